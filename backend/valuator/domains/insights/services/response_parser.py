"""
Response Parser

Structural extraction for generated analysis text: pulls the first fenced JSON
object out of a response and collapses sections the generator repeated.
Neither function raises on bad input; they degrade to returning the text as given.
"""
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

logger = logging.getLogger(__name__)

# ``` or ```json fence around a single JSON object
FENCED_JSON_BLOCK = re.compile(r"```[ \t]*(?:[A-Za-z]+)?\s*(\{.*?\})\s*```", re.DOTALL)


@dataclass(frozen=True)
class ParsedResponse:
    """A generated response split into its embedded JSON object and the remaining prose."""
    json: Optional[Dict[str, Any]]
    remainder: str


def extract_structured(raw: str) -> ParsedResponse:
    """
    Parse the first fenced JSON-object block in ``raw``.

    On success the remainder is the text with every fenced JSON block removed.
    When there is no block, or the first one is not a valid JSON object, the
    payload is None and the remainder is ``raw`` unchanged.
    """
    if not raw:
        return ParsedResponse(json=None, remainder=raw)

    match = FENCED_JSON_BLOCK.search(raw)
    if not match:
        return ParsedResponse(json=None, remainder=raw)

    try:
        payload = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        logger.warning(f"Embedded JSON block could not be parsed: {e}")
        return ParsedResponse(json=None, remainder=raw)

    if not isinstance(payload, dict):
        return ParsedResponse(json=None, remainder=raw)

    remainder = FENCED_JSON_BLOCK.sub("", raw).strip()
    return ParsedResponse(json=payload, remainder=remainder)


def deduplicate_sections(text: str, known_headings: Sequence[str]) -> str:
    """
    Drop repeated sections, keeping the first occurrence of each heading.

    A section runs from a known heading to the next known heading (of any kind)
    or the end of the text. Matching is exact and case-sensitive; text that is
    not under a known heading is kept as is.
    """
    headings = [heading for heading in known_headings if heading]
    if not text or not headings:
        return text

    # Longest first so a heading that contains another one wins the match
    pattern = re.compile("|".join(re.escape(h) for h in sorted(set(headings), key=len, reverse=True)))
    occurrences = list(pattern.finditer(text))
    if not occurrences:
        return text

    pieces = [text[:occurrences[0].start()]]
    seen = set()
    for index, occurrence in enumerate(occurrences):
        end = occurrences[index + 1].start() if index + 1 < len(occurrences) else len(text)
        heading = occurrence.group(0)
        if heading in seen:
            continue
        seen.add(heading)
        pieces.append(text[occurrence.start():end])

    removed = len(occurrences) - len(seen)
    if removed:
        logger.info(f"Removed {removed} repeated section(s) from generated text")
    return "".join(pieces)
