"""
Insight Normalizer

Reduces one raw generated response to the canonical structured insight for its
category: embedded JSON is mapped onto the category schema, and the prose is
cleaned of JSON blocks and repeated sections.
"""
import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from ..config import DEFAULT_SECTION_MARKERS
from ..models.insight import (
    Competitor,
    CompetitorsInsight,
    InsightCategory,
    RisksInsight,
    RoadmapInsight,
    StructuredInsight,
)
from .response_parser import deduplicate_sections, extract_structured

logger = logging.getLogger(__name__)


def _field(payload: Dict[str, Any], *names: str) -> Any:
    """First present key among camelCase / snake_case spellings."""
    for name in names:
        if name in payload:
            return payload[name]
    return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _optional_text(value: Any) -> Optional[str]:
    return _text(value) or None


def _text_list(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [item for item in (_text(entry) for entry in value) if item]


def _risk_score(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%").split("/")[0])
        except ValueError:
            return None
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return None
    return int(min(max(round(value), 0), 100))


def _competitor(entry: Any) -> Optional[Competitor]:
    if isinstance(entry, str):
        return Competitor(name=entry.strip()) if entry.strip() else None
    if not isinstance(entry, dict):
        return None
    return Competitor(
        name=_text(entry.get("name")),
        stage=_optional_text(entry.get("stage")),
        valuation=_optional_text(entry.get("valuation")),
        key_diff=_text(_field(entry, "keyDiff", "key_diff", "keyDifferentiator")),
    )


def _competitors_insight(data: Dict[str, Any], **common: Any) -> CompetitorsInsight:
    entries = _field(data, "competitors")
    competitors = [c for c in (_competitor(e) for e in entries or []) if c] if isinstance(entries, list) else []
    return CompetitorsInsight(
        competitors=competitors,
        summary=_text(_field(data, "summaryParagraph", "summary_paragraph", "summary")),
        **common,
    )


def _risks_insight(data: Dict[str, Any], **common: Any) -> RisksInsight:
    return RisksInsight(
        red_flags=_text_list(_field(data, "redFlags", "red_flags")),
        risk_score=_risk_score(_field(data, "riskScore", "risk_score")),
        explanation=_text(_field(data, "explanation")),
        **common,
    )


def _roadmap_insight(data: Dict[str, Any], **common: Any) -> RoadmapInsight:
    return RoadmapInsight(
        invalid_timeline=_text_list(_field(data, "invalidTimeline", "invalid_timeline")),
        missing_dependencies=_text_list(_field(data, "missingDependencies", "missing_dependencies")),
        suggestions=_text_list(_field(data, "suggestions")),
        **common,
    )


_BUILDERS = {
    InsightCategory.COMPETITORS: _competitors_insight,
    InsightCategory.RISKS: _risks_insight,
    InsightCategory.ROADMAP: _roadmap_insight,
}


def normalize(
    category: InsightCategory,
    raw_text: str,
    section_markers: Optional[Sequence[str]] = None,
) -> StructuredInsight:
    """
    Normalize a raw response for ``category``.

    A response without a usable JSON block yields an insight with cleaned prose
    and empty structured fields; callers treat that as an unstructured answer.
    """
    category = InsightCategory(category)
    markers = DEFAULT_SECTION_MARKERS if section_markers is None else section_markers
    raw_text = raw_text or ""

    parsed = extract_structured(raw_text)
    prose = deduplicate_sections(parsed.remainder, markers).strip()

    if parsed.json is None:
        logger.info(f"No structured payload in '{category.value}' response; keeping prose only")

    common = {"payload": parsed.json, "prose": prose, "raw_text": raw_text}
    return _BUILDERS[category](parsed.json or {}, **common)
