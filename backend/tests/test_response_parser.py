from valuator.domains.insights.services.response_parser import deduplicate_sections, extract_structured

HEADINGS = ["AI Competitor Analysis", "Risk Assessment", "Roadmap Validation"]


def test_extract_structured_without_block_returns_input_unchanged():
    raw = "No JSON here, just {braces} and prose.\n\n• a bullet"

    parsed = extract_structured(raw)

    assert parsed.json is None
    assert parsed.remainder is raw


def test_extract_structured_parses_first_block_and_strips_blocks():
    raw = (
        "Intro text.\n\n"
        "```json\n{\"riskScore\": 40, \"nested\": {\"a\": [1, 2]}}\n```\n\n"
        "Middle text.\n\n"
        "```\n{\"second\": true}\n```\n"
        "Outro."
    )

    parsed = extract_structured(raw)

    assert parsed.json == {"riskScore": 40, "nested": {"a": [1, 2]}}
    assert "```" not in parsed.remainder
    assert parsed.remainder.startswith("Intro text.")
    assert "Middle text." in parsed.remainder
    assert parsed.remainder.endswith("Outro.")


def test_extract_structured_bare_fence_without_language_tag():
    parsed = extract_structured("```{\"suggestions\": [\"Audit first\"]}```")

    assert parsed.json == {"suggestions": ["Audit first"]}
    assert parsed.remainder == ""


def test_extract_structured_invalid_json_fails_soft():
    # Unquoted keys, as in the prompt's own example shape
    raw = "Here you go:\n```\n{ redFlags: [\"x\"], riskScore: 50 }\n```"

    parsed = extract_structured(raw)

    assert parsed.json is None
    assert parsed.remainder == raw


def test_extract_structured_empty_text():
    parsed = extract_structured("")

    assert parsed.json is None
    assert parsed.remainder == ""


def test_deduplicate_heading_repeated_three_times():
    text = (
        "Preamble stays.\n"
        "Risk Assessment\nFirst body, kept verbatim.\n"
        "Roadmap Validation\nRoadmap body.\n"
        "Risk Assessment\nSecond body.\n"
        "Risk Assessment\nThird body.\n"
    )

    result = deduplicate_sections(text, HEADINGS)

    assert result.count("Risk Assessment") == 1
    assert "Risk Assessment\nFirst body, kept verbatim.\n" in result
    assert "Second body." not in result
    assert "Third body." not in result
    assert result.startswith("Preamble stays.\n")
    assert "Roadmap Validation\nRoadmap body.\n" in result


def test_deduplicate_is_case_sensitive_and_ignores_unknown_headings():
    text = (
        "risk assessment\nlower-case one.\n"
        "Market Overview\nA.\n"
        "Market Overview\nB.\n"
    )

    assert deduplicate_sections(text, HEADINGS) == text


def test_deduplicate_without_repeats_or_headings_is_identity():
    text = "AI Competitor Analysis\nOnly once.\nRisk Assessment\nAlso once."

    assert deduplicate_sections(text, HEADINGS) == text
    assert deduplicate_sections(text, []) == text
