import json
from datetime import datetime, timezone

import pytest

from conftest import (
    COMPETITORS_MARKER,
    COMPETITORS_RESPONSE,
    RISKS_MARKER,
    RISKS_RESPONSE,
    ROADMAP_MARKER,
    ROADMAP_RESPONSE,
)
from valuator.domains.insights.models.insight import InsightCategory, InsightReport
from valuator.domains.insights.services.insight_normalizer import normalize
from valuator.domains.reporting.services.report_assembler import (
    INSIGHTS_UNAVAILABLE_NOTE,
    ReportService,
    assemble,
    compose_narrative,
)
from valuator.domains.valuation.services.valuation import compute_valuation
from valuator.shared.exceptions import GenerationException


def test_assemble_export_contract(seed_defi_input):
    valuation = compute_valuation(seed_defi_input)
    insights = InsightReport.from_insights([normalize(InsightCategory.RISKS, RISKS_RESPONSE)])
    stamp = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    record = assemble(valuation, insights, "Narrative.", now=stamp)
    exported = record.to_export_dict()

    assert list(exported) == ["estimatedValuation", "breakdown", "calculatedAt", "summary", "aiInsights"]
    assert exported["estimatedValuation"] == 15_015_000
    assert list(exported["breakdown"]) == [
        "Base Valuation", "Revenue", "User Metrics", "Growth Potential",
        "Team Value", "Previous Funding", "Token Bonus",
    ]
    assert exported["calculatedAt"] == "2024-05-01T12:00:00+00:00"
    assert exported["summary"] == "Narrative."
    assert list(exported["aiInsights"]) == ["risks"]
    assert exported["aiInsights"]["risks"]["text"] == "Risk Assessment"
    assert json.loads(record.to_json()) == exported


def test_assemble_stamps_current_time(seed_defi_input):
    before = datetime.now(timezone.utc)
    record = assemble(compute_valuation(seed_defi_input), InsightReport(), "")
    after = datetime.now(timezone.utc)

    assert before <= record.calculated_at <= after
    assert record.to_export_dict()["aiInsights"] == {}


def test_assemble_requires_valuation_and_insights(seed_defi_input):
    with pytest.raises(ValueError):
        assemble(None, InsightReport(), "")
    with pytest.raises(ValueError):
        assemble(compute_valuation(seed_defi_input), None, "")


def test_compose_narrative_sections():
    insights = InsightReport.from_insights([normalize(InsightCategory.RISKS, RISKS_RESPONSE)])

    narrative = compose_narrative("Summary.", insights)

    assert narrative == (
        "Summary.\n\nRISK PREDICTION:\nRisk Assessment\n\n"
        "Risk score: 72/100 (High Risk)\n"
        "Red flags:\n• No audit\n• Anonymous team\n"
        "Early and unaudited."
    )
    assert compose_narrative("Summary.", InsightReport()) == f"Summary.\n\n{INSIGHTS_UNAVAILABLE_NOTE}"


def test_compose_narrative_keeps_analysis_after_intro_prose():
    raw = (
        'Here is my audit.\n```json\n{"redFlags": ["No audit"], "riskScore": 55, '
        '"explanation": "Unaudited contracts and anonymous team."}\n```'
    )
    insights = InsightReport.from_insights([normalize(InsightCategory.RISKS, raw)])

    narrative = compose_narrative("S.", insights)

    assert "Here is my audit." in narrative
    assert "Unaudited contracts and anonymous team." in narrative
    assert "Risk score: 55/100 (Medium Risk)" in narrative


def test_compose_narrative_renders_competitors_and_roadmap():
    insights = InsightReport.from_insights([
        normalize(InsightCategory.COMPETITORS, COMPETITORS_RESPONSE),
        normalize(InsightCategory.ROADMAP, ROADMAP_RESPONSE),
    ])

    narrative = compose_narrative("S.", insights)

    assert "• Aave (Public, $1.5B): Lending focus" in narrative
    assert "The DeFi market is crowded but growing." in narrative
    assert "Missing dependencies:\n• token launch before audit" in narrative
    assert "Suggestions:\n• Audit first" in narrative
    assert narrative.index("AI COMPETITOR ANALYSIS:") < narrative.index("ROADMAP CHECK:")


@pytest.mark.asyncio
async def test_report_service_partial_insights(make_insight_service, all_responses, seed_defi_input):
    responses = dict(all_responses)
    responses[COMPETITORS_MARKER] = GenerationException(source="fake", reason="down")
    insight_service, _ = make_insight_service(responses)
    report_service = ReportService(insight_service=insight_service)

    record = await report_service.generate_report(seed_defi_input)
    exported = record.to_export_dict()

    assert exported["estimatedValuation"] == 15_015_000
    assert set(exported["aiInsights"]) == {"risks", "roadmap"}
    assert "AI COMPETITOR ANALYSIS" not in exported["summary"]
    assert "RISK PREDICTION:" in exported["summary"]
    assert "ROADMAP CHECK:" in exported["summary"]
    assert exported["summary"].startswith("Based on the provided information")


@pytest.mark.asyncio
async def test_report_service_without_any_insights(make_insight_service, seed_defi_input):
    error = GenerationException(source="fake", reason="down")
    insight_service, _ = make_insight_service({COMPETITORS_MARKER: error, RISKS_MARKER: error, ROADMAP_MARKER: error})

    record = await ReportService(insight_service=insight_service).generate_report(seed_defi_input)

    assert record.valuation.total == 15_015_000
    assert record.summary.endswith(INSIGHTS_UNAVAILABLE_NOTE)
    assert record.to_export_dict()["aiInsights"] == {}
