"""
Report Assembler

Packages a valuation, its insights and the narrative into one export record,
and runs the full valuation-to-report pipeline for the API.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from valuator.domains.insights.models.insight import InsightCategory, InsightReport, RoadmapMilestone
from valuator.domains.insights.services.insight_orchestration_service import (
    InsightOrchestrationService,
    get_insight_orchestration_service,
)
from valuator.domains.valuation.models.valuation import ValuationInput, ValuationResult
from valuator.domains.valuation.services.valuation import ValuationService, get_valuation_service
from ..models.export import ExportRecord

logger = logging.getLogger(__name__)

NARRATIVE_HEADINGS = {
    InsightCategory.COMPETITORS: "AI COMPETITOR ANALYSIS",
    InsightCategory.RISKS: "RISK PREDICTION",
    InsightCategory.ROADMAP: "ROADMAP CHECK",
}
INSIGHTS_UNAVAILABLE_NOTE = "AI enhancements failed to load."


def assemble(
    valuation: ValuationResult,
    insights: InsightReport,
    narrative: str,
    now: Optional[datetime] = None,
) -> ExportRecord:
    """Merge valuation output, insights and narrative into an export record stamped with the current time."""
    if valuation is None:
        raise ValueError("A valuation result is required to assemble a report")
    if insights is None:
        raise ValueError("An insight report is required to assemble a report (use an empty one)")

    return ExportRecord(
        valuation=valuation,
        insights=insights,
        summary=narrative or "",
        calculated_at=now or datetime.now(timezone.utc),
    )


def compose_narrative(summary: str, insights: InsightReport) -> str:
    """Valuation summary followed by one headed section per available insight."""
    if not insights.insights:
        return f"{summary}\n\n{INSIGHTS_UNAVAILABLE_NOTE}"

    sections = [summary]
    for category, insight in insights.insights.items():
        body = "\n\n".join(part for part in (insight.prose, _structured_text(insight)) if part)
        sections.append(f"{NARRATIVE_HEADINGS[category]}:\n{body}")
    return "\n\n".join(sections)


def _bullets(title: str, items) -> str:
    if not items:
        return ""
    return f"{title}:\n" + "\n".join(f"• {item}" for item in items)


def _structured_text(insight) -> str:
    """Readable rendering of an insight's structured fields; empty fields are skipped."""
    if insight.category == InsightCategory.COMPETITORS:
        competitors = []
        for competitor in insight.competitors:
            details = ", ".join(part for part in (competitor.stage, competitor.valuation) if part)
            line = f"{competitor.name} ({details})" if details else competitor.name
            competitors.append(f"{line}: {competitor.key_diff}" if competitor.key_diff else line)
        parts = [_bullets("Competitors", competitors), insight.summary]
    elif insight.category == InsightCategory.RISKS:
        score = f"Risk score: {insight.risk_score}/100 ({insight.risk_level})" if insight.risk_score is not None else ""
        parts = [score, _bullets("Red flags", insight.red_flags), insight.explanation]
    else:
        parts = [
            _bullets("Invalid timeline", insight.invalid_timeline),
            _bullets("Missing dependencies", insight.missing_dependencies),
            _bullets("Suggestions", insight.suggestions),
        ]
    return "\n".join(part for part in parts if part)


class ReportService:
    """Runs valuation, insight generation and assembly for one session."""

    def __init__(
        self,
        valuation_service: Optional[ValuationService] = None,
        insight_service: Optional[InsightOrchestrationService] = None,
    ):
        self.valuation_service = valuation_service or get_valuation_service()
        self._insight_service = insight_service

    @property
    def insight_service(self) -> InsightOrchestrationService:
        if self._insight_service is None:
            self._insight_service = get_insight_orchestration_service()
        return self._insight_service

    async def generate_report(
        self,
        valuation_input: ValuationInput,
        milestones: Optional[Sequence[RoadmapMilestone]] = None,
        timeout: Optional[float] = None,
    ) -> ExportRecord:
        valuation = self.valuation_service.calculate(valuation_input)
        summary = self.valuation_service.summarize(valuation_input, valuation)

        insights = await self.insight_service.gather_insights(
            valuation_input, valuation.total, milestones=milestones, timeout=timeout
        )

        logger.info(
            f"Assembling report: valuation {valuation.total:,}, "
            f"insights {[category.value for category in insights.categories]}"
        )
        return assemble(valuation, insights, compose_narrative(summary, insights))


def get_report_service() -> ReportService:
    """Provides an instance of the ReportService."""
    return ReportService()
