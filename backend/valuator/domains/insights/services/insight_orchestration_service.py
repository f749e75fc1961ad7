import asyncio
import logging
from typing import Optional, Sequence

from valuator.domains.valuation.models.valuation import ValuationInput
from ..config import InsightsConfig, get_insights_config
from ..models.insight import (
    DEFAULT_MILESTONES,
    CompetitorQuery,
    InsightCategory,
    InsightReport,
    RiskQuery,
    RoadmapMilestone,
    StructuredInsight,
)
from .insight_normalizer import normalize
from .llm_inference_layer import TextGenerationClient, get_llm_client
from .prompt_constructor import PromptConstructor, competitor_query_for, get_prompt_constructor

logger = logging.getLogger(__name__)


class InsightOrchestrationService:
    """
    Requests the competitor, risk and roadmap analyses and normalizes the answers.

    The three requests are independent: they run concurrently and a failure or
    timeout in one only drops that category from the report.
    """

    def __init__(
        self,
        llm_client: Optional[TextGenerationClient] = None,
        prompt_constructor: Optional[PromptConstructor] = None,
        config: Optional[InsightsConfig] = None,
    ):
        self.llm_client = llm_client or get_llm_client()
        self.prompt_constructor = prompt_constructor or get_prompt_constructor()
        self.config = config or get_insights_config()

    async def _generate(
        self,
        category: InsightCategory,
        prompt: str,
        timeout: Optional[float] = None,
    ) -> StructuredInsight:
        temperature = self.config.temperature_for(category)
        logger.info(f"Requesting '{category.value}' analysis ({len(prompt)} character prompt)")

        request = self.llm_client.generate(prompt, temperature=temperature)
        if timeout is not None:
            raw_text = await asyncio.wait_for(request, timeout=timeout)
        else:
            raw_text = await request

        return normalize(category, raw_text, self.config.section_markers)

    async def analyze_competitors(self, query: CompetitorQuery, timeout: Optional[float] = None) -> StructuredInsight:
        prompt = self.prompt_constructor.construct_competitors_prompt(query)
        return await self._generate(InsightCategory.COMPETITORS, prompt, timeout)

    async def analyze_risks(self, query: RiskQuery, timeout: Optional[float] = None) -> StructuredInsight:
        prompt = self.prompt_constructor.construct_risks_prompt(query)
        return await self._generate(InsightCategory.RISKS, prompt, timeout)

    async def analyze_roadmap(
        self,
        milestones: Optional[Sequence[RoadmapMilestone]] = None,
        timeout: Optional[float] = None,
    ) -> StructuredInsight:
        prompt = self.prompt_constructor.construct_roadmap_prompt(milestones or DEFAULT_MILESTONES)
        return await self._generate(InsightCategory.ROADMAP, prompt, timeout)

    async def gather_insights(
        self,
        valuation_input: ValuationInput,
        valuation: int,
        milestones: Optional[Sequence[RoadmapMilestone]] = None,
        timeout: Optional[float] = None,
    ) -> InsightReport:
        """
        Run all three analyses concurrently and collect whatever succeeded.

        Args:
            valuation_input: The input the valuation was computed from
            valuation: The computed valuation total
            milestones: Roadmap milestones to review (defaults to the standard launch plan)
            timeout: Seconds allowed per category; expiry counts as that category failing

        Returns:
            InsightReport holding zero to three categories
        """
        categories = [InsightCategory.COMPETITORS, InsightCategory.RISKS, InsightCategory.ROADMAP]
        results = await asyncio.gather(
            self.analyze_competitors(competitor_query_for(valuation_input), timeout=timeout),
            self.analyze_risks(RiskQuery(input=valuation_input, valuation=valuation), timeout=timeout),
            self.analyze_roadmap(milestones, timeout=timeout),
            return_exceptions=True,
        )

        insights = []
        for category, result in zip(categories, results):
            if isinstance(result, BaseException):
                reason = "timed out" if isinstance(result, asyncio.TimeoutError) else str(result)
                logger.error(f"'{category.value}' analysis failed and is omitted from the report: {reason}")
                continue
            insights.append(result)

        report = InsightReport.from_insights(insights)
        if not report.is_complete:
            logger.warning(f"Insight report is partial: {len(report)} of {len(categories)} categories available")
        return report


def get_insight_orchestration_service() -> "InsightOrchestrationService":
    """
    Get a fresh instance of InsightOrchestrationService - no caching to avoid stale API keys.
    """
    return InsightOrchestrationService()
