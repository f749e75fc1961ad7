"""
Pytest fixtures for valuation and insight tests.
"""

import asyncio
from typing import Dict, List, Optional, Tuple

import pytest

from valuator.domains.insights.config import InsightsConfig
from valuator.domains.insights.services.insight_orchestration_service import InsightOrchestrationService
from valuator.domains.valuation.models.valuation import ValuationInput
from valuator.shared.exceptions import GenerationException


COMPETITORS_RESPONSE = """AI Competitor Analysis

Here is the competitive landscape for the project.

```json
{
  "competitors": [
    {"name": "Aave", "stage": "Public", "valuation": "$1.5B", "keyDiff": "Lending focus"},
    {"name": "Uniswap", "stage": "Public", "valuation": "$4B", "keyDiff": "AMM pioneer"}
  ],
  "summaryParagraph": "The DeFi market is crowded but growing."
}
```

AI Competitor Analysis

Here is the competitive landscape for the project.
"""

RISKS_RESPONSE = """Risk Assessment

```
{"redFlags": ["No audit", "Anonymous team"], "riskScore": 72, "explanation": "Early and unaudited."}
```
"""

ROADMAP_RESPONSE = """Roadmap Validation

```json
{"invalidTimeline": ["Token Launch"], "missingDependencies": ["token launch before audit"], "suggestions": ["Audit first"]}
```
"""


class FakeTextGenerator:
    """
    Stand-in for the text generation client.

    Picks a response by matching a marker in the prompt; a value that is an
    exception instance is raised instead of returned.
    """

    def __init__(self, responses: Dict[str, object], delays: Optional[Dict[str, float]] = None):
        self.responses = responses
        self.delays = delays or {}
        self.calls: List[Tuple[str, float]] = []

    async def generate(self, prompt: str, temperature: float = 0.6) -> str:
        self.calls.append((prompt, temperature))
        for marker, response in self.responses.items():
            if marker in prompt:
                delay = self.delays.get(marker)
                if delay:
                    await asyncio.sleep(delay)
                if isinstance(response, BaseException):
                    raise response
                return response
        raise GenerationException(source="fake", reason="no canned response")


# Markers that identify each category's prompt
COMPETITORS_MARKER = "market analyst"
RISKS_MARKER = "risk auditor"
ROADMAP_MARKER = "product strategy"


@pytest.fixture
def seed_defi_input() -> ValuationInput:
    """The worked example: seed-stage DeFi project in beta."""
    return ValuationInput(
        stage="seed",
        vertical="defi",
        product_stage="beta",
        token_launched=False,
        monthly_revenue=10_000,
        user_count=5_000,
        retention_rate_pct=40,
        growth_rate_pct=15,
        team_size=4,
        prior_raised_usd=200_000,
    )


@pytest.fixture
def insights_config() -> InsightsConfig:
    return InsightsConfig()


@pytest.fixture
def all_responses() -> Dict[str, object]:
    return {
        COMPETITORS_MARKER: COMPETITORS_RESPONSE,
        RISKS_MARKER: RISKS_RESPONSE,
        ROADMAP_MARKER: ROADMAP_RESPONSE,
    }


@pytest.fixture
def make_insight_service(insights_config):
    """Build an orchestration service around a fake generator."""

    def _make(responses: Dict[str, object], delays: Optional[Dict[str, float]] = None):
        generator = FakeTextGenerator(responses, delays)
        service = InsightOrchestrationService(llm_client=generator, config=insights_config)
        return service, generator

    return _make
