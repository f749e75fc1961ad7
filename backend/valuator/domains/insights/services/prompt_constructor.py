import json
from typing import List, Sequence

from valuator.domains.valuation.models.valuation import ValuationInput
from ..models.insight import CompetitorQuery, RiskQuery, RoadmapMilestone

INSIGHT_PROMPTS = {
    "competitors": """
You are a Web3 market analyst. Given a project with:
- Name: {project_name}
- Vertical: {vertical}
- Key features: {key_features}

Return JSON with:
{{
  competitors: [{{ name, stage, valuation, keyDiff }}],
  summaryParagraph: string
}}
""",

    "risks": """
You are a Web3 risk auditor. Analyze this project:
{payload}

Return JSON with:
{{
  redFlags: [ "flag1", ... ],
  riskScore: 0-100,
  explanation: "..."
}}
""",

    "roadmap": """
You are a Web3 product strategy AI. Given the roadmap milestones:
{milestones}

Return JSON:
{{
  invalidTimeline: [milestoneName],
  missingDependencies: [ "token launch before audit", ... ],
  suggestions: [ "X", ... ]
}}
""",
}


def default_key_features(valuation_input: ValuationInput) -> List[str]:
    """Feature strings describing the project to the competitor analyst."""
    return [
        "Token launched" if valuation_input.token_launched else "No token",
        f"Growth rate {valuation_input.growth_rate_pct:g}%",
        f"{valuation_input.user_count} users",
    ]


def competitor_query_for(valuation_input: ValuationInput) -> CompetitorQuery:
    return CompetitorQuery(
        project_name=valuation_input.notes or "Unnamed Project",
        vertical=valuation_input.vertical,
        key_features=default_key_features(valuation_input),
    )


class PromptConstructor:
    """
    Service responsible for constructing the category prompts for the LLM.
    """

    def construct_competitors_prompt(self, query: CompetitorQuery) -> str:
        template = INSIGHT_PROMPTS["competitors"]
        return template.format(
            project_name=query.project_name,
            vertical=query.vertical,
            key_features=", ".join(query.key_features),
        )

    def construct_risks_prompt(self, query: RiskQuery) -> str:
        payload = query.input.model_dump(by_alias=True)
        payload["valuation"] = query.valuation
        return INSIGHT_PROMPTS["risks"].format(payload=json.dumps(payload, indent=2))

    def construct_roadmap_prompt(self, milestones: Sequence[RoadmapMilestone]) -> str:
        lines = "\n".join(f"- {m.date}: {m.name} - {m.description}" for m in milestones)
        return INSIGHT_PROMPTS["roadmap"].format(milestones=lines)


def get_prompt_constructor() -> PromptConstructor:
    """Provides an instance of the PromptConstructor."""
    return PromptConstructor()
