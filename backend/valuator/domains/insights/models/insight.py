"""
Insight models.

Canonical, structured forms of the three narrative analyses (competitors,
risks, roadmap) plus the payloads used to build their prompts.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from valuator.domains.valuation.models.valuation import ValuationInput


class InsightCategory(str, Enum):
    COMPETITORS = "competitors"
    RISKS = "risks"
    ROADMAP = "roadmap"


class Competitor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    stage: Optional[str] = None
    valuation: Optional[str] = None
    key_diff: str = ""

    def to_export_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "stage": self.stage, "valuation": self.valuation, "keyDiff": self.key_diff}


class _InsightBase(BaseModel, ABC):
    model_config = ConfigDict(frozen=True)

    payload: Optional[Dict[str, Any]] = Field(None, description="JSON object embedded in the response, if any")
    prose: str = Field("", description="Response text without JSON blocks or repeated sections")
    raw_text: str = Field("", description="Response text exactly as generated")

    @property
    @abstractmethod
    def is_structured(self) -> bool:
        """True when the response carried at least one structured field."""

    @abstractmethod
    def _structured_fields(self) -> Dict[str, Any]:
        """Category fields keyed as in the export document."""

    def to_export_dict(self) -> Dict[str, Any]:
        data = self._structured_fields()
        data["text"] = self.prose
        return data


class CompetitorsInsight(_InsightBase):
    category: Literal[InsightCategory.COMPETITORS] = InsightCategory.COMPETITORS
    competitors: List[Competitor] = Field(default_factory=list)
    summary: str = ""

    @property
    def is_structured(self) -> bool:
        return bool(self.competitors or self.summary)

    def _structured_fields(self) -> Dict[str, Any]:
        return {
            "competitors": [competitor.to_export_dict() for competitor in self.competitors],
            "summaryParagraph": self.summary,
        }


class RisksInsight(_InsightBase):
    category: Literal[InsightCategory.RISKS] = InsightCategory.RISKS
    red_flags: List[str] = Field(default_factory=list)
    risk_score: Optional[int] = Field(None, ge=0, le=100)
    explanation: str = ""

    @property
    def is_structured(self) -> bool:
        return bool(self.red_flags or self.risk_score is not None or self.explanation)

    @property
    def risk_level(self) -> Optional[str]:
        if self.risk_score is None:
            return None
        if self.risk_score > 70:
            return "High Risk"
        if self.risk_score > 40:
            return "Medium Risk"
        return "Low Risk"

    def _structured_fields(self) -> Dict[str, Any]:
        return {
            "redFlags": list(self.red_flags),
            "riskScore": self.risk_score,
            "riskLevel": self.risk_level,
            "explanation": self.explanation,
        }


class RoadmapInsight(_InsightBase):
    category: Literal[InsightCategory.ROADMAP] = InsightCategory.ROADMAP
    invalid_timeline: List[str] = Field(default_factory=list)
    missing_dependencies: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)

    @property
    def is_structured(self) -> bool:
        return bool(self.invalid_timeline or self.missing_dependencies or self.suggestions)

    def _structured_fields(self) -> Dict[str, Any]:
        return {
            "invalidTimeline": list(self.invalid_timeline),
            "missingDependencies": list(self.missing_dependencies),
            "suggestions": list(self.suggestions),
        }


StructuredInsight = Annotated[
    Union[CompetitorsInsight, RisksInsight, RoadmapInsight],
    Field(discriminator="category"),
]


class InsightReport(BaseModel):
    """
    Insights for one valuation session, keyed by category.

    Partial by design: a category whose generation failed is simply absent.
    Build a new report instead of editing one.
    """
    model_config = ConfigDict(frozen=True)

    insights: Dict[InsightCategory, StructuredInsight] = Field(default_factory=dict)

    @classmethod
    def from_insights(cls, insights: Iterable[StructuredInsight]) -> "InsightReport":
        ordered = {insight.category: insight for insight in insights}
        # Keep the category order stable regardless of completion order
        return cls(insights={category: ordered[category] for category in InsightCategory if category in ordered})

    def get(self, category: InsightCategory) -> Optional[StructuredInsight]:
        return self.insights.get(category)

    def __contains__(self, category: object) -> bool:
        return category in self.insights

    def __len__(self) -> int:
        return len(self.insights)

    @property
    def categories(self) -> List[InsightCategory]:
        return list(self.insights)

    @property
    def is_complete(self) -> bool:
        return len(self.insights) == len(InsightCategory)

    def to_export_dict(self) -> Dict[str, Dict[str, Any]]:
        return {category.value: insight.to_export_dict() for category, insight in self.insights.items()}


class RoadmapMilestone(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    name: str
    description: str = ""


DEFAULT_MILESTONES: List[RoadmapMilestone] = [
    RoadmapMilestone(name="MVP Launch", date="2025-07", description="Testnet launch"),
    RoadmapMilestone(name="Token Launch", date="2025-08", description="TGE on L2"),
    RoadmapMilestone(name="Audits", date="2025-09", description="Security audits"),
]


class CompetitorQuery(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    project_name: str = Field("Unnamed Project", alias="projectName")
    vertical: str = ""
    key_features: List[str] = Field(default_factory=list, alias="keyFeatures")


class RoadmapReviewRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    milestones: List[RoadmapMilestone] = Field(
        default_factory=lambda: list(DEFAULT_MILESTONES), alias="roadmapMilestones"
    )


class RiskQuery(BaseModel):
    """Project metrics plus the valuation computed from them, for the risk audit."""
    model_config = ConfigDict(frozen=True)

    input: ValuationInput
    valuation: Optional[int] = Field(None, ge=0)
