"""
Valuation data models.

Immutable pydantic models for the valuation input record, the per-component
breakdown and the calculation result. JSON aliases follow the camelCase field
names the calculator form posts.
"""
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BreakdownComponent(str, Enum):
    """Line items of a valuation breakdown, in their fixed reporting order."""
    BASE_VALUATION = "BaseValuation"
    REVENUE = "Revenue"
    USER_METRICS = "UserMetrics"
    GROWTH_POTENTIAL = "GrowthPotential"
    TEAM_VALUE = "TeamValue"
    PREVIOUS_FUNDING = "PreviousFunding"
    TOKEN_BONUS = "TokenBonus"

    @property
    def label(self) -> str:
        """Display label used in exported reports, e.g. 'Growth Potential'."""
        return {
            BreakdownComponent.BASE_VALUATION: "Base Valuation",
            BreakdownComponent.REVENUE: "Revenue",
            BreakdownComponent.USER_METRICS: "User Metrics",
            BreakdownComponent.GROWTH_POTENTIAL: "Growth Potential",
            BreakdownComponent.TEAM_VALUE: "Team Value",
            BreakdownComponent.PREVIOUS_FUNDING: "Previous Funding",
            BreakdownComponent.TOKEN_BONUS: "Token Bonus",
        }[self]


class ValuationInput(BaseModel):
    """
    Metrics supplied by the founder for a single valuation request.

    Numbers must be finite and non-negative; percentages above 100 are clamped.
    Categorical values are free strings: unknown ones score with neutral defaults.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    stage: str = Field("", alias="companyStage")
    vertical: str = Field("", alias="industryVertical")
    product_stage: str = Field("", alias="productStage")
    token_launched: bool = Field(False, alias="tokenLaunch")

    monthly_revenue: float = Field(0, alias="mrr", ge=0, allow_inf_nan=False)
    user_count: int = Field(0, alias="userCount", ge=0)
    retention_rate_pct: float = Field(30, alias="retentionRate", ge=0, allow_inf_nan=False)
    growth_rate_pct: float = Field(10, alias="growthRate", ge=0, allow_inf_nan=False)
    team_size: int = Field(0, alias="teamSize", ge=0)
    prior_raised_usd: float = Field(0, alias="previousRaised", ge=0, allow_inf_nan=False)

    notes: Optional[str] = Field(None, alias="miscellaneousDetails")

    @field_validator("token_launched", mode="before")
    @classmethod
    def _parse_token_flag(cls, value):
        # The form posts "yes"/"no"
        if isinstance(value, str):
            flag = value.strip().lower()
            if flag in ("yes", "y", "true", "1"):
                return True
            if flag in ("no", "n", "false", "0", ""):
                return False
        return value

    @field_validator("retention_rate_pct", "growth_rate_pct")
    @classmethod
    def _clamp_percentage(cls, value: float) -> float:
        return min(value, 100.0)


class ValuationBreakdown(BaseModel):
    """Pre-multiplier monetary contribution of each scoring component."""
    model_config = ConfigDict(frozen=True)

    base_valuation: float = Field(0, ge=0)
    revenue: float = Field(0, ge=0)
    user_metrics: float = Field(0, ge=0)
    growth_potential: float = Field(0, ge=0)
    team_value: float = Field(0, ge=0)
    previous_funding: float = Field(0, ge=0)
    token_bonus: float = Field(0, ge=0)

    def items(self) -> Iterator[Tuple[BreakdownComponent, float]]:
        """Yield (component, amount) pairs in the fixed component order."""
        amounts = self.model_dump()
        for component, field_name in zip(BreakdownComponent, amounts):
            yield component, amounts[field_name]

    def as_dict(self) -> Dict[str, float]:
        """Component name -> amount, e.g. {'BaseValuation': 7500000.0, ...}."""
        return {component.value: amount for component, amount in self.items()}

    def as_labelled_dict(self) -> Dict[str, float]:
        """Display label -> amount, as written into exported reports."""
        return {component.label: amount for component, amount in self.items()}

    def total(self) -> float:
        return sum(amount for _, amount in self.items())


class BreakdownShare(BaseModel):
    model_config = ConfigDict(frozen=True)

    component: BreakdownComponent
    label: str
    value: float
    percentage: float


class ValuationResult(BaseModel):
    """
    Outcome of one valuation calculation.

    ``total`` includes the product-stage multiplier while the breakdown does not,
    so ``breakdown.total() * product_multiplier`` equals ``total`` before rounding.
    """
    model_config = ConfigDict(frozen=True)

    total: int = Field(..., ge=0)
    breakdown: ValuationBreakdown
    product_multiplier: float = Field(1.0, gt=0)

    def breakdown_total(self) -> float:
        return self.breakdown.total()

    def breakdown_shares(self) -> List[BreakdownShare]:
        """Each component's share of the breakdown sum, largest first."""
        denominator = self.breakdown_total()
        shares = [
            BreakdownShare(
                component=component,
                label=component.label,
                value=amount,
                percentage=(amount / denominator * 100) if denominator else 0.0,
            )
            for component, amount in self.breakdown.items()
        ]
        return sorted(shares, key=lambda share: share.value, reverse=True)
