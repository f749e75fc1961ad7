"""
Valuation Service

Scores an early-stage venture from its stage, vertical, traction and team
using the published step tables in ``valuation.config``, and writes the
plain-language summary that accompanies the number.
"""
import logging
import math
from typing import Any, Dict

from pydantic import ValidationError

from valuator.shared.exceptions import InvalidValuationInputException
from ..config import (
    VALUATION_CONSTANTS,
    product_stage_multiplier,
    revenue_multiple,
    stage_base_valuation,
    vertical_multiplier,
)
from ..models.valuation import ValuationBreakdown, ValuationInput, ValuationResult

logger = logging.getLogger(__name__)


def parse_valuation_input(data: Dict[str, Any]) -> ValuationInput:
    """
    Validate a raw payload into a ValuationInput.

    Raises:
        InvalidValuationInputException: For negative, non-finite or mistyped values.
    """
    try:
        return ValuationInput.model_validate(data)
    except ValidationError as e:
        errors = [
            {"loc": [str(part) for part in error["loc"]], "msg": error["msg"], "type": error["type"]}
            for error in e.errors()
        ]
        logger.warning(f"Rejected valuation input: {errors}")
        raise InvalidValuationInputException(errors) from e


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_valuation(valuation_input: ValuationInput) -> ValuationResult:
    """
    Calculates the valuation for a venture.

    The vertical multiplier is folded into the base valuation line, and the
    product-stage multiplier scales the whole sum without being itemised, so the
    breakdown adds up to ``total / product_multiplier``.
    """
    base_valuation = stage_base_valuation(valuation_input.stage)
    vertical = vertical_multiplier(valuation_input.vertical)

    annual_revenue = valuation_input.monthly_revenue * 12
    revenue_component = annual_revenue * revenue_multiple(valuation_input.stage)

    user_component = (
        valuation_input.user_count
        * (valuation_input.retention_rate_pct / 100)
        * VALUATION_CONSTANTS["value_per_retained_user"]
    )
    growth_component = base_valuation * (valuation_input.growth_rate_pct / 100)
    team_component = valuation_input.team_size * VALUATION_CONSTANTS["value_per_team_member"]
    funding_component = valuation_input.prior_raised_usd * VALUATION_CONSTANTS["prior_funding_multiple"]
    token_bonus = base_valuation * VALUATION_CONSTANTS["token_bonus_rate"] if valuation_input.token_launched else 0.0

    product_multiplier = product_stage_multiplier(valuation_input.product_stage)

    breakdown = ValuationBreakdown(
        base_valuation=base_valuation * vertical,
        revenue=revenue_component,
        user_metrics=user_component,
        growth_potential=growth_component,
        team_value=team_component,
        previous_funding=funding_component,
        token_bonus=token_bonus,
    )
    total = breakdown.total() * product_multiplier

    logger.debug(
        f"Valuation for stage='{valuation_input.stage}' vertical='{valuation_input.vertical}': "
        f"pre-multiplier {breakdown.total():,.0f} x {product_multiplier} = {total:,.0f}"
    )

    return ValuationResult(
        total=_round_half_up(total),
        breakdown=breakdown,
        product_multiplier=product_multiplier,
    )


def format_currency(value: float) -> str:
    """Compact dollar figure for display, e.g. $15.02M."""
    if value >= 1_000_000_000:
        return f"${value / 1_000_000_000:.2f}B"
    elif value >= 1_000_000:
        return f"${value / 1_000_000:.2f}M"
    elif value >= 1_000:
        return f"${value / 1_000:.2f}K"
    return f"${value:.2f}"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def _title(value: str) -> str:
    return value[:1].upper() + value[1:]


def build_valuation_summary(valuation_input: ValuationInput, total: float) -> str:
    """Narrative summary of the key factors behind a valuation."""
    stage = _title(valuation_input.stage).replace("-", " ")
    vertical = _title(valuation_input.vertical)
    formatted_valuation = f"${_round_half_up(total):,}"

    if valuation_input.monthly_revenue > 0:
        revenue_line = (
            f"Monthly revenue of ${_format_number(valuation_input.monthly_revenue)} "
            "demonstrates commercial viability"
        )
    else:
        revenue_line = "Pre-revenue status is typical for early-stage web3 projects"

    users = valuation_input.user_count
    if users > 1000:
        users_line = f"Strong user base of {users:,} monthly active users"
    elif users > 0:
        users_line = f"Early traction with {users} users shows product-market fit potential"
    else:
        users_line = "User acquisition will be a key focus area"

    retention = valuation_input.retention_rate_pct
    if retention > 50:
        retention_line = "Excellent user retention indicates strong product-market fit"
    elif retention > 30:
        retention_line = "Average user retention suggests product improvements may increase valuation"
    else:
        retention_line = "User retention needs improvement to maximize valuation"

    growth = f"{valuation_input.growth_rate_pct:g}"
    if valuation_input.growth_rate_pct > 20:
        growth_line = f"Impressive {growth}% monthly growth rate is attracting premium valuation"
    else:
        growth_line = f"{growth}% growth rate is factored into projections"

    context_line = (
        f"\nAdditional context considered: {valuation_input.notes}" if valuation_input.notes else ""
    )

    return (
        f"Based on the provided information, your {stage} stage {vertical} project is valued at "
        f"approximately {formatted_valuation}.\n\n"
        "Key factors influencing this valuation:\n"
        f"• {revenue_line}\n"
        f"• {users_line}\n"
        f"• {retention_line}\n"
        f"• {growth_line}\n"
        f"{context_line}\n\n"
        "This valuation represents a snapshot based on current market conditions and the information "
        "provided. Actual investor valuations may vary based on due diligence, market timing, and "
        "strategic value."
    )


class ValuationService:
    """A service for performing startup valuations."""

    def calculate(self, valuation_input: ValuationInput) -> ValuationResult:
        logger.info(
            f"Calculating valuation (stage='{valuation_input.stage}', vertical='{valuation_input.vertical}', "
            f"product_stage='{valuation_input.product_stage}')"
        )
        return compute_valuation(valuation_input)

    def summarize(self, valuation_input: ValuationInput, result: ValuationResult) -> str:
        return build_valuation_summary(valuation_input, result.total)


def get_valuation_service() -> ValuationService:
    """Provides an instance of the ValuationService."""
    return ValuationService()
