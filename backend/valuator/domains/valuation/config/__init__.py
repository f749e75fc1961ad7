"""
Valuation Domain Configuration

Scoring tables and constants for the startup valuation formula.
The formula is fixed and published, so these are module constants rather than settings.
"""

# Standard library imports
from typing import Dict, Mapping


# Base valuation by funding stage (USD)
STAGE_BASE_VALUATIONS: Dict[str, float] = {
    "idea": 500_000,
    "pre-seed": 2_000_000,
    "seed": 5_000_000,
    "series-a": 15_000_000,
    "series-b": 50_000_000,
    "series-c-plus": 100_000_000,
}
# Fallback for an unrecognised stage; not on the tier scale
DEFAULT_BASE_VALUATION = 1_000_000

# Industry vertical multipliers
VERTICAL_MULTIPLIERS: Dict[str, float] = {
    "defi": 1.5,
    "nft": 1.2,
    "gaming": 1.4,
    "dao": 1.3,
    "infrastructure": 1.6,
    "edufi": 1.3,
    "socialfi": 1.25,
    "rwa": 1.45,
    "ai": 1.7,
    "privacy": 1.35,
    "climate": 1.4,
}

# Product maturity multipliers, applied to the whole sum
PRODUCT_STAGE_MULTIPLIERS: Dict[str, float] = {
    "concept": 1.0,
    "mvp": 1.1,
    "beta": 1.3,
    "launched": 1.5,
    "scaling": 1.8,
}

NEUTRAL_MULTIPLIER = 1.0

# Revenue multiples on annualised MRR
LATE_STAGES = frozenset({"series-b", "series-c-plus"})
LATE_STAGE_REVENUE_MULTIPLE = 10
EARLY_STAGE_REVENUE_MULTIPLE = 15

VALUATION_CONSTANTS = {
    "value_per_retained_user": 100,
    "value_per_team_member": 250_000,
    "prior_funding_multiple": 1.5,
    "token_bonus_rate": 0.2,
}

# Alternate spellings seen from clients, mapped onto the canonical keys
_KEY_ALIASES = {
    "preseed": "pre-seed",
    "seriesa": "series-a",
    "seriesb": "series-b",
    "seriesc": "series-c-plus",
    "seriesc+": "series-c-plus",
    "seriescplus": "series-c-plus",
    "series-c": "series-c-plus",
    "series-c+": "series-c-plus",
}


def normalize_key(value: str) -> str:
    """Lower-case a categorical value and fold '_'/' ' separators and known aliases."""
    key = (value or "").strip().lower().replace("_", "-").replace(" ", "-")
    return _KEY_ALIASES.get(key, _KEY_ALIASES.get(key.replace("-", ""), key))


def lookup(table: Mapping[str, float], value: str, default: float) -> float:
    """Table lookup that never raises; unknown values fall back to the default."""
    return table.get(normalize_key(value), default)


def stage_base_valuation(stage: str) -> float:
    return lookup(STAGE_BASE_VALUATIONS, stage, DEFAULT_BASE_VALUATION)


def vertical_multiplier(vertical: str) -> float:
    return lookup(VERTICAL_MULTIPLIERS, vertical, NEUTRAL_MULTIPLIER)


def product_stage_multiplier(product_stage: str) -> float:
    return lookup(PRODUCT_STAGE_MULTIPLIERS, product_stage, NEUTRAL_MULTIPLIER)


def revenue_multiple(stage: str) -> int:
    """Later-stage ventures get the lower (compressed) revenue multiple."""
    if normalize_key(stage) in LATE_STAGES:
        return LATE_STAGE_REVENUE_MULTIPLE
    return EARLY_STAGE_REVENUE_MULTIPLE


__all__ = [
    "STAGE_BASE_VALUATIONS",
    "DEFAULT_BASE_VALUATION",
    "VERTICAL_MULTIPLIERS",
    "PRODUCT_STAGE_MULTIPLIERS",
    "NEUTRAL_MULTIPLIER",
    "LATE_STAGES",
    "VALUATION_CONSTANTS",
    "normalize_key",
    "lookup",
    "stage_base_valuation",
    "vertical_multiplier",
    "product_stage_multiplier",
    "revenue_multiple",
]
