"""
Valuation Services

The deterministic valuation engine and its summary narrative.
"""

from .valuation import (
    ValuationService,
    build_valuation_summary,
    compute_valuation,
    format_currency,
    get_valuation_service,
    parse_valuation_input,
)

__all__ = [
    "ValuationService",
    "build_valuation_summary",
    "compute_valuation",
    "format_currency",
    "get_valuation_service",
    "parse_valuation_input",
]
