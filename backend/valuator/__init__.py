"""Venture Valuator: scorecard valuation and AI insight normalization for early-stage ventures."""

__version__ = "0.1.0"
