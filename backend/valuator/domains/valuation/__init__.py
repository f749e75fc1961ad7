"""
Valuation Domain

This domain handles the scorecard valuation of early-stage ventures.
Includes the scoring tables, the valuation engine and the narrative summary.
"""
