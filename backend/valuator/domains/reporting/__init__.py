"""
Reporting Domain

Assembles valuation results and insights into the exportable report.
"""
