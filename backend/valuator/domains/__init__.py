"""
Business domains: valuation, insights and reporting.
"""
