"""
Insights Domain

Generates the competitor, risk and roadmap analyses with an external text
generation service and normalizes the responses into structured insights.
"""
