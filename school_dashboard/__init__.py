"""
School Performance Dashboard

Monthly KPI tracking for martial-arts school franchises: funnel conversion,
revenue, churn, retention, student and lifetime value, goals and exports.
"""

__version__ = '1.0.0'
