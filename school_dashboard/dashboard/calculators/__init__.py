"""
Dashboard Calculators Module

This module contains all calculation logic for school dashboard metrics, organized into logical categories.
Every calculator is a pure function of its explicit inputs: no I/O, no shared state, no exceptions
for zero denominators.

=== CALCULATOR ORGANIZATION ===

📊 BASE_CALCULATORS.PY
- MonthlyRecord: Standardized input data structure (one school, one month)
- BaseCalculator: Common utilities (to_decimal, round_half_up, safe_divide, safe_percentage)

🎯 FUNNEL_CALCULATORS.PY
- calculate_percentage: value / total * 100, 0 for an empty total
- classify_status: success / warning / danger against a target
- calculate_conversion_rates: appointment, show and enrollment rates

💰 REVENUE_CALCULATORS.PY
- calculate_total_revenue: sum of the five revenue components
- calculate_student_value: revenue per average active student
- calculate_lifetime_value: retention months x student value

📉 RETENTION_CALCULATORS.PY
- calculate_churn_rate: share of start + new students lost (may be negative)
- calculate_average_retention: 100 / churn, 0 for zero churn

🏁 GOAL_CALCULATORS.PY
- GoalTarget / GoalProgress
- calculate_progress: capped percentage, overage, met / exceeded flags
- evaluate_goals: leads, enrollments and revenue against a month's goal

=== ROUNDING ===

Integer results use ROUND_HALF_UP (half away from zero): percentage(1, 8) == 13.

=== USAGE ===

from school_dashboard.dashboard.calculators import MonthlyRecord, RetentionCalculators

record = MonthlyRecord.from_dict(record_dict)
churn = RetentionCalculators.calculate_churn_rate(
    record.students_start, record.students_end, record.enrollments
)
"""

from .base_calculators import MonthlyRecord, BaseCalculator, MONTHS, month_index, period_key
from .funnel_calculators import FunnelCalculators, PerformanceMetric, DEFAULT_FUNNEL_TARGETS
from .revenue_calculators import RevenueCalculators
from .retention_calculators import RetentionCalculators
from .goal_calculators import GoalCalculators, GoalTarget, GoalProgress

__all__ = [
    'MonthlyRecord',
    'BaseCalculator',
    'MONTHS',
    'month_index',
    'period_key',
    'FunnelCalculators',
    'PerformanceMetric',
    'DEFAULT_FUNNEL_TARGETS',
    'RevenueCalculators',
    'RetentionCalculators',
    'GoalCalculators',
    'GoalTarget',
    'GoalProgress'
]
