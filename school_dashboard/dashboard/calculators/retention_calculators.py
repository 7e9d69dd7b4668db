"""
Retention Calculators

This module handles student churn and retention:
- Churn rate: share of (starting students + new enrollments) lost by period end
- Average monthly retention: 100 / churn, in months

Churn can be negative when a school gains more students than it enrolled
during the month; it is reported as-is and never clamped.
"""

from decimal import Decimal

from .base_calculators import BaseCalculator, Number
import logging

logger = logging.getLogger(__name__)

# Churn card thresholds (percent)
CHURN_SUCCESS_BELOW = 5
CHURN_WARNING_BELOW = 10


class RetentionCalculators(BaseCalculator):
    """Churn and retention calculation functions for dashboard metrics"""

    @staticmethod
    def calculate_churn_rate_exact(students_start: Number, students_end: Number,
                                   new_enrollments: Number) -> Decimal:
        """Unrounded churn percentage; 0 when the cohort is empty"""
        base = RetentionCalculators.to_decimal(students_start) + RetentionCalculators.to_decimal(new_enrollments)
        lost = base - RetentionCalculators.to_decimal(students_end)
        return RetentionCalculators.exact_percentage(lost, base)

    @staticmethod
    def calculate_churn_rate(students_start: Number, students_end: Number, new_enrollments: Number) -> int:
        """
        Calculate churn rate for a month.

        Formula: (start + new - end) / (start + new) * 100

        Examples:
            churn_rate(100, 95, 10) == 14
            churn_rate(100, 120, 10) == -9 (net growth)

        Returns:
            int: Churn percentage, 0 if start + new is 0
        """
        return RetentionCalculators.round_half_up(
            RetentionCalculators.calculate_churn_rate_exact(students_start, students_end, new_enrollments)
        )

    @staticmethod
    def calculate_average_retention_exact(churn: Number) -> Decimal:
        """Unrounded 100 / churn; 0 when churn is 0"""
        return RetentionCalculators.safe_divide(100, churn)

    @staticmethod
    def calculate_average_retention(churn: Number) -> int:
        """
        Estimate how many months a student stays enrolled.

        A churn of 0 yields 0, not infinite retention. Negative churn yields a
        negative figure; callers receive it unchanged.
        """
        return RetentionCalculators.round_half_up(
            RetentionCalculators.calculate_average_retention_exact(churn)
        )

    @staticmethod
    def classify_churn(churn: Number) -> str:
        """Status for the churn card: success below 5%, warning below 10%"""
        if churn < CHURN_SUCCESS_BELOW:
            return 'success'
        if churn < CHURN_WARNING_BELOW:
            return 'warning'
        return 'danger'
