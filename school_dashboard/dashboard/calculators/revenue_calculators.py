"""
Revenue Calculators

This module handles all revenue-related calculations:
- Total revenue: PIF + down payments + event revenue + pro shop sales + MRR
- Student value: total revenue per average active student
- Lifetime value: average retention (months) x student value

Total revenue is an exact Decimal sum. Student value and lifetime value are
reported as integers; the *_exact variants keep full precision for chaining.
"""

from decimal import Decimal

from .base_calculators import BaseCalculator, MonthlyRecord, Number
import logging

logger = logging.getLogger(__name__)


class RevenueCalculators(BaseCalculator):
    """Revenue calculation functions for dashboard metrics"""

    @staticmethod
    def calculate_total_revenue(record: MonthlyRecord) -> Decimal:
        """
        Sum the five revenue components of a record.

        No rounding is applied.
        """
        return (
            RevenueCalculators.to_decimal(record.pif)
            + RevenueCalculators.to_decimal(record.down_payments)
            + RevenueCalculators.to_decimal(record.event_revenue)
            + RevenueCalculators.to_decimal(record.pro_shop_sales)
            + RevenueCalculators.to_decimal(record.mrr)
        )

    @staticmethod
    def calculate_average_student_count(students_start: Number, students_end: Number) -> int:
        """Average of the period boundary student counts, rounded half-up"""
        total = RevenueCalculators.to_decimal(students_start) + RevenueCalculators.to_decimal(students_end)
        return RevenueCalculators.round_half_up(total / 2)

    @staticmethod
    def calculate_student_value_exact(total_revenue: Number, avg_student_count: Number) -> Decimal:
        """Revenue per student without rounding; 0 when there are no students"""
        return RevenueCalculators.safe_divide(total_revenue, avg_student_count)

    @staticmethod
    def calculate_student_value(total_revenue: Number, avg_student_count: Number) -> int:
        """
        Calculate average revenue per active student.

        Args:
            total_revenue: Total revenue for the period
            avg_student_count: Rounded average of start and end student counts

        Returns:
            int: Revenue per student, 0 if avg_student_count is 0
        """
        return RevenueCalculators.round_half_up(
            RevenueCalculators.calculate_student_value_exact(total_revenue, avg_student_count)
        )

    @staticmethod
    def calculate_lifetime_value_exact(avg_retention: Number, student_value: Number) -> Decimal:
        return RevenueCalculators.to_decimal(avg_retention) * RevenueCalculators.to_decimal(student_value)

    @staticmethod
    def calculate_lifetime_value(avg_retention: Number, student_value: Number) -> int:
        """
        Projected revenue per student over the estimated retention.

        lifetime_value(50, 41) == 2050
        """
        return RevenueCalculators.round_half_up(
            RevenueCalculators.calculate_lifetime_value_exact(avg_retention, student_value)
        )
