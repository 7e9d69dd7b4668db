# Dashboard Service
#
# Main service for dashboard functionality. Reads records and goals through the
# repository and combines them with the metrics engine and goal evaluator.

import logging
from decimal import Decimal
from typing import Dict, List, Any, Optional, Iterable, Tuple

from ..calculators import (
    MonthlyRecord,
    GoalCalculators,
    RevenueCalculators,
    BaseCalculator,
    MONTHS,
    month_index,
)
from .metrics_service import MetricsEngine
from .record_repository import RecordRepository

logger = logging.getLogger(__name__)


class RecordNotFoundError(LookupError):
    """No record is stored for the requested school and period."""
    pass


class InvalidPeriodError(ValueError):
    """An export bound is not a 'Month-Year' key."""
    pass


def parse_period_key(key: str) -> Tuple[int, int]:
    """
    Turn a 'Month-Year' key into a chronological (year, month_index) tuple.

    Raises:
        InvalidPeriodError: If the key is not a known month followed by a year
    """
    month, _, year = key.rpartition('-')
    if month not in MONTHS or not year.lstrip('-').isdigit():
        raise InvalidPeriodError(f"Invalid period '{key}', expected e.g. 'March-2024'")
    return int(year), month_index(month)


def select_export_range(records: Iterable[MonthlyRecord], start: Optional[str] = None,
                        end: Optional[str] = None) -> List[MonthlyRecord]:
    """
    Sort records chronologically and keep those between two 'Month-Year' periods.

    Both bounds are inclusive and optional. Periods are compared by calendar
    order, so 'February-2024' falls before 'January-2025'.
    """
    ordered = sorted(records, key=lambda record: record.sort_key)
    lower = parse_period_key(start) if start else None
    upper = parse_period_key(end) if end else None

    return [
        record for record in ordered
        if (lower is None or record.sort_key >= lower) and (upper is None or record.sort_key <= upper)
    ]


class DashboardService:
    """Main service for dashboard data operations"""

    def __init__(self, repository: Optional[RecordRepository] = None,
                 metrics_engine: Optional[MetricsEngine] = None):
        self.repository = repository or RecordRepository()
        self.metrics_engine = metrics_engine or MetricsEngine()

    def get_month_dashboard(self, account_id: int, month: str, year: int) -> Dict[str, Any]:
        """
        Record, derived metrics and goal progress for one month.

        Raises:
            RecordNotFoundError: If the school has no record for the period
        """
        record = self.repository.get_record(account_id, month, year)
        if record is None:
            raise RecordNotFoundError(f"No data for {month} {year}")

        goal = self.repository.get_goal(account_id, month, year)
        metrics = self.metrics_engine.calculate(record)
        goal_progress = GoalCalculators.evaluate_goals(record, goal)

        return {
            'record': record.to_dict(),
            'metrics': metrics.to_dict(),
            'goal': goal.to_dict() if goal else None,
            'goal_progress': {
                name: progress.to_dict() for name, progress in goal_progress.items()
            } if goal_progress else None,
        }

    def get_year_overview(self, account_id: int, year: int) -> List[Dict[str, Any]]:
        """One row per stored month of the year, in calendar order"""
        rows = []
        for record in self.repository.list_records(account_id, year=year):
            metrics = self.metrics_engine.calculate(record)
            rows.append({
                'month': record.month,
                'year': record.year,
                'leads': record.leads,
                'appointments': record.appointments,
                'showed': record.showed,
                'enrollments': record.enrollments,
                'total_revenue': BaseCalculator.format_money(metrics.total_revenue),
                'students_end': record.students_end,
                'student_value': metrics.student_value,
            })
        return rows

    def get_revenue_comparison(self, account_id: int, limit: int = 6) -> List[Dict[str, Any]]:
        """
        Total revenue of the most recent months, each relative to the best month shown.

        percentage_of_max is 0 when no month in the window has revenue.
        """
        records = self.repository.list_records(account_id)[-limit:] if limit > 0 else []
        revenues = [RevenueCalculators.calculate_total_revenue(record) for record in records]
        max_revenue = max(revenues, default=Decimal('0'))

        comparison = []
        for record, revenue in zip(records, revenues):
            percentage = BaseCalculator.exact_percentage(revenue, max_revenue)
            comparison.append({
                'month': record.month,
                'year': record.year,
                'total_revenue': BaseCalculator.format_money(revenue),
                'percentage_of_max': round(float(percentage), 2),
            })
        return comparison

    def get_export_records(self, account_id: int, start: Optional[str] = None,
                           end: Optional[str] = None) -> List[MonthlyRecord]:
        """Records of an account for export, filtered to an inclusive period range"""
        return select_export_range(self.repository.list_records(account_id), start, end)
