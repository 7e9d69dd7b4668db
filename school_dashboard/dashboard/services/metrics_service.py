# Metrics Service
#
# Derives the dashboard KPIs for one monthly record. Results are recomputed on
# every read and never stored.

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Any, Optional

from ..calculators import (
    MonthlyRecord,
    FunnelCalculators,
    PerformanceMetric,
    RevenueCalculators,
    RetentionCalculators,
    BaseCalculator,
    DEFAULT_FUNNEL_TARGETS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DerivedMetrics:
    """KPIs derived from a single MonthlyRecord"""
    total_revenue: Decimal
    conversion_rates: Dict[str, PerformanceMetric]
    churn_rate: int
    churn_status: str
    average_monthly_retention: int
    average_student_count: int
    student_value: int
    lifetime_value: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_revenue': BaseCalculator.format_money(self.total_revenue),
            'conversion_rates': {name: metric.to_dict() for name, metric in self.conversion_rates.items()},
            'churn_rate': self.churn_rate,
            'churn_status': self.churn_status,
            'average_monthly_retention': self.average_monthly_retention,
            'average_student_count': self.average_student_count,
            'student_value': self.student_value,
            'lifetime_value': self.lifetime_value,
        }


class MetricsEngine:
    """
    Computes DerivedMetrics from a MonthlyRecord.

    Chained figures keep full precision: retention is computed from the
    unrounded churn ratio and lifetime value from the unrounded retention and
    student value. Each reported figure is rounded exactly once.
    """

    def __init__(self, funnel_targets: Optional[Dict[str, int]] = None):
        self.funnel_targets = {**DEFAULT_FUNNEL_TARGETS, **(funnel_targets or {})}

    def calculate(self, record: MonthlyRecord) -> DerivedMetrics:
        """Derive every dashboard KPI for a record"""
        total_revenue = RevenueCalculators.calculate_total_revenue(record)

        churn_exact = RetentionCalculators.calculate_churn_rate_exact(
            record.students_start, record.students_end, record.enrollments
        )
        churn_rate = RetentionCalculators.round_half_up(churn_exact)
        retention_exact = RetentionCalculators.calculate_average_retention_exact(churn_exact)

        average_student_count = RevenueCalculators.calculate_average_student_count(
            record.students_start, record.students_end
        )
        student_value_exact = RevenueCalculators.calculate_student_value_exact(total_revenue, average_student_count)

        return DerivedMetrics(
            total_revenue=total_revenue,
            conversion_rates=FunnelCalculators.calculate_conversion_rates(record, self.funnel_targets),
            churn_rate=churn_rate,
            churn_status=RetentionCalculators.classify_churn(churn_rate),
            average_monthly_retention=RetentionCalculators.round_half_up(retention_exact),
            average_student_count=average_student_count,
            student_value=RevenueCalculators.round_half_up(student_value_exact),
            lifetime_value=RevenueCalculators.calculate_lifetime_value(retention_exact, student_value_exact),
        )
