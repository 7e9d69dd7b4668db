"""
Funnel Calculators

This module handles the enrollment funnel conversion rates:
- Appointment rate: appointments / leads
- Show rate: showed / appointments
- Enrollment rate: enrollments / showed

Each rate is paired with a policy target and classified as
success / warning / danger.
"""

from dataclasses import dataclass
from typing import Dict, Any

from .base_calculators import BaseCalculator, MonthlyRecord, Number
import logging

logger = logging.getLogger(__name__)

STATUS_SUCCESS = 'success'
STATUS_WARNING = 'warning'
STATUS_DANGER = 'danger'

# Within 10% of the target counts as a warning rather than danger
WARNING_TOLERANCE = 0.9

DEFAULT_FUNNEL_TARGETS = {
    'appointment_rate': 50,
    'show_rate': 80,
    'enrollment_rate': 80,
}


@dataclass(frozen=True)
class PerformanceMetric:
    """A conversion rate with its target and status"""
    value: int
    target: int
    status: str

    def to_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'target': self.target, 'status': self.status}


class FunnelCalculators(BaseCalculator):
    """Funnel conversion calculation functions for dashboard metrics"""

    @staticmethod
    def calculate_percentage(value: Number, total: Number) -> int:
        """
        Calculate value as an integer percentage of total.

        percentage(0, 0) == 0, percentage(1, 3) == 33, percentage(1, 8) == 13.
        """
        return FunnelCalculators.safe_percentage(value, total)

    @staticmethod
    def classify_status(actual: Number, target: Number) -> str:
        """
        Classify an actual value against its target.

        Returns:
            'success' if actual >= target, 'warning' if actual >= 90% of target,
            otherwise 'danger'
        """
        actual = FunnelCalculators.to_decimal(actual)
        target = FunnelCalculators.to_decimal(target)

        if actual >= target:
            return STATUS_SUCCESS
        if actual >= target * FunnelCalculators.to_decimal(WARNING_TOLERANCE):
            return STATUS_WARNING
        return STATUS_DANGER

    @staticmethod
    def calculate_funnel_metric(value: Number, total: Number, target: int) -> PerformanceMetric:
        """
        Build a PerformanceMetric for one funnel stage.

        The status is classified from the rounded percentage, which is the
        figure the dashboard shows next to the target.
        """
        percentage = FunnelCalculators.calculate_percentage(value, total)
        return PerformanceMetric(
            value=percentage,
            target=target,
            status=FunnelCalculators.classify_status(percentage, target)
        )

    @staticmethod
    def calculate_conversion_rates(record: MonthlyRecord,
                                   targets: Dict[str, int] = None) -> Dict[str, PerformanceMetric]:
        """
        Calculate the three funnel conversion rates for a record.

        Args:
            record: Monthly record to evaluate
            targets: Optional override of DEFAULT_FUNNEL_TARGETS

        Returns:
            dict with 'appointment_rate', 'show_rate' and 'enrollment_rate'
        """
        targets = {**DEFAULT_FUNNEL_TARGETS, **(targets or {})}

        return {
            'appointment_rate': FunnelCalculators.calculate_funnel_metric(
                record.appointments, record.leads, targets['appointment_rate']
            ),
            'show_rate': FunnelCalculators.calculate_funnel_metric(
                record.showed, record.appointments, targets['show_rate']
            ),
            'enrollment_rate': FunnelCalculators.calculate_funnel_metric(
                record.enrollments, record.showed, targets['enrollment_rate']
            ),
        }
