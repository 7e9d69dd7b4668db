"""
Goal Calculators

This module evaluates a month's actual results against the school's goal:
- Leads vs target leads
- Enrollments vs target enrollments
- Total revenue vs target revenue

A target of 0 means no goal was set for that metric: progress is 0 and the
goal is never reported as met or exceeded.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Any, Optional

from .base_calculators import BaseCalculator, MonthlyRecord, Number, period_key
from .revenue_calculators import RevenueCalculators
import logging

logger = logging.getLogger(__name__)

PROGRESS_CAP = Decimal('100')


@dataclass(frozen=True)
class GoalTarget:
    """Monthly targets set by a school"""
    month: str
    year: int
    target_leads: int = 0
    target_enrollments: int = 0
    target_revenue: Decimal = Decimal('0')
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, raw_goal: Dict[str, Any]) -> 'GoalTarget':
        return cls(
            month=raw_goal.get('month', ''),
            year=int(raw_goal.get('year') or 0),
            target_leads=int(raw_goal.get('target_leads') or 0),
            target_enrollments=int(raw_goal.get('target_enrollments') or 0),
            target_revenue=BaseCalculator.to_decimal(raw_goal.get('target_revenue') or 0),
            id=raw_goal.get('id'),
        )

    @property
    def period_key(self) -> str:
        return period_key(self.month, self.year)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'month': self.month,
            'year': self.year,
            'target_leads': self.target_leads,
            'target_enrollments': self.target_enrollments,
            'target_revenue': BaseCalculator.format_money(self.target_revenue),
        }


@dataclass(frozen=True)
class GoalProgress:
    """Progress of one metric towards its target"""
    current: Decimal
    target: Decimal
    percentage: Decimal
    overage: Decimal
    met: bool
    exceeded: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'current': float(self.current),
            'target': float(self.target),
            'percentage': round(float(self.percentage), 2),
            'overage': round(float(self.overage), 2),
            'met': self.met,
            'exceeded': self.exceeded,
        }


class GoalCalculators(BaseCalculator):
    """Goal progress calculation functions"""

    @staticmethod
    def calculate_progress(current: Number, target: Number) -> GoalProgress:
        """
        Evaluate a current value against its target.

        percentage is capped at 100 for progress bars; overage is the uncapped
        percentage above target and is 0 unless the target was exceeded.

        Example:
            calculate_progress(120, 100) -> percentage 100, overage 20, met, exceeded
        """
        current = GoalCalculators.to_decimal(current)
        target = GoalCalculators.to_decimal(target)

        has_goal = target > 0
        met = has_goal and current >= target
        exceeded = has_goal and current > target

        percentage = min(GoalCalculators.exact_percentage(current, target), PROGRESS_CAP) if has_goal else Decimal('0')
        overage = (current / target - 1) * 100 if exceeded else Decimal('0')

        return GoalProgress(
            current=current,
            target=target,
            percentage=percentage,
            overage=overage,
            met=met,
            exceeded=exceeded
        )

    @staticmethod
    def evaluate_goals(record: MonthlyRecord, goal: Optional[GoalTarget]) -> Optional[Dict[str, GoalProgress]]:
        """
        Evaluate leads, enrollments and revenue of a record against its goal.

        Returns:
            dict keyed by 'leads', 'enrollments', 'revenue', or None when the
            month has no goal
        """
        if goal is None:
            return None

        return {
            'leads': GoalCalculators.calculate_progress(record.leads, goal.target_leads),
            'enrollments': GoalCalculators.calculate_progress(record.enrollments, goal.target_enrollments),
            'revenue': GoalCalculators.calculate_progress(
                RevenueCalculators.calculate_total_revenue(record), goal.target_revenue
            ),
        }
