"""
Base Calculator Classes and Utilities

This module provides the foundation for all dashboard calculations:
- MonthlyRecord: Standardized input data structure (one school, one month)
- BaseCalculator: Common calculation utilities (decimal conversion, safe division, rounding)

All rounding in the calculators uses ROUND_HALF_UP (half away from zero) to an
integer, applied once at the externally observed result.
"""

from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Dict, Any, Optional, Union
import logging

logger = logging.getLogger(__name__)

Number = Union[int, float, Decimal]

MONTHS = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December'
]

COUNT_FIELDS = ('leads', 'appointments', 'showed', 'enrollments', 'students_start', 'students_end')
MONEY_FIELDS = ('pif', 'down_payments', 'event_revenue', 'pro_shop_sales', 'mrr')

# Keys sent by the browser client
CAMEL_CASE_ALIASES = {
    'downPayments': 'down_payments',
    'eventRevenue': 'event_revenue',
    'proShopSales': 'pro_shop_sales',
    'studentsStart': 'students_start',
    'studentsEnd': 'students_end',
}


def month_index(month: str) -> int:
    """Zero-based calendar index of a month name, or -1 when unknown."""
    try:
        return MONTHS.index(month)
    except ValueError:
        return -1


def period_key(month: str, year: int) -> str:
    """Export range key, e.g. 'March-2024'."""
    return f"{month}-{year}"


@dataclass(frozen=True)
class MonthlyRecord:
    """
    Operational metrics entered by one school for one calendar month.

    Numeric fields default to 0. Money is held as Decimal so repeated sums
    and exports do not drift. Instances are frozen; calculators never mutate them.
    """
    month: str
    year: int
    leads: int = 0
    appointments: int = 0
    showed: int = 0
    enrollments: int = 0
    pif: Decimal = Decimal('0')
    down_payments: Decimal = Decimal('0')
    event_revenue: Decimal = Decimal('0')
    pro_shop_sales: Decimal = Decimal('0')
    mrr: Decimal = Decimal('0')
    students_start: int = 0
    students_end: int = 0
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, raw_record: Dict[str, Any]) -> 'MonthlyRecord':
        """
        Build a record from a dict using either snake_case or camelCase keys.

        Missing or None values become 0. No range validation happens here;
        see dashboard.validation for the data-entry boundary.
        """
        data = {CAMEL_CASE_ALIASES.get(key, key): value for key, value in raw_record.items()}

        kwargs = {
            'month': data.get('month', ''),
            'year': int(data.get('year') or 0),
            'id': data.get('id'),
        }
        for field_name in COUNT_FIELDS:
            kwargs[field_name] = int(data.get(field_name) or 0)
        for field_name in MONEY_FIELDS:
            kwargs[field_name] = BaseCalculator.to_decimal(data.get(field_name) or 0)

        return cls(**kwargs)

    @property
    def period_key(self) -> str:
        return period_key(self.month, self.year)

    @property
    def sort_key(self):
        """Chronological ordering key (year, month index)."""
        return (self.year, month_index(self.month))

    def to_dict(self) -> Dict[str, Any]:
        """JSON friendly representation; money rendered as 2-decimal strings"""
        result = asdict(self)
        for field_name in MONEY_FIELDS:
            result[field_name] = BaseCalculator.format_money(result[field_name])
        return result


class BaseCalculator:
    """
    Base class providing common calculation utilities.

    All calculator classes inherit from this to access shared
    decimal arithmetic and rounding.
    """

    @staticmethod
    def to_decimal(value: Number) -> Decimal:
        """
        Convert a number to Decimal without binary float drift.

        Floats go through str() so 99.1 becomes Decimal('99.1').
        """
        if isinstance(value, Decimal):
            return value
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)

    @staticmethod
    def round_half_up(value: Number) -> int:
        """
        Round to the nearest integer, halves away from zero.

        Args:
            value: The value to round

        Returns:
            Rounded integer, or 0 if value is not a finite number
        """
        try:
            return int(BaseCalculator.to_decimal(value).quantize(Decimal('1'), rounding=ROUND_HALF_UP))
        except (TypeError, ValueError, InvalidOperation) as e:
            logger.warning(f"round_half_up error: {e}, returning 0")
            return 0

    @staticmethod
    def safe_divide(numerator: Number, denominator: Number,
                    default: Decimal = Decimal('0')) -> Decimal:
        """
        Perform exact decimal division with a default for a zero denominator.

        Args:
            numerator: The number to divide
            denominator: The number to divide by
            default: Value to return if denominator is 0

        Returns:
            Unrounded quotient, or default if denominator is 0
        """
        try:
            denominator = BaseCalculator.to_decimal(denominator)
            if denominator == 0:
                return default
            return BaseCalculator.to_decimal(numerator) / denominator
        except (TypeError, ValueError, InvalidOperation) as e:
            logger.warning(f"safe_divide error: {e}, returning default {default}")
            return default

    @staticmethod
    def exact_percentage(numerator: Number, denominator: Number) -> Decimal:
        """Unrounded percentage (numerator / denominator * 100), 0 for a zero denominator"""
        return BaseCalculator.safe_divide(numerator, denominator) * 100

    @staticmethod
    def safe_percentage(numerator: Number, denominator: Number) -> int:
        """
        Calculate an integer percentage with safe division.

        Args:
            numerator: The number to convert to percentage of denominator
            denominator: The total amount

        Returns:
            Percentage rounded half-up to an integer, 0 if denominator is 0
        """
        return BaseCalculator.round_half_up(BaseCalculator.exact_percentage(numerator, denominator))

    @staticmethod
    def format_money(value: Number) -> str:
        """Render an amount with exactly 2 decimals, e.g. '2050.00'"""
        amount = BaseCalculator.to_decimal(value).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
        return str(amount)
