"""
Input Validation

Checks applied at the data-entry boundary before a record or goal reaches the
calculators. The calculators themselves trust their inputs.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from .calculators import MonthlyRecord, GoalTarget, MONTHS, BaseCalculator
from .calculators.base_calculators import COUNT_FIELDS, MONEY_FIELDS, CAMEL_CASE_ALIASES

MIN_YEAR = 2000
MAX_YEAR = 2100

# Ceilings keep counts within sqlite INTEGER and amounts within the 28-digit
# decimal context used for money formatting.
MAX_COUNT = 10 ** 9
MAX_AMOUNT = Decimal('1e12')


class RecordValidationError(ValueError):
    """Raised when submitted data cannot be stored"""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


def validate_period(month: Any, year: Any) -> tuple:
    """
    Normalize a (month, year) pair.

    Month names are matched case-insensitively: 'march' becomes 'March'.

    Returns:
        (month, year) with a canonical month name and an int year
    """
    month_name = str(month or '').strip().capitalize()
    if month_name not in MONTHS:
        raise RecordValidationError(f"Unknown month '{month}'", field='month')

    try:
        year_value = int(year)
    except (TypeError, ValueError):
        raise RecordValidationError(f"Year must be an integer, got '{year}'", field='year')
    if isinstance(year, bool) or not MIN_YEAR <= year_value <= MAX_YEAR:
        raise RecordValidationError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}", field='year')

    return month_name, year_value


def validate_count(value: Any, field: str) -> int:
    """A non-negative whole number; None and '' count as 0"""
    if value is None or value == '':
        return 0
    if isinstance(value, bool):
        raise RecordValidationError(f"{field} must be a whole number", field=field)

    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise RecordValidationError(f"{field} must be a whole number", field=field)

    if not number.is_finite() or number != number.to_integral_value():
        raise RecordValidationError(f"{field} must be a whole number", field=field)
    if number < 0:
        raise RecordValidationError(f"{field} cannot be negative", field=field)
    if number > MAX_COUNT:
        raise RecordValidationError(f"{field} cannot exceed {MAX_COUNT}", field=field)
    return int(number)


def validate_amount(value: Any, field: str) -> Decimal:
    """A non-negative finite amount; None and '' count as 0"""
    if value is None or value == '':
        return Decimal('0')
    if isinstance(value, bool):
        raise RecordValidationError(f"{field} must be a number", field=field)

    try:
        amount = BaseCalculator.to_decimal(value) if isinstance(value, (int, float, Decimal)) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise RecordValidationError(f"{field} must be a number", field=field)

    if not amount.is_finite():
        raise RecordValidationError(f"{field} must be a finite number", field=field)
    if amount < 0:
        raise RecordValidationError(f"{field} cannot be negative", field=field)
    if amount > MAX_AMOUNT:
        raise RecordValidationError(f"{field} cannot exceed {MAX_AMOUNT:f}", field=field)
    return amount


def parse_record_payload(payload: Dict[str, Any], month: Any, year: Any) -> MonthlyRecord:
    """
    Validate a submitted monthly record.

    The period comes from the URL; month/year keys in the payload are ignored.
    """
    if not isinstance(payload, dict):
        raise RecordValidationError('Request body must be a JSON object')

    month, year = validate_period(month, year)
    data = {CAMEL_CASE_ALIASES.get(key, key): value for key, value in payload.items()}

    values = {'month': month, 'year': year}
    for field in COUNT_FIELDS:
        values[field] = validate_count(data.get(field), field)
    for field in MONEY_FIELDS:
        values[field] = validate_amount(data.get(field), field)

    return MonthlyRecord(**values)


def parse_goal_payload(payload: Dict[str, Any], month: Any, year: Any) -> GoalTarget:
    """Validate submitted goal targets for a period"""
    if not isinstance(payload, dict):
        raise RecordValidationError('Request body must be a JSON object')

    month, year = validate_period(month, year)
    return GoalTarget(
        month=month,
        year=year,
        target_leads=validate_count(payload.get('target_leads'), 'target_leads'),
        target_enrollments=validate_count(payload.get('target_enrollments'), 'target_enrollments'),
        target_revenue=validate_amount(payload.get('target_revenue'), 'target_revenue'),
    )
