"""
Currency unit conversion. Prices are persisted in cents.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union
from lightbnb.utils.exceptions import ValidationError

Number = Union[int, float, str, Decimal]

CENTS_PER_UNIT = 100


def to_minor_units(amount: Number, field: str = "amount") -> int:
    """
    Convert a major-unit amount (dollars) to integer cents.

    Args:
        amount: Amount in major units, e.g. 150 or "149.99"
        field: Name reported when the amount is rejected

    Returns:
        Amount in cents, rounded half up

    Raises:
        ValidationError: If the amount is not a finite number
    """
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        value = None

    if isinstance(amount, bool) or value is None or not value.is_finite():
        raise ValidationError(
            f"{field} must be a finite number, got {amount!r}",
            field_errors=[{"field": field, "message": "Must be a finite number"}]
        )

    cents = value * CENTS_PER_UNIT
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
