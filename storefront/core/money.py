"""Exact decimal helpers for two-place currency amounts."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from storefront.core.exceptions import InvalidAmountError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
MAX_AMOUNT = Decimal("999999.99")


def quantize(value: Decimal) -> Decimal:
    """Round a value to two places, half up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def validate_amount(
    value: Decimal | None,
    operation: str,
    max_amount: Decimal | None = None,
) -> Decimal:
    """Validate a monetary input and return it at a scale of two.

    Raises:
        InvalidAmountError: If the value is missing, not finite, not
            positive, too large to represent, has more than two decimal
            places, or exceeds ``max_amount``.
    """
    if value is None:
        raise InvalidAmountError(operation, "is required")
    try:
        value = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(operation, "is not a valid decimal") from None
    if not value.is_finite():
        raise InvalidAmountError(operation, "is not a valid decimal")
    if value <= 0:
        raise InvalidAmountError(operation)
    try:
        rounded = quantize(value)
    except InvalidOperation:
        # More integer digits than the decimal context can hold
        raise InvalidAmountError(operation, "is out of range") from None
    if value.as_tuple().exponent < -2 and value != rounded:
        raise InvalidAmountError(operation, "must have at most 2 decimal places")
    if max_amount is not None and value > max_amount:
        raise InvalidAmountError(operation, f"must not exceed {max_amount}")
    return rounded


def total(prices: Iterable[Decimal]) -> Decimal:
    """Sum prices exactly, starting from 0.00."""
    return quantize(sum(prices, ZERO))
