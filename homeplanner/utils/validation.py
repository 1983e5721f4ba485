"""
Validation utilities for client input
"""
import math
from decimal import Decimal, InvalidOperation


# Largest magnitude a Numeric(14, 2) column holds
MAX_AMOUNT = 10 ** 12
# Largest magnitude a Numeric(6, 2) percent column holds
MAX_PERCENT = 10 ** 4
# Signed 32-bit INTEGER column
MAX_SORT_ORDER = 2 ** 31 - 1


def normalize_decimal_input(value: str) -> str:
    """
    Normalize a typed amount: trim and replace a decimal comma with a dot

    Example:
        >>> normalize_decimal_input(" 100,50 ")
        "100.50"
    """
    return value.strip().replace(",", ".")


def parse_amount(value, limit: float = MAX_AMOUNT) -> float | None:
    """
    Parse a currency amount from JSON input

    None and empty strings mean "absent". Numbers and numeric strings are
    accepted; anything that does not produce a finite number within the
    column range is rejected instead of being silently treated as absent.

    Args:
        limit: exclusive bound on the absolute value

    Returns:
        float value, or None when the field is absent

    Raises:
        ValueError: value is not a finite number, or is out of range

    Example:
        >>> parse_amount("1 200,5")
        ValueError: Not a valid number: '1 200,5'
        >>> parse_amount("1200,5")
        1200.5
        >>> parse_amount(None)
        None
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Not a valid number: {value!r}")
    if isinstance(value, str):
        normalized = normalize_decimal_input(value)
        if not normalized:
            return None
        try:
            parsed = float(Decimal(normalized))
        except (InvalidOperation, ValueError, OverflowError):
            raise ValueError("Not a valid number")
    elif isinstance(value, (int, float, Decimal)):
        try:
            parsed = float(value)
        except OverflowError:
            raise ValueError("Not a finite number")
    else:
        raise ValueError(f"Not a valid number: {type(value).__name__}")

    if not math.isfinite(parsed):
        raise ValueError("Not a finite number")
    if abs(parsed) >= limit:
        raise ValueError(f"Must be less than {limit:g} in absolute value")
    return parsed


def parse_sort_order(value) -> int | None:
    """
    Parse a position within a list: a whole number in the 32-bit range

    Example:
        >>> parse_sort_order("3")
        3
        >>> parse_sort_order(1.7)
        ValueError: Must be a whole number
    """
    parsed = parse_amount(value, limit=MAX_SORT_ORDER + 1)
    if parsed is None:
        return None
    if not parsed.is_integer():
        raise ValueError("Must be a whole number")
    return int(parsed)


def clean_text(value: str | None) -> str:
    """Trim a free-text field; None becomes an empty string"""
    return (value or "").strip()


def optional_text(value: str | None) -> str | None:
    """Trim a nullable free-text field; blank becomes None"""
    cleaned = clean_text(value)
    return cleaned or None


def as_number(value) -> float:
    """Stored Numeric (or None) to a plain JSON number"""
    return float(value) if value is not None else 0.0


def as_optional_number(value) -> float | None:
    return float(value) if value is not None else None


def to_decimal(value: float | None) -> Decimal | None:
    """Float amount to a Numeric column value without binary float noise"""
    if value is None:
        return None
    return Decimal(repr(float(value)))
