"""Parsing helpers for numeric entry fields."""
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

PLAIN_DECIMAL_PATTERN = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")


def sanitize_numeric_input(text: Optional[str]) -> str:
    """
    Filter a keystroke-level value down to digits and one decimal point.

    Anything else (letters, signs, spaces, a second '.') is dropped rather
    than rejected, so the field never shows characters it cannot parse.

    Examples:
        sanitize_numeric_input("12a.5") -> "12.5"
        sanitize_numeric_input("1.2.3") -> "1.23"
        sanitize_numeric_input("-5")    -> "5"
    """
    if not text:
        return ''

    kept = []
    seen_point = False
    for ch in str(text):
        if ch.isdigit() and ch.isascii():
            kept.append(ch)
        elif ch == '.' and not seen_point:
            kept.append(ch)
            seen_point = True
    return ''.join(kept)


def parse_plain_decimal(value: Optional[str]) -> Decimal:
    """
    Parse an unsigned plain decimal string ("12", "12.5", ".5", "3.").

    No signs, exponents, thousands separators or NaN/Infinity are accepted.

    Raises:
        ValueError: if the value is empty or not a plain decimal.
    """
    if value is None:
        raise ValueError('Please enter a number.')

    cleaned = str(value).strip()
    if not cleaned or not PLAIN_DECIMAL_PATTERN.match(cleaned):
        raise ValueError('Please enter a number.')

    try:
        return Decimal(cleaned)
    except (InvalidOperation, ValueError):
        raise ValueError('Please enter a number.')


def to_decimal(value, default: Optional[Decimal] = None) -> Optional[Decimal]:
    """Coerce config/env values (str, int, float, Decimal, None) to Decimal."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f'Invalid decimal value: {value!r}')
