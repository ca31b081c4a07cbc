"""
Display formatting for money and quantities.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union, Optional

from fuelshop.models.category import ProductCategory

Number = Union[int, float, Decimal, str, None]

CENTS = Decimal('0.01')


def _as_decimal(value: Number) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None


def money(value: Number, symbol: str = '₱') -> str:
    """
    Format a monetary amount with thousands separators and two decimals.

    Examples:
        money(420) -> "₱420.00"
        money(Decimal('1234.5')) -> "₱1,234.50"
        money(None) -> "-"
    """
    num = _as_decimal(value)
    if num is None:
        return "-"
    num = num.quantize(CENTS, rounding=ROUND_HALF_UP)
    return f"{symbol}{num:,.2f}"


def quantity_label(quantity: Number, category, unit: str = '') -> str:
    """
    Describe a cart quantity the way the cart screen shows it.

    Fuel is a continuous volume shown to two decimals in its plural unit
    ("7.00 Liters", Liter when no unit is stored); counted goods show the
    whole count and the unit ("2 Bottle(s)").
    """
    num = _as_decimal(quantity)
    if num is None:
        return "-"

    kind = ProductCategory.from_label(category)
    if kind.is_continuous:
        label = (unit or '').strip() or 'Liter'
        if not label.endswith('s'):
            label += 's'
        return f"{num.quantize(CENTS, rounding=ROUND_HALF_UP)} {label}"

    if num == num.to_integral_value():
        count = str(int(num))
    else:
        count = str(num.normalize())
    return f"{count} {unit}(s)".strip()
