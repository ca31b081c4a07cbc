"""
Pricing calculator for the product screen.

Turns whatever the shopper typed plus the selected entry mode into the
(quantity, line_total) pair the cart ledger accumulates. Pure functions:
nothing here touches the session, the database or the cart.
"""
import enum
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Tuple

from fuelshop.models.category import ProductCategory
from fuelshop.utils.number_format import parse_plain_decimal, sanitize_numeric_input, to_decimal

CENTS = Decimal('0.01')
QUANTITY_STEP = Decimal('0.000001')

# Largest values a single cart line or a whole cart may reach; they keep
# OrderItem.quantity (14,6) and Order.subtotal/total_amount (12,2) storable.
MAX_INTEGER_DIGITS = 12
MAX_QUANTITY = Decimal('99999999.999999')
MAX_LINE_TOTAL = Decimal('99999999.99')
MAX_CART_TOTAL = MAX_LINE_TOTAL

DEFAULT_QUANTITY_INPUT = '1'
DEFAULT_AMOUNT_INPUT = '100'

INVALID_AMOUNT_MESSAGE = 'Please enter a valid amount.'
WHOLE_UNITS_MESSAGE = 'Quantity must be a whole number.'
INVALID_PRICE_MESSAGE = 'This product has no valid price.'
TOO_LARGE_MESSAGE = 'That amount is too large.'


class InputMode(enum.Enum):
    """What the number in the entry field means."""
    BY_QUANTITY = "quantity"  # liters / bottles
    BY_AMOUNT = "amount"      # money to spend; volume is derived

    @classmethod
    def parse(cls, value, default: 'InputMode' = None) -> 'InputMode':
        """Accept an InputMode, its value ('amount') or its name ('BY_AMOUNT')."""
        if isinstance(value, cls):
            return value
        if value is None or str(value).strip() == '':
            return default or cls.BY_QUANTITY
        text = str(value).strip()
        for mode in cls:
            if text.lower() == mode.value or text.upper() == mode.name:
                return mode
        if text.lower() == 'liters':  # mode value the mobile app sends
            return cls.BY_QUANTITY
        raise ValueError(f'Unknown input mode: {value}')


@dataclass(frozen=True)
class PricingResult:
    """Outcome of one calculation; `valid` is False instead of raising."""
    valid: bool
    quantity: Optional[Decimal] = None
    line_total: Optional[Decimal] = None
    message: Optional[str] = None

    @classmethod
    def invalid(cls, message: str = INVALID_AMOUNT_MESSAGE) -> 'PricingResult':
        return cls(valid=False, message=message)

    def to_dict(self):
        if not self.valid:
            return {'valid': False, 'message': self.message}
        return {
            'valid': True,
            'quantity': str(self.quantity),
            'line_total': str(self.line_total),
        }


def sanitize_input(raw_input: Optional[str]) -> str:
    """Keystroke filter: digits and the first decimal point only."""
    return sanitize_numeric_input(raw_input)


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def round_quantity(value: Decimal) -> Decimal:
    return value.quantize(QUANTITY_STEP, rounding=ROUND_HALF_UP)


def compute(raw_input: Optional[str], mode, unit_price) -> PricingResult:
    """
    Convert the entry field into a (quantity, line_total) pair.

    BY_QUANTITY: quantity = input, line_total = quantity * unit_price
    BY_AMOUNT:   line_total = input, quantity = line_total / unit_price

    Empty, non-numeric, zero or negative input gives an invalid result, as
    does a non-positive unit price or a line too large to be ordered.
    """
    try:
        mode = InputMode.parse(mode)
        price = to_decimal(unit_price)
    except ValueError:
        return PricingResult.invalid()

    if price is None or not price.is_finite() or price <= 0:
        return PricingResult.invalid(INVALID_PRICE_MESSAGE)

    try:
        value = parse_plain_decimal(raw_input)
    except ValueError:
        return PricingResult.invalid()

    if value <= 0:
        return PricingResult.invalid()

    if value.adjusted() >= MAX_INTEGER_DIGITS:
        return PricingResult.invalid(TOO_LARGE_MESSAGE)

    try:
        if mode is InputMode.BY_AMOUNT:
            line_total = round_money(value)
            quantity = round_quantity(value / price)
        else:
            quantity = value
            line_total = round_money(value * price)
    except InvalidOperation:
        return PricingResult.invalid(TOO_LARGE_MESSAGE)

    if quantity <= 0 or line_total <= 0:
        return PricingResult.invalid()

    if not within_limits(quantity, line_total):
        return PricingResult.invalid(TOO_LARGE_MESSAGE)

    return PricingResult(valid=True, quantity=quantity, line_total=line_total)


def within_limits(quantity: Decimal, line_total: Decimal, cart_total: Decimal = Decimal('0')) -> bool:
    """True if a line (and the cart it ends up in) can still be stored on an order."""
    return (
        quantity <= MAX_QUANTITY
        and line_total <= MAX_LINE_TOTAL
        and cart_total <= MAX_CART_TOTAL
    )


def available_modes(category) -> Tuple[InputMode, ...]:
    """Entry modes the product screen offers for a category."""
    if ProductCategory.from_label(category).allows_amount_entry:
        return (InputMode.BY_QUANTITY, InputMode.BY_AMOUNT)
    return (InputMode.BY_QUANTITY,)


def effective_mode(category, mode) -> InputMode:
    """Requested mode, or BY_QUANTITY where amount entry is not offered."""
    mode = InputMode.parse(mode)
    if mode not in available_modes(category):
        return InputMode.BY_QUANTITY
    return mode


def default_input(mode, amount_default: str = DEFAULT_AMOUNT_INPUT) -> str:
    """
    Value the entry field resets to when the mode is switched.

    The old text is never reinterpreted, so "100" liters does not silently
    become 100 currency units.
    """
    if InputMode.parse(mode) is InputMode.BY_AMOUNT:
        return amount_default
    return DEFAULT_QUANTITY_INPUT


def compute_for_product(product, raw_input: Optional[str], mode=None) -> PricingResult:
    """Run `compute` with the product's price and category rules applied."""
    category = ProductCategory.from_label(product.category)
    try:
        mode = effective_mode(category, mode)
    except ValueError:
        return PricingResult.invalid()

    result = compute(raw_input, mode, product.current_price)
    if not result.valid:
        return result

    if not category.is_continuous and result.quantity != result.quantity.to_integral_value():
        return PricingResult.invalid(WHOLE_UNITS_MESSAGE)

    return result
