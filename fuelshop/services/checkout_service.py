"""Checkout preparation: delivery fee policy, order draft and preconditions."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from fuelshop.exceptions import BusinessLogicError, EmptyCartError, MissingAddressError
from fuelshop.models import PaymentMethod, normalize_payment_method
from fuelshop.services.cart_ledger import CartSnapshot
from fuelshop.services.pricing_service import round_money
from fuelshop.utils.number_format import to_decimal

ZERO = Decimal('0.00')
IDEMPOTENCY_KEY_MAX_LENGTH = 64


@dataclass(frozen=True)
class DeliveryFeePolicy:
    """
    Flat delivery fee, waived when the subtotal reaches `free_threshold`.

    A threshold of None means the fee always applies.
    """
    fee: Decimal = ZERO
    free_threshold: Optional[Decimal] = None

    @classmethod
    def from_config(cls, config) -> 'DeliveryFeePolicy':
        fee = to_decimal(config.get('DELIVERY_FEE'), ZERO)
        threshold = to_decimal(config.get('FREE_DELIVERY_THRESHOLD'), None)
        if fee < 0:
            raise ValueError('DELIVERY_FEE cannot be negative')
        if threshold is not None and threshold < 0:
            raise ValueError('FREE_DELIVERY_THRESHOLD cannot be negative')
        return cls(fee=round_money(fee), free_threshold=threshold)

    def fee_for(self, subtotal: Decimal) -> Decimal:
        if self.free_threshold is not None and subtotal >= self.free_threshold:
            return ZERO
        return self.fee


@dataclass(frozen=True)
class OrderDraft:
    """Everything the order submitter needs, built once at checkout."""
    snapshot: CartSnapshot
    delivery_address: str
    payment_method: PaymentMethod
    special_instructions: Optional[str]
    delivery_fee: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.snapshot.total

    @property
    def total_amount(self) -> Decimal:
        return round_money(self.subtotal + self.delivery_fee)


def summarize(snapshot: CartSnapshot, fee_policy: DeliveryFeePolicy) -> dict:
    """Subtotal / delivery fee / total block shown under the cart."""
    subtotal = round_money(snapshot.total)
    fee = fee_policy.fee_for(subtotal)
    return {
        'subtotal': str(subtotal),
        'delivery_fee': str(fee),
        'total': str(round_money(subtotal + fee)),
    }


def validate_checkout(snapshot: CartSnapshot, address: Optional[str], payment_method=None) -> PaymentMethod:
    """
    Client-side preconditions checked before any order is sent.

    Raises:
        MissingAddressError: blank delivery address
        EmptyCartError: nothing to order
        BusinessLogicError: unknown payment method
    """
    if not isinstance(address, str) or not address.strip():
        raise MissingAddressError()
    if snapshot.is_empty:
        raise EmptyCartError()
    try:
        return normalize_payment_method(payment_method)
    except ValueError as e:
        raise BusinessLogicError(str(e))


def build_order_draft(
    snapshot: CartSnapshot,
    address: Optional[str],
    payment_method=None,
    instructions: Optional[str] = None,
    fee_policy: Optional[DeliveryFeePolicy] = None
) -> OrderDraft:
    """Validate and freeze the checkout form into an OrderDraft."""
    method = validate_checkout(snapshot, address, payment_method)
    fee_policy = fee_policy or DeliveryFeePolicy()
    if instructions is not None and not isinstance(instructions, str):
        raise BusinessLogicError('Special instructions must be text.')
    instructions = (instructions or '').strip() or None

    return OrderDraft(
        snapshot=snapshot,
        delivery_address=address.strip(),
        payment_method=method,
        special_instructions=instructions,
        delivery_fee=fee_policy.fee_for(round_money(snapshot.total)),
    )


def normalize_idempotency_key(value) -> Optional[str]:
    """
    Client-generated key that makes a repeated submit a no-op.

    Blank means none. Raises BusinessLogicError when the key cannot be
    stored (not a string or number, or longer than the column).
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise BusinessLogicError('Invalid idempotency key.')
    key = str(value).strip()
    if not key:
        return None
    if len(key) > IDEMPOTENCY_KEY_MAX_LENGTH:
        raise BusinessLogicError('Invalid idempotency key.')
    return key
