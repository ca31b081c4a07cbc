"""
Cart Ledger - in-memory shopping cart for one logged-in session.

The ledger only accumulates what callers hand it: quantities and line
totals are summed per product, never re-derived from prices, so a price
change in the catalog cannot rewrite a line already in the cart.
"""
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Callable, Dict, Optional, Tuple
import logging

from fuelshop.models.category import ProductCategory

logger = logging.getLogger(__name__)

ZERO = Decimal('0')


@dataclass(frozen=True)
class CartLineItem:
    """
    One cart row, keyed by product id.

    name/category/unit/unit_price are captured on the first add and are
    never overwritten; quantity and line_total only grow through merge().
    """
    product_id: int
    name: str
    category: ProductCategory
    unit: str
    unit_price: Decimal
    quantity: Decimal
    line_total: Decimal

    @classmethod
    def from_product(cls, product, quantity, line_total) -> 'CartLineItem':
        return cls(
            product_id=product.id,
            name=product.name,
            category=ProductCategory.from_label(product.category),
            unit=product.unit,
            unit_price=Decimal(str(product.current_price)),
            quantity=Decimal(str(quantity)),
            line_total=Decimal(str(line_total)),
        )

    def merge(self, quantity, line_total) -> 'CartLineItem':
        """New item with the additions applied; self is left untouched."""
        return replace(
            self,
            quantity=self.quantity + Decimal(str(quantity)),
            line_total=self.line_total + Decimal(str(line_total)),
        )

    def to_dict(self):
        return {
            'product_id': self.product_id,
            'name': self.name,
            'category': self.category.value,
            'unit': self.unit,
            'unit_price': str(self.unit_price),
            'quantity': str(self.quantity),
            'line_total': str(self.line_total),
        }


@dataclass(frozen=True)
class CartSnapshot:
    """Immutable copy of the cart handed to the order submitter."""
    items: Tuple[CartLineItem, ...]
    total: Decimal

    @property
    def is_empty(self) -> bool:
        return not self.items


class CartLedger:
    """Line items for the active session plus the derived grand total."""

    def __init__(self, on_item_added: Optional[Callable[[CartLineItem], None]] = None):
        self._items: Dict[int, CartLineItem] = {}
        self._on_item_added = on_item_added

    @property
    def items(self) -> Tuple[CartLineItem, ...]:
        """Read-only view in insertion order."""
        return tuple(self._items.values())

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self):
        return len(self._items)

    def __contains__(self, product_id):
        return product_id in self._items

    def get(self, product_id) -> Optional[CartLineItem]:
        return self._items.get(product_id)

    def add_item(self, product, quantity, line_total) -> Tuple[CartLineItem, ...]:
        """
        Add `quantity` / `line_total` for `product`.

        An existing line for the same product id is replaced by a merged copy
        (same position); otherwise a new line is appended. Inputs are not
        re-validated: the pricing calculator is the gatekeeper.
        """
        existing = self._items.get(product.id)
        if existing is not None:
            item = existing.merge(quantity, line_total)
        else:
            item = CartLineItem.from_product(product, quantity, line_total)
        self._items[product.id] = item

        logger.info(
            f"Cart add: product={item.product_id} qty={item.quantity} "
            f"line_total={item.line_total}"
        )
        if self._on_item_added is not None:
            self._on_item_added(item)
        return self.items

    def remove_item(self, product_id) -> Tuple[CartLineItem, ...]:
        """Drop the line for `product_id`; unknown ids are ignored."""
        if self._items.pop(product_id, None) is not None:
            logger.info(f"Cart remove: product={product_id}")
        return self.items

    def clear(self) -> None:
        self._items = {}

    def remove_submitted(self, submitted) -> Tuple[CartLineItem, ...]:
        """
        Drop the lines of a placed order.

        Only lines still equal to their submitted copy are removed; anything
        added or changed since the snapshot stays in the cart.
        """
        for item in submitted:
            if self._items.get(item.product_id) == item:
                del self._items[item.product_id]
        return self.items

    def get_total(self) -> Decimal:
        """Sum of line totals; there is no separately stored running total."""
        return sum((item.line_total for item in self._items.values()), ZERO)

    def snapshot(self) -> CartSnapshot:
        items = self.items
        return CartSnapshot(items=items, total=sum((i.line_total for i in items), ZERO))

    def __repr__(self):
        return f"<CartLedger(items={len(self._items)}, total={self.get_total()})>"
