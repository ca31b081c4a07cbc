"""
Cart Registry - owns one CartLedger per logged-in user.

A ledger is opened empty at login, looked up by the views that need it and
discarded at logout; nothing is persisted. The registry also tracks which
users have an order submission in flight so checkout cannot run twice for
the same cart.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Optional, Set

from flask import Flask, current_app

from fuelshop.exceptions import CheckoutInProgressError
from fuelshop.services.cart_ledger import CartLedger

logger = logging.getLogger(__name__)


class CartRegistry:
    """Session-scoped carts keyed by user id."""

    def __init__(self, app: Optional[Flask] = None):
        self._carts: Dict[int, CartLedger] = {}
        self._checkouts: Set[int] = set()
        self._lock = threading.Lock()

        if app:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        if not hasattr(app, 'extensions'):
            app.extensions = {}
        app.extensions['carts'] = self

    def open(self, user_id: int) -> CartLedger:
        """Start a fresh, empty cart for a new session."""
        ledger = CartLedger()
        with self._lock:
            self._carts[user_id] = ledger
            self._checkouts.discard(user_id)
        logger.info(f"[CART] opened for user {user_id}")
        return ledger

    def get(self, user_id: int) -> CartLedger:
        """
        Cart for `user_id`, opening one if the process has none.

        A restarted worker loses its carts; the shopper simply starts over
        with an empty one.
        """
        with self._lock:
            return self._get_or_open(user_id)

    def _get_or_open(self, user_id: int) -> CartLedger:
        ledger = self._carts.get(user_id)
        if ledger is None:
            ledger = self._carts[user_id] = CartLedger()
            logger.info(f"[CART] opened for user {user_id}")
        return ledger

    @contextmanager
    def editing(self, user_id: int):
        """
        Yield the cart of `user_id` for an addition.

        Held under the registry lock, so a checkout cannot snapshot the cart
        halfway through the change. Raises CheckoutInProgressError while an
        order submission for this cart is in flight.
        """
        with self._lock:
            if user_id in self._checkouts:
                raise CheckoutInProgressError()
            yield self._get_or_open(user_id)

    def discard(self, user_id: int) -> None:
        """Drop the cart at logout."""
        with self._lock:
            self._carts.pop(user_id, None)
            self._checkouts.discard(user_id)
        logger.info(f"[CART] discarded for user {user_id}")

    def has_cart(self, user_id: int) -> bool:
        with self._lock:
            return user_id in self._carts

    @contextmanager
    def checkout_in_progress(self, user_id: int):
        """
        Mark an order submission as in flight for `user_id`.

        Yields the cart; snapshot it inside the block, since additions are
        refused from that point until the block exits. Raises
        CheckoutInProgressError if a submission is already running.
        """
        with self._lock:
            if user_id in self._checkouts:
                raise CheckoutInProgressError()
            self._checkouts.add(user_id)
            ledger = self._get_or_open(user_id)
        try:
            yield ledger
        finally:
            with self._lock:
                self._checkouts.discard(user_id)

    def is_checking_out(self, user_id: int) -> bool:
        with self._lock:
            return user_id in self._checkouts


def init_carts(app: Flask) -> CartRegistry:
    """Attach a cart registry to the app."""
    return CartRegistry(app)


def get_cart_registry() -> CartRegistry:
    """Cart registry of the current app."""
    registry = current_app.extensions.get('carts')
    if registry is None:
        raise RuntimeError("Cart registry not initialized.")
    return registry
