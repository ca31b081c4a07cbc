"""Cart blueprint - in-memory cart of the logged-in shopper."""
import logging
from typing import Tuple

from flask import Blueprint, request, current_app, g, jsonify, Response

from fuelshop.database import get_session
from fuelshop.exceptions import BusinessLogicError, InsufficientStockError, InvalidInputError
from fuelshop.middleware import require_login
from fuelshop.services import catalog_service, pricing_service
from fuelshop.services.cart_registry import get_cart_registry
from fuelshop.services.checkout_service import DeliveryFeePolicy, summarize
from fuelshop.utils.formatters import money, quantity_label

logger = logging.getLogger(__name__)

cart_bp = Blueprint('cart', __name__, url_prefix='/cart')

ADDED_MESSAGE = 'Item added to cart!'


def cart_payload(ledger) -> dict:
    """Items plus the subtotal / delivery fee / total summary."""
    symbol = current_app.config.get('CURRENCY_SYMBOL', '₱')
    items = []
    for item in ledger.items:
        row = item.to_dict()
        row['quantity_label'] = quantity_label(item.quantity, item.category, item.unit)
        row['line_total_display'] = money(item.line_total, symbol)
        items.append(row)

    summary = summarize(ledger.snapshot(), DeliveryFeePolicy.from_config(current_app.config))
    summary['total_display'] = money(summary['total'], symbol)
    return {'items': items, 'count': len(items), **summary}


def _check_stock(ledger, product, quantity) -> None:
    """Gate on stock only when the product tracks it."""
    if not product.gates_stock:
        return
    existing = ledger.get(product.id)
    requested = quantity + (existing.quantity if existing else 0)
    if requested > product.stock_quantity:
        raise InsufficientStockError(product.name, requested, product.stock_quantity)


def _check_limits(ledger, product, result) -> None:
    """Merged line and cart total must still fit on an order."""
    existing = ledger.get(product.id)
    quantity = result.quantity + (existing.quantity if existing else 0)
    line_total = result.line_total + (existing.line_total if existing else 0)
    cart_total = ledger.get_total() + result.line_total
    if not pricing_service.within_limits(quantity, line_total, cart_total):
        raise InvalidInputError(pricing_service.TOO_LARGE_MESSAGE)


@cart_bp.route('/', methods=['GET'])
@require_login
def view_cart() -> Tuple[Response, int]:
    ledger = get_cart_registry().get(g.user_id)
    return jsonify(cart_payload(ledger)), 200


@cart_bp.route('/items', methods=['POST'])
@require_login
def add_item() -> Tuple[Response, int]:
    """
    Price the entry field and add the result to the cart.

    Body: {"product_id": 1, "input": "300", "mode": "amount"}
    """
    data = request.get_json(silent=True) or {}
    try:
        product_id = int(data.get('product_id'))
    except (TypeError, ValueError):
        raise BusinessLogicError('product_id is required.')

    db_session = get_session()
    product = catalog_service.get_product(db_session, product_id)

    result = pricing_service.compute_for_product(product, data.get('input'), data.get('mode'))
    if not result.valid:
        raise InvalidInputError(result.message)

    with get_cart_registry().editing(g.user_id) as ledger:
        _check_stock(ledger, product, result.quantity)
        _check_limits(ledger, product, result)
        ledger.add_item(product, result.quantity, result.line_total)

    payload = cart_payload(ledger)
    payload['message'] = ADDED_MESSAGE
    return jsonify(payload), 201


@cart_bp.route('/items/<int:product_id>', methods=['DELETE'])
@require_login
def remove_item(product_id: int) -> Tuple[Response, int]:
    ledger = get_cart_registry().get(g.user_id)
    ledger.remove_item(product_id)
    return jsonify(cart_payload(ledger)), 200


@cart_bp.route('/clear', methods=['POST'])
@require_login
def clear_cart() -> Tuple[Response, int]:
    ledger = get_cart_registry().get(g.user_id)
    ledger.clear()
    return jsonify(cart_payload(ledger)), 200
