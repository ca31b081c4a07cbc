"""Checkout blueprint - turns the cart into a delivery order."""
import logging
from typing import Tuple

from flask import Blueprint, request, current_app, g, jsonify, Response

from fuelshop.database import get_session
from fuelshop.middleware import require_login
from fuelshop.models import PaymentMethod
from fuelshop.services import order_service
from fuelshop.services.cart_registry import get_cart_registry
from fuelshop.services.checkout_service import (
    DeliveryFeePolicy, build_order_draft, normalize_idempotency_key, summarize
)

logger = logging.getLogger(__name__)

checkout_bp = Blueprint('checkout', __name__, url_prefix='/checkout')


@checkout_bp.route('/', methods=['GET'])
@require_login
def checkout_summary() -> Tuple[Response, int]:
    """Order summary, payment methods and the profile's saved address."""
    ledger = get_cart_registry().get(g.user_id)
    body = summarize(ledger.snapshot(), DeliveryFeePolicy.from_config(current_app.config))
    body['items'] = [item.to_dict() for item in ledger.items]
    body['payment_methods'] = [m.value for m in PaymentMethod]
    body['delivery_address'] = g.user.address or ''
    return jsonify(body), 200


@checkout_bp.route('/', methods=['POST'])
@require_login
def place_order() -> Tuple[Response, int]:
    """
    Submit the cart as an order.

    Body: {"delivery_address": "...", "payment_method": "Cash on Delivery",
           "special_instructions": "...", "idempotency_key": "..."}

    The submitted lines leave the cart only after the order is stored; any
    failure leaves it as it was so the shopper can retry.
    """
    data = request.get_json(silent=True) or {}
    idempotency_key = normalize_idempotency_key(data.get('idempotency_key'))
    fee_policy = DeliveryFeePolicy.from_config(current_app.config)

    with get_cart_registry().checkout_in_progress(g.user_id) as ledger:
        draft = build_order_draft(
            ledger.snapshot(),
            data.get('delivery_address'),
            data.get('payment_method'),
            data.get('special_instructions'),
            fee_policy,
        )
        order_id = order_service.submit_order(
            get_session(),
            g.user_id,
            draft,
            idempotency_key=idempotency_key,
        )
        ledger.remove_submitted(draft.snapshot.items)

    return jsonify({
        'status': 'ok',
        'message': 'Your order has been received. Please wait for delivery.',
        'order_id': order_id,
        'total_amount': str(draft.total_amount),
    }), 201
