"""Order history blueprint."""
from typing import Tuple

from flask import Blueprint, g, jsonify, Response

from fuelshop.database import get_session
from fuelshop.middleware import require_login
from fuelshop.services import order_service

orders_bp = Blueprint('orders', __name__, url_prefix='/orders')


@orders_bp.route('/', methods=['GET'])
@require_login
def order_history() -> Tuple[Response, int]:
    """Orders of the logged-in user, newest first."""
    orders = order_service.list_orders_for_user(get_session(), g.user_id)
    return jsonify({'orders': [o.to_dict() for o in orders]}), 200


@orders_bp.route('/<int:order_id>', methods=['GET'])
@require_login
def order_detail(order_id: int) -> Tuple[Response, int]:
    order = order_service.get_order(get_session(), order_id, g.user_id)
    return jsonify({'order': order.to_dict()}), 200
