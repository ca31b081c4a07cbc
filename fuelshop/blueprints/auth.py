"""
Authentication blueprint.
Handles registration, login and logout; login opens a fresh cart and
logout discards it.
"""
import logging
from typing import Tuple

from flask import Blueprint, request, session, g, jsonify, Response

from fuelshop.database import get_session
from fuelshop.middleware import require_login
from fuelshop.services import auth_service
from fuelshop.services.cart_registry import get_cart_registry

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


def _form_data() -> dict:
    """Accept both JSON bodies and form posts."""
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict()


def _start_session(user) -> None:
    session.clear()
    session['user_id'] = user.id
    session.permanent = True
    get_cart_registry().open(user.id)


@auth_bp.route('/register', methods=['POST'])
def register() -> Tuple[Response, int]:
    """Create an account and log it in."""
    db_session = get_session()
    user = auth_service.register_user(db_session, _form_data())
    _start_session(user)
    return jsonify({
        'status': 'ok',
        'message': 'Account created successfully. You are now logged in.',
        'user': user.to_dict()
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login() -> Tuple[Response, int]:
    data = _form_data()
    db_session = get_session()
    user = auth_service.authenticate(db_session, data.get('email'), data.get('password'))
    _start_session(user)
    logger.info(f"User {user.id} logged in")
    return jsonify({'status': 'ok', 'user': user.to_dict()}), 200


@auth_bp.route('/logout', methods=['POST'])
@require_login
def logout() -> Tuple[Response, int]:
    user_id = g.user_id
    get_cart_registry().discard(user_id)
    session.clear()
    logger.info(f"User {user_id} logged out")
    return jsonify({'status': 'ok'}), 200


@auth_bp.route('/me', methods=['GET'])
@require_login
def me() -> Tuple[Response, int]:
    return jsonify({'status': 'ok', 'user': g.user.to_dict()}), 200
