"""Catalog blueprint: product browsing and live price quotes."""
import logging
from typing import Tuple

from flask import Blueprint, request, current_app, jsonify, Response

from fuelshop.database import get_session
from fuelshop.services import catalog_service, pricing_service

logger = logging.getLogger(__name__)

catalog_bp = Blueprint('catalog', __name__, url_prefix='/products')


def _product_detail(product) -> dict:
    """Product fields plus the entry modes the product screen offers."""
    amount_default = current_app.config.get('DEFAULT_AMOUNT_INPUT', pricing_service.DEFAULT_AMOUNT_INPUT)
    modes = pricing_service.available_modes(product.category)
    data = product.to_dict()
    data['modes'] = [
        {'mode': mode.value, 'default_input': pricing_service.default_input(mode, amount_default)}
        for mode in modes
    ]
    data['unit_kind'] = product.category_kind.unit_kind.value
    return data


@catalog_bp.route('/', methods=['GET'])
def list_products() -> Tuple[Response, int]:
    """Active products, optionally filtered with ?category=Fuel."""
    db_session = get_session()
    category = request.args.get('category', '').strip() or None
    products = catalog_service.list_active_products(db_session, category)
    return jsonify({'products': [p.to_dict() for p in products]}), 200


@catalog_bp.route('/categories', methods=['GET'])
def list_categories() -> Tuple[Response, int]:
    db_session = get_session()
    return jsonify({'categories': catalog_service.list_categories(db_session)}), 200


@catalog_bp.route('/<int:product_id>', methods=['GET'])
def product_detail(product_id: int) -> Tuple[Response, int]:
    db_session = get_session()
    product = catalog_service.get_product(db_session, product_id)
    return jsonify({'product': _product_detail(product)}), 200


@catalog_bp.route('/<int:product_id>/quote', methods=['POST'])
def quote(product_id: int) -> Tuple[Response, int]:
    """
    Run the pricing calculator for the current entry field.

    Body: {"input": "50", "mode": "amount"}. Always 200: an invalid input is
    reported in the body, not as an error.
    """
    db_session = get_session()
    product = catalog_service.get_product(db_session, product_id)
    data = request.get_json(silent=True) or {}

    result = pricing_service.compute_for_product(product, data.get('input'), data.get('mode'))
    body = result.to_dict()
    body['sanitized_input'] = pricing_service.sanitize_input(data.get('input'))
    return jsonify(body), 200
