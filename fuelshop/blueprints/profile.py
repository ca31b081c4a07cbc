"""Profile blueprint."""
from typing import Tuple

from flask import Blueprint, request, g, jsonify, Response

from fuelshop.database import get_session
from fuelshop.middleware import require_login
from fuelshop.services import profile_service

profile_bp = Blueprint('profile', __name__, url_prefix='/profile')


@profile_bp.route('/', methods=['GET'])
@require_login
def show_profile() -> Tuple[Response, int]:
    profile = profile_service.get_profile(get_session(), g.user_id)
    return jsonify({'profile': profile.to_dict()}), 200


@profile_bp.route('/', methods=['POST'])
@require_login
def update_profile() -> Tuple[Response, int]:
    data = request.get_json(silent=True) or request.form.to_dict()
    profile = profile_service.update_profile(get_session(), g.user_id, data)
    return jsonify({
        'status': 'ok',
        'message': 'Profile updated successfully!',
        'profile': profile.to_dict()
    }), 200
