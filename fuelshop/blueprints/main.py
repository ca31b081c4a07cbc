"""Main blueprint with store info and health check endpoints."""
from flask import Blueprint, current_app, jsonify
from sqlalchemy import text
from fuelshop.database import get_session

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Store name and currency for the app's landing screen."""
    return jsonify({
        'store': current_app.config.get('STORE_NAME'),
        'currency': current_app.config.get('CURRENCY_CODE'),
        'currency_symbol': current_app.config.get('CURRENCY_SYMBOL'),
    }), 200


@main_bp.route('/health')
def health():
    """
    Health check endpoint that validates database connection.

    Returns:
        200: Healthy (DB connected)
        500: Unhealthy (DB error)
    """
    try:
        session = get_session()
        row = session.execute(text("SELECT 1 as health_check")).fetchone()

        if row and row[0] == 1:
            return jsonify({
                'status': 'healthy',
                'database': 'connected'
            }), 200
        return jsonify({
            'status': 'unhealthy',
            'database': 'error',
            'message': 'Unexpected query result'
        }), 500

    except Exception as e:
        current_app.logger.error(f"Health check failed: {e}")
        return jsonify({
            'status': 'unhealthy',
            'database': 'disconnected',
            'message': str(e)
        }), 500
