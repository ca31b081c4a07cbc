"""Middleware for authentication context."""
from functools import wraps
from flask import session, g, jsonify
from fuelshop.database import get_session
from fuelshop.models import Profile


def load_user():
    """
    Load the current user into g (Flask's per-request global).

    Called before each request. Sets g.user and g.user_id if the session
    holds a valid, active profile id.
    """
    g.user = None
    g.user_id = None

    try:
        user_id = session.get('user_id')
        if user_id:
            db_session = get_session()
            if not db_session:
                return

            user = db_session.query(Profile).filter_by(id=user_id, active=True).first()
            if user:
                g.user = user
                g.user_id = user.id
            else:
                session.pop('user_id', None)
    except Exception as e:
        # Avoid crashing the whole app if context loading fails
        from flask import current_app
        current_app.logger.error(f"Error in load_user: {e}")


def require_login(f):
    """
    Decorator: Require user to be logged in.

    Returns a 401 JSON body if not authenticated.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if g.get('user') is None:
            return jsonify({'status': 'error', 'message': 'Please log in first.'}), 401
        return f(*args, **kwargs)
    return decorated_function
