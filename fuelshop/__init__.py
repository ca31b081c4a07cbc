"""Flask application factory."""
from flask import Flask, jsonify, request
from fuelshop.database import init_db
import os


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Sentry error tracking in production
    if os.getenv('SENTRY_DSN') and app.config.get('ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=os.getenv('SENTRY_DSN'),
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment=app.config.get('ENV'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )

    # Production: trust X-Forwarded-* from the reverse proxy
    if app.config.get('ENV') == 'production':
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    # Initialize database
    init_db(app)

    # Per-session carts
    from fuelshop.services.cart_registry import init_carts
    init_carts(app)

    # Money formatting for any rendered output
    from fuelshop.utils.formatters import money, quantity_label
    app.jinja_env.filters['money'] = money
    app.jinja_env.filters['quantity_label'] = quantity_label

    from fuelshop.middleware import load_user

    @app.before_request
    def before_request_handler():
        """Load user context for each request."""
        load_user()

    # Error Handlers
    from fuelshop.exceptions import StoreError

    @app.errorhandler(StoreError)
    def handle_store_error(error):
        """Handle custom application exceptions."""
        if error.status_code >= 500:
            app.logger.error(f"StoreError [{error.status_code}]: {error.message}")
        else:
            app.logger.warning(f"StoreError [{error.status_code}]: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'status': 'error', 'message': 'Not Found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'status': 'error', 'message': 'Method Not Allowed'}), 405

    @app.errorhandler(500)
    @app.errorhandler(Exception)
    def internal_error(error):
        import traceback
        from werkzeug.exceptions import HTTPException
        if isinstance(error, HTTPException) and error.code < 500:
            return jsonify({'status': 'error', 'message': error.description}), error.code
        app.logger.error(f"Unhandled Exception on {request.path}: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        return jsonify({'status': 'error', 'message': 'Internal Server Error'}), 500

    # Register blueprints
    from fuelshop.blueprints.main import main_bp
    from fuelshop.blueprints.auth import auth_bp
    from fuelshop.blueprints.catalog import catalog_bp
    from fuelshop.blueprints.cart import cart_bp
    from fuelshop.blueprints.checkout import checkout_bp
    from fuelshop.blueprints.orders import orders_bp
    from fuelshop.blueprints.profile import profile_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(checkout_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(profile_bp)

    # Register CLI commands
    from fuelshop.cli_commands import init_cli_commands
    init_cli_commands(app)

    app.logger.info(f"Database: {app.config.get('SQLALCHEMY_DATABASE_URI', '').split('@')[-1]}")

    return app
