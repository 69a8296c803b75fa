"""
Flask API for the bowling community backend.
Application factory: builds the OTP store once per process and wires routes.
"""
import logging
from flask import Flask, jsonify
from flask_cors import CORS
from dotenv import load_dotenv

# Load environment variables FIRST
load_dotenv()

from config import config as default_config
from middleware.security import add_security_headers
from routes import register_blueprints
from shared import OTPStore, InvalidArgumentError

# Configure logging
logging.basicConfig(
    level=getattr(logging, default_config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_otp_store(app_config) -> OTPStore:
    """Create the process-wide OTP store from configuration."""
    return OTPStore(
        expiry_ms=app_config.OTP_EXPIRY_MS,
        max_entries=app_config.OTP_MAX_ENTRIES,
        strict_codes=app_config.OTP_STRICT_CODES
    )


def create_app(app_config=None, otp_store: OTPStore = None) -> Flask:
    """
    Create the Flask application.

    Args:
        app_config: Config instance, defaults to the environment's config
        otp_store: Pre-built store (tests inject one with a fake clock)
    """
    app_config = app_config or default_config

    app = Flask(__name__)
    app.config['SECRET_KEY'] = app_config.SECRET_KEY
    app.config['TESTING'] = getattr(app_config, 'TESTING', False)
    app.config['ENV_NAME'] = 'production' if app_config.is_production() else app_config.FLASK_ENV
    app.config['JWT_ACCESS_TOKEN_EXPIRY'] = app_config.JWT_ACCESS_TOKEN_EXPIRY

    app.extensions['otp_store'] = otp_store if otp_store is not None else build_otp_store(app_config)

    # SECURITY: Add security headers to all responses
    app.after_request(add_security_headers)

    # SECURITY: CORS configuration
    CORS(app,
         resources={r"/api/*": {
             "origins": app_config.CORS_ORIGINS,
             "methods": ["GET", "POST", "OPTIONS"],
             "allow_headers": ["Content-Type", "Authorization"],
             "expose_headers": ["Content-Type"],
             "max_age": 3600
         }},
         supports_credentials=True)

    register_blueprints(app)
    _register_error_handlers(app, app_config)

    return app


def _register_error_handlers(app, app_config):
    @app.errorhandler(InvalidArgumentError)
    def invalid_argument(error):
        """Handle values rejected by the OTP store."""
        logger.warning(f"Rejected argument: {error}")
        return jsonify({'error': str(error)}), 400

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'error': 'Endpoint not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle 405 errors."""
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error(f"Internal server error: {error}", exc_info=True)
        if app_config.is_production():
            return jsonify({'error': 'Internal server error'}), 500
        return jsonify({'error': str(error)}), 500


app = create_app()


if __name__ == '__main__':
    logger.info(f"Starting bowling community backend (Environment: {default_config.FLASK_ENV})")
    logger.info(f"Server running on {default_config.FLASK_HOST}:{default_config.FLASK_PORT}")

    if default_config.is_production():
        logger.warning("Running in production mode. Consider using Gunicorn instead.")

    # Single process: OTP state is held in memory.
    app.run(
        host=default_config.FLASK_HOST,
        port=default_config.FLASK_PORT,
        debug=default_config.is_development(),
        use_reloader=False
    )
