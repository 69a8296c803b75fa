"""
Route blueprints for the bowling community backend.
"""
from .auth import auth_bp
from .health import health_bp


def register_blueprints(app):
    """Register all route blueprints under /api."""
    app.register_blueprint(health_bp, url_prefix='/api')
    app.register_blueprint(auth_bp, url_prefix='/api')
