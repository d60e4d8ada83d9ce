"""
Flask route blueprints for the reseller order portal.

This module contains all route handlers organized by functionality:
- main: Header summary and health check
- auth: Login / logout (issues the opaque user token)
- catalog: Product listing
- configure: Configuration wizard (step state machine)
- batch: Draft batch and submission
- orders: Order history

Each blueprint is registered with the Flask app in create_app().
"""

from .main import main_bp
from .auth import auth_bp
from .catalog import catalog_bp
from .configure import configure_bp
from .batch import batch_bp
from .orders import orders_bp

__all__ = [
    "main_bp",
    "auth_bp",
    "catalog_bp",
    "configure_bp",
    "batch_bp",
    "orders_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(configure_bp)
    app.register_blueprint(batch_bp)
    app.register_blueprint(orders_bp)
