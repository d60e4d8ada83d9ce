"""
Reseller Order Portal - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration and logging
2. Builds the shared collaborators (catalog, order id generator, item id
   sequence)
3. Creates the workflow registry (one OrderWorkflow per user token)
4. Registers route blueprints
5. Sets up error handlers

ARCHITECTURE:
    Flask request
    └── session["user_token"] -> WorkflowRegistry -> OrderWorkflow
        ├── ConfigurationSession (at most one open)
        ├── Batch
        └── OrderHistoryStore

Workflows of different resellers share nothing but the read-only catalog,
the stateless order id generator and the locked item id sequence.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from logging_config import setup_logging, get_logger
from core.exceptions import (
    InvalidChoiceError,
    InvariantViolation,
    NotFoundError,
    OrderPortalError,
)
from modules.catalog import ProductCatalog
from routes import register_blueprints
from services.batch import ItemIdSequence
from services.order_submitter import OrderIdGenerator
from services.workflow import WorkflowRegistry


logger = get_logger(__name__)


def _get_base_path() -> Path:
    """
    Get the base path for the application.

    In a frozen bundle: Returns the directory containing the executable
    In development: Returns the directory containing app.py
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    return Path(__file__).parent


def _status_for(error: OrderPortalError) -> int:
    if isinstance(error, InvariantViolation):
        return 500
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, InvalidChoiceError):
        return 400
    return 409


def create_app(config_object: str = "config.Config", catalog: ProductCatalog = None) -> Flask:
    """
    Application factory - creates and configures Flask app.

    Args:
        config_object: Import path of the configuration class
        catalog: Product catalog (default: the built-in wholesale line-up)

    Returns:
        Configured Flask application
    """
    env_file = _get_base_path() / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    app = Flask(__name__)
    app.config.from_object(config_object)

    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting reseller order portal in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # WORKFLOW INITIALIZATION
    # =========================================================================

    catalog = catalog or ProductCatalog()
    id_generator = OrderIdGenerator(
        prefix=app.config["ORDER_ID_PREFIX"],
        digits=app.config["ORDER_ID_DIGITS"],
        retry_budget=app.config["ORDER_ID_RETRY_BUDGET"],
    )
    registry = WorkflowRegistry(
        catalog,
        id_generator=id_generator,
        item_ids=ItemIdSequence(),
        media_library_size=app.config["MEDIA_LIBRARY_SIZE"],
        seed_orders=app.config["SEED_ORDER_HISTORY"],
    )

    app.config["CATALOG"] = catalog
    app.config["WORKFLOW_REGISTRY"] = registry
    logger.info(f"Workflow registry ready ({len(catalog)} products)")

    register_blueprints(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(OrderPortalError)
    def handle_portal_error(e: OrderPortalError):
        status = _status_for(e)
        if status >= 500:
            logger.error(f"Invariant violation: {e}", exc_info=True)
        else:
            logger.info(f"Request refused ({e.code}): {e.message}")
        return jsonify(e.to_dict()), status

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.name.lower().replace(" ", "_"), "message": e.description}), e.code

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return jsonify({"error": "server_error", "message": "An unexpected error occurred."}), 500

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
