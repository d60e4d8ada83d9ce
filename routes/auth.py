"""
Login/logout routes.

Credential checking belongs to an external identity service; this
blueprint only requires both fields and issues the opaque token every
workflow is keyed by.
"""

import uuid

from flask import Blueprint, current_app, jsonify, session

from logging_config import get_logger
from routes.context import current_token, request_data, sanitize_text


logger = get_logger(__name__)

auth_bp = Blueprint("auth", __name__)

DEFAULT_DISPLAY_NAME = "Premium Partner"


@auth_bp.route("/login", methods=["POST"])
def login():
    """Issue a user token for the session."""
    data = request_data()
    username = sanitize_text(data.get("username"), max_length=120)
    password = data.get("password") or ""

    if not username or not password:
        return jsonify({
            "error": "invalid_credentials",
            "message": "Username and password are required.",
        }), 400

    token = uuid.uuid4().hex
    session.clear()
    session["user_token"] = token
    session["user_name"] = DEFAULT_DISPLAY_NAME
    session.modified = True

    current_app.config["WORKFLOW_REGISTRY"].get_or_create(token)
    logger.info(f"Reseller logged in, token {token[:8]}")

    return jsonify({"user": {"name": DEFAULT_DISPLAY_NAME, "username": username}})


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """Drop the reseller's workflow, including any open session and batch."""
    token = current_token()
    if token:
        current_app.config["WORKFLOW_REGISTRY"].discard(token)
        logger.info(f"Reseller logged out, token {token[:8]}")
    session.clear()
    return jsonify({"logged_out": True})
