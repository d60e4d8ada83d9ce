"""
Main routes (summary, health).
"""

from flask import Blueprint, current_app, jsonify, session

from routes.context import current_workflow

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def index():
    """Header data for the logged-in reseller: batch badge, open session."""
    workflow = current_workflow()
    return jsonify({
        "user": {"name": session.get("user_name", "")},
        "summary": workflow.summary(),
    })


@main_bp.route("/health", methods=["GET"])
def health():
    registry = current_app.config["WORKFLOW_REGISTRY"]
    return jsonify({"status": "ok", "workflows": len(registry)})
