"""
Order history routes.
"""

from flask import Blueprint, jsonify

from routes.context import current_workflow


orders_bp = Blueprint("orders", __name__)


@orders_bp.route("/orders", methods=["GET"])
def list_orders():
    """Submitted orders, most recent first."""
    records = current_workflow().list_orders()
    return jsonify({"orders": [r.to_dict() for r in records]})


@orders_bp.route("/orders/<order_id>", methods=["GET"])
def get_order(order_id):
    record = current_workflow().get_order(order_id)
    return jsonify({"order": record.to_dict()})
