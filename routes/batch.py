"""
Draft batch routes.

Shows the current batch, removes items and submits the batch as one order.
"""

from flask import Blueprint, jsonify

from routes.context import current_workflow


batch_bp = Blueprint("batch", __name__)


@batch_bp.route("/batch", methods=["GET"])
def view():
    workflow = current_workflow()
    payload = workflow.batch.to_dict()
    payload["can_submit"] = not workflow.batch.is_empty()
    return jsonify(payload)


@batch_bp.route("/batch/<int:assigned_id>", methods=["DELETE"])
def remove(assigned_id):
    workflow = current_workflow()
    item = workflow.remove_item(assigned_id)
    return jsonify({"removed": item.to_dict(), "batch": workflow.batch.to_dict()})


@batch_bp.route("/batch/submit", methods=["POST"])
def submit():
    """
    Submit the whole batch.

    Answers 201 with the new order; an empty batch answers 409.
    """
    workflow = current_workflow()
    record = workflow.submit_batch()
    return jsonify({"order": record.to_dict(), "batch": workflow.batch.to_dict()}), 201
