"""
Catalog routes.

Read-only product listing.
"""

from flask import Blueprint, current_app, jsonify

from routes.context import current_workflow


catalog_bp = Blueprint("catalog", __name__)


@catalog_bp.route("/catalog", methods=["GET"])
def list_products():
    current_workflow()
    catalog = current_app.config["CATALOG"]
    return jsonify({"products": [p.to_dict() for p in catalog.list_products()]})


@catalog_bp.route("/catalog/<product_id>", methods=["GET"])
def get_product(product_id):
    current_workflow()
    product = current_app.config["CATALOG"].get_product(product_id)
    return jsonify({"product": product.to_dict()})
