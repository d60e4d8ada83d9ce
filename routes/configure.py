"""
Configuration wizard routes.

Drives the reseller's ConfigurationSession:
    start -> media -> fields -> advance/retreat -> commit (or abandon)

Rejected step operations answer 422 with the StepResult and the unchanged
session state so the client can show the reason.
"""

import re

from flask import Blueprint, current_app, jsonify

from core.exceptions import InvalidChoiceError
from models.selection import (
    PackagingChoice,
    StyleChoice,
    ThemeChoice,
    TypographyChoice,
    parse_choice,
)
from routes.context import current_workflow, request_data, sanitize_text


configure_bp = Blueprint("configure", __name__)

CHOICE_FIELDS = {
    "style": StyleChoice,
    "theme": ThemeChoice,
    "typography": TypographyChoice,
    "packaging": PackagingChoice,
}


def _parse_quantity(raw) -> int:
    """Whole numbers only: JSON integers or digit strings from forms."""
    if isinstance(raw, bool):
        raise InvalidChoiceError("quantity", raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and re.fullmatch(r"\s*-?\d+\s*", raw):
        return int(raw)
    raise InvalidChoiceError("quantity", raw)


def _step_response(result, session):
    payload = {"result": result.to_dict(), "session": session.to_dict()}
    return jsonify(payload), (200 if result.ok else 422)


@configure_bp.route("/configure/options", methods=["GET"])
def options():
    """Closed value lists for every configurable field."""
    current_workflow()
    return jsonify({
        "media_library_size": current_app.config["MEDIA_LIBRARY_SIZE"],
        **{name: [m.value for m in enum_cls] for name, enum_cls in CHOICE_FIELDS.items()},
    })


@configure_bp.route("/configure/<product_id>", methods=["POST"])
def start(product_id):
    """Open a session for a product. Pass replace=true to drop an open one."""
    workflow = current_workflow()
    data = request_data()
    replace = str(data.get("replace", "")).lower() in ("1", "true", "yes")
    session = workflow.start_configuration(product_id, replace=replace)
    return jsonify({"session": session.to_dict()}), 201


@configure_bp.route("/configure", methods=["GET"])
def state():
    session = current_workflow().require_session()
    return jsonify({"session": session.to_dict()})


@configure_bp.route("/configure/media/<int:ref>", methods=["POST"])
def toggle_media(ref):
    session = current_workflow().require_session()
    return _step_response(session.select_media(ref), session)


@configure_bp.route("/configure/fields", methods=["POST"])
def set_fields():
    """
    Set any subset of style, theme, typography, packaging, quantity and
    reseller_mark.

    All values are validated before any of them is applied.
    """
    session = current_workflow().require_session()
    data = request_data()

    choices = {}
    for name, enum_cls in CHOICE_FIELDS.items():
        if name in data:
            choices[name] = parse_choice(enum_cls, data[name], name)

    quantity = _parse_quantity(data["quantity"]) if "quantity" in data else None

    setters = {
        "style": session.set_style,
        "theme": session.set_theme,
        "typography": session.set_typography,
        "packaging": session.set_packaging,
    }
    for name, value in choices.items():
        setters[name](value)
    if quantity is not None:
        session.set_quantity(quantity)
    if "reseller_mark" in data:
        max_length = current_app.config["MAX_RESELLER_MARK_LENGTH"]
        session.set_reseller_mark(sanitize_text(data["reseller_mark"], max_length=max_length))

    return jsonify({"session": session.to_dict()})


@configure_bp.route("/configure/advance", methods=["POST"])
def advance():
    session = current_workflow().require_session()
    return _step_response(session.advance(), session)


@configure_bp.route("/configure/retreat", methods=["POST"])
def retreat():
    session = current_workflow().require_session()
    return _step_response(session.retreat(), session)


@configure_bp.route("/configure/commit", methods=["POST"])
def commit():
    """Add the configured product to the batch (review step only)."""
    workflow = current_workflow()
    session = workflow.require_session()
    result = workflow.commit_active()
    if not result.ok:
        return _step_response(result, session)
    return jsonify({"result": result.to_dict(), "batch": workflow.batch.to_dict()}), 201


@configure_bp.route("/configure/abandon", methods=["POST"])
def abandon():
    workflow = current_workflow()
    workflow.abandon_active()
    return jsonify({"abandoned": True, "summary": workflow.summary()})
