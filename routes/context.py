"""
Request helpers shared by the blueprints.

Resolves the reseller's workflow from the Flask session token and cleans
free text coming from forms or JSON bodies.
"""

from typing import Any, Dict, Optional

import bleach
from flask import abort, current_app, request, session

from services.workflow import OrderWorkflow


def current_token() -> Optional[str]:
    return session.get("user_token")


def current_workflow() -> OrderWorkflow:
    """
    Workflow of the logged-in reseller.

    Aborts with 401 when no one is logged in.
    """
    token = current_token()
    if not token:
        abort(401)
    registry = current_app.config["WORKFLOW_REGISTRY"]
    return registry.get_or_create(token)


def request_data() -> Dict[str, Any]:
    """
    JSON body or form fields, whichever the client sent.

    Aborts with 400 when the JSON body is not an object.
    """
    if request.is_json:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            abort(400, description="Request body must be a JSON object.")
        return data
    return request.form.to_dict()


def sanitize_text(text: Optional[str], max_length: Optional[int] = None) -> str:
    """Strip markup and surrounding whitespace, then truncate."""
    if not text:
        return ""
    text = bleach.clean(str(text).strip(), tags=[], strip=True)
    if max_length and len(text) > max_length:
        text = text[:max_length]
    return text
