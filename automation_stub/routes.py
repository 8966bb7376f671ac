"""
Stub automation API endpoints.

Reproduces the wire contract of the remote service closely enough for the
scenario suites to run without it.

Endpoints:
    GET    /api/health                           - Readiness probe
    POST   /token                                - Exchange form credentials for a token
    GET    /api/automation/<resource>            - List records as [{id, name}]
    POST   /api/automation/<resource>            - Create from {"Name": ...}
    GET    /api/automation/<resource>/id/<id>    - Fetch {name} (no id)
    DELETE /api/automation/<resource>/id/<id>    - Delete a record
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import Blueprint, Response, current_app, g, jsonify, request

from .tokens import create_token, verify_token

logger = logging.getLogger(__name__)

stub_bp = Blueprint("automation_stub", __name__)

UNAUTHORIZED_MESSAGE = "Authorization has been denied for this request."


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def _json_error(message: str, status_code: int) -> tuple[Response, int]:
    """Build the ``{"Message": ...}`` error envelope the remote API uses."""
    return jsonify({"Message": message}), status_code


def _json_body(payload: Any, status_code: int) -> tuple[Response, int]:
    """
    Serialize a record payload compactly, without Flask's trailing newline.

    An empty list must go out as exactly ``[]``.
    """
    body = json.dumps(payload, separators=(",", ":"))
    return Response(body, mimetype="application/json"), status_code


def _store():
    return current_app.extensions["automation_store"]


def _extract_bearer_token() -> str | None:
    """Return the token from ``Authorization: Bearer <token>``, or None."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    token = auth_header[7:].strip()
    return token or None


def require_token(view_func: Callable[..., Any]):
    """Reject the request with 401 unless it carries a valid bearer token."""

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        token = _extract_bearer_token()
        if token is None:
            return _json_error(UNAUTHORIZED_MESSAGE, 401)

        claims = verify_token(token, current_app.config["STUB_SECRET_KEY"])
        if claims is None:
            return _json_error(UNAUTHORIZED_MESSAGE, 401)

        g.username = claims["sub"]
        return view_func(*args, **kwargs)

    return wrapper


def _requested_name(data: Any) -> str | None:
    """Return the non-blank ``Name`` of a create body, matching the key case-insensitively."""
    if not isinstance(data, dict):
        return None
    for key, value in data.items():
        if str(key).lower() == "name" and isinstance(value, str) and value.strip():
            return value
    return None


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@stub_bp.route("/api/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Readiness probe used before handing the stub URL to the suite."""
    return jsonify({"status": "healthy", "service": "automation-stub"}), 200


@stub_bp.route("/token", methods=["POST"])
def issue_token() -> tuple[Response, int]:
    """
    Exchange ``Username``/``Password``/``grant_type`` form fields for a token.

    Returns:
        200 with ``access_token`` on success, 400 ``invalid_grant`` otherwise.
    """
    username = request.form.get("Username", "")
    password = request.form.get("Password", "")
    grant_type = request.form.get("grant_type", "")

    config = current_app.config
    if grant_type != config["API_GRANT_TYPE"]:
        logger.info("Token request with unsupported grant type %r", grant_type)
        return jsonify({"error": "unsupported_grant_type"}), 400

    if username != config["API_USERNAME"] or password != config["API_PASSWORD"]:
        logger.info("Token request with bad credentials for %r", username)
        return jsonify({
            "error": "invalid_grant",
            "error_description": "The user name or password is incorrect.",
        }), 400

    expiry = int(config["STUB_TOKEN_EXPIRY_SECONDS"])
    token = create_token(username, config["STUB_SECRET_KEY"], expiry)
    return jsonify({
        "access_token": token,
        "token_type": "bearer",
        "expires_in": expiry,
    }), 200


@stub_bp.route("/api/automation/<resource>", methods=["GET"])
@require_token
def list_records(resource: str) -> tuple[Response, int]:
    """List every record of *resource* as ``[{id, name}]``."""
    store = _store()
    if resource not in store:
        return _json_error(f"Unknown resource '{resource}'", 404)

    records = store.list(resource)
    logger.info("GET /api/automation/%s - %d records", resource, len(records))
    return _json_body([record.to_dict() for record in records], 200)


@stub_bp.route("/api/automation/<resource>", methods=["POST"])
@require_token
def create_record(resource: str) -> tuple[Response, int]:
    """Create a record from a ``{"Name": ...}`` body."""
    store = _store()
    if resource not in store:
        return _json_error(f"Unknown resource '{resource}'", 404)

    name = _requested_name(request.get_json(silent=True))
    if name is None:
        return _json_error("The request is invalid. 'Name' is required.", 400)

    record = store.add(resource, name)
    logger.info("POST /api/automation/%s - created id %d", resource, record.id)
    return _json_body(record.to_dict(), 201)


@stub_bp.route("/api/automation/<resource>/id/<int:record_id>", methods=["GET"])
@require_token
def get_record(resource: str, record_id: int) -> tuple[Response, int]:
    """Fetch one record; the body carries only its name."""
    store = _store()
    if resource not in store:
        return _json_error(f"Unknown resource '{resource}'", 404)

    record = store.get(resource, record_id)
    if record is None:
        return _json_error(f"No record with id {record_id}", 404)
    return _json_body(record.to_dict(include_id=False), 200)


@stub_bp.route("/api/automation/<resource>/id/<int:record_id>", methods=["DELETE"])
@require_token
def delete_record(resource: str, record_id: int) -> tuple[Response, int]:
    """Delete one record."""
    store = _store()
    if resource not in store:
        return _json_error(f"Unknown resource '{resource}'", 404)

    if not store.remove(resource, record_id):
        return _json_error(f"No record with id {record_id}", 404)

    logger.info("DELETE /api/automation/%s/id/%d", resource, record_id)
    return jsonify({}), 200
