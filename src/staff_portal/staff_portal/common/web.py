"""Helpers shared by the Flask controllers."""
from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import g, jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    Forbidden,
    NotFoundError,
    PolicyViolation,
    StateError,
    StoreError,
    ValidationError,
)
from .datetime_utils import parse_iso_date, parse_month

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (PolicyViolation, 409),
    (StateError, 409),
    (StoreError, 502),
)


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 400


def error_response(error: Exception):
    if isinstance(error, DomainError):
        return jsonify({"error": str(error)}), status_for(error)
    logger.exception("unhandled error on %s %s", request.method, request.path)
    return jsonify({"error": "Internal server error"}), 500


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    if not header:
        raise AuthenticationError("No authorization header")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Authorization header must be 'Bearer <token>'")
    return token.strip()


def build_auth_guards(container):
    """Return (auth_required, approver_required) decorators bound to the container."""

    def auth_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                g.identity = container.auth_service.resolve(bearer_token())
            except Exception as e:
                return error_response(e)
            return view(*args, **kwargs)

        return wrapper

    def approver_required(view):
        @auth_required
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not g.identity.can_approve:
                return error_response(Forbidden("Only admin or manager can access this resource"))
            return view(*args, **kwargs)

        return wrapper

    return auth_required, approver_required


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def optional_date(value) -> Optional[date]:
    if value in (None, ""):
        return None
    return parse_iso_date(str(value))


def month_arg() -> Optional[tuple[int, int]]:
    value = request.args.get("month")
    return parse_month(value) if value else None


def not_linked():
    return jsonify({"linked": False, "message": "Your account is not linked to an employee record"}), 200
