"""Shared helpers for the JSON controllers.

Authentication is handled upstream; the caller's identity arrives in the
``X-User-Id`` and ``X-Role`` headers.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from functools import wraps

from flask import g, jsonify, request

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def to_json(value):
    if is_dataclass(value) and not isinstance(value, type):
        return to_json(asdict(value))
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, date):
        return value.isoformat()
    return value


def error(message: str, status: int):
    return jsonify({"error": message}), status


def form_value(name: str, default: str = "") -> str:
    data = request.get_json(silent=True) or request.form
    value = data.get(name, default)
    return "" if value is None else str(value)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user_id = request.headers.get("X-User-Id", "")
        role = request.headers.get("X-Role", "")
        if not user_id.isdigit():
            return error("Please sign in to continue", 401)
        try:
            g.role = Role(role)
        except ValueError:
            return error("Unknown role", 401)
        g.user_id = int(user_id)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    @login_required
    def wrapper(*args, **kwargs):
        if g.role != Role.ADMIN:
            return error("Permission denied", 403)
        return view(*args, **kwargs)

    return wrapper


def domain_errors(view):
    """Map domain exceptions to JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return error(str(e), 400)
        except AuthorizationError as e:
            return error(str(e), 403)
        except NotFoundError as e:
            return error(str(e), 404)
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return error("Internal error", 500)

    return wrapper
