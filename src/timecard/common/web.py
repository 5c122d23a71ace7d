"""Shared helpers for the JSON controllers."""

from __future__ import annotations

import logging
from datetime import date, time
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError, NotFoundError, ValidationError
from .datetime_utils import parse_hhmm, parse_iso_date

logger = logging.getLogger(__name__)


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def ok(http_status: int = 200, /, **payload):
    return jsonify({"success": True, **payload}), http_status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Login required", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Login required", 401)
        if session.get("role") != Role.ADMIN.value:
            return fail("Forbidden", 403)
        return view(*args, **kwargs)

    return wrapper


def json_errors(view):
    """Translate domain errors into JSON responses; log anything unexpected."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return fail(str(e), 400)
        except AuthorizationError as e:
            return fail(str(e), 403)
        except NotFoundError as e:
            return fail(str(e), 404)
        except DomainError as e:
            return fail(str(e), 400)
        except Exception:
            logger.exception("unhandled error in %s", view.__name__)
            return fail("Internal server error", 500)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role", Role.STAFF.value))


def body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def date_arg(name: str, default: Optional[date] = None) -> date:
    raw = request.args.get(name)
    if not raw:
        if default is None:
            raise ValidationError(f"{name} is required")
        return default
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD") from None


def int_arg(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer") from None


def int_field(data: dict, name: str, default: Optional[int] = None) -> Optional[int]:
    """Integer from a JSON body; missing or empty gives default."""

    raw = data.get(name)
    if raw is None or raw == "":
        return default
    if isinstance(raw, bool):
        raise ValidationError(f"{name} must be an integer")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer") from None


def int_list_field(data: dict, name: str) -> list[int]:
    raw = data.get(name)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError(f"{name} must be a list of integers")
    return [int_field({name: v}, name) for v in raw if v not in (None, "")]


def date_field(data: dict, name: str, *, required: bool = True) -> Optional[date]:
    raw = data.get(name)
    if raw is None or raw == "":
        if required:
            raise ValidationError(f"{name} is required")
        return None
    if not isinstance(raw, str):
        raise ValidationError(f"{name} must be YYYY-MM-DD")
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD") from None


def time_field(data: dict, name: str) -> Optional[time]:
    raw = data.get(name)
    if raw is not None and not isinstance(raw, str):
        raise ValidationError(f"{name} must be HH:MM")
    try:
        return parse_hhmm(raw)
    except ValueError:
        raise ValidationError(f"{name} must be HH:MM") from None


def text_field(data: dict, name: str, default: str = "") -> str:
    raw = data.get(name)
    if raw is None:
        return default
    if not isinstance(raw, str):
        raise ValidationError(f"{name} must be a string")
    return raw
