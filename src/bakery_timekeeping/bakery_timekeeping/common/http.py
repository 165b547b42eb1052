from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import NotFoundError, ValidationError, ValidationErrors
from .validators import parse_date_field

logger = logging.getLogger(__name__)


def json_ok(data: Any = None, status: int = 200, **extra):
    body = {"success": True, "data": data}
    body.update(extra)
    return jsonify(body), status


def json_error(message: str, status: int, errors: Optional[list] = None):
    body = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = errors
    return jsonify(body), status


def json_endpoint(view):
    """Map domain errors onto JSON responses (400 / 404 / 500)."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationErrors as e:
            return json_error("validation failed", 400, [err.to_dict() for err in e.errors])
        except ValidationError as e:
            return json_error(e.message, 400, [e.to_dict()])
        except NotFoundError as e:
            return json_error(str(e), 404)
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return json_error("internal server error", 500)

    return wrapper


def request_payload() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def query_date(name: str) -> Optional[date]:
    value = request.args.get(name)
    if not value:
        return None
    return parse_date_field(value, name, f"invalid {name} (YYYY-MM-DD expected)")


def query_int(name: str) -> Optional[int]:
    value = (request.args.get(name) or "").strip()
    if not value:
        return None
    if not value.isdigit():
        raise ValidationError(f"invalid {name}", field=name)
    return int(value)
