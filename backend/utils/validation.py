"""
utils/validation.py
-------------------
Input helpers shared by the route handlers. They only check presence and
parse the few typed fields (ids, flags, timestamps); anything else is left to
the database.
"""

from datetime import date, datetime, timezone
from typing import Optional

from flask import request

from utils.errors import ValidationError


def json_body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(source, *names: str) -> None:
    missing = [name for name in names if _is_blank(source.get(name))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def require_text(source, name: str, strip: bool = True) -> str:
    require_fields(source, name)
    value = source[name]
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value.strip() if strip else value


def parse_int(value, name: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer") from None


def parse_bool(value, name: str) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    raise ValidationError(f"{name} must be a boolean")


def parse_timestamp(value, name: str) -> Optional[datetime]:
    """Parse an ISO 8601 date or datetime into naive UTC."""
    if value is None or value == "":
        return None
    try:
        parsed = datetime.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"{name} must be an ISO 8601 timestamp") from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_date(value, name: str) -> date:
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        raise ValidationError(f"{name} must be a date (YYYY-MM-DD)") from None


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
