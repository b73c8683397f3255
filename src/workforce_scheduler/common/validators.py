from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_text(value: Any, field_name: str) -> Optional[str]:
    """JSON bodies can carry numbers or lists where a string is expected."""
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value


def require_non_empty(value: Any, field_name: str) -> str:
    value = require_text(value, field_name)
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date(value: Any, field_name: str) -> date:
    raw = (require_text(value, field_name) or "").strip()
    if not raw:
        raise ValidationError(f"{field_name} is required (YYYY-MM-DD)")
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{field_name} must be a valid date (YYYY-MM-DD)")


def optional_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    return require_date(value, field_name)


def require_positive_ids(values: Iterable[object], field_name: str) -> list[int]:
    """Coerce ids to int, dropping duplicates while keeping order."""
    out: list[int] = []
    for v in values:
        if isinstance(v, bool):
            raise ValidationError(f"{field_name} contains an invalid id: {v!r}")
        try:
            wid = int(v)
        except (TypeError, ValueError):
            raise ValidationError(f"{field_name} contains an invalid id: {v!r}")
        if wid <= 0:
            raise ValidationError(f"{field_name} contains an invalid id: {v!r}")
        if wid not in out:
            out.append(wid)
    return out


def optional_positive_int(value: Any, field_name: str, *, default: Optional[int] = None) -> Optional[int]:
    if value is None or value == "":
        return default
    ids = require_positive_ids([value], field_name)
    return ids[0]
