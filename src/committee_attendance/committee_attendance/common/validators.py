from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} required", reason=f"{field_name}_required")
    return value.strip()


def require_iso_date(value: Any, field_name: str) -> date:
    raw = require_non_empty(value, field_name)
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD", reason=f"invalid_{field_name}")


def optional_iso_date(value: Any, field_name: str) -> Optional[date]:
    if value in (None, ""):
        return None
    return require_iso_date(value, field_name)


def optional_text(value: Any) -> Optional[str]:
    """Trimmed string, or None when the value is not a string."""
    if not isinstance(value, str):
        return None
    return value.strip()


def id_list(value: Any) -> list[str]:
    """Keep only string ids, dropping duplicates while preserving order."""
    if not isinstance(value, list):
        return []
    out: list[str] = []
    for item in value:
        if isinstance(item, str) and item and item not in out:
            out.append(item)
    return out


def optional_float(value: Any) -> Optional[float]:
    # bool is an int subclass; a JSON true is not a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def bounded_int(value: Any, field_name: str, *, default: int, maximum: int) -> int:
    """Query-string integer clamped to ``1..maximum``; missing means ``default``."""
    if value in (None, ""):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer", reason=f"invalid_{field_name}")
    return max(1, min(number, maximum))
