from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value, field_name: str) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_non_negative(value, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def optional_text(value, field_name: str = "text") -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    value = value.strip() if value else None
    return value or None
