from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"Поле «{field_name}» обязательно")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} должен содержать минимум {min_len} символов")
    return value


def strip_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip()
