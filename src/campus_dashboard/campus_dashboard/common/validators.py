from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Strip text and collapse blank input to None."""
    v = (value or "").strip()
    return v or None
