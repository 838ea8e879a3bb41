from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..core.exceptions import ValidationError


def require_mapping(value: Any, field_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValidationError(f"{field_name} ต้องเป็น JSON object")
    return value


def require_list(value: Any, field_name: str) -> Sequence[Any]:
    """None means an empty list; anything else must be a JSON array."""
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{field_name} ต้องเป็น JSON array")
    return value
