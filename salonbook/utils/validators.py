# salonbook/utils/validators.py
from typing import Optional, Union
from uuid import UUID

from salonbook.core.exceptions import ValidationError


def parse_uuid(value: Union[str, UUID, None], field: str, required: bool = True) -> Optional[UUID]:
    """Coerce an identifier to UUID; empty optional values become None"""
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field} is required", field=field)
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field} '{value}'", field=field)


def require_text(value: Optional[str], field: str, max_length: int = 255) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    value = value.strip()
    if len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters", field=field)
    return value
