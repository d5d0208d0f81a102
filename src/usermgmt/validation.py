"""
Input validation for user writes.

Birth dates are checked by ``parse_birth_date`` (format, calendar validity,
range) and never again by the generic field validator. Names go through a
strict pydantic model so that non-string and blank values are reported
together in one ``ValidationError``.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError
from strawberry import UNSET

from .dbmodels import NAME_MAX_LENGTH
from .errors import ValidationError

BIRTH_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)

FIELD_LABELS = {
    "first_name": "First name",
    "last_name": "Last name",
    "birth_date": "Birth date",
}


def today_utc() -> date:
    return datetime.now(UTC).date()


def parse_birth_date(value: Any, *, today: date | None = None) -> date:
    """Parse a ``YYYY-MM-DD`` birth date that is not in the future.

    Raises:
        ValidationError: on bad format, an impossible date, or a future date.
    """
    if not isinstance(value, str) or not BIRTH_DATE_PATTERN.fullmatch(value):
        raise ValidationError("Birth date must be in YYYY-MM-DD format", field="birth_date")

    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        raise ValidationError("Birth date must be a valid date", field="birth_date") from None

    if parsed > (today or today_utc()):
        raise ValidationError("Birth date cannot be in the future", field="birth_date")

    return parsed


class NameFields(BaseModel):
    """Generic string checks for the name fields of a user."""

    model_config = ConfigDict(strict=True)

    first_name: str | None = None
    last_name: str | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def _non_empty(cls, value: str | None) -> str:
        if value is None:
            raise PydanticCustomError("blank", "is required")
        stripped = value.strip()
        if not stripped:
            raise PydanticCustomError("blank", "is required")
        if len(stripped) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "too_long",
                "must be at most {max_length} characters",
                {"max_length": NAME_MAX_LENGTH},
            )
        return stripped


def _describe(error: dict[str, Any]) -> tuple[str, str]:
    field = str(error["loc"][0]) if error.get("loc") else "input"
    label = FIELD_LABELS.get(field, field)
    if error["type"] == "string_type":
        return field, f"{label} must be a string"
    return field, f"{label} {error['msg']}"


def validate_names(
    first_name: Any = UNSET, last_name: Any = UNSET, *, required: bool = False
) -> dict[str, str]:
    """Validate and normalize the supplied name fields.

    ``UNSET`` means "not supplied": with ``required=True`` it is reported as
    required, otherwise it is left out of the result. ``None`` is always
    reported as required.

    Returns:
        Mapping of field name to the stripped value, for supplied fields only.
    """
    raw = {
        key: None if value is UNSET else value
        for key, value in (("first_name", first_name), ("last_name", last_name))
        if value is not UNSET or required
    }

    try:
        fields = NameFields.model_validate(raw)
    except PydanticValidationError as e:
        described = [_describe(error) for error in e.errors()]
        messages = "; ".join(message for _, message in described)
        raise ValidationError(f"Validation failed: {messages}", field=described[0][0]) from None

    return fields.model_dump(exclude_unset=True)
