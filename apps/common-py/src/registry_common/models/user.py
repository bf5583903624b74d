"""User models for the registry."""

from collections.abc import Iterable
from typing import Annotated, Any, ClassVar

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, Field, model_validator

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50

USERNAME_LENGTH_MESSAGE = (
    f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters."
)
INVALID_EMAIL_MESSAGE = "Invalid email format."


def _check_email(value: str) -> str:
    """Validate email syntax but keep the address exactly as submitted."""
    try:
        validate_email(value, check_deliverability=False, allow_display_name=False)
    except EmailNotValidError as exc:
        raise ValueError(str(exc)) from exc
    return value


Username = Annotated[
    str,
    Field(
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        description="Login name of the user",
    ),
]
Email = Annotated[
    str,
    AfterValidator(_check_email),
    Field(description="Email address of the user", json_schema_extra={"format": "email"}),
]
Name = Annotated[str, Field(min_length=1, description="Display name of the user")]


class _UserModel(BaseModel):
    """Base for user models: case-insensitive keys, blank values count as missing."""

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        normalized = {}
        for key, value in data.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                continue
            normalized[str(key).lower()] = value
        return normalized


class UserIn(_UserModel):
    """Writable user fields, as accepted on create and update."""

    username: Username
    email: Email
    name: Name

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "username": "ann01",
                "email": "ann@mail.com",
                "name": "Ann",
            }
        }


class User(_UserModel):
    """Stored user record."""

    id: int = Field(..., description="Identifier assigned by the registry")
    username: Username
    email: Email
    name: Name

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "id": 1,
                "username": "ann01",
                "email": "ann@mail.com",
                "name": "Ann",
            }
        }


def _message_for(field: str, error: dict[str, Any]) -> str:
    error_type = error.get("type")
    if error_type == "missing":
        return f"{field.capitalize()} is required."
    if field == "username" and error_type in {"string_too_short", "string_too_long"}:
        return USERNAME_LENGTH_MESSAGE
    if field == "email" and error_type == "value_error":
        return INVALID_EMAIL_MESSAGE
    return str(error.get("msg", "Invalid value."))


def validation_messages(errors: Iterable[dict[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic validation errors into per-field messages.

    Accepts the output of ``ValidationError.errors()`` as well as FastAPI's
    ``RequestValidationError.errors()``, whose locations start with ``"body"``.

    Args:
        errors: Pydantic error dictionaries

    Returns:
        Mapping of field name to the list of messages for that field
    """
    messages: dict[str, list[str]] = {}
    for error in errors:
        loc = [part for part in error.get("loc", ()) if part != "body"]
        if loc:
            field = str(loc[0])
            message = _message_for(field, error)
        elif error.get("type") == "missing":
            field, message = "body", "A non-empty request body is required."
        else:
            field, message = "body", "The request body must be a JSON object."
        field_messages = messages.setdefault(field, [])
        if message not in field_messages:
            field_messages.append(message)
    return messages
