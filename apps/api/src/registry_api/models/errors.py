"""Error response models."""

from typing import ClassVar

from pydantic import BaseModel


class ValidationProblem(BaseModel):
    """Body of a 400 response for a payload that failed field validation."""

    title: str = "One or more validation errors occurred."
    status: int = 400
    errors: dict[str, list[str]]

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "title": "One or more validation errors occurred.",
                "status": 400,
                "errors": {
                    "username": ["Username must be between 3 and 50 characters."],
                    "email": ["Invalid email format."],
                },
            }
        }
