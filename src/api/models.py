"""
API request and response models.

Pydantic models for response serialization and OpenAPI schema generation.
Request bodies are validated by the domain validation engine, so the
request models here only document the expected payloads.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    """Documented body for user registration."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=3, description="Display name (min 3 characters)")
    email: EmailStr
    password: str = Field(
        ...,
        min_length=8,
        description="Password (min 8 characters, with a letter, a number and a special character)",
    )


class LoginRequest(BaseModel):
    """Documented body for login."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    message: str


class LoginResponse(BaseModel):
    """Response model for successful login."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken")


class ProfileResponse(BaseModel):
    """Public view of the authenticated account."""

    name: str
    email: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str


class ValidationErrorResponse(BaseModel):
    """Field-keyed validation failure report."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(..., alias="statusCode")
    error: str
    validation_errors: dict[str, list[str]] = Field(..., alias="validationErrors")


def json_body_schema(model: type[BaseModel]) -> dict[str, Any]:
    """OpenAPI requestBody for routes that read the raw JSON body themselves."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }
