"""
Error response shaping - Maps domain Failure outcomes to HTTP responses.

Messages are fixed per error code so responses never carry internal
detail. INVALID_TOKEN and EXPIRED_TOKEN share one response, and login
failures never say whether the email exists.
"""

from fastapi import status
from fastapi.responses import JSONResponse

from src.api.models import ErrorResponse, ValidationErrorResponse
from src.domain.results import ErrorCode, Failure
from src.domain.validation import Invalid, ValidationErrorSet

NOT_AUTHENTICATED = "Not authenticated"
BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}

_FAILURE_RESPONSES: dict[ErrorCode, tuple[int, str]] = {
    ErrorCode.DUPLICATE_EMAIL: (status.HTTP_409_CONFLICT, "Email already registered"),
    ErrorCode.REGISTRATION_FAILED: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Could not register user",
    ),
    ErrorCode.INVALID_CREDENTIALS: (status.HTTP_401_UNAUTHORIZED, "Invalid credentials"),
    ErrorCode.INVALID_TOKEN: (status.HTTP_401_UNAUTHORIZED, NOT_AUTHENTICATED),
    ErrorCode.EXPIRED_TOKEN: (status.HTTP_401_UNAUTHORIZED, NOT_AUTHENTICATED),
}

_TOKEN_FAILURES = {ErrorCode.INVALID_TOKEN, ErrorCode.EXPIRED_TOKEN}


def validation_error_response(errors: ValidationErrorSet) -> JSONResponse:
    """400 response with {statusCode, error, validationErrors}."""
    body = ValidationErrorResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        error="Bad Request",
        validation_errors=Invalid(errors).as_dict(),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(by_alias=True),
    )


def failure_response(failure: Failure) -> JSONResponse:
    """Protocol-level response for a Failure outcome."""
    if failure.code is ErrorCode.VALIDATION_FAILED:
        return validation_error_response(failure.validation_errors)

    status_code, detail = _FAILURE_RESPONSES[failure.code]
    headers = BEARER_CHALLENGE if failure.code in _TOKEN_FAILURES else None
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=detail).model_dump(),
        headers=headers,
    )
