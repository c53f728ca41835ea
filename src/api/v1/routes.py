"""
API v1 routes.

Defines REST endpoints for account registration, login and the
authenticated profile.
"""

from typing import Union

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.api.dependencies import (
    get_authentication_service,
    get_current_account,
    get_registration_service,
    read_json_body,
)
from src.api.errors import failure_response, validation_error_response
from src.api.models import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    RegisterRequest,
    RegisterResponse,
    ValidationErrorResponse,
    json_body_schema,
)
from src.domain.authentication import AuthenticationService
from src.domain.ports import Account
from src.domain.registration import RegistrationService
from src.domain.results import Failure
from src.domain.validation import Invalid

router = APIRouter(tags=["v1"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        500: {"model": ErrorResponse, "description": "Registration could not be completed"},
    },
    openapi_extra=json_body_schema(RegisterRequest),
    summary="Register a new user",
    description="Submit name, email and password to create an account.",
)
async def register(
    request: Request,
    service: RegistrationService = Depends(get_registration_service),
) -> Union[RegisterResponse, JSONResponse]:
    """
    Register a new account.

    - **name**: At least 3 characters
    - **email**: Valid email address, not already registered
    - **password**: At least 8 characters with a letter, a number and a special character
    """
    payload = await read_json_body(request)
    if isinstance(payload, Invalid):
        return validation_error_response(payload.errors)

    result = await service.register(payload)
    if isinstance(result, Failure):
        return failure_response(result)

    return RegisterResponse(message="User registered successfully")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
    openapi_extra=json_body_schema(LoginRequest),
    summary="Log in and obtain an access token",
    description="Submit email and password to receive a bearer token.",
)
async def login(
    request: Request,
    service: AuthenticationService = Depends(get_authentication_service),
) -> Union[LoginResponse, JSONResponse]:
    """
    Verify credentials and issue an access token.

    Unknown email and wrong password return the same 401 response.
    """
    payload = await read_json_body(request)
    if isinstance(payload, Invalid):
        return validation_error_response(payload.errors)

    result = await service.login(payload)
    if isinstance(result, Failure):
        return failure_response(result)

    return LoginResponse(access_token=result.value)


@router.get(
    "/me",
    response_model=ProfileResponse,
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
    summary="Get the authenticated user's profile",
)
async def me(account: Account = Depends(get_current_account)) -> ProfileResponse:
    """Return name and email of the account the bearer token was issued for."""
    return ProfileResponse(name=account.name, email=account.email)
