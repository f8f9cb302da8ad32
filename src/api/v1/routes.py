"""
API v1 routes.

Defines REST endpoints for account registration, email verification and login.
Service calls hash with bcrypt and block on store I/O, so each one runs in
the threadpool rather than on the event loop.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from src.api.dependencies import get_account_service
from src.api.models import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    VerifyResponse,
)
from src.domain.exceptions import (
    AccountNotVerified,
    EmailTaken,
    InvalidCredentials,
    InvalidInput,
    InvalidOrUsedToken,
)
from src.domain.lifecycle import AccountService

router = APIRouter(tags=["v1"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        422: {"description": "Validation error"},
    },
    summary="Register a new user",
    description="Submit email and password to create an unverified account. "
    "A verification link will be sent to the provided email.",
)
async def register(
    request_data: RegisterRequest,
    service: AccountService = Depends(get_account_service),
) -> RegisterResponse:
    """
    Register a new user and send a verification link.

    - **email**: Valid email address to register
    - **password**: Password (minimum 6 characters)
    """
    try:
        email = await run_in_threadpool(service.register, request_data.email, request_data.password)
    except InvalidInput as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
    except EmailTaken:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this email already exists",
        ) from None
    return RegisterResponse(
        message="Registration successful. Please verify your email.",
        email=email,
    )


@router.get(
    "/verify/{token}",
    response_model=VerifyResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or used token"},
    },
    summary="Verify email with token",
    description="Consume the single-use token from the verification link.",
)
async def verify(
    token: str,
    service: AccountService = Depends(get_account_service),
) -> VerifyResponse:
    """Mark the account holding this token as verified."""
    try:
        email = await run_in_threadpool(service.verify, token)
    except InvalidInput as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
    except InvalidOrUsedToken:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or used token",
        ) from None
    return VerifyResponse(message="Account verified. You can now log in.", email=email)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        403: {"model": ErrorResponse, "description": "Account not verified"},
        422: {"description": "Validation error"},
    },
    summary="Log in with email and password",
    description="Check credentials of a verified account. No session is issued.",
)
async def login(
    request_data: LoginRequest,
    service: AccountService = Depends(get_account_service),
) -> LoginResponse:
    """
    Authenticate a verified account.

    Unknown email and wrong password return the same 401 response.
    """
    try:
        account = await run_in_threadpool(service.login, request_data.email, request_data.password)
    except InvalidInput as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
    except InvalidCredentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        ) from None
    except AccountNotVerified:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account not verified. Please verify your email.",
        ) from None
    return LoginResponse(message="Login successful", email=account.email)
