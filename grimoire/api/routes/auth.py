from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from grimoire.api.error import ClientError, ServerError
from grimoire.app.errors import (
    ACCOUNT_INACTIVE,
    ALREADY_VERIFIED,
    EMAIL_ALREADY_IN_USE,
    INVALID_CREDENTIALS,
    INVALID_OR_EXPIRED_TOKEN,
    WEAK_PASSWORD,
)
from grimoire.app.services.auth_service import AuthService
from grimoire.app.services.session_store import SessionMeta
from grimoire.app.use_cases.auth import (
    CurrentUserContext,
    LoginResponse,
    MessageResponse,
    PublicUserView,
    RegisterResponse,
)
from grimoire.depends import get_auth_service, get_bearer_token, get_current_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request shape. Password strength is checked by the
    core, not here.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, max_length=1024, description="User password")
    display_name: str = Field("", max_length=255, description="Display name")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)
):
    """
    User Registration

    Creates a PENDING account. Does not log the user in.

    Raises:
        - 400 Bad Request: WEAK_PASSWORD
        - 409 Conflict: EMAIL_ALREADY_IN_USE
        - 500 Internal Server Error: Server error
    """
    result = await auth_service.register(request.email, request.password, request.display_name)

    if result.is_err():
        error = result.error
        if error.code == WEAK_PASSWORD:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == EMAIL_ALREADY_IN_USE:
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., max_length=1024, description="User password")
    device_label: Optional[str] = Field(None, max_length=128, description="Device name")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    User Login

    Authenticates the user, revokes every previous session and returns a new
    bearer session token.

    Raises:
        - 401 Unauthorized: INVALID_CREDENTIALS
        - 403 Forbidden: ACCOUNT_INACTIVE
        - 500 Internal Server Error: Server error
    """
    meta = SessionMeta(
        user_agent=http_request.headers.get("user-agent"),
        ip_address=http_request.client.host if http_request.client else None,
        device_label=request.device_label,
    )
    result = await auth_service.login(request.email, request.password, meta)

    if result.is_err():
        error = result.error
        if error.code == INVALID_CREDENTIALS:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == ACCOUNT_INACTIVE:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout(
    token: Optional[str] = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    User Logout

    Revokes the session behind the bearer token. Always succeeds.
    """
    if token:
        result = await auth_service.logout(token)
        if result.is_err():
            raise ServerError(result.error)

    return MessageResponse(status="logged_out", message="Logout successful")


@router.get("/me", status_code=status.HTTP_200_OK, response_model=PublicUserView)
async def me(current_user: CurrentUserContext = Depends(get_current_user)):
    """
    Current User

    Raises:
        - 401 Unauthorized: missing, unknown, expired or revoked session
    """
    return current_user.user


class EmailRequest(BaseModel):
    """Payload for flows that start from an email address"""

    email: EmailStr = Field(..., description="User email address")


class TokenRequest(BaseModel):
    """Payload carrying a one-time token from an emailed link"""

    token: str = Field(..., min_length=1, max_length=256, description="One-time token")


@router.post("/verify/request", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def request_email_verification(
    request: EmailRequest, auth_service: AuthService = Depends(get_auth_service)
):
    """
    Request Email Verification

    Security:
        - No email enumeration (same response for valid/invalid emails)
        - Rate limiting should be applied in front of this endpoint

    Returns:
        - 200 OK: Always returns success (no enumeration)
        - 500 Internal Server Error: email delivery or server error
    """
    result = await auth_service.request_email_verification(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post("/verify/confirm", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def verify_email(
    request: TokenRequest, auth_service: AuthService = Depends(get_auth_service)
):
    """
    Confirm Email Verification

    Raises:
        - 400 Bad Request: INVALID_OR_EXPIRED_TOKEN
        - 409 Conflict: ALREADY_VERIFIED
        - 500 Internal Server Error: Server error
    """
    result = await auth_service.verify_email(request.token)

    if result.is_err():
        error = result.error
        if error.code == INVALID_OR_EXPIRED_TOKEN:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == ALREADY_VERIFIED:
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post(
    "/password/reset/request", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
async def request_password_reset(
    request: EmailRequest, auth_service: AuthService = Depends(get_auth_service)
):
    """
    Request Password Reset

    Security:
        - No email enumeration (same response for valid/invalid emails)
        - Token is valid for 1 hour and stored only as a SHA-256 digest

    Returns:
        - 200 OK: Always returns success (no enumeration)
        - 500 Internal Server Error: email delivery or server error
    """
    result = await auth_service.request_password_reset(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Confirm password reset HTTP request payload"""

    token: str = Field(..., min_length=1, max_length=256, description="Reset token from email")
    new_password: str = Field(..., min_length=1, max_length=1024, description="New password")


@router.post(
    "/password/reset/confirm", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
async def reset_password(
    request: ResetPasswordRequest, auth_service: AuthService = Depends(get_auth_service)
):
    """
    Confirm Password Reset

    Sets the new password and revokes every session of the account.

    Raises:
        - 400 Bad Request: WEAK_PASSWORD or INVALID_OR_EXPIRED_TOKEN
        - 500 Internal Server Error: Server error
    """
    result = await auth_service.reset_password(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in (WEAK_PASSWORD, INVALID_OR_EXPIRED_TOKEN):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
