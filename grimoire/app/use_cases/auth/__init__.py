"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .get_current_user_use_case import GetCurrentUserUseCase
from .request_email_verification_use_case import RequestEmailVerificationUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    RegisterCommand,
    RegisterResponse,
    LoginResponse,
    MessageResponse,
    PublicUserView,
    CurrentUserContext,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "GetCurrentUserUseCase",
    "RequestEmailVerificationUseCase",
    "VerifyEmailUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
    "MessageResponse",
    # DTOs - Nested Models
    "PublicUserView",
    "CurrentUserContext",
]
