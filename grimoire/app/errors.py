"""
Error codes returned by the auth core.

Messages are fixed per code so that failures which must not be told apart
(unknown account vs. wrong password, unknown vs. expired vs. consumed token)
are byte-for-byte identical.
"""

from grimoire.libs.result import Error

WEAK_PASSWORD = "WEAK_PASSWORD"
EMAIL_ALREADY_IN_USE = "EMAIL_ALREADY_IN_USE"
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
INVALID_OR_EXPIRED_TOKEN = "INVALID_OR_EXPIRED_TOKEN"
ALREADY_VERIFIED = "ALREADY_VERIFIED"
HASHING_ERROR = "HASHING_ERROR"
EMAIL_DELIVERY_FAILED = "EMAIL_DELIVERY_FAILED"
SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
USER_NOT_FOUND = "USER_NOT_FOUND"
INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"


def weak_password(reason: str) -> Error:
    return Error(WEAK_PASSWORD, reason)


def email_already_in_use() -> Error:
    return Error(EMAIL_ALREADY_IN_USE, "User with this email already exists")


def invalid_credentials() -> Error:
    return Error(INVALID_CREDENTIALS, "Invalid email or password")


def account_inactive() -> Error:
    return Error(ACCOUNT_INACTIVE, "Account is suspended or deleted")


def invalid_or_expired_token() -> Error:
    return Error(INVALID_OR_EXPIRED_TOKEN, "Invalid or expired token")


def already_verified() -> Error:
    return Error(ALREADY_VERIFIED, "Email is already verified")


def hashing_error() -> Error:
    return Error(HASHING_ERROR, "Password hashing failed")


def email_delivery_failed() -> Error:
    return Error(EMAIL_DELIVERY_FAILED, "Email could not be sent")
