"""
Password strength policy.

Rules are checked in a fixed order and only the first failure is reported.
"""

import string
from typing import Optional

from pydantic import BaseModel

MIN_LENGTH = 8
MAX_LENGTH = 128
SYMBOLS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"


class PasswordValidation(BaseModel):
    valid: bool
    reason: Optional[str] = None


class PasswordPolicy:
    def __init__(self, min_length: int = MIN_LENGTH, max_length: int = MAX_LENGTH):
        self.min_length = min_length
        self.max_length = max_length

    def validate(self, plaintext: str) -> PasswordValidation:
        if len(plaintext) < self.min_length:
            return self._fail(f"Password must be at least {self.min_length} characters long")
        if len(plaintext) > self.max_length:
            return self._fail(f"Password must be at most {self.max_length} characters long")
        if not any(c in string.ascii_lowercase for c in plaintext):
            return self._fail("Password must contain at least one lowercase letter")
        if not any(c in string.ascii_uppercase for c in plaintext):
            return self._fail("Password must contain at least one uppercase letter")
        if not any(c in string.digits for c in plaintext):
            return self._fail("Password must contain at least one number")
        if not any(c in SYMBOLS for c in plaintext):
            return self._fail("Password must contain at least one special character")
        return PasswordValidation(valid=True)

    @staticmethod
    def _fail(reason: str) -> PasswordValidation:
        return PasswordValidation(valid=False, reason=reason)
