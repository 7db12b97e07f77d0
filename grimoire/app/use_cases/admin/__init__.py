"""
Admin Use Cases
"""

from .change_account_status_use_case import ChangeAccountStatusUseCase
from .dtos import AccountStatusResponse

__all__ = [
    "ChangeAccountStatusUseCase",
    "AccountStatusResponse",
]
