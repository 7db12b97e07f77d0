"""
Change Account Status Use Case

Administrative lifecycle transitions: suspend and delete.
"""

import logging
from uuid import UUID

from grimoire.app.errors import INVALID_STATUS_TRANSITION, USER_NOT_FOUND
from grimoire.app.services.session_store import SessionStore
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.domain.entities import UserStatus
from grimoire.libs.result import Error, Result, Return
from .dtos import AccountStatusResponse

logger = logging.getLogger(__name__)

# Target status -> statuses it may be entered from
ALLOWED_TRANSITIONS = {
    UserStatus.SUSPENDED: (UserStatus.PENDING, UserStatus.VERIFIED),
    UserStatus.DELETED: tuple(UserStatus),
}


class ChangeAccountStatusUseCase:
    """
    Business Rules:
    - PENDING or VERIFIED accounts can be suspended
    - Any account can be deleted (status only, the row is kept)
    - Both transitions revoke every session of the user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def suspend(self, user_id: UUID) -> Result[AccountStatusResponse]:
        return await self._transition(user_id, UserStatus.SUSPENDED)

    async def delete(self, user_id: UUID) -> Result[AccountStatusResponse]:
        return await self._transition(user_id, UserStatus.DELETED)

    async def _transition(
        self, user_id: UUID, target: UserStatus
    ) -> Result[AccountStatusResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(USER_NOT_FOUND, "User not found"))

            if user.status not in ALLOWED_TRANSITIONS[target]:
                return Return.err(
                    Error(
                        INVALID_STATUS_TRANSITION,
                        f"Cannot change account from {user.status.value} to {target.value}",
                    )
                )

            user.status = target
            await self.uow.users.update(user)
            revoked_count = await SessionStore(self.uow.sessions).revoke_all_for_user(user_id)

            await self.uow.commit()

            logger.info(f"User {user_id} moved to {target.value}, {revoked_count} session(s) revoked")
            return Return.ok(
                AccountStatusResponse(
                    user_id=user_id, status=target, sessions_revoked=revoked_count
                )
            )
