from uuid import UUID

from pydantic import BaseModel

from grimoire.domain.entities import UserStatus


class AccountStatusResponse(BaseModel):
    """Response for account status transitions"""

    user_id: UUID
    status: UserStatus
    sessions_revoked: int
