"""
List Sessions Use Case

Active sessions of a user, most recently used first.
"""

from typing import Optional
from uuid import UUID

from grimoire.app.services.session_store import SessionStore
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.libs.result import Result, Return
from .dtos import ActiveSession, SessionListResponse


class ListSessionsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, current_session_id: Optional[UUID] = None
    ) -> Result[SessionListResponse]:
        async with self.uow:
            views = await SessionStore(self.uow.sessions).list_active(user_id)

        return Return.ok(
            SessionListResponse(
                sessions=[
                    ActiveSession(**view.model_dump(), is_current=view.id == current_session_id)
                    for view in views
                ]
            )
        )
