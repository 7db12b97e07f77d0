from uuid import UUID

from fastapi import APIRouter, Depends, status

from grimoire.api.error import ClientError, ServerError
from grimoire.app.errors import SESSION_NOT_FOUND
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.app.use_cases.auth import CurrentUserContext
from grimoire.app.use_cases.sessions import (
    ListSessionsUseCase,
    RevokeAllSessionsResponse,
    RevokeSessionResponse,
    RevokeSessionsUseCase,
    SessionListResponse,
)
from grimoire.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("", status_code=status.HTTP_200_OK, response_model=SessionListResponse)
async def list_sessions(
    current_user: CurrentUserContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Active Sessions

    Active sessions of the caller, most recently used first. The session used
    for this request is flagged with is_current.
    """
    use_case = ListSessionsUseCase(uow)
    result = await use_case.execute(current_user.user.id, current_user.session_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionResponse,
)
async def revoke_session(
    session_id: UUID,
    current_user: CurrentUserContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke Specific Session

    Logs one of the caller's devices out.

    Raises:
        - 404 Not Found: SESSION_NOT_FOUND (also for other users' sessions)
        - 500 Internal Server Error: Server error
    """
    use_case = RevokeSessionsUseCase(uow)
    result = await use_case.revoke_own_session(current_user.user.id, session_id)

    if result.is_err():
        error = result.error
        if error.code == SESSION_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/revoke-all",
    status_code=status.HTTP_200_OK,
    response_model=RevokeAllSessionsResponse,
)
async def revoke_all_sessions(
    current_user: CurrentUserContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke All Sessions

    Logs the caller out everywhere, including the current session.
    """
    use_case = RevokeSessionsUseCase(uow)
    result = await use_case.revoke_all(current_user.user.id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value
