"""
Admin API Routes - Account Administration and Maintenance

Authentication is via Admin API Key, not user sessions.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from grimoire.api.error import ClientError, ServerError
from grimoire.api.utils.admin_auth import verify_admin_api_key
from grimoire.app.errors import INVALID_STATUS_TRANSITION, USER_NOT_FOUND
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.app.use_cases.admin import AccountStatusResponse, ChangeAccountStatusUseCase
from grimoire.app.use_cases.sessions import CleanupExpiredUseCase, CleanupResponse
from grimoire.depends import get_unit_of_work
from grimoire.libs.result import Result

router = APIRouter(prefix="/admin", tags=["Admin"])


def _account_status_result(result: Result[AccountStatusResponse]) -> AccountStatusResponse:
    if result.is_err():
        error = result.error
        if error.code == USER_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == INVALID_STATUS_TRANSITION:
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)
    return result.value


@router.post(
    "/users/{user_id}/suspend",
    status_code=status.HTTP_200_OK,
    response_model=AccountStatusResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def suspend_user(user_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Suspend User

    Blocks login and revokes all sessions.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
        - 409 Conflict: INVALID_STATUS_TRANSITION
    """
    result = await ChangeAccountStatusUseCase(uow).suspend(user_id)
    return _account_status_result(result)


@router.post(
    "/users/{user_id}/delete",
    status_code=status.HTTP_200_OK,
    response_model=AccountStatusResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def delete_user(user_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Delete User

    Marks the account DELETED (the row is kept) and revokes all sessions.

    Requires: X-Admin-API-Key header
    """
    result = await ChangeAccountStatusUseCase(uow).delete(user_id)
    return _account_status_result(result)


@router.post(
    "/maintenance/cleanup",
    status_code=status.HTTP_200_OK,
    response_model=CleanupResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def cleanup_expired(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Cleanup Expired Sessions and Tokens

    Intended to be called periodically by a scheduler.

    Requires: X-Admin-API-Key header
    """
    result = await CleanupExpiredUseCase(uow).execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
