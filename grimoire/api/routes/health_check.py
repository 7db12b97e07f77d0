from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.app.use_cases.health import HealthCheckUseCase, HealthReport, PingResponse
from grimoire.depends import get_unit_of_work
from grimoire.domain.base import utcnow

router = APIRouter()


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    response_model=HealthReport,
    response_model_exclude_none=True,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthReport}},
)
async def health_check(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Health Check

    Checks database connectivity and reports user and active session counts.
    Answers 503 with connected=false when the database cannot be reached.
    """
    result = await HealthCheckUseCase(uow).execute()
    report = result.value

    if not report.healthy:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=report.model_dump(mode="json", exclude_none=True),
        )
    return report


@router.get("/ping", status_code=status.HTTP_200_OK, response_model=PingResponse)
async def ping():
    """Liveness check that never touches the database"""
    return PingResponse(timestamp=utcnow())
