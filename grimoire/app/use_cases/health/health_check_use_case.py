"""
Health Check Use Case

Round-trips to the database and reports user and active session counts.
A failing database yields an unhealthy report rather than an error result,
so the route can still answer with a body.
"""

import logging
import time

from sqlalchemy.exc import SQLAlchemyError

from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.domain.base import utcnow
from grimoire.libs.result import Result, Return
from .dtos import DatabaseStatus, HealthReport

logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()


def uptime_seconds() -> float:
    return round(time.monotonic() - _STARTED_AT, 3)


class HealthCheckUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[HealthReport]:
        now = utcnow()
        try:
            async with self.uow:
                user_count = await self.uow.users.count()
                active_sessions = await self.uow.sessions.count_active(now)
        except SQLAlchemyError as exc:
            logger.error(f"Health check failed: {exc}")
            return Return.ok(
                HealthReport(
                    status="unhealthy",
                    timestamp=now,
                    database=DatabaseStatus(connected=False, error=type(exc).__name__),
                    uptime_seconds=uptime_seconds(),
                )
            )

        return Return.ok(
            HealthReport(
                status="healthy",
                timestamp=now,
                database=DatabaseStatus(
                    connected=True, user_count=user_count, active_sessions=active_sessions
                ),
                uptime_seconds=uptime_seconds(),
            )
        )
