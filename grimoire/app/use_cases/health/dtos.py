"""
Health Check Use Case DTOs
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class DatabaseStatus(BaseModel):
    connected: bool
    user_count: Optional[int] = None
    active_sessions: Optional[int] = None
    error: Optional[str] = None


class HealthReport(BaseModel):
    status: str
    timestamp: datetime
    database: DatabaseStatus
    uptime_seconds: float

    @property
    def healthy(self) -> bool:
        return self.status == "healthy"


class PingResponse(BaseModel):
    message: str = "pong"
    timestamp: datetime
