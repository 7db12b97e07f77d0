"""
Health Check Use Cases
"""

from .health_check_use_case import HealthCheckUseCase
from .dtos import DatabaseStatus, HealthReport, PingResponse

__all__ = [
    "HealthCheckUseCase",
    "DatabaseStatus",
    "HealthReport",
    "PingResponse",
]
