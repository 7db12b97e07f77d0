from typing import Optional

from fastapi import status

from grimoire.libs.result import Error


class ApiError(Exception):
    """Use case Error raised out of a route, rendered as {"error": {...}}"""

    default_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, base_error: Error, status_code: Optional[int] = None):
        self.base_error = base_error
        self.status_code = status_code or self.default_status_code
        super().__init__(base_error.message)

    def body(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": self.base_error.message}}


class ClientError(ApiError):
    default_status_code = status.HTTP_400_BAD_REQUEST


class ServerError(ApiError):
    """Internal failure; the message is not shown to the client"""

    def body(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": "Internal server error"}}
