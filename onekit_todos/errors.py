"""API error type and a sample endpoint that uses it."""

from __future__ import annotations

from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse

INTERNAL_SERVER_ERROR = 500


class ApiError(Exception):
    """An error that turns into a JSON response."""

    def __init__(self, status_code: int, body: dict[str, Any]) -> None:
        super().__init__(body.get("error", body))
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_exception(cls, error: BaseException) -> "ApiError":
        """Wrap any exception as a 500 error carrying its description."""
        return cls(INTERNAL_SERVER_ERROR, {"error": repr(error)})

    def to_response(self) -> JSONResponse:
        return JSONResponse(self.body, status_code=self.status_code)


async def hello(request: Request) -> JSONResponse:
    """Return a greeting as JSON."""
    return JSONResponse({"message": "Hello, World!"}, status_code=200)