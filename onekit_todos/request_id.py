"""Request id generation and propagation."""

from __future__ import annotations

import uuid
from typing import Awaitable, Callable

from starlette.datastructures import MutableHeaders
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

ONE_KIT_REQUEST_ID = "one-kit-request-id"


def make_request_id() -> str:
    """Return a fresh random UUID as a string."""
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Give each request an id header and copy it onto the response."""

    def __init__(self, app: ASGIApp, header_name: str = ONE_KIT_REQUEST_ID) -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        headers = MutableHeaders(scope=request.scope)
        request_id = headers.get(self.header_name)
        if request_id is None:
            request_id = make_request_id()
            headers.append(self.header_name, request_id)
        request.state.request_id = request_id

        response = await call_next(request)
        if self.header_name not in response.headers:
            response.headers[self.header_name] = request_id
        return response