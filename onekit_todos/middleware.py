"""Request logging middleware."""

from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable

from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


def _target(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


async def logging_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log method, target and how long the request took in milliseconds."""
    method = request.method
    target = _target(request)
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = int((time.perf_counter() - start) * 1000)
    logger.debug("%s %s took %d ms", method, target, elapsed_ms)
    return response


async def access_log_on_request(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log method and target before handling the request."""
    logger.debug("%s %s", request.method, _target(request))
    return await call_next(request)