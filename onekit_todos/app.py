"""Application assembly, server start-up and the command entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Mount, Route

from .auth import authenticate, login
from .handlers import all_todo, counter_handler, get_cookie, get_state, health_check
from .middleware import logging_middleware
from .request_id import ONE_KIT_REQUEST_ID, RequestIdMiddleware
from .sessions import SESSION_EXPIRY_SECONDS, MemoryStore, SessionMiddleware
from .state import AppState, Modules
from .worker import worker_start

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
CHANNEL_CAPACITY = 64
ONESHOT_MESSAGE = "test2"
_LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(threadName)s(%(thread)d) "
    "%(filename)s:%(lineno)d: %(message)s"
)


def create_app(modules: Modules, app_state: AppState) -> Starlette:
    """Build the web application with its routes, state and middleware."""
    auth_routes = [
        Route("/login", login, methods=["GET"]),
        Route("/user", login, methods=["GET"]),
    ]
    api_routes = [
        Route("/health", health_check, methods=["GET"]),
        Route("/cookie", get_cookie, methods=["GET"]),
        Route("/one-kit", all_todo, methods=["GET"]),
        Route("/handler", counter_handler, methods=["GET"]),
        Route("/get-state", get_state, methods=["GET"]),
    ]
    # Listed from the outermost layer inwards.
    middleware = [
        Middleware(RequestIdMiddleware, header_name=ONE_KIT_REQUEST_ID),
        Middleware(BaseHTTPMiddleware, dispatch=logging_middleware),
        Middleware(BaseHTTPMiddleware, dispatch=authenticate),
        Middleware(
            SessionMiddleware,
            store=MemoryStore(),
            expiry=SESSION_EXPIRY_SECONDS,
            secure=False,
        ),
    ]
    app = Starlette(
        routes=[Mount("/auth", routes=auth_routes), Mount("/api", routes=api_routes)],
        middleware=middleware,
    )
    app.state.modules = modules
    app.state.app_state = app_state
    return app


async def serve(
    modules: Modules,
    app_state: AppState,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> None:
    """Serve the application until interrupted or terminated."""
    app = create_app(modules, app_state)
    logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT)
    logger.debug("Starting server on")
    logger.debug("http://%s:%d", "localhost" if host == DEFAULT_HOST else host, port)
    config = uvicorn.Config(app, host=host, port=port, log_config=None)
    await uvicorn.Server(config).serve()


async def run(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Start the workers, hand them their first messages and serve the app."""
    queue: asyncio.Queue = asyncio.Queue(maxsize=CHANNEL_CAPACITY)
    oneshot: asyncio.Future = asyncio.get_running_loop().create_future()
    workers = worker_start(queue, oneshot)
    oneshot.set_result(ONESHOT_MESSAGE)

    app_state = AppState(queue)
    modules = Modules()
    try:
        await serve(modules, app_state, host, port)
    finally:
        for task in workers:
            task.cancel()
        await asyncio.gather(*workers, return_exceptions=True)


def main(argv: list[str] | None = None) -> int:
    """Parse the command line and run the server."""
    parser = argparse.ArgumentParser(description="Serve the todo web application.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to bind")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to bind")
    args = parser.parse_args(argv)
    asyncio.run(run(args.host, args.port))
    return 0