"""HTTP handlers for health, cookies, todos and shared state."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import jwt
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from .auth import decode_jwt
from .models import RequestMail
from .sessions import Session

logger = logging.getLogger(__name__)

COUNTER_KEY = "counter"
HEALTH_CHECK_DELAY = 5.0
_MISSING_SESSION = "Can't extract session. Is `SessionManagerLayer` enabled?"


@dataclass
class Counter:
    """A per-session visit counter."""

    value: int = 0

    @classmethod
    def from_session(cls, session: Session) -> "Counter":
        """Read the counter and store it incremented for the next visit."""
        counter = cls(session.get(COUNTER_KEY, 0))
        session.insert(COUNTER_KEY, counter.value + 1)
        return counter


async def counter_handler(request: Request) -> Response:
    """Count visits in the session and set a fixed cookie."""
    session = getattr(request.state, "session", None)
    if session is None:
        return PlainTextResponse(_MISSING_SESSION, status_code=500)
    counter = Counter.from_session(session)
    logger.debug("handler")
    logger.debug("Current count: %d", counter.value)
    return PlainTextResponse(
        "クッキーが設定されました",
        headers={"set-cookie": "key=value2; Path=/; SameSite=Strict; Max-Age=30"},
    )


async def get_cookie(request: Request) -> Response:
    """Decode the token cookie and describe the result."""
    if "cookie" not in request.headers:
        return PlainTextResponse("Header of type `cookie` was missing", status_code=400)
    token = request.cookies.get("token")
    if token is None:
        return PlainTextResponse("クッキーが見つかりません")
    try:
        claims = decode_jwt(token)
    except jwt.InvalidTokenError as err:
        message = f"Failed to decode token: {err!r}"
    else:
        message = f"Decoded claims: {claims!r}"
    print(message)
    return PlainTextResponse(message)


async def health_check(request: Request) -> Response:
    """Answer 200 after a short pause."""
    logger.debug("Access health check endpoint from user!")
    await asyncio.sleep(HEALTH_CHECK_DELAY)
    return Response(status_code=200)


async def all_todo(request: Request) -> Response:
    """Load every todo and send a default mail, ignoring mail failures."""
    modules = request.app.state.modules
    todos = await modules.todo_use_case.all()
    try:
        await modules.mail_use_case.mail_send(RequestMail())
    except Exception:
        logger.debug("mail send failed", exc_info=True)
    logger.debug("%r", todos)
    return Response(status_code=200)


async def get_state(request: Request) -> Response:
    """Send a message to the worker channel."""
    await request.app.state.app_state.send("test")
    return Response(status_code=200)