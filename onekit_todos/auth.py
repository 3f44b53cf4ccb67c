"""Basic authentication, JWT issuing and the login endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Mapping

import jwt
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

logger = logging.getLogger(__name__)

BASIC_AUTH_KEY = "secret"
JWT_ENCODING_KEY = b"secret"
JWT_ALGORITHM = "HS256"
JWT_LIFETIME = timedelta(days=30)
JWT_LEEWAY_SECONDS = 60
TOKEN_COOKIE_MAX_AGE = 30
UNAUTHORIZED_REALM = 'Basic realm="Access to the protected area"'


@dataclass
class Claims:
    """The claims carried by an issued token."""

    user_id: str
    exp: int

    def to_dict(self) -> dict[str, Any]:
        return {"user_id": self.user_id, "exp": self.exp}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Claims":
        user_id = data.get("user_id")
        exp = data.get("exp")
        if not isinstance(user_id, str):
            raise ValueError("claim `user_id` must be a string")
        if not isinstance(exp, int) or isinstance(exp, bool):
            raise ValueError("claim `exp` must be an integer")
        return cls(user_id=user_id, exp=exp)


def is_basic_authenticated(auth_header: str) -> bool:
    """Check the credential that follows the scheme in an Authorization value."""
    words = auth_header.split()
    if len(words) < 2:
        return False
    credential = words[1]
    logger.debug("%-30s (credential)", credential)
    return credential == BASIC_AUTH_KEY


def generate_jwt(now: datetime | None = None) -> str:
    """Issue a token for the master user that expires thirty days after ``now``."""
    if now is None:
        now = datetime.now(timezone.utc)
    claims = Claims(user_id="master", exp=int((now + JWT_LIFETIME).timestamp()))
    return jwt.encode(claims.to_dict(), JWT_ENCODING_KEY, algorithm=JWT_ALGORITHM)


def decode_jwt(token: str) -> Claims:
    """Verify a token and return its claims; raise ``jwt.InvalidTokenError`` if it is bad."""
    payload = jwt.decode(
        token,
        JWT_ENCODING_KEY,
        algorithms=[JWT_ALGORITHM],
        options={"require": ["exp"]},
        leeway=JWT_LEEWAY_SECONDS,
    )
    try:
        return Claims.from_dict(payload)
    except ValueError as exc:
        raise jwt.InvalidTokenError(str(exc)) from exc


async def authenticate(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log the Authorization header and pass the request on."""
    logger.debug("authenticate:%r", request.headers.get("authorization"))
    return await call_next(request)


async def login(request: Request) -> Response:
    """Answer a Basic login with a token cookie, or 401."""
    auth_header = request.headers.get("authorization")
    authenticated = False
    if auth_header is not None:
        logger.debug("auth_header:%r", auth_header)
        authenticated = is_basic_authenticated(auth_header)

    if not authenticated:
        return Response(
            "Unauthorized",
            status_code=401,
            headers={"WWW-Authenticate": UNAUTHORIZED_REALM},
        )

    token = generate_jwt()
    logger.debug("jwt:%r", token)
    try:
        print(f"Decoded claims: {decode_jwt(token)!r}")
    except jwt.InvalidTokenError as err:
        print(f"Failed to decode token: {err!r}")

    cookie = f"token={token}; Path=/; SameSite=Strict; Max-Age={TOKEN_COOKIE_MAX_AGE}"
    return PlainTextResponse("authenticated", headers={"set-cookie": cookie})