"""In-memory cookie sessions that expire after inactivity."""

from __future__ import annotations

import copy
import json
import secrets
import time
from typing import Any, Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

SESSION_COOKIE_NAME = "id"
SESSION_EXPIRY_SECONDS = 10.0


class MemoryStore:
    """Session records kept in a dictionary."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self.clock = clock
        self._records: dict[str, tuple[dict[str, Any], float]] = {}

    def load(self, session_id: str) -> dict[str, Any] | None:
        """Return a copy of the session data, or None if absent or expired."""
        record = self._records.get(session_id)
        if record is None:
            return None
        data, expires_at = record
        if expires_at <= self.clock():
            del self._records[session_id]
            return None
        return copy.deepcopy(data)

    def save(self, session_id: str, data: dict[str, Any], expires_at: float) -> None:
        self._records[session_id] = (copy.deepcopy(data), expires_at)

    def delete(self, session_id: str) -> None:
        self._records.pop(session_id, None)


class Session:
    """The data of one client session, with JSON-compatible values."""

    def __init__(self, session_id: str | None = None, data: dict[str, Any] | None = None) -> None:
        self.id = session_id
        self._data: dict[str, Any] = dict(data or {})
        self.modified = False

    @property
    def data(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self._data.get(key, default))

    def insert(self, key: str, value: Any) -> None:
        """Store a value; it must be serialisable as JSON."""
        self._data[key] = json.loads(json.dumps(value))
        self.modified = True


class SessionMiddleware(BaseHTTPMiddleware):
    """Attach a session to ``request.state.session`` and persist it."""

    def __init__(
        self,
        app: ASGIApp,
        store: MemoryStore | None = None,
        cookie_name: str = SESSION_COOKIE_NAME,
        expiry: float = SESSION_EXPIRY_SECONDS,
        secure: bool = False,
    ) -> None:
        super().__init__(app)
        self.store = store if store is not None else MemoryStore()
        self.cookie_name = cookie_name
        self.expiry = expiry
        self.secure = secure

    def _cookie(self, session_id: str) -> str:
        cookie = (
            f"{self.cookie_name}={session_id}; HttpOnly; SameSite=Strict; "
            f"Path=/; Max-Age={int(self.expiry)}"
        )
        return cookie + "; Secure" if self.secure else cookie

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        session_id = request.cookies.get(self.cookie_name)
        data = self.store.load(session_id) if session_id else None
        session = Session(session_id if data is not None else None, data)
        request.state.session = session

        response = await call_next(request)

        if session.modified or (session.id is not None and session.data):
            if session.id is None:
                session.id = secrets.token_urlsafe(16)
            self.store.save(session.id, session.data, self.store.clock() + self.expiry)
            response.headers.append("set-cookie", self._cookie(session.id))
        return response