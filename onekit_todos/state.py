"""Shared application state and the wired use cases."""

from __future__ import annotations

import asyncio

from .adapters import MailRepositoryForMemory, TodoRepositoryForRedis
from .usecases import MailUseCase, TodoUseCase


class AppState:
    """State shared by handlers: a counter and the worker channel."""

    def __init__(self, tx: asyncio.Queue) -> None:
        self.counter1 = 0
        self.tx = tx
        self._lock = asyncio.Lock()

    async def send(self, message: str) -> None:
        """Put a message on the worker channel, one sender at a time."""
        async with self._lock:
            await self.tx.put(message)

    def __repr__(self) -> str:
        return f"AppState(counter1={self.counter1}, tx={self.tx!r})"


class Modules:
    """The use cases the handlers work with."""

    def __init__(
        self,
        todo_use_case: TodoUseCase | None = None,
        mail_use_case: MailUseCase | None = None,
    ) -> None:
        if todo_use_case is None:
            todo_use_case = TodoUseCase(TodoRepositoryForRedis())
        if mail_use_case is None:
            mail_use_case = MailUseCase(MailRepositoryForMemory())
        self.todo_use_case = todo_use_case
        self.mail_use_case = mail_use_case

    def __repr__(self) -> str:
        return "Modules"