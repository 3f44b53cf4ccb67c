"""Repository implementations backed by memory and Redis."""

from __future__ import annotations

import json
from typing import Any

import redis.asyncio as aioredis

from .models import RequestMail, ResultMail, Todo
from .repository import MailRepository, TodoRepository

REDIS_URL = "redis://127.0.0.1/"
REDIS_TEST_KEY = "REDIS_TEST_KEY"


class MailRepositoryForMemory(MailRepository):
    """Mail repository that only prints the message."""

    async def mail_send(self, mail: RequestMail) -> ResultMail:
        print(f"mail send:MailRepositoryForMemory:{mail.content}")
        return ResultMail(True, "mail sent:MailRepositoryForMemory")


class TodoRepositoryForMemory(TodoRepository):
    """Todo repository returning a fixed in-memory list."""

    async def all(self) -> list[Todo]:
        return [Todo(id=1, text="test", completed=False)]


class TodoRepositoryForRedis(TodoRepository):
    """Todo repository that round-trips its todos through Redis."""

    def __init__(self, client: Any = None, url: str = REDIS_URL) -> None:
        self._client = client
        self._url = url

    async def _round_trip(self, client: Any, todos: list[Todo]) -> list[Todo]:
        payload = json.dumps([todo.to_dict() for todo in todos], separators=(",", ":"))
        await client.set(REDIS_TEST_KEY, payload)
        stored = await client.get(REDIS_TEST_KEY)
        if stored is None:
            raise LookupError(f"key {REDIS_TEST_KEY} missing from redis")
        if isinstance(stored, bytes):
            stored = stored.decode("utf-8")
        return [Todo.from_dict(item) for item in json.loads(stored)]

    async def redis_test(self, todos: list[Todo]) -> list[Todo]:
        """Store the todos as JSON under the test key and read them back."""
        if self._client is not None:
            return await self._round_trip(self._client, todos)
        async with aioredis.from_url(self._url) as client:
            return await self._round_trip(client, todos)

    async def all(self) -> list[Todo]:
        todos = [
            Todo(id=1, text="test_1", completed=False),
            Todo(id=2, text="test_2", completed=True),
        ]
        await self.redis_test(list(todos))
        return todos