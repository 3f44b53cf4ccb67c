"""Application use cases over the repositories."""

from __future__ import annotations

from .models import RequestMail, ResultMail, Todo
from .repository import MailRepository, TodoRepository


class TodoUseCase:
    """Reads todos from a repository."""

    def __init__(self, todo_repository: TodoRepository) -> None:
        self.todo_repository = todo_repository

    async def all(self) -> list[Todo]:
        return await self.todo_repository.all()


class MailUseCase:
    """Sends mail through a repository."""

    def __init__(self, mail_repository: MailRepository) -> None:
        self.mail_repository = mail_repository

    async def mail_send(self, mail: RequestMail) -> ResultMail:
        return await self.mail_repository.mail_send(mail)