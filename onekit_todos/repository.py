"""Repository interfaces for todos and mail."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import RequestMail, ResultMail, Todo


class RepositoryNotFoundError(LookupError):
    """A todo with the given id does not exist."""

    def __init__(self, id: int) -> None:
        super().__init__(f"NotFound, id is {id}")
        self.id = id


class MailRepositoryNotFoundError(LookupError):
    """A mail with the given id does not exist."""

    def __init__(self, id: int) -> None:
        super().__init__(f"NotFound, id is {id}")
        self.id = id


class TodoRepository(ABC):
    """Source of todo items."""

    @abstractmethod
    async def all(self) -> list[Todo]:
        """Return every todo."""


class MailRepository(ABC):
    """Destination for outgoing mail."""

    @abstractmethod
    async def mail_send(self, mail: RequestMail) -> ResultMail:
        """Send a mail and report the outcome."""