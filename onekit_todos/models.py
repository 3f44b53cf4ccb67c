"""Domain models for todos and mail."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _require(data: Mapping[str, Any], name: str, kind: type) -> Any:
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    value = data[name]
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise ValueError(
            f"invalid type for field `{name}`: expected {kind.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


@dataclass
class RequestMail:
    """An outgoing mail message."""

    from_: str = ""
    to: str = ""
    cc: str = ""
    bcc: str = ""
    subject: str = ""
    content: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "from": self.from_,
            "to": self.to,
            "cc": self.cc,
            "bcc": self.bcc,
            "subject": self.subject,
            "content": self.content,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RequestMail":
        return cls(
            from_=_require(data, "from", str),
            to=_require(data, "to", str),
            cc=_require(data, "cc", str),
            bcc=_require(data, "bcc", str),
            subject=_require(data, "subject", str),
            content=_require(data, "content", str),
        )


@dataclass
class ResultMail:
    """The outcome of sending a mail."""

    success: bool
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "message": self.message}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResultMail":
        return cls(
            success=_require(data, "success", bool),
            message=_require(data, "message", str),
        )


@dataclass
class Todo:
    """A single todo item."""

    id: int
    text: str
    completed: bool = False

    def __post_init__(self) -> None:
        if not _I32_MIN <= self.id <= _I32_MAX:
            raise ValueError(f"todo id {self.id} is out of the 32-bit range")

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "completed": self.completed}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Todo":
        return cls(
            id=_require(data, "id", int),
            text=_require(data, "text", str),
            completed=_require(data, "completed", bool),
        )