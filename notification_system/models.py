"""Core data models: notification content pipeline and delivery results."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Protocol, Sequence

DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class Decoration(Protocol):
    """Pure transformation: takes the accumulated text, returns the wrapped text."""

    def __call__(self, text: str) -> str:
        ...


@dataclass(frozen=True)
class TimestampDecoration:
    """Prepends ``[<timestamp>] `` to the text."""

    clock: Callable[[], datetime] = datetime.now
    fmt: str = DEFAULT_TIMESTAMP_FORMAT

    def __call__(self, text: str) -> str:
        return f"[{self.clock().strftime(self.fmt)}] {text}"


@dataclass(frozen=True)
class SignatureDecoration:
    """Appends a ``-- <signature>`` line to the text."""

    signature: str

    def __call__(self, text: str) -> str:
        return f"{text}\n-- {self.signature}"


def build(base: str, decorations: Sequence[Decoration]) -> str:
    """Apply decorations in order; each one wraps the result of the previous."""
    text = base
    for decoration in decorations:
        text = decoration(text)
    return text


@dataclass(frozen=True)
class Notification:
    """Immutable message plus the decorations wrapped around it, innermost first."""

    message: str
    decorations: tuple[Decoration, ...] = ()

    def decorate(self, decoration: Decoration) -> Notification:
        """Return a new notification with ``decoration`` as the outermost layer."""
        return Notification(self.message, self.decorations + (decoration,))

    @property
    def content(self) -> str:
        return build(self.message, self.decorations)


class DeliveryStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"
    ERROR = "error"


@dataclass
class DeliveryResult:
    """Outcome of one channel delivery during a dispatch."""

    channel: str
    target: str | None
    status: DeliveryStatus
    error: str = field(default="")

    @property
    def ok(self) -> bool:
        return self.status is DeliveryStatus.SENT
