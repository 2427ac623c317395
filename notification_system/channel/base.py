"""Channel abstraction: one delivery strategy per sink."""
from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from notification_system.errors import ChannelDeliveryError


class Channel(ABC):
    """Abstract channel: deliver(content) -> None, raising ChannelDeliveryError on failure."""

    name: str = "channel"

    def __init__(self, available: bool = True, stream: TextIO | None = None) -> None:
        self.available = available
        self._stream = stream

    @property
    def target(self) -> str | None:
        """Static target identifier (address, number); None for local sinks."""
        return None

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys sees the writes.
        return self._stream if self._stream is not None else sys.stdout

    def deliver(self, content: str) -> None:
        if not self.available:
            raise ChannelDeliveryError(self.name, self.target, "sink unavailable")
        self.render(content)

    @abstractmethod
    def render(self, content: str) -> None:
        """Write the content to this channel's sink."""
        ...

    def _write(self, headline: str, content: str) -> None:
        self.stream.write(f"\n[{self.name}] {headline}:\n{content}\n")
