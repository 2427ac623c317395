"""Exceptions raised by the publisher and delivery channels."""
from __future__ import annotations


class EmptyStateError(LookupError):
    """Current content was requested before anything was published."""


class ChannelDeliveryError(RuntimeError):
    """A delivery channel could not hand the content to its sink."""

    def __init__(self, channel: str, target: str | None, reason: str) -> None:
        self.channel = channel
        self.target = target
        self.reason = reason
        where = f"{channel} -> {target}" if target else channel
        super().__init__(f"{where}: {reason}")
