"""Console-simulated channels: email, SMS and popup."""
from __future__ import annotations

import logging
from typing import TextIO

from notification_system.channel.base import Channel

logger = logging.getLogger(__name__)


class EmailChannel(Channel):
    name = "Email"

    def __init__(self, address: str, available: bool = True, stream: TextIO | None = None) -> None:
        super().__init__(available, stream)
        self.address = address

    @property
    def target(self) -> str:
        return self.address

    def render(self, content: str) -> None:
        self._write(f"Sent to {self.address}", content)
        logger.info("email delivered to %s (%s chars)", self.address, len(content))


class SMSChannel(Channel):
    name = "SMS"

    def __init__(self, number: str, available: bool = True, stream: TextIO | None = None) -> None:
        super().__init__(available, stream)
        self.number = number

    @property
    def target(self) -> str:
        return self.number

    def render(self, content: str) -> None:
        self._write(f"Sent to {self.number}", content)
        logger.info("sms delivered to %s (%s chars)", self.number, len(content))


class PopupChannel(Channel):
    name = "Popup"

    def render(self, content: str) -> None:
        self._write("Notification displayed", content)
        logger.info("popup displayed (%s chars)", len(content))
