"""Subscriber roles: console logger and the channel dispatch engine."""
from __future__ import annotations

import logging
import sys
from typing import Iterable, TextIO

from notification_system.channel.base import Channel
from notification_system.errors import ChannelDeliveryError
from notification_system.models import DeliveryResult, DeliveryStatus
from notification_system.observable import NotificationObservable, Subscriber

logger = logging.getLogger(__name__)


class NotificationLogger(Subscriber):
    """Writes every published notification to a line-oriented stream."""

    def __init__(self, observable: NotificationObservable, stream: TextIO | None = None) -> None:
        self._observable = observable
        self._stream = stream

    def update(self) -> None:
        content = self._observable.current_content()
        stream = self._stream if self._stream is not None else sys.stdout
        try:
            stream.write(f"\n[Logger] New Notification Logged:\n{content}\n")
        except (OSError, ValueError):
            # Closed or broken stream; the publish carries on to the other subscribers.
            logger.exception("notification logger could not write to its stream")
            return
        logger.debug("logged notification (%s chars)", len(content))


class NotificationEngine(Subscriber):
    """Fans the current content out to every registered channel, in order.

    A failing channel does not stop the ones after it; every outcome is
    recorded in ``last_results`` for the most recent dispatch.
    """

    def __init__(
        self,
        observable: NotificationObservable,
        channels: Iterable[Channel] = (),
    ) -> None:
        self._observable = observable
        self._channels: list[Channel] = list(channels)
        self.last_results: list[DeliveryResult] = []

    @property
    def channels(self) -> list[Channel]:
        return list(self._channels)

    def add_channel(self, channel: Channel) -> None:
        self._channels.append(channel)

    def update(self) -> None:
        content = self._observable.current_content()
        results: list[DeliveryResult] = []
        for channel in self._channels:
            try:
                channel.deliver(content)
            except ChannelDeliveryError as e:
                logger.error("delivery failed channel=%s target=%s: %s", channel.name, channel.target, e.reason)
                results.append(DeliveryResult(channel.name, channel.target, DeliveryStatus.FAILED, e.reason))
                continue
            except Exception as e:  # noqa: BLE001 - delivery never reaches the publisher
                logger.exception("channel %s raised while delivering", channel.name)
                results.append(DeliveryResult(channel.name, channel.target, DeliveryStatus.ERROR, str(e)))
                continue
            results.append(DeliveryResult(channel.name, channel.target, DeliveryStatus.SENT))
        self.last_results = results
        failed = sum(1 for r in results if not r.ok)
        if failed:
            logger.warning("dispatch finished: %s/%s channel(s) failed", failed, len(results))
        else:
            logger.info("dispatch finished: %s channel(s) delivered", len(results))
