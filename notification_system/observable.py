"""Publisher holding the current notification content and its subscribers."""
from __future__ import annotations

import logging
import weakref
from abc import ABC, abstractmethod

from notification_system.errors import EmptyStateError

logger = logging.getLogger(__name__)


class Subscriber(ABC):
    """Reacts to a publish event by reading current content from its publisher."""

    @abstractmethod
    def update(self) -> None:
        ...


class NotificationObservable:
    """Holds the current content and notifies subscribers synchronously.

    Subscribers are held by weak reference: the observable does not keep them
    alive, and a collected subscriber is skipped and pruned on the next publish.
    Subscribing the same object twice registers it twice, so it is notified
    twice per publish.

    With ``isolate_errors`` left False, an exception raised by a subscriber
    propagates out of :meth:`publish` and later subscribers are not notified.
    With it set, the exception is logged and the remaining subscribers run.
    """

    def __init__(self, isolate_errors: bool = False) -> None:
        self.isolate_errors = isolate_errors
        self._refs: list[weakref.ref[Subscriber]] = []
        self._content: str | None = None

    def subscribe(self, subscriber: Subscriber) -> None:
        self._refs.append(weakref.ref(subscriber))
        logger.debug("subscribed %s (total=%s)", type(subscriber).__name__, len(self._refs))

    def unsubscribe(self, subscriber: Subscriber) -> None:
        """Remove every registration of ``subscriber``; no-op if absent."""
        self._refs = [r for r in self._refs if r() is not None and r() is not subscriber]

    @property
    def subscribers(self) -> list[Subscriber]:
        return [s for s in (r() for r in self._refs) if s is not None]

    def current_content(self) -> str:
        if self._content is None:
            raise EmptyStateError("no notification has been published yet")
        return self._content

    def publish(self, content: str) -> None:
        self._content = content
        self._notify()

    def _notify(self) -> None:
        # Snapshot so subscribe/unsubscribe during notification affect the next publish only.
        refs = list(self._refs)
        dead = False
        for ref in refs:
            subscriber = ref()
            if subscriber is None:
                dead = True
                continue
            if not self.isolate_errors:
                subscriber.update()
                continue
            try:
                subscriber.update()
            except Exception:  # noqa: BLE001 - one subscriber must not block the others
                logger.exception("subscriber %s failed; continuing", type(subscriber).__name__)
        if dead:
            self._refs = [r for r in self._refs if r() is not None]
