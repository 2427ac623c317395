import gc
import logging

import pytest

from notification_system.errors import EmptyStateError
from notification_system.observable import NotificationObservable, Subscriber


class RecordingSubscriber(Subscriber):
    def __init__(self, observable: NotificationObservable, log: list[str] | None = None, name: str = "") -> None:
        self.observable = observable
        self.seen: list[str] = []
        self.log = log
        self.name = name

    def update(self) -> None:
        self.seen.append(self.observable.current_content())
        if self.log is not None:
            self.log.append(self.name)


class BrokenSubscriber(Subscriber):
    def update(self) -> None:
        raise RuntimeError("boom")


def test_current_content_before_publish_raises() -> None:
    observable = NotificationObservable()
    with pytest.raises(EmptyStateError):
        observable.current_content()


def test_publish_notifies_all_in_registration_order() -> None:
    observable = NotificationObservable()
    order: list[str] = []
    first = RecordingSubscriber(observable, order, "first")
    second = RecordingSubscriber(observable, order, "second")
    observable.subscribe(first)
    observable.subscribe(second)

    observable.publish("c1")

    assert first.seen == ["c1"]
    assert second.seen == ["c1"]
    assert order == ["first", "second"]
    assert observable.current_content() == "c1"


def test_later_publish_replaces_content() -> None:
    observable = NotificationObservable()
    sub = RecordingSubscriber(observable)
    observable.subscribe(sub)

    observable.publish("one")
    observable.publish("two")

    assert sub.seen == ["one", "two"]
    assert observable.current_content() == "two"


def test_unsubscribed_subscriber_is_not_notified() -> None:
    observable = NotificationObservable()
    kept = RecordingSubscriber(observable)
    removed = RecordingSubscriber(observable)
    observable.subscribe(kept)
    observable.subscribe(removed)

    observable.unsubscribe(removed)
    observable.publish("c")

    assert kept.seen == ["c"]
    assert removed.seen == []


def test_unsubscribe_unknown_is_noop() -> None:
    observable = NotificationObservable()
    observable.unsubscribe(RecordingSubscriber(observable))
    assert observable.subscribers == []


def test_duplicate_subscription_notifies_twice() -> None:
    observable = NotificationObservable()
    sub = RecordingSubscriber(observable)
    observable.subscribe(sub)
    observable.subscribe(sub)

    observable.publish("c")
    assert sub.seen == ["c", "c"]

    # unsubscribe removes every registration
    observable.unsubscribe(sub)
    observable.publish("d")
    assert sub.seen == ["c", "c"]


def test_collected_subscriber_is_skipped_and_pruned() -> None:
    observable = NotificationObservable()
    kept = RecordingSubscriber(observable)
    observable.subscribe(RecordingSubscriber(observable))
    observable.subscribe(kept)
    gc.collect()

    observable.publish("c")

    assert kept.seen == ["c"]
    assert observable.subscribers == [kept]


def test_subscriber_error_propagates_by_default() -> None:
    observable = NotificationObservable()
    broken = BrokenSubscriber()
    after = RecordingSubscriber(observable)
    observable.subscribe(broken)
    observable.subscribe(after)

    with pytest.raises(RuntimeError):
        observable.publish("c")
    assert after.seen == []


def test_isolated_subscriber_error_is_logged_and_others_run(caplog) -> None:
    observable = NotificationObservable(isolate_errors=True)
    broken = BrokenSubscriber()
    after = RecordingSubscriber(observable)
    observable.subscribe(broken)
    observable.subscribe(after)

    with caplog.at_level(logging.ERROR, logger="notification_system.observable"):
        observable.publish("c")

    assert after.seen == ["c"]
    assert any("BrokenSubscriber" in r.getMessage() for r in caplog.records)
