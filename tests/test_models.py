from datetime import datetime

from notification_system.models import (
    DeliveryResult,
    DeliveryStatus,
    Notification,
    SignatureDecoration,
    TimestampDecoration,
    build,
)

FIXED = datetime(2025, 10, 26, 10, 45, 0)


def _clock() -> datetime:
    return FIXED


def test_build_applies_decorations_in_order() -> None:
    def d1(text: str) -> str:
        return text + "-a"

    def d2(text: str) -> str:
        return "<" + text + ">"

    assert build("b", [d1, d2]) == d2(d1("b")) == "<b-a>"
    assert build("b", [d2, d1]) == "<b>-a"


def test_build_without_decorations_returns_base() -> None:
    assert build("plain", []) == "plain"


def test_timestamp_and_signature_decorations() -> None:
    stamp = TimestampDecoration(clock=_clock)
    sign = SignatureDecoration("Team")

    assert stamp("Hello") == "[2025-10-26 10:45:00] Hello"
    assert sign("Hello") == "Hello\n-- Team"
    assert build("Hello", [stamp, sign]) == "[2025-10-26 10:45:00] Hello\n-- Team"


def test_timestamp_custom_format() -> None:
    stamp = TimestampDecoration(clock=_clock, fmt="%d/%m")
    assert stamp("x") == "[26/10] x"


def test_notification_decorate_does_not_mutate_inner() -> None:
    base = Notification("Hello")
    stamped = base.decorate(TimestampDecoration(clock=_clock))
    signed = stamped.decorate(SignatureDecoration("Team"))

    assert base.content == "Hello"
    assert stamped.content == "[2025-10-26 10:45:00] Hello"
    assert signed.content.startswith("[2025-10-26 10:45:00] Hello")
    assert signed.content.endswith("-- Team")
    assert len(signed.decorations) == 2


def test_delivery_result_ok() -> None:
    assert DeliveryResult("Email", "a@b.c", DeliveryStatus.SENT).ok
    assert not DeliveryResult("SMS", "1", DeliveryStatus.FAILED, "down").ok
