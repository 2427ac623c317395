"""Channel layer: base + console channels; factory by type."""
from __future__ import annotations

from typing import Any

from notification_system.channel.base import Channel
from notification_system.channel.console import EmailChannel, PopupChannel, SMSChannel

_CHANNELS: dict[str, type[Channel]] = {
    "email": EmailChannel,
    "sms": SMSChannel,
    "popup": PopupChannel,
}

# Config key holding the target for each channel type
TARGET_KEYS: dict[str, str | None] = {
    "email": "address",
    "sms": "number",
    "popup": None,
}


def get_channel(channel_type: str) -> type[Channel]:
    """Return channel class for given type ('email', 'sms' or 'popup')."""
    if channel_type not in _CHANNELS:
        raise ValueError(f"Unknown channel type: {channel_type}")
    return _CHANNELS[channel_type]


def build_channel(channel_config: dict[str, Any]) -> Channel:
    """Instantiate a channel from a config mapping such as {'type': 'email', 'address': ...}."""
    channel_type = channel_config.get("type", "")
    channel_cls = get_channel(channel_type)
    available = channel_config.get("available", True)
    if not isinstance(available, bool):
        raise ValueError(f"{channel_type} channel 'available' must be a bool")
    kwargs: dict[str, Any] = {"available": available}
    target_key = TARGET_KEYS[channel_type]
    if target_key is not None:
        target = channel_config.get(target_key)
        if not target:
            raise ValueError(f"{channel_type} channel missing '{target_key}'")
        kwargs[target_key] = str(target)
    return channel_cls(**kwargs)


__all__ = [
    "Channel",
    "EmailChannel",
    "PopupChannel",
    "SMSChannel",
    "TARGET_KEYS",
    "build_channel",
    "get_channel",
]
