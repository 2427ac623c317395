"""Runner: load config, wire publisher, subscribers and channels, send one notification."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from notification_system.channel import TARGET_KEYS, build_channel, get_channel
from notification_system.models import (
    DEFAULT_TIMESTAMP_FORMAT,
    Notification,
    SignatureDecoration,
    TimestampDecoration,
)
from notification_system.observable import NotificationObservable, Subscriber
from notification_system.service import NotificationService
from notification_system.subscribers import NotificationEngine, NotificationLogger

logger = logging.getLogger(__name__)

# Match ${VAR_NAME} in config strings
ENV_PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def resolve_env(value: Any) -> Any:
    """Replace ${ENV_VAR} in strings (recursively in dicts/lists) with os.environ values."""
    if isinstance(value, str):
        def repl(match: re.Match[str]) -> str:
            key = match.group(1)
            return os.environ.get(key, match.group(0))
        return ENV_PLACEHOLDER_RE.sub(repl, value)
    if isinstance(value, dict):
        return {k: resolve_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [resolve_env(v) for v in value]
    return value


def load_config(path: str | Path) -> dict:
    """Load YAML config from path and resolve env placeholders."""
    with open(path, encoding="utf-8") as f:
        return resolve_env(yaml.safe_load(f) or {})


def validate_config(config: dict) -> None:
    """Validate notification and channels sections; raise ValueError on error."""
    if not isinstance(config, dict):
        raise ValueError("config: top level must be a dict")
    notification = config.get("notification")
    if not isinstance(notification, dict):
        raise ValueError("config: notification must be a dict")
    message = notification.get("message")
    if not isinstance(message, str) or not message:
        raise ValueError("config: notification.message must be a non-empty string")
    signature = notification.get("signature")
    if signature is not None and not isinstance(signature, str):
        raise ValueError("config: notification.signature must be a string")
    if not isinstance(notification.get("timestamp", True), bool):
        raise ValueError("config: notification.timestamp must be a bool")
    timestamp_format = notification.get("timestamp_format")
    if timestamp_format is not None and not isinstance(timestamp_format, str):
        raise ValueError("config: notification.timestamp_format must be a string")

    channels = config.get("channels") or []
    if not isinstance(channels, list):
        raise ValueError("config: channels must be a list")
    for i, ch in enumerate(channels):
        if not isinstance(ch, dict):
            raise ValueError(f"config: channels[{i}] must be a dict")
        ch_type = ch.get("type")
        if not isinstance(ch_type, str):
            raise ValueError(f"config: channels[{i}].type must be a string")
        try:
            get_channel(ch_type)
        except ValueError:
            raise ValueError(f"config: channels[{i}] unknown type '{ch_type}'")
        target_key = TARGET_KEYS[ch_type]
        if target_key is not None and not ch.get(target_key):
            raise ValueError(f"config: channels[{i}] ({ch_type}) missing '{target_key}'")
        if not isinstance(ch.get("available", True), bool):
            raise ValueError(f"config: channels[{i}].available must be a bool")

    logger_cfg = config.get("logger")
    if logger_cfg is not None and not isinstance(logger_cfg, dict):
        raise ValueError("config: logger must be a dict")
    if not isinstance((logger_cfg or {}).get("enabled", True), bool):
        raise ValueError("config: logger.enabled must be a bool")
    if not isinstance(config.get("isolate_subscriber_errors", False), bool):
        raise ValueError("config: isolate_subscriber_errors must be a bool")


def build_notification(notification_config: dict) -> Notification:
    """Build the decorated notification: timestamp first, signature outermost."""
    notification = Notification(notification_config["message"])
    if notification_config.get("timestamp", True):
        fmt = notification_config.get("timestamp_format") or DEFAULT_TIMESTAMP_FORMAT
        notification = notification.decorate(TimestampDecoration(fmt=fmt))
    signature = notification_config.get("signature")
    if signature:
        notification = notification.decorate(SignatureDecoration(signature))
    return notification


@dataclass
class Pipeline:
    """Everything wired for one run; keeps strong references to the subscribers."""

    service: NotificationService
    engine: NotificationEngine
    notification_logger: NotificationLogger | None = None
    subscribers: list[Subscriber] = field(default_factory=list)


def build_pipeline(config: dict) -> Pipeline:
    """Create observable, service, logger and engine; subscribe in logger-then-engine order."""
    observable = NotificationObservable(
        isolate_errors=config.get("isolate_subscriber_errors", False)
    )
    service = NotificationService(observable)

    notification_logger = None
    subscribers: list[Subscriber] = []
    if (config.get("logger") or {}).get("enabled", True):
        notification_logger = NotificationLogger(observable)
        observable.subscribe(notification_logger)
        subscribers.append(notification_logger)

    engine = NotificationEngine(observable)
    for ch in config.get("channels") or []:
        engine.add_channel(build_channel(ch))
    observable.subscribe(engine)
    subscribers.append(engine)

    return Pipeline(
        service=service,
        engine=engine,
        notification_logger=notification_logger,
        subscribers=subscribers,
    )


def run(
    config_path: str | Path,
    message: str | None = None,
    signature: str | None = None,
) -> Pipeline:
    """Load config, validate, build the pipeline and send the configured notification.

    ``message`` and ``signature`` override the values from the config file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"config not found: {path}")

    config = load_config(path)
    if isinstance(config, dict) and (message is not None or signature is not None):
        # A bare `notification:` key loads as None; overrides still apply.
        if not isinstance(config.get("notification"), dict):
            config["notification"] = {}
        if message is not None:
            config["notification"]["message"] = message
        if signature is not None:
            config["notification"]["signature"] = signature
    validate_config(config)

    pipeline = build_pipeline(config)
    logger.info(
        "Pipeline ready: %s channel(s): %s",
        len(pipeline.engine.channels),
        [c.name for c in pipeline.engine.channels],
    )
    pipeline.service.send(build_notification(config["notification"]))

    failed = [r for r in pipeline.engine.last_results if not r.ok]
    if failed:
        logger.warning("Undelivered: %s", [f"{r.channel}:{r.error}" for r in failed])
    return pipeline
