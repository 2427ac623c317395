"""Command line for the notification pipeline.

    notification-system run [--config PATH] [--message TEXT] [--signature TEXT] [--verbose]

``--message`` and ``--signature`` replace notification.message and
notification.signature from the config file. Notification output goes to
stdout; log records go to stderr and logs/app.log.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from notification_system.runner import run

load_dotenv()

DEFAULT_CONFIG = "config/config.yaml"
LOG_DIR = Path("logs")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _setup_logging(level: int = logging.INFO) -> None:
    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return
    LOG_DIR.mkdir(exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)
    h_stderr = logging.StreamHandler(sys.stderr)
    h_stderr.setFormatter(formatter)
    root.addHandler(h_stderr)
    h_file = logging.FileHandler(LOG_DIR / "app.log", encoding="utf-8")
    h_file.setFormatter(formatter)
    root.addHandler(h_file)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notification-system",
        description="Decorate a notification and fan it out to the logger and delivery channels",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    run_parser = sub.add_parser("run", help="Send the configured notification once")
    run_parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help=f"Config file path (default: {DEFAULT_CONFIG})",
    )
    run_parser.add_argument("--message", default=None, help="Message text to send")
    run_parser.add_argument("--signature", default=None, help="Signature appended as '-- <signature>'")
    run_parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    _setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.command == "run":
        try:
            pipeline = run(args.config, args.message, args.signature)
        except (FileNotFoundError, ValueError) as e:
            logging.error("%s", e)
            sys.exit(1)
        failed = [r for r in pipeline.engine.last_results if not r.ok]
        logging.info(
            "sent via %s channel(s), %s undelivered",
            len(pipeline.engine.last_results) - len(failed),
            len(failed),
        )


if __name__ == "__main__":
    main()
