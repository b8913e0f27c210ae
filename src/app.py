"""Application entry point for the certstream-slack watcher."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Iterable, Optional

from art import tprint

import settings
from adapters.certstream_feed import CertstreamFeed
from adapters.notification_formatting import format_notification
from adapters.slack_notifier import SlackWebhookNotifier
from core.config import WatcherConfig
from core.errors import ConfigError, FeedError
from core.matcher import match_domains
from core.models import FeedEvent
from core.processor import CertificateProcessor

NAME = "CERTSTREAM"
FONT = "tarty-1"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

LOGGER = logging.getLogger(__name__)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = sorted({secret for secret in secrets if secret}, key=len, reverse=True)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _configure_logging(config: WatcherConfig) -> None:
    level = logging.getLevelName(config.log_level)
    # The webhook URL is a bearer credential for the Slack channel.
    formatter = _RedactingFormatter([config.webhook_url], fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if config.log_file:
        directory = os.path.dirname(config.log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)


def run_forever(feed: Iterable[FeedEvent], processor: CertificateProcessor) -> None:
    """Handle feed events one at a time until the feed raises."""

    for event in feed:
        processor.handle(event)


def _run(config: WatcherConfig) -> None:
    notifier = SlackWebhookNotifier(config.webhook_url, timeout=config.slack_timeout)
    processor = CertificateProcessor(config.domain_pattern, notifier)

    with CertstreamFeed() as feed:
        LOGGER.info("Watching for certificates (domain_pattern=%s)", config.domain_pattern.pattern)
        run_forever(feed, processor)


def _check(config: WatcherConfig, domains: list[str], fingerprint: str) -> None:
    """Print the notification a certificate with these domains would produce."""

    result = match_domains(domains, config.domain_pattern)
    if not result:
        print(f"No domains match {config.domain_pattern.pattern!r}")
        return
    print(format_notification(result, fingerprint))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="certstream-slack")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the watcher")
    check = subparsers.add_parser(
        "check",
        help="Show the notification DOMAIN_PATTERN would produce for some domains.",
    )
    check.add_argument("domains", nargs="+", metavar="DOMAIN")
    check.add_argument("--fingerprint", default="", help="Certificate fingerprint for the lookup URL")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config = settings.load_config()
    except ConfigError as exc:
        logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATEFMT)
        LOGGER.critical("%s", exc)
        return 1

    if args.command == "check":
        _check(config, args.domains, args.fingerprint)
        return 0

    _print_banner()
    _configure_logging(config)

    try:
        _run(config)
    except FeedError as exc:
        LOGGER.critical("%s", exc)
        return 1
    except KeyboardInterrupt:
        LOGGER.info("Interrupted, exiting")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
