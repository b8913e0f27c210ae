"""Environment configuration for certstream-slack.

Everything the watcher needs is read once at startup and frozen into a
WatcherConfig that is passed explicitly to each component.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Mapping, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from core.config import WatcherConfig
from core.errors import ConfigError

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_SLACK_TIMEOUT = 10.0


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name, "")
    if not value:
        raise ConfigError(f"{name} must be set")
    return value


def _webhook_url(environ: Mapping[str, str]) -> str:
    url = _require(environ, "SLACK_WEBHOOK_URL")
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigError("SLACK_WEBHOOK_URL must be an http(s) URL")
    return url


def _domain_pattern(environ: Mapping[str, str]) -> re.Pattern:
    raw = _require(environ, "DOMAIN_PATTERN")
    try:
        return re.compile(raw)
    except re.error as exc:
        raise ConfigError(f"invalid DOMAIN_PATTERN: {exc}") from exc


def _slack_timeout(environ: Mapping[str, str]) -> float:
    raw = environ.get("SLACK_TIMEOUT")
    if not raw:
        return DEFAULT_SLACK_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(f"SLACK_TIMEOUT must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise ConfigError("SLACK_TIMEOUT must be positive")
    return timeout


def _log_level(environ: Mapping[str, str]) -> str:
    name = str(environ.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    # getLevelName maps known names to their numeric level and echoes
    # anything else back as a "Level <name>" string.
    if not isinstance(logging.getLevelName(name), int):
        raise ConfigError(f"LOG_LEVEL must be a logging level name, got {name!r}")
    return name


def load_config(environ: Optional[Mapping[str, str]] = None) -> WatcherConfig:
    """Build the WatcherConfig from the environment.

    When no mapping is given we read os.environ, loading a local .env first
    via python-dotenv so secrets can stay out of the shell history.
    """

    if environ is None:
        load_dotenv()
        environ = os.environ

    return WatcherConfig(
        webhook_url=_webhook_url(environ),
        domain_pattern=_domain_pattern(environ),
        log_level=_log_level(environ),
        log_file=environ.get("LOG_FILE") or None,
        slack_timeout=_slack_timeout(environ),
    )
