"""Exception types shared by the core and adapters."""

from __future__ import annotations

from typing import Optional


class WatcherError(RuntimeError):
    """Base class for all certstream-slack errors."""


class ConfigError(WatcherError):
    """Required configuration is missing or invalid. Always fatal."""


class FeedError(WatcherError):
    """The certificate feed could not be reached or decoded. Always fatal."""


class DeliveryError(WatcherError):
    """A notification could not be delivered. Logged and ignored."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status
