"""Core configuration dataclasses.

We keep environment parsing outside the core, but this dataclass defines the
shape the core expects so adapters and the app layer can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Optional


@dataclass(frozen=True)
class WatcherConfig:
    """Startup configuration shared read-only by every pipeline iteration."""

    webhook_url: str
    domain_pattern: re.Pattern
    log_level: str = "INFO"
    log_file: Optional[str] = None
    slack_timeout: float = 10.0
