"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to the raw feed payload. Optional fields mark values that the feed
did not provide (or provided in an unusable shape).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class LeafCert:
    """The end-entity certificate named in a certificate_update event."""

    all_domains: Optional[Tuple[str, ...]]
    fingerprint: Optional[str]


@dataclass(frozen=True)
class FeedEvent:
    """One decoded message from the certificate feed."""

    message_type: Optional[str]
    leaf_cert: Optional[LeafCert] = None


@dataclass(frozen=True)
class MatchResult:
    """Domains of one certificate that satisfied the configured pattern.

    ``matches`` holds the backtick-wrapped names in ascending order and
    ``others`` counts the names that did not match.
    """

    matches: Tuple[str, ...]
    others: int

    def __bool__(self) -> bool:
        return bool(self.matches)

    def series(self) -> List[str]:
        """Return the entries to render, with an "N others" tail if needed."""

        entries = list(self.matches)
        if self.others > 0:
            entries.append(f"{self.others} others")
        return entries
