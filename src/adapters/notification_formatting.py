"""Shared notification formatting helpers.

Keeping formatting here prevents drift between adapters and keeps messages
consistent regardless of delivery channel.
"""

from __future__ import annotations

from typing import Sequence

from core.models import MatchResult

CRT_SH_URL = "https://crt.sh/?q={fingerprint}"


def word_series(items: Sequence[str], conjunction: str = "and") -> str:
    """Join items as an English series with an Oxford comma.

    ``["a"]`` -> ``a``, ``["a", "b"]`` -> ``a and b``,
    ``["a", "b", "c"]`` -> ``a, b, and c``.
    """

    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} {conjunction} {items[1]}"
    return f"{', '.join(items[:-1])}, {conjunction} {items[-1]}"


def build_lookup_url(fingerprint: str) -> str:
    """Return the crt.sh lookup URL for a colon-separated fingerprint."""

    return CRT_SH_URL.format(fingerprint=fingerprint.replace(":", ""))


def format_notification(result: MatchResult, fingerprint: str) -> str:
    """Return the chat message announcing a matching certificate."""

    return (
        f"Found matching certificate for {word_series(result.series())}: "
        f"{build_lookup_url(fingerprint)}"
    )
