"""Domain matching logic (core domain)."""

from __future__ import annotations

import re
from typing import Iterable

from core.models import MatchResult


def decorate(domain: str) -> str:
    """Wrap a domain in backticks so Slack renders it as inline code."""

    return f"`{domain}`"


def match_domains(domains: Iterable[str], pattern: re.Pattern) -> MatchResult:
    """Return the domains matching ``pattern`` plus a count of the rest.

    Matching is an unanchored search, so operators anchor the pattern
    themselves (``^``/``$``) when they need exact names. Matches are sorted
    after decoration so notification order does not depend on the order of
    names in the certificate.
    """

    all_domains = list(domains)
    matches = [decorate(domain) for domain in all_domains if pattern.search(domain)]
    if not matches:
        return MatchResult(matches=(), others=0)

    matches.sort()
    return MatchResult(matches=tuple(matches), others=len(all_domains) - len(matches))
