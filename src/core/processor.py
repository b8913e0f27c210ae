"""Core certificate processing pipeline.

This module is integration-agnostic. It only relies on the notifier port,
enabling other feeds or delivery adapters without changes here.

Each event goes through a strict order:
1) Skip anything that is not a certificate_update (heartbeats etc.)
2) Require the leaf certificate's domain list
3) Match domains against the configured pattern
4) Notify once, logging (never raising) delivery failures
"""

from __future__ import annotations

import logging
import re

from core.errors import DeliveryError
from core.events import is_certificate_update
from core.matcher import match_domains
from core.models import FeedEvent
from core.ports import NotifierPort

LOGGER = logging.getLogger(__name__)


class CertificateProcessor:
    """Orchestrates classification, matching, and notification for one event."""

    def __init__(self, domain_pattern: re.Pattern, notifier: NotifierPort) -> None:
        self._pattern = domain_pattern
        self._notifier = notifier

    def handle(self, event: FeedEvent) -> bool:
        """Process one feed event. Returns True when a notification was sent."""

        # Heartbeats and unknown message kinds are expected and frequent.
        if not is_certificate_update(event):
            return False

        leaf = event.leaf_cert
        if leaf is None or leaf.all_domains is None:
            LOGGER.error("Couldn't get domains from certificate update")
            return False

        result = match_domains(leaf.all_domains, self._pattern)
        if not result:
            return False

        # A missing fingerprint does not drop the notification; the lookup
        # URL is sent without a query value instead.
        fingerprint = leaf.fingerprint
        if fingerprint is None:
            LOGGER.error("Could not parse fingerprint from matching certificate")
            fingerprint = ""

        try:
            self._notifier.send(result, fingerprint)
        except DeliveryError as exc:
            LOGGER.error("Error sending webhook (fingerprint=%s): %s", fingerprint, exc)
            return False

        LOGGER.info("Notified %s matching domain(s) (fingerprint=%s)", len(result.matches), fingerprint)
        return True
