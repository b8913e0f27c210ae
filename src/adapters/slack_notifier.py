"""Slack incoming-webhook notification adapter.

Posts the formatted notification as the ``text`` of a webhook payload. The
webhook URL itself selects the channel and bot identity.
"""

from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.request

from adapters.notification_formatting import format_notification
from core.errors import DeliveryError
from core.models import MatchResult


class SlackWebhookNotifier:
    """Notifier adapter that sends messages to a Slack incoming webhook."""

    def __init__(self, webhook_url: str, timeout: float = 10.0) -> None:
        self._webhook_url = webhook_url
        self._timeout = timeout

    def send(self, result: MatchResult, fingerprint: str) -> None:
        """Send the formatted notification to the webhook."""

        self.post_text(format_notification(result, fingerprint))

    def post_text(self, text: str) -> None:
        """POST a raw text payload. Raises DeliveryError on any failure."""

        data = json.dumps({"text": text}).encode("utf-8")
        request = urllib.request.Request(self._webhook_url, data=data, method="POST")
        request.add_header("Content-Type", "application/json")
        # Blocking on purpose: the watcher loop handles one event at a time.
        try:
            with urllib.request.urlopen(request, timeout=self._timeout):
                pass
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="replace")
            raise DeliveryError(f"Slack webhook error {e.code}: {body}", status=e.code) from e
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            raise DeliveryError(f"Slack webhook unreachable: {e}") from e
