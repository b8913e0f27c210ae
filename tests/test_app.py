from __future__ import annotations

import logging
import re

import pytest

import app
from core.config import WatcherConfig
from core.errors import ConfigError, DeliveryError, FeedError
from core.events import decode_event
from core.processor import CertificateProcessor

WEBHOOK = "https://hooks.slack.com/services/T000/B000/XXXX"


def _config(pattern: str = "heptio") -> WatcherConfig:
    return WatcherConfig(webhook_url=WEBHOOK, domain_pattern=re.compile(pattern))


class FakeProcessor:
    def __init__(self) -> None:
        self.handled = []

    def handle(self, event) -> bool:
        self.handled.append(event)
        return False


def _feed(events, error: Exception):
    yield from events
    raise error


def test_run_forever_handles_events_in_order_until_feed_fails() -> None:
    events = [decode_event({"message_type": "heartbeat"}), decode_event({"message_type": "x"})]
    processor = FakeProcessor()

    with pytest.raises(FeedError):
        app.run_forever(_feed(events, FeedError("closed")), processor)

    assert processor.handled == events


class FlakyNotifier:
    def __init__(self, failures: int) -> None:
        self.attempts: list[str] = []
        self._failures = failures

    def send(self, result, fingerprint: str) -> None:
        self.attempts.append(fingerprint)
        if len(self.attempts) <= self._failures:
            raise DeliveryError("Slack webhook error 500: boom", status=500)


def _update(domains: list[str], fingerprint: str) -> dict:
    return {
        "message_type": "certificate_update",
        "data": {"leaf_cert": {"all_domains": domains, "fingerprint": fingerprint}},
    }


def test_run_forever_keeps_going_after_failed_delivery(caplog) -> None:
    notifier = FlakyNotifier(failures=1)
    processor = CertificateProcessor(re.compile("heptio"), notifier)
    events = [
        decode_event(_update(["a.heptio.com"], "AA:01")),
        decode_event({"message_type": "heartbeat"}),
        decode_event(_update(["b.heptio.com", "x.com"], "BB:02")),
    ]
    caplog.set_level(logging.ERROR)

    with pytest.raises(FeedError):
        app.run_forever(_feed(events, FeedError("closed")), processor)

    assert notifier.attempts == ["AA:01", "BB:02"]
    errors = [record for record in caplog.records if record.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "AA:01" in errors[0].getMessage()


def test_redacting_formatter_hides_webhook_url() -> None:
    formatter = app._RedactingFormatter([WEBHOOK, ""], fmt="%(message)s")
    record = logging.LogRecord("x", logging.ERROR, __file__, 1, "posting to %s", (WEBHOOK,), None)
    assert formatter.format(record) == "posting to ***"


def test_check_prints_notification(monkeypatch, capsys) -> None:
    monkeypatch.setattr(app.settings, "load_config", lambda: _config())

    code = app.main(["check", "b.other.com", "a.heptio.com", "--fingerprint", "AA:BB"])

    assert code == 0
    assert capsys.readouterr().out.strip() == (
        "Found matching certificate for `a.heptio.com` and 1 others: https://crt.sh/?q=AABB"
    )


def test_check_reports_no_match(monkeypatch, capsys) -> None:
    monkeypatch.setattr(app.settings, "load_config", lambda: _config("^nomatch$"))

    assert app.main(["check", "x.com"]) == 0
    assert "No domains match" in capsys.readouterr().out


def test_missing_config_exits_non_zero(monkeypatch) -> None:
    def fail():
        raise ConfigError("SLACK_WEBHOOK_URL must be set")

    monkeypatch.setattr(app.settings, "load_config", fail)

    assert app.main(["run"]) == 1


def test_feed_failure_exits_non_zero(monkeypatch, caplog) -> None:
    def fail(config):
        raise FeedError("could not connect to certstream: refused")

    monkeypatch.setattr(app.settings, "load_config", lambda: _config())
    monkeypatch.setattr(app, "_print_banner", lambda: None)
    monkeypatch.setattr(app, "_configure_logging", lambda config: None)
    monkeypatch.setattr(app, "_run", fail)
    caplog.set_level(logging.CRITICAL)

    assert app.main([]) == 1
    assert "could not connect" in caplog.text
