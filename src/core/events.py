"""Feed event decoding and classification (core domain).

The feed payload is decoded once into a typed FeedEvent. Any field that is
missing or has the wrong shape becomes None so the processor can decide
whether that is worth an error log or a silent skip.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

from core.models import FeedEvent, LeafCert

CERTIFICATE_UPDATE = "certificate_update"


def _domains_from(leaf: Mapping[str, Any]) -> Optional[Tuple[str, ...]]:
    raw = leaf.get("all_domains")
    if not isinstance(raw, list):
        return None
    if not all(isinstance(domain, str) for domain in raw):
        return None
    return tuple(raw)


def _fingerprint_from(leaf: Mapping[str, Any]) -> Optional[str]:
    raw = leaf.get("fingerprint")
    return raw if isinstance(raw, str) else None


def decode_event(payload: Any) -> FeedEvent:
    """Build a FeedEvent from a JSON-decoded feed message."""

    if not isinstance(payload, Mapping):
        return FeedEvent(message_type=None)

    message_type = payload.get("message_type")
    if not isinstance(message_type, str):
        message_type = None

    # Only certificate updates carry a leaf certificate worth reading.
    if message_type != CERTIFICATE_UPDATE:
        return FeedEvent(message_type=message_type)

    data = payload.get("data")
    leaf = data.get("leaf_cert") if isinstance(data, Mapping) else None
    if not isinstance(leaf, Mapping):
        return FeedEvent(message_type=message_type, leaf_cert=LeafCert(None, None))

    return FeedEvent(
        message_type=message_type,
        leaf_cert=LeafCert(
            all_domains=_domains_from(leaf),
            fingerprint=_fingerprint_from(leaf),
        ),
    )


def is_certificate_update(event: FeedEvent) -> bool:
    """Return True for newly issued certificate events (not heartbeats)."""

    return event.message_type == CERTIFICATE_UPDATE
