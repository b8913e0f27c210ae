"""Certstream websocket feed adapter.

Holds one persistent websocket connection to the public certstream
endpoint and turns each frame into a core FeedEvent. There is no reconnect
logic: a dropped connection surfaces as a FeedError and ends the process.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterator, Optional

import websocket

from core.errors import FeedError
from core.events import decode_event
from core.models import FeedEvent

LOGGER = logging.getLogger(__name__)

CERTSTREAM_URL = "wss://certstream.calidog.io"


class CertstreamFeed:
    """Blocking certstream reader used as a context manager."""

    def __init__(
        self,
        url: str = CERTSTREAM_URL,
        connect: Callable[..., Any] = websocket.create_connection,
    ) -> None:
        self._url = url
        self._connect = connect
        self._conn: Optional[Any] = None

    def __enter__(self) -> "CertstreamFeed":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        """Connect to the feed. Raises FeedError if the dial fails."""

        LOGGER.info("Connecting to certstream at %s", self._url)
        try:
            self._conn = self._connect(self._url)
        except (websocket.WebSocketException, OSError) as exc:
            raise FeedError(f"could not connect to certstream: {exc}") from exc

    def close(self) -> None:
        if self._conn is None:
            return
        try:
            self._conn.close()
        finally:
            self._conn = None

    def receive(self) -> FeedEvent:
        """Block until the next message arrives and decode it."""

        if self._conn is None:
            raise FeedError("certstream connection is not open")

        try:
            frame = self._conn.recv()
        except (websocket.WebSocketException, OSError) as exc:
            raise FeedError(f"error reading from certstream: {exc}") from exc

        # An empty frame is what a closed connection looks like to recv().
        if not frame:
            raise FeedError("certstream connection closed")

        try:
            payload = json.loads(frame)
        except ValueError as exc:
            raise FeedError(f"error decoding JSON: {exc}") from exc
        return decode_event(payload)

    def __iter__(self) -> Iterator[FeedEvent]:
        while True:
            yield self.receive()
