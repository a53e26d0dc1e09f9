"""Room-based realtime fan-out.

Every websocket connection is a :class:`Subscription` holding an outbound
queue. Subscriptions join rooms named after agents; services push events with
:meth:`RealtimeGateway.emit_to_room` or :meth:`RealtimeGateway.emit_global`.
Emitting never waits for delivery: events are queued and a connection that is
gone simply loses them (at-most-once, best effort).
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections import defaultdict
from functools import lru_cache
from threading import Lock
from typing import Any

logger = logging.getLogger(__name__)

_SUBSCRIPTION_IDS = itertools.count(1)


class Subscription:
    """Outbound event queue for one connected client."""

    def __init__(self) -> None:
        self.id = next(_SUBSCRIPTION_IDS)
        self.queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        self.rooms: set[str] = set()
        self.closed = False
        try:
            self._loop: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
        except RuntimeError:
            self._loop = None

    def deliver(self, event: str, data: Any) -> None:
        """Queue an event without blocking; dropped once the subscription closed."""
        if self.closed:
            return
        envelope = {"event": event, "data": data}
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        try:
            if self._loop is None or running is self._loop:
                self.queue.put_nowait(envelope)
            else:
                self._loop.call_soon_threadsafe(self.queue.put_nowait, envelope)
        except RuntimeError as exc:
            logger.debug("Dropping %s for subscription %d: %s", event, self.id, exc)

    def drain(self) -> list[dict[str, Any]]:
        """Return and remove every queued event."""
        events = []
        while not self.queue.empty():
            events.append(self.queue.get_nowait())
        return events


class RealtimeGateway:
    """In-process publish/subscribe channel keyed by agent name."""

    def __init__(self) -> None:
        self._rooms: dict[str, set[Subscription]] = defaultdict(set)
        self._subscriptions: set[Subscription] = set()
        self._lock = Lock()

    def connect(self) -> Subscription:
        subscription = Subscription()
        with self._lock:
            self._subscriptions.add(subscription)
        return subscription

    def join(self, subscription: Subscription, room: str) -> None:
        with self._lock:
            self._rooms[room].add(subscription)
            subscription.rooms.add(room)
        logger.info("Subscription %d joined room %s", subscription.id, room)

    def disconnect(self, subscription: Subscription) -> None:
        with self._lock:
            subscription.closed = True
            self._subscriptions.discard(subscription)
            for room in subscription.rooms:
                members = self._rooms.get(room)
                if members is None:
                    continue
                members.discard(subscription)
                if not members:
                    del self._rooms[room]
            subscription.rooms.clear()

    def room_size(self, room: str) -> int:
        with self._lock:
            return len(self._rooms.get(room, ()))

    def emit_to_room(self, room: str, event: str, payload: Any) -> None:
        with self._lock:
            members = list(self._rooms.get(room, ()))
        if not members:
            logger.debug("No subscribers in room %s for %s", room, event)
        for subscription in members:
            subscription.deliver(event, payload)

    def emit_global(self, event: str, payload: Any) -> None:
        with self._lock:
            members = list(self._subscriptions)
        for subscription in members:
            subscription.deliver(event, payload)


@lru_cache(maxsize=1)
def get_gateway() -> RealtimeGateway:
    """Return the process-wide realtime gateway."""
    return RealtimeGateway()
