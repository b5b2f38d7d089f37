"""Event log — bounded, thread-safe store of capture and flag events.

Keeps the most recent ``TaplineEvent`` objects in a ring buffer so a host
app can ask why touches were not captured (``query(reason=...)``) or how
often its flag snapshot changed (``query(source=...)``).

Thread Safety:
    All methods are protected by a ``threading.Lock``.

"""

import threading
from collections import deque

from tapline.observability.events import CaptureSkipped, FlagsUpdated, TaplineEvent


class EventLog:
    """Ring buffer of recent events.

    Args:
        max_events: Maximum number of events to retain; older ones are
            discarded first.

    """

    __slots__ = ("_events", "_lock")

    def __init__(self, max_events: int = 10_000) -> None:
        self._events: deque[TaplineEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: TaplineEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        reason: str | None = None,
        source: str | None = None,
        limit: int = 100,
    ) -> list[TaplineEvent]:
        """Return matching events, most recent first.

        Args:
            event_type: Only events of this type.
            since_ns: Only events stamped at or after this time.
            reason: Only ``CaptureSkipped`` events with this skip reason.
            source: Only ``FlagsUpdated`` events from this source
                (``initial`` or ``push``).
            limit: Maximum number of events returned.

        """
        with self._lock:
            snapshot = list(self._events)

        matches: list[TaplineEvent] = []
        for event in reversed(snapshot):
            if len(matches) == limit:
                break
            if event.timestamp_ns < since_ns:
                continue
            if event_type is not None and not isinstance(event, event_type):
                continue
            if reason is not None and not (
                isinstance(event, CaptureSkipped) and event.reason == reason
            ):
                continue
            if source is not None and not (
                isinstance(event, FlagsUpdated) and event.source == source
            ):
                continue
            matches.append(event)
        return matches

    def recent(self, n: int = 20) -> list[TaplineEvent]:
        """Return the N most recent events, oldest first."""
        with self._lock:
            return list(self._events)[-n:]

    def clear(self) -> int:
        """Drop every event; returns how many were dropped."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
