"""Capture collector — records autocapture and flag activity into an event log.

Dispatchers and flag bindings take an optional collector and report every
decision through it, including the silent no-op paths, so a host app can
see why a touch was not captured without the core ever raising.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from tapline.observability.events import (
    CaptureSkipped,
    FlagsUpdated,
    SubscriptionChanged,
    TouchCaptured,
    now_ns,
)
from tapline.observability.log import EventLog

if TYPE_CHECKING:
    from tapline.capture.elements import CapturePayload


class CaptureCollector:
    """Event collector for the capture dispatcher and flag bindings.

    Args:
        log: The EventLog to store events in.
        verbose: Print a one-line summary to stderr for each capture.

    """

    __slots__ = ("_log", "_verbose")

    def __init__(self, log: EventLog | None = None, *, verbose: bool = False) -> None:
        self._log = log if log is not None else EventLog()
        self._verbose = verbose

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    # ----- Autocapture -----

    def record_capture(self, payload: CapturePayload, *, nodes_visited: int = 0) -> TouchCaptured:
        """Record a payload handed to the analytics client."""
        event = TouchCaptured(
            event_type=payload.event_type,
            elements=len(payload.elements),
            active_label=payload.active_label,
            active_display_name=payload.active_display_name,
            nodes_visited=nodes_visited,
            touch_x=payload.touch_x,
            touch_y=payload.touch_y,
            timestamp_ns=now_ns(),
        )
        self._log.append(event)
        if self._verbose:
            self._print_capture(event)
        return event

    def record_skip(self, reason: str, *, nodes_visited: int = 0) -> None:
        """Record a touch-end that produced nothing."""
        self._log.append(
            CaptureSkipped(
                reason=reason,  # type: ignore[arg-type]
                nodes_visited=nodes_visited,
                timestamp_ns=now_ns(),
            )
        )

    # ----- Feature flags -----

    def record_flags(self, source: str, flags: Mapping[str, Any] | None) -> None:
        """Record a flag snapshot replacement."""
        self._log.append(
            FlagsUpdated(
                source=source,  # type: ignore[arg-type]
                flag_count=len(flags) if flags is not None else 0,
                timestamp_ns=now_ns(),
            )
        )

    def record_subscription(self, action: str, client: object) -> None:
        """Record a subscribe or unsubscribe against a flag client."""
        self._log.append(
            SubscriptionChanged(
                action=action,  # type: ignore[arg-type]
                client=type(client).__name__,
                timestamp_ns=now_ns(),
            )
        )

    # ----- Queries -----

    def skipped(self, reason: str | None = None, *, limit: int = 100) -> list[CaptureSkipped]:
        """Recent skipped touch-ends, most recent first, optionally for one reason."""
        events = self._log.query(event_type=CaptureSkipped, reason=reason, limit=limit)
        return [e for e in events if isinstance(e, CaptureSkipped)]

    def flag_updates(self, source: str | None = None, *, limit: int = 100) -> list[FlagsUpdated]:
        """Recent snapshot replacements, most recent first, optionally for one source."""
        events = self._log.query(event_type=FlagsUpdated, source=source, limit=limit)
        return [e for e in events if isinstance(e, FlagsUpdated)]

    def _print_capture(self, e: TouchCaptured) -> None:
        name = e.active_label or e.active_display_name or "?"
        noun = "element" if e.elements == 1 else "elements"
        print(
            f"  [{e.event_type}] {name} -> {e.elements} {noun} "
            f"({e.nodes_visited} visited, x={e.touch_x:g}, y={e.touch_y:g})",
            file=sys.stderr,
        )
