"""Event model for capture and flag observability.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal


# ---------------------------------------------------------------------------
# Autocapture events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TouchCaptured:
    """A touch produced a payload that was handed to the analytics client.

    Attributes:
        event_type: Event kind sent downstream.
        elements: Number of capture elements in the payload.
        active_label: First explicit or accessibility label found, if any.
        active_display_name: First component display name found, if any.
        nodes_visited: Ancestor nodes walked during resolution.
        touch_x: Horizontal page coordinate of the touch.
        touch_y: Vertical page coordinate of the touch.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    event_type: str
    elements: int
    active_label: str | None
    active_display_name: str | None
    nodes_visited: int
    touch_x: float
    touch_y: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class CaptureSkipped:
    """A touch-end was observed but nothing was sent.

    Attributes:
        reason: Why no payload was produced or forwarded.
        nodes_visited: Ancestor nodes walked before giving up.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    reason: Literal["no_target", "opted_out", "no_elements", "disabled", "no_client"]
    nodes_visited: int
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Feature flag events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FlagsUpdated:
    """A flag binding replaced its snapshot.

    Attributes:
        source: ``initial`` for the synchronous read at bind time,
            ``push`` for a client callback.
        flag_count: Number of flags in the new snapshot (0 when unknown).
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: Literal["initial", "push"]
    flag_count: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class SubscriptionChanged:
    """A flag binding acquired or released its client subscription.

    Attributes:
        action: ``subscribe`` or ``unsubscribe``.
        client: ``repr``-style name of the client type.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    action: Literal["subscribe", "unsubscribe"]
    client: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type TaplineEvent = TouchCaptured | CaptureSkipped | FlagsUpdated | SubscriptionChanged


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
