"""Observability — event model for capture decisions and flag updates.

Records every autocapture outcome (captured or skipped, with the reason)
and every flag snapshot replacement or subscription change.

All events are frozen dataclasses with nanosecond timestamps, safe for
concurrent production from multiple threads.

Quick Start:
    >>> from tapline.observability import CaptureCollector, EventLog
    >>> log = EventLog()
    >>> collector = CaptureCollector(log)
    >>> # Pass collector to Provider, AutocaptureDispatcher or FeatureFlagBinding

"""

from tapline.observability.collector import CaptureCollector
from tapline.observability.events import (
    CaptureSkipped,
    FlagsUpdated,
    SubscriptionChanged,
    TaplineEvent,
    TouchCaptured,
    now_ns,
)
from tapline.observability.log import EventLog

__all__ = [
    "CaptureCollector",
    "CaptureSkipped",
    "EventLog",
    "FlagsUpdated",
    "SubscriptionChanged",
    "TaplineEvent",
    "TouchCaptured",
    "now_ns",
]
