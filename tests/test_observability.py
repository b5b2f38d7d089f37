"""Tests for tapline.observability — capture and flag event recording."""

import threading

from tapline.capture.elements import CaptureElement, CapturePayload
from tapline.observability.collector import CaptureCollector
from tapline.observability.events import (
    CaptureSkipped,
    FlagsUpdated,
    SubscriptionChanged,
    TouchCaptured,
    now_ns,
)
from tapline.observability.log import EventLog


def _skipped(reason: str = "no_elements") -> CaptureSkipped:
    return CaptureSkipped(reason=reason, nodes_visited=1, timestamp_ns=now_ns())  # type: ignore[arg-type]


def _payload(label: str | None = "Buy") -> CapturePayload:
    return CapturePayload(
        event_type="touch",
        elements=(CaptureElement(tag_name=label or "View"),),
        properties={"$touch_x": 1.0, "$touch_y": 2.0},
        active_label=label,
    )


# ---------------------------------------------------------------------------
# EventLog
# ---------------------------------------------------------------------------


class TestEventLog:
    """Tests for the event log store."""

    def test_append_and_len(self) -> None:
        log = EventLog()
        assert len(log) == 0
        log.append(_skipped())
        assert len(log) == 1

    def test_max_events_enforced(self) -> None:
        log = EventLog(max_events=5)
        for _ in range(10):
            log.append(_skipped())
        assert len(log) == 5

    def test_recent(self) -> None:
        log = EventLog()
        for reason in ("no_target", "opted_out", "no_elements"):
            log.append(_skipped(reason))
        recent = log.recent(2)
        assert [e.reason for e in recent] == ["opted_out", "no_elements"]

    def test_query_by_type(self) -> None:
        log = EventLog()
        log.append(_skipped())
        log.append(FlagsUpdated(source="push", flag_count=1, timestamp_ns=now_ns()))
        log.append(_skipped())

        results = log.query(event_type=CaptureSkipped)
        assert len(results) == 2
        assert all(isinstance(r, CaptureSkipped) for r in results)

    def test_query_since(self) -> None:
        log = EventLog()
        log.append(CaptureSkipped(reason="no_target", nodes_visited=0, timestamp_ns=100))
        log.append(CaptureSkipped(reason="opted_out", nodes_visited=0, timestamp_ns=200))
        results = log.query(since_ns=150)
        assert [e.reason for e in results] == ["opted_out"]

    def test_query_limit_newest_first(self) -> None:
        log = EventLog()
        for reason in ("no_target", "opted_out", "no_elements"):
            log.append(_skipped(reason))
        results = log.query(limit=2)
        assert [e.reason for e in results] == ["no_elements", "opted_out"]

    def test_clear(self) -> None:
        log = EventLog()
        log.append(_skipped())
        log.append(_skipped())
        assert log.clear() == 2
        assert len(log) == 0

    def test_query_by_reason(self) -> None:
        log = EventLog()
        log.append(_skipped("opted_out"))
        log.append(_skipped("no_target"))
        log.append(FlagsUpdated(source="push", flag_count=1, timestamp_ns=now_ns()))
        log.append(_skipped("opted_out"))

        results = log.query(reason="opted_out")
        assert len(results) == 2
        assert all(isinstance(r, CaptureSkipped) and r.reason == "opted_out" for r in results)

    def test_query_by_source(self) -> None:
        log = EventLog()
        log.append(FlagsUpdated(source="initial", flag_count=1, timestamp_ns=now_ns()))
        log.append(FlagsUpdated(source="push", flag_count=2, timestamp_ns=now_ns()))
        log.append(_skipped())

        (push,) = log.query(source="push")
        assert isinstance(push, FlagsUpdated)
        assert push.flag_count == 2

    def test_concurrent_appends(self) -> None:
        log = EventLog()

        def worker() -> None:
            for _ in range(200):
                log.append(_skipped())

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(log) == 800


# ---------------------------------------------------------------------------
# CaptureCollector
# ---------------------------------------------------------------------------


class TestCaptureCollector:
    """Tests for the collector's record_* helpers."""

    def test_default_log(self) -> None:
        collector = CaptureCollector()
        assert isinstance(collector.log, EventLog)

    def test_record_capture(self) -> None:
        collector = CaptureCollector()
        event = collector.record_capture(_payload(), nodes_visited=4)

        assert isinstance(event, TouchCaptured)
        assert event.active_label == "Buy"
        assert event.elements == 1
        assert event.nodes_visited == 4
        assert (event.touch_x, event.touch_y) == (1.0, 2.0)
        assert len(collector.log) == 1

    def test_record_skip(self) -> None:
        collector = CaptureCollector()
        collector.record_skip("opted_out", nodes_visited=3)
        (event,) = collector.log.recent()
        assert isinstance(event, CaptureSkipped)
        assert event.reason == "opted_out"

    def test_record_flags_none(self) -> None:
        collector = CaptureCollector()
        collector.record_flags("initial", None)
        (event,) = collector.log.recent()
        assert isinstance(event, FlagsUpdated)
        assert event.flag_count == 0

    def test_record_subscription(self) -> None:
        collector = CaptureCollector()
        collector.record_subscription("subscribe", object())
        (event,) = collector.log.recent()
        assert isinstance(event, SubscriptionChanged)
        assert event.client == "object"

    def test_quiet_by_default(self, capsys) -> None:
        CaptureCollector().record_capture(_payload())
        assert capsys.readouterr().err == ""

    def test_verbose_summary(self, capsys) -> None:
        CaptureCollector(verbose=True).record_capture(_payload(None), nodes_visited=2)
        err = capsys.readouterr().err
        assert "[touch] ? -> 1 element (2 visited, x=1, y=2)" in err

    def test_skipped_by_reason(self) -> None:
        collector = CaptureCollector()
        collector.record_skip("opted_out", nodes_visited=2)
        collector.record_skip("no_elements", nodes_visited=5)
        collector.record_flags("push", {"a": True})

        assert len(collector.skipped()) == 2
        (event,) = collector.skipped("no_elements")
        assert event.nodes_visited == 5

    def test_flag_updates_by_source(self) -> None:
        collector = CaptureCollector()
        collector.record_flags("initial", None)
        collector.record_flags("push", {"a": True, "b": "x"})

        assert [u.source for u in collector.flag_updates()] == ["push", "initial"]
        (push,) = collector.flag_updates("push")
        assert push.flag_count == 2
