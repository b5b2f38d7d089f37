"""Autocapture dispatcher — gates touches and forwards payloads.

Only the terminal phase of a gesture (``end``) is captured.  Starts and
moves are ignored outright.  A disabled dispatcher or one without a client
does nothing; errors raised by the client itself propagate to the caller.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from tapline.capture.resolver import ComponentTreeResolver

if TYPE_CHECKING:
    from tapline._types import TouchPhase
    from tapline.capture.elements import CapturePayload
    from tapline.capture.tree import InteractionEvent
    from tapline.observability.collector import CaptureCollector


class AnalyticsClient(Protocol):
    """The analytics client's autocapture entry point."""

    def autocapture(
        self,
        event_type: str,
        elements: list[dict[str, Any]],
        properties: Mapping[str, Any],
    ) -> None: ...


class AutocaptureDispatcher:
    """Forwards resolved touch-end captures to an analytics client.

    Args:
        client: Destination for payloads.  None disables forwarding.
        resolver: Resolver used for each touch-end.
        enabled: Initial capture state.
        collector: Optional collector notified of every outcome.

    """

    __slots__ = ("_client", "_collector", "_enabled", "_resolver")

    def __init__(
        self,
        client: AnalyticsClient | None = None,
        *,
        resolver: ComponentTreeResolver | None = None,
        enabled: bool = True,
        collector: CaptureCollector | None = None,
    ) -> None:
        self._client = client
        self._resolver = resolver if resolver is not None else ComponentTreeResolver()
        self._enabled = enabled
        self._collector = collector

    @property
    def client(self) -> AnalyticsClient | None:
        return self._client

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    def on_touch(self, phase: TouchPhase, event: InteractionEvent) -> CapturePayload | None:
        """Handle one touch callback from the host framework.

        Returns the payload sent to the client, or None when nothing was sent.

        """
        if phase != "end":
            return None

        collector = self._collector
        if not self._enabled:
            if collector is not None:
                collector.record_skip("disabled")
            return None
        if self._client is None:
            if collector is not None:
                collector.record_skip("no_client")
            return None

        resolution = self._resolver.resolve(event)
        payload = resolution.payload
        if payload is None:
            if collector is not None:
                collector.record_skip(
                    resolution.skip_reason or "no_elements",
                    nodes_visited=resolution.nodes_visited,
                )
            return None

        self._client.autocapture(payload.event_type, payload.element_dicts(), dict(payload.properties))
        if collector is not None:
            collector.record_capture(payload, nodes_visited=resolution.nodes_visited)
        return payload
