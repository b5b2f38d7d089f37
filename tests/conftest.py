"""Shared test fixtures for tapline."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from tapline.capture.tree import ComponentNode, ElementType, TouchEvent


class RecordingClient:
    """Analytics client double that records every autocapture call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[dict[str, Any]], dict[str, Any]]] = []

    def autocapture(
        self,
        event_type: str,
        elements: list[dict[str, Any]],
        properties: Mapping[str, Any],
    ) -> None:
        self.calls.append((event_type, elements, dict(properties)))


@pytest.fixture
def client() -> RecordingClient:
    return RecordingClient()


def node(
    display_name: str | None = None,
    *,
    name: str | None = None,
    **props: Any,
) -> ComponentNode:
    """Create an unlinked node; ``ph_label`` style kwargs map to ``ph-label``."""
    element_type = None
    if display_name is not None or name is not None:
        element_type = ElementType(display_name=display_name, name=name)
    return ComponentNode(
        element_type=element_type,
        memoized_props={k.replace("_", "-") if k.startswith("ph_") else k: v
                        for k, v in props.items()},
    )


def touch(*nodes: ComponentNode, x: float = 10.0, y: float = 20.0) -> TouchEvent:
    """Create a touch whose target is the first of *nodes*, linked upward."""
    return TouchEvent(target=ComponentNode.chain(*nodes), page_x=x, page_y=y)
