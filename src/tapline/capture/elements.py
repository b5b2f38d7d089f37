"""Capture records produced by the resolver.

``CaptureElement`` keeps the field set of web autocapture elements so the
analytics backend can treat touch and click captures alike.  The DOM-only
fields (``attr_class``, ``nth_child``, ``nth_of_type``, ``order``) have no
component-tree equivalent and stay at their empty defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from tapline._types import AttributeValue

TOUCH_X = "$touch_x"
TOUCH_Y = "$touch_y"


def _freeze(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, slots=True)
class CaptureElement:
    """One labelled ancestor of the touched component.

    Attributes:
        tag_name: Label, accessibility label or display name of the node.
        attributes: Primitive-valued props of the node.
        attr_class: Always empty for component trees.
        nth_child: Always 0 for component trees.
        nth_of_type: Always 0 for component trees.
        order: Always 0 for component trees.

    """

    tag_name: str = ""
    attributes: Mapping[str, AttributeValue] = field(default_factory=dict)
    attr_class: tuple[str, ...] = ()
    nth_child: int = 0
    nth_of_type: int = 0
    order: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", _freeze(self.attributes))

    def to_dict(self) -> dict[str, Any]:
        """Wire form expected by the analytics client."""
        return {
            "tag_name": self.tag_name,
            "attr_class": list(self.attr_class),
            "nth_child": self.nth_child,
            "nth_of_type": self.nth_of_type,
            "attributes": dict(self.attributes),
            "order": self.order,
        }


@dataclass(frozen=True, slots=True)
class CapturePayload:
    """A finished capture, ready for the analytics client.

    Attributes:
        event_type: Event kind (``touch``).
        elements: Labelled ancestors, nearest first.
        properties: Auxiliary event properties (``$touch_x``, ``$touch_y``).
        active_label: First non-empty explicit or accessibility label.
        active_display_name: First component display name.

    """

    event_type: str
    elements: tuple[CaptureElement, ...]
    properties: Mapping[str, Any]
    active_label: str | None = None
    active_display_name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", _freeze(self.properties))

    @property
    def touch_x(self) -> float:
        return self.properties.get(TOUCH_X, 0.0)

    @property
    def touch_y(self) -> float:
        return self.properties.get(TOUCH_Y, 0.0)

    def element_dicts(self) -> list[dict[str, Any]]:
        """Wire form of every element, in capture order."""
        return [element.to_dict() for element in self.elements]

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": self.event_type,
            "elements": self.element_dicts(),
            "properties": dict(self.properties),
            "active_label": self.active_label,
            "active_display_name": self.active_display_name,
        }
