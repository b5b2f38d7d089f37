"""Component-tree resolver — turns a touch into a capture payload.

Walks from the touched node up through its ancestors, collecting one
``CaptureElement`` per node that carries a usable label:

    1. The explicit label prop (``ph-label``)
    2. The accessibility label prop (``accessibilityLabel``)
    3. The component type's display name (or, failing that, its name)

The first rule that matches decides the node's tag name.  The nearest
explicit or accessibility label becomes the payload's ``active_label``; the
nearest display name becomes ``active_display_name``.  Farther ancestors
never override them but still contribute their own elements.

A truthy opt-out prop (``ph-no-capture``) anywhere in the walked chain
cancels the whole capture.  The walk is a plain loop bounded by
``max_tree_size``, so deep or cyclic trees cost at most that many visits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from tapline.capture.attributes import filter_attributes
from tapline.capture.elements import TOUCH_X, TOUCH_Y, CaptureElement, CapturePayload
from tapline.config import TaplineConfig

if TYPE_CHECKING:
    from tapline._types import NamePredicate, SkipReason
    from tapline.capture.tree import InteractionEvent


def never_ignored(name: str) -> bool:
    """Default label suppression hook: keeps every name."""
    return False


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of one resolver walk.

    Attributes:
        payload: The capture, or None when nothing should be sent.
        skip_reason: Why ``payload`` is None.
        nodes_visited: Number of tree nodes inspected.

    """

    payload: CapturePayload | None
    skip_reason: SkipReason | None
    nodes_visited: int

    @property
    def captured(self) -> bool:
        return self.payload is not None


class ComponentTreeResolver:
    """Resolves touch events against the component tree.

    Args:
        config: Prop keys, depth bound and event kind.
        is_name_ignored: Predicate that suppresses candidate labels.
            Defaults to keeping every label.

    """

    __slots__ = ("_config", "_is_name_ignored")

    def __init__(
        self,
        config: TaplineConfig | None = None,
        *,
        is_name_ignored: NamePredicate | None = None,
    ) -> None:
        self._config = config if config is not None else TaplineConfig()
        self._is_name_ignored = is_name_ignored or never_ignored

    @property
    def config(self) -> TaplineConfig:
        return self._config

    def resolve(self, event: InteractionEvent) -> Resolution:
        """Walk the ancestors of ``event.target`` and build the payload."""
        node = getattr(event, "target", None)
        if node is None:
            return Resolution(None, "no_target", 0)

        config = self._config
        elements: list[CaptureElement] = []
        active_label: str | None = None
        active_display_name: str | None = None
        visited = 0

        while node is not None and visited < config.max_tree_size:
            visited += 1
            props = getattr(node, "memoized_props", None)
            attributes = filter_attributes(props)

            if props and props.get(config.no_capture_prop):
                return Resolution(None, "opted_out", visited)

            label = self._label_for(props)
            if label is not None:
                if label and not active_label:
                    active_label = label
                elements.append(CaptureElement(tag_name=label, attributes=attributes))
            else:
                display_name = self._display_name_for(getattr(node, "element_type", None))
                if display_name is not None:
                    if not active_display_name:
                        active_display_name = display_name
                    elements.append(CaptureElement(tag_name=display_name, attributes=attributes))

            node = getattr(node, "parent", None)

        if not elements:
            return Resolution(None, "no_elements", visited)

        payload = CapturePayload(
            event_type=config.event_type,
            elements=tuple(elements),
            properties={
                TOUCH_X: getattr(event, "page_x", 0.0),
                TOUCH_Y: getattr(event, "page_y", 0.0),
            },
            active_label=active_label,
            active_display_name=active_display_name,
        )
        return Resolution(payload, None, visited)

    def _label_for(self, props: Any) -> str | None:
        """Explicit label first, then the accessibility label."""
        if not props:
            return None

        raw = props.get(self._config.label_prop)
        if raw is not None:
            label = str(raw).lower() if isinstance(raw, bool) else str(raw)
            if label and not self._is_name_ignored(label):
                return label

        accessibility = props.get(self._config.accessibility_label_prop)
        if isinstance(accessibility, str) and not self._is_name_ignored(accessibility):
            return accessibility
        return None

    def _display_name_for(self, element_type: Any) -> str | None:
        if element_type is None:
            return None
        for attr in ("display_name", "name"):
            name = getattr(element_type, attr, None)
            if isinstance(name, str) and name and not self._is_name_ignored(name):
                return name
        return None


def resolve_touch(
    event: InteractionEvent,
    config: TaplineConfig | None = None,
    *,
    is_name_ignored: NamePredicate | None = None,
) -> CapturePayload | None:
    """Resolve a single touch and return its payload, or None."""
    resolver = ComponentTreeResolver(config, is_name_ignored=is_name_ignored)
    return resolver.resolve(event).payload
