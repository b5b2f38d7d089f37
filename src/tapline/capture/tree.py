"""Component tree and touch event shapes consumed by the resolver.

The host framework owns the real tree; the resolver only reads three
optional attributes from each node.  ``ComponentNode`` and ``ElementType``
are concrete frozen shapes for adapters and tests; any object exposing the
same attributes is accepted.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TreeNode(Protocol):
    """A node in the host framework's component tree."""

    @property
    def element_type(self) -> Any: ...

    @property
    def memoized_props(self) -> Mapping[str, Any] | None: ...

    @property
    def parent(self) -> TreeNode | None: ...


@runtime_checkable
class InteractionEvent(Protocol):
    """A touch event carrying its originating node and page coordinates."""

    @property
    def target(self) -> TreeNode | None: ...

    @property
    def page_x(self) -> float: ...

    @property
    def page_y(self) -> float: ...


@dataclass(frozen=True, slots=True)
class ElementType:
    """Type metadata of a component.

    Attributes:
        display_name: Explicit display name set on the component.
        name: The component's declared type name.

    """

    display_name: str | None = None
    name: str | None = None


@dataclass(frozen=True, slots=True)
class ComponentNode:
    """A component instance with a link to its parent.

    Attributes:
        element_type: Type metadata, if the framework exposes any.
        memoized_props: Props the component last rendered with.
        parent: The enclosing component, or None at the root.

    """

    element_type: ElementType | None = None
    memoized_props: Mapping[str, Any] | None = None
    parent: ComponentNode | None = None

    @classmethod
    def chain(cls, *nodes: ComponentNode) -> ComponentNode | None:
        """Link *nodes*, given from the touched node upward, into one chain.

        Returns the touched (first) node, or None when no nodes are given.
        Each node's own ``parent`` is replaced.

        """
        linked: ComponentNode | None = None
        for node in reversed(nodes):
            linked = cls(
                element_type=node.element_type,
                memoized_props=node.memoized_props,
                parent=linked,
            )
        return linked


@dataclass(frozen=True, slots=True)
class TouchEvent:
    """A touch reported by the host framework.

    Attributes:
        target: The node the touch originated from, if known.
        page_x: Horizontal page coordinate.
        page_y: Vertical page coordinate.

    """

    target: TreeNode | None = None
    page_x: float = 0.0
    page_y: float = 0.0
