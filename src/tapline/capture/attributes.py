"""Attribute filter — keeps the primitive-valued props of a component."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tapline._types import AttributeValue

# bool is an int subclass, so it is covered here
_PRIMITIVES = (str, int, float)


def filter_attributes(props: Mapping[str, Any] | None) -> dict[str, AttributeValue]:
    """Return a new dict holding only the str, number and bool entries of *props*.

    ``None`` values, containers, callables and arbitrary objects are dropped
    without error.  Values are kept verbatim and in their original order.

    """
    if not props:
        return {}
    return {key: value for key, value in props.items() if isinstance(value, _PRIMITIVES)}
