"""Shared type definitions for tapline."""

from collections.abc import Callable, Mapping
from typing import Literal

# Primitive prop value kept by the attribute filter
type AttributeValue = str | int | float | bool

# Feature flag value: on/off or a multivariate variant key
type FlagValue = bool | str

# Flag key -> value, as read from or pushed by a flag client
type FlagMapping = Mapping[str, FlagValue]

# Callback a flag client invokes with each pushed mapping
type FlagCallback = Callable[[FlagMapping], None]

# Action returned by a subscribe primitive
type Unsubscribe = Callable[[], None]

# Phase of a touch gesture as reported by the host framework
type TouchPhase = Literal["start", "move", "end"]

# Why a resolution produced no payload
type SkipReason = Literal["no_target", "opted_out", "no_elements"]

# Hook deciding whether a candidate label should be suppressed
type NamePredicate = Callable[[str], bool]
