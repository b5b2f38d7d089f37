"""In-memory feature flag store.

A minimal flag client: a synchronous read of the current flags plus a
subscription that is called back with the full mapping on every reload.
Useful as the flag source in tests and for hosts that receive flag
payloads through their own transport.

Thread-safe: flags and callbacks are protected by a lock.  Callbacks run
outside the lock, in subscription order.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tapline._types import FlagCallback, FlagMapping, FlagValue, Unsubscribe


class FeatureFlagStore:
    """Holds the last known flags and pushes replacements to subscribers.

    Args:
        flags: Initial flags.  None means "not yet known".

    """

    __slots__ = ("_callbacks", "_flags", "_lock", "_next_id")

    def __init__(self, flags: FlagMapping | None = None) -> None:
        self._flags: Mapping[str, FlagValue] | None = (
            MappingProxyType(dict(flags)) if flags is not None else None
        )
        self._callbacks: dict[int, FlagCallback] = {}
        self._next_id = 0
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def get_feature_flags(self) -> Mapping[str, FlagValue] | None:
        """Return the current flags, or None if none have been loaded."""
        with self._lock:
            return self._flags

    def get_feature_flag(self, key: str, default: FlagValue | None = None) -> FlagValue | None:
        flags = self.get_feature_flags()
        if flags is None:
            return default
        return flags.get(key, default)

    def on_feature_flags(self, callback: FlagCallback) -> Unsubscribe:
        """Register *callback* for every reload; returns its unsubscribe action.

        The returned action is idempotent.

        """
        with self._lock:
            token = self._next_id
            self._next_id += 1
            self._callbacks[token] = callback

        def unsubscribe() -> None:
            with self._lock:
                self._callbacks.pop(token, None)

        return unsubscribe

    def reload_feature_flags(self, flags: FlagMapping) -> int:
        """Replace the stored flags and notify every subscriber.

        Returns:
            Number of callbacks invoked.

        """
        snapshot = MappingProxyType(dict(flags))
        with self._lock:
            self._flags = snapshot
            callbacks = list(self._callbacks.values())

        for callback in callbacks:
            callback(snapshot)
        return len(callbacks)
