"""Feature flag binding — a live snapshot over an asynchronous flag client.

A ``FeatureFlagBinding`` owns at most one subscription, to the client it is
currently bound to.  Binding reads the client's current flags synchronously
so the snapshot is usable before the first push arrives, then subscribes.
Every push replaces the snapshot with a new read-only mapping; watchers are
called with it in arrival order.

Lifecycle::

    binding = FeatureFlagBinding(client)
    unwatch = binding.watch(rerender)
    ...
    binding.bind(other_client)   # releases the old subscription first
    ...
    binding.close()              # releases exactly once; safe to repeat

Callbacks still delivered by a released subscription are ignored.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tapline._types import FlagCallback, FlagMapping, FlagValue, Unsubscribe
    from tapline.observability.collector import CaptureCollector

type FlagSnapshot = Mapping[str, FlagValue]
type FlagWatcher = Callable[[FlagSnapshot | None], None]


class FlagClient(Protocol):
    """The flag source a binding subscribes to."""

    def get_feature_flags(self) -> FlagMapping | None: ...

    def on_feature_flags(self, callback: FlagCallback) -> Unsubscribe: ...


class _Subscription:
    """One subscribe/unsubscribe pair against one client."""

    __slots__ = ("client", "released", "unsubscribe")

    def __init__(self, client: FlagClient) -> None:
        self.client = client
        self.released = False
        self.unsubscribe: Unsubscribe | None = None


def _freeze(flags: FlagMapping | None) -> FlagSnapshot | None:
    if flags is None:
        return None
    return MappingProxyType(dict(flags))


class FeatureFlagBinding:
    """Reactive view of a flag client's flags.

    Args:
        client: Client to bind immediately.  None leaves the binding empty.
        collector: Optional collector notified of snapshots and subscriptions.

    """

    __slots__ = ("_client", "_collector", "_lock", "_snapshot", "_subscription", "_watchers")

    def __init__(
        self,
        client: FlagClient | None = None,
        *,
        collector: CaptureCollector | None = None,
    ) -> None:
        self._client: FlagClient | None = None
        self._collector = collector
        self._lock = threading.Lock()
        self._snapshot: FlagSnapshot | None = None
        self._subscription: _Subscription | None = None
        self._watchers: list[FlagWatcher] = []
        if client is not None:
            self.bind(client)

    @property
    def client(self) -> FlagClient | None:
        return self._client

    @property
    def snapshot(self) -> FlagSnapshot | None:
        """The last known flags, or None when unbound or unknown."""
        with self._lock:
            return self._snapshot

    @property
    def subscribed(self) -> bool:
        with self._lock:
            return self._subscription is not None

    def get(self, key: str, default: FlagValue | None = None) -> FlagValue | None:
        """Value of a single flag from the current snapshot."""
        snapshot = self.snapshot
        if snapshot is None:
            return default
        return snapshot.get(key, default)

    def is_enabled(self, key: str) -> bool:
        """True when the flag is on or set to any non-empty variant."""
        return bool(self.get(key, False))

    def watch(self, watcher: FlagWatcher) -> Unsubscribe:
        """Call *watcher* with each new snapshot; returns the unwatch action."""
        with self._lock:
            self._watchers.append(watcher)

        def unwatch() -> None:
            with self._lock:
                if watcher in self._watchers:
                    self._watchers.remove(watcher)

        return unwatch

    def bind(self, client: FlagClient | None) -> None:
        """Track *client*, replacing any previous subscription.

        Binding the client that is already bound is a no-op.  Watchers may
        call ``close()`` or ``bind()`` from inside this call; the newest
        request wins and every superseded subscription is released.

        """
        subscription = _Subscription(client) if client is not None else None
        with self._lock:
            if client is not None and client is self._client and self._subscription is not None:
                return
            previous = self._subscription
            self._subscription = subscription
            self._client = client

        if previous is not None:
            self._release(previous)

        if subscription is None:
            self._replace(None, "initial")
            return

        self._replace(client.get_feature_flags(), "initial")
        with self._lock:
            superseded = subscription.released
        if superseded:
            # A watcher closed or rebound the binding during the initial read.
            return

        unsubscribe = client.on_feature_flags(
            lambda flags: self._on_push(subscription, flags)
        )
        with self._lock:
            released = subscription.released
            if not released:
                subscription.unsubscribe = unsubscribe
        if released:
            # Closed while subscribing; release now that the action exists.
            unsubscribe()
        elif self._collector is not None:
            self._collector.record_subscription("subscribe", client)

    def close(self) -> None:
        """Release the current subscription.  Safe to call more than once."""
        with self._lock:
            subscription = self._subscription
            self._subscription = None
        if subscription is not None:
            self._release(subscription)

    def __enter__(self) -> FeatureFlagBinding:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _release(self, subscription: _Subscription) -> None:
        with self._lock:
            if subscription.released:
                return
            subscription.released = True
            unsubscribe = subscription.unsubscribe
            subscription.unsubscribe = None
        if unsubscribe is not None:
            unsubscribe()
            if self._collector is not None:
                self._collector.record_subscription("unsubscribe", subscription.client)

    def _on_push(self, subscription: _Subscription, flags: FlagMapping) -> None:
        with self._lock:
            stale = subscription.released or subscription is not self._subscription
        if stale:
            return
        self._replace(flags, "push")

    def _replace(self, flags: FlagMapping | None, source: str) -> None:
        snapshot = _freeze(flags)
        with self._lock:
            self._snapshot = snapshot
            watchers = list(self._watchers)
        if self._collector is not None:
            self._collector.record_flags(source, snapshot)
        for watcher in watchers:
            watcher(snapshot)
