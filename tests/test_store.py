"""Tests for tapline.flags.store — in-memory flag client."""

from __future__ import annotations

from typing import Any

import pytest

from tapline.flags.store import FeatureFlagStore


class TestReads:
    """Synchronous flag reads."""

    def test_empty_store(self) -> None:
        store = FeatureFlagStore()
        assert store.get_feature_flags() is None
        assert store.get_feature_flag("beta") is None
        assert store.get_feature_flag("beta", False) is False

    def test_initial_flags(self) -> None:
        store = FeatureFlagStore({"beta": True, "variant": "b"})
        assert store.get_feature_flags() == {"beta": True, "variant": "b"}
        assert store.get_feature_flag("variant") == "b"

    def test_flags_read_only(self) -> None:
        store = FeatureFlagStore({"beta": True})
        flags = store.get_feature_flags()
        assert flags is not None
        with pytest.raises(TypeError):
            flags["beta"] = False  # type: ignore[index]


class TestSubscriptions:
    """on_feature_flags / reload_feature_flags."""

    def test_reload_notifies_in_order(self) -> None:
        store = FeatureFlagStore()
        calls: list[tuple[str, Any]] = []
        store.on_feature_flags(lambda flags: calls.append(("first", dict(flags))))
        store.on_feature_flags(lambda flags: calls.append(("second", dict(flags))))

        count = store.reload_feature_flags({"beta": True})

        assert count == 2
        assert calls == [("first", {"beta": True}), ("second", {"beta": True})]
        assert store.get_feature_flags() == {"beta": True}

    def test_unsubscribe_is_idempotent(self) -> None:
        store = FeatureFlagStore()
        calls: list[Any] = []
        unsubscribe = store.on_feature_flags(calls.append)
        assert store.subscriber_count == 1

        unsubscribe()
        unsubscribe()

        assert store.subscriber_count == 0
        assert store.reload_feature_flags({"beta": True}) == 0
        assert calls == []

    def test_same_callback_twice(self) -> None:
        store = FeatureFlagStore()
        calls: list[Any] = []
        first = store.on_feature_flags(calls.append)
        store.on_feature_flags(calls.append)

        first()
        store.reload_feature_flags({"a": True})

        assert len(calls) == 1

    def test_unsubscribe_from_callback(self) -> None:
        store = FeatureFlagStore()
        calls: list[Any] = []
        holder: dict[str, Any] = {}

        def once(flags: Any) -> None:
            calls.append(flags)
            holder["unsubscribe"]()

        holder["unsubscribe"] = store.on_feature_flags(once)
        store.reload_feature_flags({"a": True})
        store.reload_feature_flags({"a": False})

        assert len(calls) == 1
