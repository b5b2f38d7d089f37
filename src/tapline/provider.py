"""Provider — ambient client context and the host framework's touch hook.

The provider is the one place where the ambient client is resolved.  The
resolver, dispatcher and flag binding all take their client explicitly;
``use_client()`` and ``use_feature_flags()`` look up the ambient default
once, at the boundary, and pass it in.

Usage::

    with Provider(client, autocapture=True) as provider:
        root_view.on_touch_end_capture = provider.on_touch_end_capture
        flags = use_feature_flags()      # bound to ``client``

Touch capture is off unless ``autocapture`` is passed or set in the
loaded config.  Providers nest; leaving the ``with`` block restores the
outer client.
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from typing import TYPE_CHECKING, Any

from tapline._errors import ContextError
from tapline.capture.dispatcher import AutocaptureDispatcher
from tapline.capture.resolver import ComponentTreeResolver
from tapline.config import TaplineConfig
from tapline.flags.bridge import FeatureFlagBinding
from tapline.observability.collector import CaptureCollector

if TYPE_CHECKING:
    from tapline._types import NamePredicate
    from tapline.capture.elements import CapturePayload
    from tapline.capture.tree import InteractionEvent

_current_client: ContextVar[Any] = ContextVar("tapline_client", default=None)


class Provider:
    """Owns a client, its autocapture dispatcher, and the ambient context.

    Args:
        client: The analytics/flag client shared with consumers.
        config: Capture configuration.  Defaults to ``TaplineConfig()``.
        autocapture: Overrides ``config.autocapture`` when given.
        collector: Collector for capture and flag events.  One is created
            (honouring ``config.verbose``) when omitted.
        is_name_ignored: Label suppression hook for the resolver.

    """

    __slots__ = ("_client", "_collector", "_config", "_dispatcher", "_tokens")

    def __init__(
        self,
        client: Any = None,
        *,
        config: TaplineConfig | None = None,
        autocapture: bool | None = None,
        collector: CaptureCollector | None = None,
        is_name_ignored: NamePredicate | None = None,
    ) -> None:
        self._client = client
        self._config = config if config is not None else TaplineConfig()
        self._collector = (
            collector if collector is not None
            else CaptureCollector(verbose=self._config.verbose)
        )
        enabled = self._config.autocapture if autocapture is None else autocapture
        self._dispatcher = AutocaptureDispatcher(
            client,
            resolver=ComponentTreeResolver(self._config, is_name_ignored=is_name_ignored),
            enabled=enabled,
            collector=self._collector,
        )
        self._tokens: list[Token[Any]] = []

    @property
    def client(self) -> Any:
        return self._client

    @property
    def config(self) -> TaplineConfig:
        return self._config

    @property
    def collector(self) -> CaptureCollector:
        return self._collector

    @property
    def dispatcher(self) -> AutocaptureDispatcher:
        return self._dispatcher

    def on_touch_end_capture(self, event: InteractionEvent) -> CapturePayload | None:
        """Touch-end hook for the root view."""
        return self._dispatcher.on_touch("end", event)

    def feature_flags(self) -> FeatureFlagBinding:
        """A binding to this provider's client, reporting to its collector."""
        return FeatureFlagBinding(self._client, collector=self._collector)

    def __enter__(self) -> Provider:
        self._tokens.append(_current_client.set(self._client))
        return self

    def __exit__(self, *exc_info: object) -> None:
        _current_client.reset(self._tokens.pop())


def use_client() -> Any:
    """Return the client of the innermost active provider, or None."""
    return _current_client.get()


def require_client() -> Any:
    """Like ``use_client()``, but raise when no provider supplies a client.

    Raises:
        ContextError: If called outside any provider with a client.

    """
    client = _current_client.get()
    if client is None:
        msg = (
            "No tapline client in context. "
            "Enter a Provider(client) or pass the client explicitly."
        )
        raise ContextError(msg)
    return client


def use_feature_flags(
    client: Any = None,
    *,
    collector: CaptureCollector | None = None,
) -> FeatureFlagBinding:
    """Bind to *client*, or to the ambient provider client when None.

    With no client available the binding stays empty: no subscription and
    a ``None`` snapshot.

    """
    return FeatureFlagBinding(client if client is not None else use_client(), collector=collector)
