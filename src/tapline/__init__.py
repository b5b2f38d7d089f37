"""Tapline — component-tree autocapture and live feature-flag bindings.

Turns touches inside a tree of nested UI components into autocapture
payloads for an analytics client, and keeps application code in sync with
a flag client that updates asynchronously.

Quick start::

    import tapline

    with tapline.Provider(client, autocapture=True) as provider:
        root_view.on_touch_end_capture = provider.on_touch_end_capture
        flags = tapline.use_feature_flags()
        flags.watch(rerender)

Label a component with ``{"ph-label": "Buy"}`` in its props; hide a subtree
from capture with ``{"ph-no-capture": True}``.

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "AutocaptureDispatcher",
    "ComponentNode",
    "ComponentTreeResolver",
    "FeatureFlagBinding",
    "FeatureFlagStore",
    "Provider",
    "TaplineConfig",
    "TouchEvent",
    "__version__",
    "load_config",
    "resolve_touch",
    "use_client",
    "use_feature_flags",
]

_LAZY = {
    "AutocaptureDispatcher": "tapline.capture.dispatcher",
    "ComponentNode": "tapline.capture.tree",
    "ComponentTreeResolver": "tapline.capture.resolver",
    "FeatureFlagBinding": "tapline.flags.bridge",
    "FeatureFlagStore": "tapline.flags.store",
    "Provider": "tapline.provider",
    "TaplineConfig": "tapline.config",
    "TouchEvent": "tapline.capture.tree",
    "load_config": "tapline.config_loader",
    "resolve_touch": "tapline.capture.resolver",
    "use_client": "tapline.provider",
    "use_feature_flags": "tapline.provider",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import tapline`` fast while providing a flat top-level API.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
