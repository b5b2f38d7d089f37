"""Capture layer — touch events to autocapture payloads.

Resolves the touched component's ancestor chain into capture elements and
hands the finished payload to the analytics client.
"""

from tapline.capture.attributes import filter_attributes
from tapline.capture.dispatcher import AnalyticsClient, AutocaptureDispatcher
from tapline.capture.elements import CaptureElement, CapturePayload
from tapline.capture.resolver import ComponentTreeResolver, Resolution, resolve_touch
from tapline.capture.tree import ComponentNode, ElementType, InteractionEvent, TouchEvent, TreeNode

__all__ = [
    "AnalyticsClient",
    "AutocaptureDispatcher",
    "CaptureElement",
    "CapturePayload",
    "ComponentNode",
    "ComponentTreeResolver",
    "ElementType",
    "InteractionEvent",
    "Resolution",
    "TouchEvent",
    "TreeNode",
    "filter_attributes",
    "resolve_touch",
]
