"""Tapline configuration.

TaplineConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass

from tapline._errors import ConfigError

DEFAULT_MAX_TREE_SIZE = 20
LABEL_PROP = "ph-label"
NO_CAPTURE_PROP = "ph-no-capture"
ACCESSIBILITY_LABEL_PROP = "accessibilityLabel"
TOUCH_EVENT_TYPE = "touch"


@dataclass(frozen=True, slots=True)
class TaplineConfig:
    """Configuration for autocapture and flag bindings.

    Attributes:
        autocapture: Capture touch-end events through the provider (opt-in).
        max_tree_size: Maximum number of ancestor nodes visited per touch.
        label_prop: Prop key carrying an explicit capture label.
        no_capture_prop: Prop key that opts a subtree out of capture.
        accessibility_label_prop: Prop key of the framework's accessibility label.
        event_type: Event kind sent to the analytics client.
        verbose: Print one-line capture summaries to stderr.

    """

    autocapture: bool = False
    max_tree_size: int = DEFAULT_MAX_TREE_SIZE
    label_prop: str = LABEL_PROP
    no_capture_prop: str = NO_CAPTURE_PROP
    accessibility_label_prop: str = ACCESSIBILITY_LABEL_PROP
    event_type: str = TOUCH_EVENT_TYPE
    verbose: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.max_tree_size, bool) or not isinstance(self.max_tree_size, int):
            msg = f"max_tree_size must be an integer, got {self.max_tree_size!r}"
            raise ConfigError(msg)
        if self.max_tree_size < 1:
            msg = f"max_tree_size must be at least 1, got {self.max_tree_size}"
            raise ConfigError(msg)
        for name in ("label_prop", "no_capture_prop", "accessibility_label_prop", "event_type"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                msg = f"{name} must be a non-empty string, got {value!r}"
                raise ConfigError(msg)
