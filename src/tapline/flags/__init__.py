"""Feature flags — live snapshots over asynchronously updated flag clients."""

from tapline.flags.bridge import FeatureFlagBinding, FlagClient, FlagSnapshot
from tapline.flags.store import FeatureFlagStore

__all__ = [
    "FeatureFlagBinding",
    "FeatureFlagStore",
    "FlagClient",
    "FlagSnapshot",
]
