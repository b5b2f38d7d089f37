"""Tapline error hierarchy.

All tapline-specific errors inherit from TaplineError for easy catching.
Instrumentation paths never raise these; they surface only from explicit
configuration and lookup calls.
"""


class TaplineError(Exception):
    """Base error for all tapline operations."""


class ConfigError(TaplineError):
    """Invalid or unreadable configuration."""


class ContextError(TaplineError):
    """Strict ambient lookup with no provider active."""
