"""
Domain-specific exception hierarchy for the slot booking application.
"""

from __future__ import annotations


class SlotbookerError(Exception):
    """Base class for all application-level errors."""


class InputValidationError(SlotbookerError, ValueError):
    """Raised when a duration, quantity or interval is malformed."""


class UpstreamDataError(SlotbookerError):
    """Raised when one of the input collections cannot be retrieved."""

    def __init__(self, collection: str, message: str) -> None:
        super().__init__(f"Failed to fetch {collection}: {message}")
        self.collection = collection


class ConfigError(SlotbookerError, ValueError):
    """Raised when the configuration file cannot be read or is invalid."""
