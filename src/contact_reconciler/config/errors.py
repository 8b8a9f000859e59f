"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class ThresholdOutOfRangeError(ConfigurationError):
    """Raised when a similarity threshold falls outside ``[0, 1]``."""

    def __init__(self, *, name: str, value: float) -> None:
        self.name = name
        self.value = value
        super().__init__(f"{name} must be between 0 and 1, got {value}")
