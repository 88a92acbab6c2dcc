from __future__ import annotations


class VantageError(Exception):
    """Base class for errors raised by vantage."""


class ConfigError(VantageError):
    """Raised when a configuration payload violates the schema."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
