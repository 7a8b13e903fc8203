"""Exception hierarchy for cross-selling resolution."""
from __future__ import annotations


class CrossSellingError(Exception):
    """Base exception for all cross-selling errors."""


class ConfigLookupError(CrossSellingError):
    """Raised when the system configuration cannot be read."""

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        super().__init__(f"Cannot read system config from {source}: {detail}")


class CatalogError(CrossSellingError):
    """Raised when a catalog file is missing or malformed."""


# --- Product streams ---


class StreamError(CrossSellingError):
    """Base for product stream errors."""


class StreamNotFoundError(StreamError):
    """Raised when a cross-selling references an unknown product stream."""

    def __init__(self, stream_id: str) -> None:
        self.stream_id = stream_id
        super().__init__(f"Product stream not found: '{stream_id}'")


class NoStreamFilterError(StreamError):
    """Raised when a product stream carries no filters."""

    def __init__(self, stream_id: str) -> None:
        self.stream_id = stream_id
        super().__init__(f"Product stream '{stream_id}' has no filters")


class InvalidFilterError(StreamError):
    """Raised when a serialized filter cannot be compiled."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid filter definition: {detail}")


# --- Search ---


class InvalidCriteriaError(CrossSellingError, ValueError):
    """Raised for criteria that cannot be executed, such as a negative limit."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid criteria: {detail}")
