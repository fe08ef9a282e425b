"""Exceptions raised around the scoring engine."""

from typing import List, Optional


class ConsistencyError(Exception):
    """Base class for consistency scoring failures."""


class InvalidInput(ConsistencyError):
    """Raised when request parameters fail validation before scoring."""

    def __init__(self, errors: Optional[List[str]] = None):
        self.errors = list(errors or [])
        super().__init__("Validation failed: " + "; ".join(self.errors))


class StorageUnavailable(ConsistencyError):
    """Raised when session data cannot be delivered by the store or a reader."""
