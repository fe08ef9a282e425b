"""
Base Reader

Abstract base class for session sources. The engine only needs a reader to
return a user's candidate sessions for a time range; over-fetching and any
ordering are fine because the engine filters internally.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from training_consistency.core.models import SessionRecord


class BaseReader(ABC):
    """Abstract reader for exercise-session data."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this source's data is accessible."""

    @abstractmethod
    def get_data_locations(self) -> List[str]:
        """Return paths where this source stores data."""

    @abstractmethod
    def read_sessions(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[SessionRecord]:
        """
        Read a user's sessions.

        Args:
            user_id: Whose sessions to return.
            since: Only include sessions starting at or after this instant.
            until: Only include sessions starting at or before this instant.

        Returns:
            List of SessionRecord objects, in no particular order.

        Raises:
            StorageUnavailable: If the source cannot deliver its data.
        """

    def get_status(self) -> dict:
        """Return a summary of source availability."""
        available = self.is_available()
        return {
            "source": type(self).__name__,
            "available": available,
            "data_locations": self.get_data_locations() if available else [],
        }
