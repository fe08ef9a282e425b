"""
Storage Session Reader

Adapts the local SQLite session store to the reader interface.
"""

from datetime import datetime
from typing import List, Optional

from training_consistency.core.models import SessionRecord
from training_consistency.core.storage import ConsistencyStorage
from training_consistency.readers.base_reader import BaseReader


class StorageSessionReader(BaseReader):
    """Reader backed by ConsistencyStorage."""

    def __init__(self, storage: Optional[ConsistencyStorage] = None):
        self.storage = storage or ConsistencyStorage()

    def is_available(self) -> bool:
        return self.storage.db_path.exists()

    def get_data_locations(self) -> List[str]:
        return [str(self.storage.db_path)]

    def read_sessions(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[SessionRecord]:
        return self.storage.fetch_user_sessions(user_id, since=since, until=until)
