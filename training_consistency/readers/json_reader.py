"""
JSON Session Reader

Reads exported session documents from a file. Two layouts are accepted:
- A JSON array of session objects
- JSONL, one session object per line

Each object carries:
  - sessionId: unique id
  - userId: owner
  - startTime: ISO-8601 string or Unix epoch milliseconds
  - endTime: same formats, optional
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from training_consistency.core.errors import StorageUnavailable
from training_consistency.core.models import SessionRecord
from training_consistency.core.validation import parse_timestamp
from training_consistency.core.window import to_utc
from training_consistency.readers.base_reader import BaseReader

logger = logging.getLogger(__name__)


class JsonSessionReader(BaseReader):
    """Reader for JSON or JSONL session exports."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def is_available(self) -> bool:
        return self.path.is_file()

    def get_data_locations(self) -> List[str]:
        return [str(self.path)] if self.is_available() else []

    def read_sessions(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[SessionRecord]:
        since = to_utc(since) if since else None
        until = to_utc(until) if until else None
        sessions = []
        for record in self.iter_records():
            if record.user_id != user_id:
                continue
            if since and record.start_time < since:
                continue
            if until and record.start_time > until:
                continue
            sessions.append(record)
        logger.debug("Read %d sessions for %s from %s", len(sessions), user_id, self.path)
        return sessions

    def iter_records(self) -> Iterator[SessionRecord]:
        """Yield every well-formed record in the file, for any user."""
        for index, doc in enumerate(self._load_documents()):
            record = self._parse_document(doc)
            if record is None:
                logger.warning("Skipping malformed session record #%d in %s", index, self.path)
                continue
            yield record

    # =========================================================================
    # Parsing
    # =========================================================================

    def _load_documents(self) -> List[Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageUnavailable(f"Cannot read session export {self.path}: {e}") from e

        stripped = text.lstrip()
        if not stripped:
            return []

        try:
            if stripped.startswith("["):
                docs = json.loads(stripped)
            else:
                docs = [json.loads(line) for line in text.splitlines() if line.strip()]
        except json.JSONDecodeError as e:
            raise StorageUnavailable(f"Session export {self.path} is not valid JSON: {e}") from e

        return docs

    def _parse_document(self, doc: Any) -> Optional[SessionRecord]:
        if not isinstance(doc, dict):
            return None

        session_id = doc.get("sessionId")
        user_id = doc.get("userId")
        if not session_id or not user_id or doc.get("startTime") is None:
            return None

        try:
            start_time = parse_timestamp(doc["startTime"])
            end_time = self._optional_timestamp(doc, "endTime")
        except ValueError:
            return None

        return SessionRecord(
            session_id=str(session_id),
            user_id=str(user_id),
            start_time=start_time,
            end_time=end_time,
        )

    def _optional_timestamp(self, doc: Dict[str, Any], key: str) -> Optional[datetime]:
        value = doc.get(key)
        if value is None:
            return None
        return parse_timestamp(value)
