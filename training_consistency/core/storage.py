"""
Training Consistency Local Storage

SQLite-based session store at ~/.training_consistency/consistency.db
Holds session records and key/value config -- never computed scores.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from training_consistency.config.defaults import DEFAULT_DB_PATH
from training_consistency.core.errors import StorageUnavailable
from training_consistency.core.models import SessionRecord
from training_consistency.core.window import to_utc

logger = logging.getLogger(__name__)


def _encode_time(instant: Optional[datetime]) -> Optional[str]:
    """Fixed-width UTC ISO string so text order matches time order."""
    if instant is None:
        return None
    return to_utc(instant).isoformat(timespec="microseconds")


def _decode_time(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value).astimezone(timezone.utc)


class ConsistencyStorage:
    """Local SQLite storage for exercise sessions."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn: Optional[sqlite3.Connection] = None
        try:
            self._ensure_schema()
        except sqlite3.Error as e:
            logger.error("Cannot open session store %s: %s", self.db_path, e)
            self.close()
            raise StorageUnavailable(f"Cannot open session store {self.db_path}: {e}") from e

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(str(self.db_path))
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA journal_mode=WAL")
        return self._conn

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None

    # =========================================================================
    # Schema
    # =========================================================================

    def _ensure_schema(self):
        """Create tables if they don't exist."""
        with self.conn:
            self.conn.executescript("""
                CREATE TABLE IF NOT EXISTS sessions (
                    session_id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    start_time TEXT NOT NULL,  -- UTC ISO-8601, microseconds
                    end_time TEXT,
                    created_at TEXT DEFAULT (datetime('now'))
                );

                CREATE TABLE IF NOT EXISTS config (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT DEFAULT (datetime('now'))
                );

                CREATE INDEX IF NOT EXISTS idx_sessions_user_start
                    ON sessions(user_id, start_time);
            """)

    # =========================================================================
    # Sessions
    # =========================================================================

    def save_session(self, record: SessionRecord):
        """Insert or replace a session, keyed by session_id."""
        with self.conn:
            self._upsert(record)

    def save_sessions(self, records: Iterable[SessionRecord]) -> int:
        """Insert or replace many sessions in one transaction."""
        count = 0
        try:
            with self.conn:
                for record in records:
                    self._upsert(record)
                    count += 1
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Failed to save sessions: {e}") from e
        logger.info("Saved %d sessions", count)
        return count

    def _upsert(self, record: SessionRecord):
        self.conn.execute(
            """INSERT OR REPLACE INTO sessions
               (session_id, user_id, start_time, end_time)
               VALUES (?, ?, ?, ?)""",
            (
                record.session_id,
                record.user_id,
                _encode_time(record.start_time),
                _encode_time(record.end_time),
            ),
        )

    def fetch_user_sessions(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[SessionRecord]:
        """Fetch a user's sessions with start_time in [since, until].

        Raises:
            StorageUnavailable: If the database cannot be queried.
        """
        query = "SELECT session_id, user_id, start_time, end_time FROM sessions WHERE user_id = ?"
        params: List[str] = [user_id]
        if since:
            query += " AND start_time >= ?"
            params.append(_encode_time(since))
        if until:
            query += " AND start_time <= ?"
            params.append(_encode_time(until))
        query += " ORDER BY start_time DESC"

        try:
            rows = self.conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            logger.error("Error fetching sessions for %s: %s", user_id, e)
            raise StorageUnavailable("Failed to fetch exercise sessions") from e

        return [
            SessionRecord(
                session_id=row["session_id"],
                user_id=row["user_id"],
                start_time=_decode_time(row["start_time"]),
                end_time=_decode_time(row["end_time"]),
            )
            for row in rows
        ]

    def get_session_count(self, user_id: Optional[str] = None) -> int:
        """Count sessions, optionally for one user."""
        query = "SELECT COUNT(*) FROM sessions"
        params = []
        if user_id:
            query += " WHERE user_id = ?"
            params.append(user_id)
        try:
            row = self.conn.execute(query, params).fetchone()
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Failed to count sessions: {e}") from e
        return row[0] if row else 0

    def list_users(self) -> List[str]:
        try:
            rows = self.conn.execute(
                "SELECT DISTINCT user_id FROM sessions ORDER BY user_id"
            ).fetchall()
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Failed to list users: {e}") from e
        return [row[0] for row in rows]

    # =========================================================================
    # Config
    # =========================================================================

    def get_config(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a config value."""
        try:
            row = self.conn.execute(
                "SELECT value FROM config WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Failed to read config {key}: {e}") from e
        return row[0] if row else default

    def set_config(self, key: str, value: str):
        """Set a config value."""
        try:
            with self.conn:
                self.conn.execute(
                    """INSERT OR REPLACE INTO config (key, value, updated_at)
                       VALUES (?, ?, datetime('now'))""",
                    (key, value),
                )
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Failed to write config {key}: {e}") from e

    # =========================================================================
    # Maintenance
    # =========================================================================

    def delete_sessions_before(self, cutoff: datetime) -> int:
        """Remove sessions that started before the cutoff."""
        try:
            with self.conn:
                cursor = self.conn.execute(
                    "DELETE FROM sessions WHERE start_time < ?", (_encode_time(cutoff),)
                )
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Failed to delete old sessions: {e}") from e
        logger.info("Deleted %d sessions older than %s", cursor.rowcount, cutoff.date())
        return cursor.rowcount
