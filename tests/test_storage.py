"""Tests for the SQLite session store."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from training_consistency.core.errors import StorageUnavailable
from training_consistency.core.models import SessionRecord
from training_consistency.core.storage import ConsistencyStorage


@pytest.fixture
def storage(tmp_path):
    """Create a storage instance with a temp path."""
    s = ConsistencyStorage(db_path=Path(tmp_path / "test.db"))
    yield s
    s.close()


class TestStorageSchema:
    def test_creates_tables(self, storage):
        cursor = storage.conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        )
        tables = {row[0] for row in cursor.fetchall()}
        assert "sessions" in tables
        assert "config" in tables

    def test_creates_parent_directory(self, tmp_path):
        s = ConsistencyStorage(db_path=tmp_path / "nested" / "dir" / "db.sqlite")
        assert s.db_path.parent.exists()
        s.close()


class TestSessions:
    def test_save_and_fetch(self, storage, make_session):
        session = make_session(days_ago=2)
        storage.save_session(session)
        fetched = storage.fetch_user_sessions("test-user")
        assert fetched == [session]

    def test_fetch_range_inclusive(self, storage, make_session, reference_date):
        start = datetime(2024, 2, 1, tzinfo=timezone.utc)
        end = datetime(2024, 2, 10, 23, 59, 59, 999000, tzinfo=timezone.utc)
        storage.save_sessions([
            make_session(start_time=start, session_id="at-start"),
            make_session(start_time=end, session_id="at-end"),
            make_session(start_time=start - timedelta(microseconds=1), session_id="before"),
            make_session(start_time=end + timedelta(milliseconds=1), session_id="after"),
        ])
        fetched = storage.fetch_user_sessions("test-user", since=start, until=end)
        assert {s.session_id for s in fetched} == {"at-start", "at-end"}

    def test_fetch_ordered_newest_first(self, storage, make_session):
        storage.save_sessions([make_session(days_ago=d) for d in (5, 1, 9)])
        fetched = storage.fetch_user_sessions("test-user")
        starts = [s.start_time for s in fetched]
        assert starts == sorted(starts, reverse=True)

    def test_fetch_filters_user(self, storage, make_session):
        storage.save_sessions([
            make_session(user_id="alice"),
            make_session(user_id="bob"),
        ])
        assert [s.user_id for s in storage.fetch_user_sessions("alice")] == ["alice"]

    def test_non_utc_times_stored_as_utc(self, storage, make_session):
        plus_two = timezone(timedelta(hours=2))
        storage.save_session(make_session(start_time=datetime(2024, 2, 10, 1, 0, tzinfo=plus_two)))
        fetched = storage.fetch_user_sessions("test-user")[0]
        assert fetched.start_time == datetime(2024, 2, 9, 23, 0, tzinfo=timezone.utc)
        assert fetched.start_time.tzinfo == timezone.utc

    def test_upsert_is_idempotent(self, storage, make_session):
        session = make_session(session_id="dup")
        storage.save_session(session)
        storage.save_session(session)
        assert storage.get_session_count() == 1

    def test_missing_end_time(self, storage, reference_date):
        record = SessionRecord(session_id="open", user_id="u", start_time=reference_date)
        storage.save_session(record)
        assert storage.fetch_user_sessions("u")[0].end_time is None

    def test_counts_and_users(self, storage, make_session):
        storage.save_sessions([
            make_session(user_id="bob"),
            make_session(user_id="alice"),
            make_session(user_id="alice"),
        ])
        assert storage.get_session_count() == 3
        assert storage.get_session_count("alice") == 2
        assert storage.list_users() == ["alice", "bob"]

    def test_save_sessions_returns_count(self, storage, make_session):
        assert storage.save_sessions(make_session(days_ago=d) for d in range(4)) == 4

    def test_delete_sessions_before(self, storage, make_session, reference_date):
        storage.save_sessions([make_session(days_ago=d) for d in (1, 40, 60)])
        deleted = storage.delete_sessions_before(reference_date - timedelta(days=30))
        assert deleted == 2
        assert storage.get_session_count() == 1

    def test_corrupt_file_raises_storage_unavailable(self, tmp_path):
        path = tmp_path / "corrupt.db"
        path.write_bytes(b"this is not an sqlite database\n" * 100)
        with pytest.raises(StorageUnavailable, match="Cannot open session store"):
            ConsistencyStorage(db_path=path)

    def test_config_read_failure_raises_storage_unavailable(self, storage):
        storage.conn.execute("DROP TABLE config")
        with pytest.raises(StorageUnavailable):
            storage.get_config("max_future_days")

    def test_query_failure_raises_storage_unavailable(self, storage):
        storage.conn.execute("DROP TABLE sessions")
        with pytest.raises(StorageUnavailable):
            storage.fetch_user_sessions("test-user")


class TestConfig:
    def test_set_and_get(self, storage):
        storage.set_config("test_key", "test_value")
        assert storage.get_config("test_key") == "test_value"

    def test_get_missing_returns_default(self, storage):
        assert storage.get_config("missing") is None
        assert storage.get_config("missing", "fallback") == "fallback"

    def test_overwrite_config(self, storage):
        storage.set_config("key", "v1")
        storage.set_config("key", "v2")
        assert storage.get_config("key") == "v2"
