"""Tests for engine creation and the two-phase connect."""

from pathlib import Path

import pytest
from sqlalchemy import inspect, text

from cement.errors import StoreConnectionError
from cement.infrastructure.database.engine import connect, create_db_engine


class TestCreateDbEngine:
    def test_lazy_until_first_use(self, tmp_path: Path) -> None:
        db_path = tmp_path / "test.db"
        engine = create_db_engine(db_path)
        assert not db_path.exists()
        engine.dispose()

    def test_wal_mode_enabled(self, tmp_path: Path) -> None:
        engine = create_db_engine(tmp_path / "test.db")
        with engine.connect() as conn:
            result = conn.execute(text("PRAGMA journal_mode")).scalar()
            assert result == "wal"
        engine.dispose()

    def test_pool_is_bounded(self, tmp_path: Path) -> None:
        engine = create_db_engine(tmp_path / "test.db", pool_size=3)
        assert engine.pool.size() == 3
        engine.dispose()

    def test_pool_size_minimum(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="pool_size"):
            create_db_engine(tmp_path / "test.db", pool_size=0)


class TestConnect:
    def test_creates_file_and_table(self, tmp_path: Path) -> None:
        db_path = tmp_path / "cement.sqlite3"
        engine = connect(db_path)
        assert db_path.exists()
        assert "idioms" in inspect(engine).get_table_names()
        engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        db_path = tmp_path / "cement.sqlite3"
        connect(db_path).dispose()
        engine = connect(db_path)
        assert inspect(engine).get_table_names() == ["idioms"]
        engine.dispose()

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        engine = connect(str(tmp_path / "cement.sqlite3"))
        engine.dispose()

    @pytest.mark.parametrize("name", ["idioms?v=1.sqlite3", "100%41.sqlite3", "a#b.sqlite3"])
    def test_url_characters_stay_in_file_name(self, tmp_path: Path, name: str) -> None:
        engine = connect(tmp_path / name)
        engine.dispose()
        created = {p.name for p in tmp_path.iterdir() if not p.name.endswith(("-wal", "-shm"))}
        assert created == {name}

    def test_embedded_null_byte(self) -> None:
        with pytest.raises(StoreConnectionError) as exc_info:
            connect("uh_oh\0")
        assert exc_info.value.path == "uh_oh\0"

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(StoreConnectionError, match="Could not connect"):
            connect(tmp_path / "missing" / "cement.sqlite3")

    def test_not_a_database(self, tmp_path: Path) -> None:
        bogus = tmp_path / "bogus.sqlite3"
        bogus.write_bytes(b"this is plainly not a sqlite file\n" * 8)
        with pytest.raises(StoreConnectionError):
            connect(bogus)

    def test_failure_is_catchable_for_library_use(self, tmp_path: Path) -> None:
        """A failed connect can be logged and skipped instead of aborting."""
        engine = None
        try:
            engine = connect(tmp_path / "missing" / "cement.sqlite3")
        except StoreConnectionError as exc:
            assert exc.reason
        assert engine is None
