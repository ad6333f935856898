"""Shared pytest fixtures and test helpers for cement tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from cement.domain.models import NewIdiom
from cement.infrastructure.store import IdiomStore
from cement.services.idioms import IdiomService


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test (the CLI reconfigures it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    cement_logger = logging.getLogger("cement")
    cement_level = cement_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    cement_logger.setLevel(cement_level)
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "cement_test.sqlite3"


@pytest.fixture
def store(db_path: Path) -> Generator[IdiomStore]:
    """Connected store on a temp file; short busy timeout keeps lock tests fast."""
    s = IdiomStore.connect(db_path, busy_timeout=0.1)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def service(store: IdiomStore) -> IdiomService:
    return IdiomService(store)


@pytest.fixture
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from a temp directory against a temp store file.

    Use via ``@pytest.mark.usefixtures("_isolated_env")`` on CLI test classes.
    """
    for var in (
        "CEMENT_CONFIG",
        "CEMENT_JSON_OUTPUT",
        "CEMENT_VERBOSE",
        "CEMENT_LOG_JSON",
        "CEMENT_POOL_SIZE",
        "CEMENT_BUSY_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CEMENT_DATABASE_FILE", str(tmp_path / "cement_test.sqlite3"))


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def add_idiom(store: IdiomStore, phrase: str, example: str | None = None) -> int:
    """Insert an idiom directly through the store, returning its id."""
    return store.insert(NewIdiom(phrase=phrase, example=example))
