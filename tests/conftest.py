"""Pytest configuration and fixtures."""

import logging
from pathlib import Path

import pytest

from partyhunt.core.parser import parse_session_report
from partyhunt.persistence import storage as storage_module


@pytest.fixture(scope="session", autouse=True)
def isolated_persistence(tmp_path_factory):
    """Ensure tests use an isolated SQLite database and reset caches between runs."""

    db_dir = tmp_path_factory.mktemp("persistence-db")
    db_path = db_dir / "partyhunt.db"
    monkeypatch = pytest.MonkeyPatch()
    monkeypatch.setenv(storage_module.DB_ENV_VAR, str(db_path))
    storage_module.get_storage.cache_clear()
    try:
        yield
    finally:
        storage_module.get_storage.cache_clear()
        monkeypatch.undo()


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handlers and levels installed by the CLI's --verbose handling."""

    logger = logging.getLogger("partyhunt")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.fixture
def sample_report_path():
    """Path to a three-player report led by Alice."""
    return Path(__file__).parent / "fixtures" / "party_hunt.txt"


@pytest.fixture
def sample_report_text(sample_report_path):
    return sample_report_path.read_text(encoding="utf-8")


@pytest.fixture
def sample_session(sample_report_text):
    return parse_session_report(sample_report_text)


@pytest.fixture
def write_report(tmp_path):
    """Write report text to a temporary file and return its path."""

    def _write(text: str, name: str = "report.txt") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
