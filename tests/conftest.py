"""Shared test fixtures."""

import pytest


@pytest.fixture(autouse=True)
def env_override(tmp_path, monkeypatch):
    """Point named locks at a temporary directory and clear other settings."""
    monkeypatch.setenv("HOLDFILE_LOCK_DIR", str(tmp_path / "locks"))
    for name in (
        "HOLDFILE_LOG_LEVEL",
        "HOLDFILE_LOG_FILE",
        "HOLDFILE_LOCK_TIMEOUT_SEC",
        "HOLDFILE_LOCK_POLL_SEC",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def lock_path(tmp_path):
    """A lock location whose parent directory does not exist yet."""
    return tmp_path / "x" / "lockA"
