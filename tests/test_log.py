"""holdfile.log unit tests."""

import logging

import pytest

from holdfile import Lockfile, configure_logging


@pytest.fixture
def clean_logger():
    logger = logging.getLogger("holdfile")
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)


def test_configure_logging_to_file(clean_logger, monkeypatch, tmp_path, lock_path):
    log_path = tmp_path / "logs" / "holdfile.log"
    monkeypatch.setenv("HOLDFILE_LOG_FILE", str(log_path))
    monkeypatch.setenv("HOLDFILE_LOG_LEVEL", "DEBUG")

    logger = configure_logging()
    assert logger is clean_logger
    assert logger.level == logging.DEBUG
    assert isinstance(logger.handlers[0], logging.FileHandler)

    Lockfile.create(lock_path).release()
    for handler in logger.handlers:
        handler.flush()
    text = log_path.read_text(encoding="utf-8")
    assert "lockfile created at" in text
    assert "Removed lockfile at" in text


def test_configure_logging_is_idempotent(clean_logger):
    configure_logging()
    configure_logging()
    assert len(clean_logger.handlers) == 1
    assert isinstance(clean_logger.handlers[0], logging.StreamHandler)
