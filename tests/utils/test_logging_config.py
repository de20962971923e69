# tests/utils/test_logging_config.py
"""Unit tests for logging configuration utility.
=================================================

Tests for `ubrowse.utils.logging_config.setup_logging`:
- A rotating main log, plus a separate error log when requested.
- Handler levels follow the configuration.
- Console logging stays off unless enabled.
- Key tracing is attached to ``ubrowse.keyevents`` only when enabled.

Log files are written under a temporary directory.
"""

import logging
import logging.handlers

import pytest

from ubrowse.utils import logging_config


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def test_setup_logging_creates_handlers(tmp_path, monkeypatch) -> None:
    """Main and error rotating file handlers with the configured levels."""
    monkeypatch.delenv("UBROWSE_KEYTRACE", raising=False)
    log_file = tmp_path / "logs" / "ubrowse.log"

    logging_config.setup_logging(
        {
            "logging": {
                "file": str(log_file),
                "file_level": "INFO",
                "console_level": "ERROR",
                "log_to_console": False,
                "separate_error_log": True,
            }
        }
    )

    root = logging.getLogger()
    assert len(root.handlers) == 2
    assert all(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    levels = sorted(h.level for h in root.handlers)
    assert levels == [logging.INFO, logging.ERROR]
    assert log_file.exists()
    assert (tmp_path / "logs" / "error.log").exists()
    assert logging_config.KEY_LOGGER.disabled


def test_console_handler_is_opt_in(tmp_path) -> None:
    logging_config.setup_logging(
        {"logging": {"file": str(tmp_path / "u.log"), "log_to_console": True, "console_level": "ERROR"}}
    )
    stream_handlers = [
        h
        for h in logging.getLogger().handlers
        if type(h) is logging.StreamHandler
    ]
    assert len(stream_handlers) == 1
    assert stream_handlers[0].level == logging.ERROR


def test_default_log_location(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    logging_config.setup_logging()
    assert (tmp_path / ".cache" / "ubrowse" / "ubrowse.log").exists()


def test_key_trace_enabled_by_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("UBROWSE_KEYTRACE", "1")
    logging_config.setup_logging({"logging": {"file": str(tmp_path / "u.log")}})
    key_logger = logging_config.KEY_LOGGER
    try:
        assert not key_logger.disabled
        assert not key_logger.propagate
        assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in key_logger.handlers)
        assert (tmp_path / "keytrace.log").exists()
    finally:
        for handler in key_logger.handlers:
            handler.close()
        key_logger.handlers = []
        key_logger.disabled = True
