# ubrowse/utils/logging_config.py
"""ubrowse.utils.logging_config
==============================

Logging setup for ubrowse.

The browser owns the whole terminal while it runs, so log output goes to a
rotating file by default and console logging is opt-in.

Handlers:
    - Rotating file log (``~/.cache/ubrowse/ubrowse.log`` unless configured).
    - Optional console handler on stderr.
    - Optional separate error log next to the main log.
    - Optional key trace log, enabled by ``UBROWSE_KEYTRACE=1``, attached to
      the ``ubrowse.keyevents`` logger.

`setup_logging` never raises; problems are reported on stderr and logging
continues with whatever handlers could be created.
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional

from ubrowse.utils.utils import get_cache_dir


# ======================== Global loggers ========================
logger = logging.getLogger("ubrowse")
KEY_LOGGER = logging.getLogger("ubrowse.keyevents")

KEYTRACE_ENV_VAR = "UBROWSE_KEYTRACE"


def _ensure_parent_dir(filename: str, fallback_name: str) -> str:
    """Create the directory of `filename`, or return a temp-dir path on failure."""
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir)
        except OSError as e_mkdir:
            print(f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr)
            filename = os.path.join(tempfile.gettempdir(), fallback_name)
            print(f"Logging to temporary file: '{filename}'", file=sys.stderr)
    return filename


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Existing root handlers are replaced so repeated calls (as in tests) do
    not duplicate records.

    Args:
        config (dict | None): Application configuration. Only the
            ``["logging"]`` section is read; recognised keys are
            ``file``, ``file_level``, ``log_to_console``, ``console_level``
            and ``separate_error_log``.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})

    log_filename = logging_config.get("file") or str(get_cache_dir() / "ubrowse.log")
    log_filename = _ensure_parent_dir(os.path.expanduser(log_filename), "ubrowse.log")
    log_file_level_str = str(logging_config.get("file_level", "INFO")).upper()
    log_file_level = getattr(logging, log_file_level_str, logging.INFO)

    file_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
    )
    file_handler = None
    try:
        file_handler = logging.handlers.RotatingFileHandler(
            log_filename, maxBytes=2 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(log_file_level)
    except OSError as e_fh:
        print(
            f"Error setting up file logger for '{log_filename}': {e_fh}. File logging may be impaired.",
            file=sys.stderr,
        )

    # Console Handler
    console_handler = None
    if logging_config.get("log_to_console", False):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s")
        )
        console_handler.setLevel(getattr(logging, console_level_str, logging.WARNING))

    # Optional Separate Error Log File
    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        error_log_filename = os.path.join(os.path.dirname(log_filename), "error.log")
        try:
            error_file_handler = logging.handlers.RotatingFileHandler(
                error_log_filename,
                maxBytes=1 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            error_file_handler.setFormatter(file_formatter)
            error_file_handler.setLevel(logging.ERROR)
        except OSError as e_efh:
            print(
                f"Error setting up separate error log '{error_log_filename}': {e_efh}.",
                file=sys.stderr,
            )

    root_logger = logging.getLogger()
    root_logger.handlers = []
    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)
    root_logger.setLevel(log_file_level)

    # Key Event Logger
    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []

    if os.environ.get(KEYTRACE_ENV_VAR, "").lower() in {"1", "true", "yes"}:
        key_trace_filename = os.path.join(os.path.dirname(log_filename), "keytrace.log")
        try:
            key_trace_handler = logging.handlers.RotatingFileHandler(
                key_trace_filename,
                maxBytes=1 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            key_trace_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
            KEY_LOGGER.addHandler(key_trace_handler)
            KEY_LOGGER.disabled = False
            logging.info("Key event tracing enabled, logging to '%s'.", key_trace_filename)
        except OSError as e_keytrace:
            logging.error(f"Failed to set up key trace logging: {e_keytrace}", exc_info=True)
            KEY_LOGGER.disabled = True
    else:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True
        logging.debug("Key event tracing is disabled.")

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logging.info(
            f"File logging to '{log_filename}' at level: {logging.getLevelName(file_handler.level)}."
        )
