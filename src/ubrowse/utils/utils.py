# ubrowse/utils/utils.py
"""
ubrowse.utils.utils.py
======================

Configuration helpers for the ubrowse browser.

- Embedded defaults: `DEFAULT_CONFIG` is the built-in configuration the
  program can always fall back on.
- User overrides: `load_config` merges `~/.config/ubrowse/config.toml` (or the
  file named by the ``UBROWSE_CONFIG`` environment variable) on top of the
  defaults with `deep_merge`. A missing file is silently skipped; a file that
  fails to parse is logged and ignored.
- Small value helpers used when turning configuration into session settings.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger("ubrowse")

CONFIG_ENV_VAR = "UBROWSE_CONFIG"

DEFAULT_CONFIG: Dict[str, Any] = {
    "display": {
        "columns": 2,
        "accent": "U+00B7",
        "show_combining": True,
    },
    "logging": {
        "file": "",
        "file_level": "INFO",
        "log_to_console": False,
        "console_level": "WARNING",
        "separate_error_log": False,
    },
}


# --- Helper Functions ---

def get_config_dir() -> Path:
    """Directory holding the user's `config.toml` and `.env`."""
    return Path.home() / ".config" / "ubrowse"


def get_cache_dir() -> Path:
    """Directory for log files."""
    return Path.home() / ".cache" / "ubrowse"


def user_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "config.toml"


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Loads the embedded defaults and merges the user's TOML file over them.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    config_path = path if path is not None else user_config_path()
    if config_path.is_file():
        try:
            user_config = toml.load(config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Loaded and merged user config from {config_path}")
        except (toml.TomlDecodeError, OSError) as e:
            logger.error(f"Could not parse user config '{config_path}': {e}. Using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def config_int(section: Dict[str, Any], key: str, default: int) -> int:
    """Read an integer setting, falling back to `default` on a bad value."""
    value = section.get(key, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Config value {key}={value!r} is not an integer; using {default}.")
        return default
