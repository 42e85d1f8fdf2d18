"""Configuration for Trade Tracker.

Settings live in ``config.toml`` inside the tracker home directory
(``~/.config/tradetracker`` unless ``TRADETRACKER_HOME`` is set).
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "TRADETRACKER_HOME"

DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "storage": {
        "db_path": "",  # Leave empty to use tracker.db in the home directory
    },
    "display": {
        "currency": "$",
    },
    "logging": {
        "level": "WARNING",
    },
}


def get_home_dir() -> Path:
    """Get the tracker home directory."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "tradetracker"


def get_config_path() -> Path:
    """Get the path of the config file."""
    return get_home_dir() / "config.toml"


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    A missing or unreadable file yields the defaults.

    Args:
        config_path: Optional explicit path of the config file.

    Returns:
        Config dict with every section of DEFAULT_CONFIG present.
    """
    import toml

    path = config_path or get_config_path()
    config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}

    if not path.exists():
        return config

    try:
        loaded = toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return config

    for section, values in loaded.items():
        if isinstance(values, dict):
            config.setdefault(section, {}).update(values)
    return config


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write the default configuration file.

    Returns:
        Path of the written file.
    """
    import toml

    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)

    return path


def get_db_path(config: dict) -> Path:
    """Get the database path from config."""
    configured = config.get("storage", {}).get("db_path", "")
    if configured:
        return Path(configured).expanduser()
    return get_home_dir() / "tracker.db"


def get_currency(config: dict) -> str:
    """Get the currency symbol used for display."""
    return str(config.get("display", {}).get("currency", "$"))


def get_log_level(config: dict) -> int:
    """Get the logging level from config, WARNING when unrecognised."""
    name = str(config.get("logging", {}).get("level", "WARNING")).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING
