"""Configuration management for expense-tracker."""

import json
import os
from pathlib import Path
from typing import Any

from expense_tracker.currency import DEFAULT_CURRENCY, is_currency_code

CONFIG_FILENAME = "config.json"
DATA_FILENAME = "expenses.json"
APP_DIRNAME = "expense-tracker"


def get_config_dir() -> Path:
    """Get the config directory path (XDG compliant)."""
    xdg_config_home = os.getenv("XDG_CONFIG_HOME", str(Path.home() / ".config"))
    return Path(xdg_config_home) / APP_DIRNAME


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_config_dir() / CONFIG_FILENAME


def get_data_dir() -> Path:
    """Get the data directory path (XDG compliant)."""
    xdg_data_home = os.getenv("XDG_DATA_HOME", str(Path.home() / ".local" / "share"))
    return Path(xdg_data_home) / APP_DIRNAME


def find_config_file() -> Path | None:
    """Return the first existing config file.

    The working directory's config.json wins over the XDG location.
    """
    candidates = (Path(CONFIG_FILENAME), get_config_path())
    return next((path for path in candidates if path.is_file()), None)


def load_json_config(config_path: Path) -> dict[str, Any]:
    """Read a config file.

    Raises:
        ValueError: If the file is not a JSON object
    """
    try:
        config = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ValueError(f"Invalid config file {config_path}: expected a JSON object")
    return config


def save_json_config(config: dict[str, Any], config_path: Path | None = None) -> Path:
    """Write the config as indented JSON, creating parent directories.

    Returns:
        Path where config was saved
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
    return path


def load_config(config_path: Path | None = None) -> dict[str, Any] | None:
    """Load the explicit config file, or the discovered one, or None."""
    path = config_path or find_config_file()
    return load_json_config(path) if path else None


def get_data_path(
    config: dict[str, Any] | None = None,
    override: Path | None = None,
) -> Path:
    """Get the expense data file path.

    Args:
        config: Loaded JSON config
        override: Optional path to use instead of config

    Returns:
        Path of the JSON data file
    """
    if override:
        return override

    if config and (data_file := config.get("data_file")):
        return Path(data_file).expanduser()

    return get_data_dir() / DATA_FILENAME


def get_preferred_currency(
    config: dict[str, Any] | None = None,
    override: str | None = None,
) -> str:
    """Get the currency used to display amounts.

    Args:
        config: Loaded JSON config
        override: Optional currency code to use instead of config

    Returns:
        Upper-case ISO currency code
    """
    if override:
        return override.upper()

    if config and (code := config.get("preferred_currency")):
        return str(code).upper()

    return DEFAULT_CURRENCY


def set_preferred_currency(
    code: str,
    config: dict[str, Any] | None = None,
    config_path: Path | None = None,
) -> Path:
    """Store a new preferred currency in the config file.

    Args:
        code: ISO currency code
        config: Currently loaded config (a default one is created if None)
        config_path: Path to save to (defaults to XDG config location)

    Returns:
        Path where config was saved

    Raises:
        ValueError: If the code is not a three-letter currency code
    """
    if not is_currency_code(code):
        raise ValueError(f"Not a currency code: {code}")

    updated = dict(config) if config else create_default_config()
    updated["preferred_currency"] = code.upper()
    return save_json_config(updated, config_path)


def get_exchange_rate_api_key(
    config: dict[str, Any] | None = None,
    override: str | None = None,
) -> str | None:
    """Get the exchange rate API access key.

    Args:
        config: Loaded JSON config
        override: Optional API key to use instead of config

    Returns:
        API key string or None if not configured
    """
    if override:
        return override

    if config:
        rate_config = config.get("exchange_rate", {})
        if api_key := rate_config.get("api_key"):
            return api_key  # type: ignore[no-any-return]

    return None


def create_default_config() -> dict[str, Any]:
    """Create a default configuration."""
    return {
        "preferred_currency": DEFAULT_CURRENCY,
        "data_file": None,
        "exchange_rate": {
            "api_key": None,
        },
    }
