"""TOML configuration loader with deep merge support."""

import os
import tomllib
from pathlib import Path
from typing import Any


def get_config_dir() -> Path | None:
    """Get the configuration directory path.

    The directory is taken from the HADOOPCONF_CONFIG_DIR env var only.
    Returns None when it is unset; the working directory is never searched.

    Raises:
        FileNotFoundError: If HADOOPCONF_CONFIG_DIR names a missing directory
    """
    config_dir_env = os.environ.get("HADOOPCONF_CONFIG_DIR")
    if not config_dir_env:
        return None

    path = Path(config_dir_env)
    if not path.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir_env}")
    return path


def get_environment() -> str:
    """Get the current environment from HADOOPCONF_ENV.

    Defaults to 'development' if not set.
    """
    return os.environ.get("HADOOPCONF_ENV", "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary.

    Args:
        file_path: Path to the TOML file

    Returns:
        Dictionary containing the TOML data

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    For nested dictionaries, values are merged recursively.
    For other values, override replaces base.

    Args:
        base: Base dictionary
        override: Override dictionary (takes precedence)

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_config() -> dict[str, Any]:
    """Load configuration from TOML files.

    Loading order:
    1. $HADOOPCONF_CONFIG_DIR/default.toml (optional)
    2. $HADOOPCONF_CONFIG_DIR/{HADOOPCONF_ENV}.toml (optional)

    Without HADOOPCONF_CONFIG_DIR the result is empty.

    Returns:
        Merged configuration dictionary
    """
    config_dir = get_config_dir()
    config: dict[str, Any] = {}
    if config_dir is None:
        return config

    env = get_environment()

    default_path = config_dir / "default.toml"
    if default_path.exists():
        config = load_toml(default_path)

    env_path = config_dir / f"{env}.toml"
    if env_path.exists():
        config = deep_merge(config, load_toml(env_path))

    return config
