"""Process configuration for hadoopconf.

Configuration is loaded from TOML files with environment variable overrides.
It tells the resolver where Hadoop configuration files live and how to log.

Usage:
    from hadoopconf.config import get_settings

    settings = get_settings()
    site_path = settings.get_string("fs.hdfs.hdfssite")
"""

from functools import lru_cache

from hadoopconf.config.loader import load_config
from hadoopconf.config.settings import (
    HDFS_DEFAULT_CONFIG,
    HDFS_SITE_CONFIG,
    PATH_HADOOP_CONFIG,
    Settings,
    set_toml_config,
)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. $HADOOPCONF_CONFIG_DIR/default.toml (base configuration)
    3. $HADOOPCONF_CONFIG_DIR/{HADOOPCONF_ENV}.toml (environment overrides)
    4. HADOOPCONF_* environment variables (runtime overrides)

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` to reload configuration.

    Returns:
        Settings instance with all configuration loaded and validated
    """
    config_dict = load_config()
    set_toml_config(config_dict)

    # pydantic-settings gives env vars higher priority than TOML
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration.

    Returns:
        Fresh Settings instance
    """
    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "HDFS_DEFAULT_CONFIG",
    "HDFS_SITE_CONFIG",
    "PATH_HADOOP_CONFIG",
    "Settings",
    "get_settings",
    "reload_settings",
]
