"""Root settings model for the process configuration."""

from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from hadoopconf.config.models.filesystem import FileSystemConfig
from hadoopconf.config.models.observability import ObservabilityConfig

# Process-configuration keys naming Hadoop configuration locations
HDFS_DEFAULT_CONFIG = "fs.hdfs.hdfsdefault"
HDFS_SITE_CONFIG = "fs.hdfs.hdfssite"
PATH_HADOOP_CONFIG = "fs.hdfs.hadoopconf"

# Module-level variable to store TOML config for settings source
_toml_config: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Set the TOML configuration to be used by Settings."""
    global _toml_config
    _toml_config = config


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that reads from TOML configuration."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        """Get field value from TOML config."""
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        """Return the TOML config values."""
        return _toml_config.copy()


class Settings(BaseSettings):
    """Root configuration object containing all nested configuration sections.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. $HADOOPCONF_CONFIG_DIR/default.toml (base configuration)
    3. $HADOOPCONF_CONFIG_DIR/{HADOOPCONF_ENV}.toml (environment overrides)
    4. HADOOPCONF_* environment variables (runtime overrides)
    """

    model_config = SettingsConfigDict(
        env_prefix="HADOOPCONF_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    fs: FileSystemConfig = Field(
        default_factory=FileSystemConfig,
        description="Filesystem configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )

    def get_string(self, key: str, default: str | None = None) -> str | None:
        """Look up a dotted key such as ``fs.hdfs.hdfssite``.

        Each dot descends into a nested section. Unknown keys, unset values and
        keys naming a whole section all yield ``default``.
        """
        node: Any = self
        for part in key.split("."):
            if not isinstance(node, BaseModel) or part not in type(node).model_fields:
                return default
            node = getattr(node, part)

        if node is None or isinstance(node, BaseModel):
            return default
        return str(node)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include TOML config.

        Priority order (highest to lowest):
        1. init_settings (constructor arguments)
        2. env_settings (HADOOPCONF_* environment variables)
        3. toml_settings (config/*.toml files)
        4. (defaults from model)
        """
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
