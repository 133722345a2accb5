"""Unit tests for TOML configuration loader."""

import tomllib
from pathlib import Path

import pytest

from hadoopconf.config.loader import (
    deep_merge,
    get_config_dir,
    get_environment,
    load_config,
    load_toml,
)


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_merge_flat_dicts(self) -> None:
        """Flat dictionaries are merged correctly."""
        base = {"a": 1, "b": 2}
        override = {"b": 3, "c": 4}
        result = deep_merge(base, override)
        assert result == {"a": 1, "b": 3, "c": 4}

    def test_merge_nested_dicts(self) -> None:
        """Nested dictionaries are merged recursively."""
        base = {"fs": {"hdfs": {"hdfssite": "/a", "hdfsdefault": "/b"}}}
        override = {"fs": {"hdfs": {"hdfssite": "/c"}}}
        result = deep_merge(base, override)
        assert result == {"fs": {"hdfs": {"hdfssite": "/c", "hdfsdefault": "/b"}}}

    def test_override_replaces_non_dict(self) -> None:
        """Non-dict values in override replace base values."""
        base = {"a": {"x": 1}}
        override = {"a": "replaced"}
        result = deep_merge(base, override)
        assert result == {"a": "replaced"}

    def test_base_unmodified(self) -> None:
        """Original base dictionary is not modified."""
        base = {"a": 1}
        deep_merge(base, {"b": 2})
        assert base == {"a": 1}

    def test_empty_override(self) -> None:
        """Empty override returns copy of base."""
        base = {"a": 1, "b": 2}
        assert deep_merge(base, {}) == base


class TestLoadToml:
    """Tests for load_toml function."""

    def test_load_valid_toml(self, tmp_path: Path) -> None:
        """Valid TOML file is loaded correctly."""
        toml_file = tmp_path / "test.toml"
        toml_file.write_text('[fs.hdfs]\nhadoopconf = "/etc/hadoop/conf"')

        result = load_toml(toml_file)
        assert result == {"fs": {"hdfs": {"hadoopconf": "/etc/hadoop/conf"}}}

    def test_load_missing_file_raises(self, tmp_path: Path) -> None:
        """Missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_toml(tmp_path / "nonexistent.toml")

    def test_load_invalid_toml_raises(self, tmp_path: Path) -> None:
        """Invalid TOML syntax raises error."""
        invalid_file = tmp_path / "invalid.toml"
        invalid_file.write_text("invalid = [unclosed")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml(invalid_file)


class TestGetEnvironment:
    """Tests for get_environment function."""

    def test_returns_env_var_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Returns HADOOPCONF_ENV value when set."""
        monkeypatch.setenv("HADOOPCONF_ENV", "production")
        assert get_environment() == "production"

    def test_defaults_to_development(self) -> None:
        """Defaults to 'development' when HADOOPCONF_ENV not set."""
        assert get_environment() == "development"


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_uses_env_var_when_set(
        self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Uses HADOOPCONF_CONFIG_DIR when set."""
        monkeypatch.setenv("HADOOPCONF_CONFIG_DIR", str(test_config_dir))
        assert get_config_dir() == test_config_dir

    def test_raises_for_missing_env_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Raises error when HADOOPCONF_CONFIG_DIR doesn't exist."""
        monkeypatch.setenv("HADOOPCONF_CONFIG_DIR", str(tmp_path / "missing"))

        with pytest.raises(FileNotFoundError):
            get_config_dir()

    def test_returns_none_without_env_var(
        self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without HADOOPCONF_CONFIG_DIR no directory is used, even if config/ exists."""
        monkeypatch.chdir(test_config_dir.parent)

        assert get_config_dir() is None

    def test_ignores_config_in_parent_directories(
        self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A config/ directory above the working directory is not picked up."""
        nested = test_config_dir.parent / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        assert get_config_dir() is None


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_default_config(
        self,
        test_config_dir: Path,
        mock_toml_files,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Loads default.toml configuration."""
        mock_toml_files({"default.toml": "[fs.hdfs]\nhadoopconf = '/etc/hadoop'"})
        monkeypatch.setenv("HADOOPCONF_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("HADOOPCONF_ENV", "nonexistent")

        assert load_config() == {"fs": {"hdfs": {"hadoopconf": "/etc/hadoop"}}}

    def test_merges_environment_config(
        self,
        test_config_dir: Path,
        mock_toml_files,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Environment config overrides default config."""
        mock_toml_files({
            "default.toml": "[fs.hdfs]\nhdfssite = '/default/hdfs-site.xml'\nhadoopconf = '/etc/hadoop'",
            "production.toml": "[fs.hdfs]\nhdfssite = '/prod/hdfs-site.xml'",
        })
        monkeypatch.setenv("HADOOPCONF_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("HADOOPCONF_ENV", "production")

        assert load_config() == {
            "fs": {
                "hdfs": {
                    "hdfssite": "/prod/hdfs-site.xml",
                    "hadoopconf": "/etc/hadoop",
                }
            }
        }

    def test_missing_files_yield_empty_config(
        self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A config directory without TOML files loads as empty."""
        monkeypatch.setenv("HADOOPCONF_CONFIG_DIR", str(test_config_dir))

        assert load_config() == {}

    def test_host_config_directory_is_not_loaded(
        self,
        mock_toml_files,
        test_config_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """TOML in a config/ directory of the working directory is ignored."""
        mock_toml_files({
            "default.toml": "[fs.hdfs]\nhdfssite = '/host/hdfs-site.xml'",
            "development.toml": "[fs.hdfs]\nhadoopconf = '/host/conf'",
        })
        monkeypatch.chdir(test_config_dir.parent)

        assert load_config() == {}
