"""Shared test fixtures for the hadoopconf test suite."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog

HADOOP_ENV_VARS = (
    "HADOOP_HOME",
    "HADOOP_CONF_DIR",
    "HADOOP_USER_NAME",
    "HADOOP_TOKEN_FILE_LOCATION",
    "HADOOPCONF_CONFIG_DIR",
    "HADOOPCONF_ENV",
)


def hadoop_xml(properties: dict[str, str]) -> str:
    """Render properties as a Hadoop configuration XML document."""
    body = "".join(
        f"  <property>\n    <name>{key}</name>\n    <value>{value}</value>\n  </property>\n"
        for key, value in properties.items()
    )
    return f'<?xml version="1.0"?>\n<configuration>\n{body}</configuration>\n'


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "[observability.logging]\\nlevel = 'DEBUG'",
                "development.toml": "[fs.hdfs]\\nhdfssite = '/etc/hdfs-site.xml'",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            toml_file = test_config_dir / filename
            toml_file.write_text(content)

    return _create_toml_files


@pytest.fixture
def write_hadoop_xml() -> Callable[[Path, dict[str, str]], Path]:
    """Factory fixture writing a Hadoop XML file, creating parent directories.

    Usage:
        def test_something(tmp_path, write_hadoop_xml):
            write_hadoop_xml(tmp_path / "conf" / "core-site.xml", {"fs.defaultFS": "hdfs://a"})
    """

    def _write(path: Path, properties: dict[str, str]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(hadoop_xml(properties))
        return path

    return _write


@pytest.fixture(autouse=True)
def clean_hadoop_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove Hadoop-related environment variables for test isolation."""
    for name in HADOOP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear cached settings and login user before and after each test."""
    from hadoopconf.config import get_settings
    from hadoopconf.config.settings import set_toml_config
    from hadoopconf.security import reset_login_user

    get_settings.cache_clear()
    set_toml_config({})
    reset_login_user()
    yield
    get_settings.cache_clear()
    set_toml_config({})
    reset_login_user()


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults after tests that configure logging."""
    yield
    structlog.reset_defaults()
