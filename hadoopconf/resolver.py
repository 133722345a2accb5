"""Resolution of the effective Hadoop configuration for this process.

Sources are applied in a fixed order, each one overriding keys set by the
ones before it:

1. the built-in ``hdfs-default.xml`` and ``hdfs-site.xml`` resources
2. the file named by ``fs.hdfs.hdfsdefault`` in the process configuration
3. the file named by ``fs.hdfs.hdfssite`` in the process configuration
4. ``core-site.xml`` and ``hdfs-site.xml`` from each existing candidate
   directory: ``$HADOOP_HOME/conf``, ``$HADOOP_HOME/etc/hadoop``,
   ``$HADOOP_CONF_DIR`` and ``fs.hdfs.hadoopconf``

Files from steps 2 and 3 are added without an existence check; missing ones
are skipped by the configuration store when it loads. Candidate directories
and the files inside them are only added when they exist.
"""

import os
from typing import Any, Protocol

from hadoopconf.config.settings import (
    HDFS_DEFAULT_CONFIG,
    HDFS_SITE_CONFIG,
    PATH_HADOOP_CONFIG,
)
from hadoopconf.configuration import HdfsConfiguration
from hadoopconf.observability.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAMES = ("core-site.xml", "hdfs-site.xml")


class ProcessConfig(Protocol):
    """Named string lookups on the process configuration."""

    def get_string(self, key: str, default: str | None = None) -> str | None: ...


class DiagnosticSink(Protocol):
    """Receives notes about which resources were or were not found."""

    def debug(self, event: str, **kwargs: Any) -> Any: ...


class ConfigResolver:
    """Builds an HdfsConfiguration from every configured source."""

    def __init__(self, sink: DiagnosticSink | None = None) -> None:
        self._sink: DiagnosticSink = sink if sink is not None else logger

    def candidate_directories(self, process_config: ProcessConfig) -> list[str | None]:
        """Return the four candidate directories in precedence order.

        A slot is None when its source is not configured.
        """
        conf_dir: str | None = None
        etc_dir: str | None = None
        hadoop_home = os.environ.get("HADOOP_HOME")
        if hadoop_home is not None:
            conf_dir = f"{hadoop_home}/conf"
            etc_dir = f"{hadoop_home}/etc/hadoop"  # hadoop 2.2+

        return [
            conf_dir,
            etc_dir,
            os.environ.get("HADOOP_CONF_DIR"),
            process_config.get_string(PATH_HADOOP_CONFIG),
        ]

    def resolve(self, process_config: ProcessConfig) -> HdfsConfiguration:
        """Build the effective configuration.

        Never fails because a source is missing; with no sources at all the
        result holds only the built-in defaults.
        """
        result = HdfsConfiguration()
        found = False

        hdfs_default_path = process_config.get_string(HDFS_DEFAULT_CONFIG)
        if hdfs_default_path is not None:
            result.add_resource(hdfs_default_path)
            self._sink.debug("hdfs_default_path_configured", path=hdfs_default_path)
            found = True
        else:
            self._sink.debug("hdfs_default_path_not_configured", key=HDFS_DEFAULT_CONFIG)

        hdfs_site_path = process_config.get_string(HDFS_SITE_CONFIG)
        if hdfs_site_path is not None:
            result.add_resource(hdfs_site_path)
            self._sink.debug("hdfs_site_path_configured", path=hdfs_site_path)
            found = True
        else:
            self._sink.debug("hdfs_site_path_not_configured", key=HDFS_SITE_CONFIG)

        for candidate in self.candidate_directories(process_config):
            if not candidate or not os.path.exists(candidate):
                continue
            for file_name in CONFIG_FILE_NAMES:
                config_file = f"{candidate}/{file_name}"
                if os.path.exists(config_file):
                    result.add_resource(config_file)
                    self._sink.debug("hadoop_config_file_added", path=config_file)
                    found = True

        if not found:
            self._sink.debug(
                "hadoop_configuration_not_found",
                methods=["process configuration", "environment variables"],
            )

        return result


def get_hadoop_configuration(
    process_config: ProcessConfig,
    sink: DiagnosticSink | None = None,
) -> HdfsConfiguration:
    """Resolve the effective Hadoop configuration for process_config."""
    return ConfigResolver(sink).resolve(process_config)
