"""Configuration model exports.

    from hadoopconf.config.models import FileSystemConfig, LoggingConfig
"""

from hadoopconf.config.models.filesystem import FileSystemConfig, HdfsConfig
from hadoopconf.config.models.observability import (
    LoggingConfig,
    ObservabilityConfig,
)

__all__ = [
    # Filesystem
    "FileSystemConfig",
    "HdfsConfig",
    # Observability
    "LoggingConfig",
    "ObservabilityConfig",
]
