"""Filesystem configuration models.

The field names mirror the dotted process-configuration keys, so the TOML
table ``[fs.hdfs]`` with ``hdfssite = "..."`` answers the key
``fs.hdfs.hdfssite``.
"""

from pydantic import BaseModel, Field


class HdfsConfig(BaseModel):
    """Locations of Hadoop configuration files for HDFS access."""

    hdfsdefault: str | None = Field(
        default=None,
        description="Path to an hdfs-default.xml file",
    )
    hdfssite: str | None = Field(
        default=None,
        description="Path to an hdfs-site.xml file",
    )
    hadoopconf: str | None = Field(
        default=None,
        description="Directory holding core-site.xml and hdfs-site.xml",
    )


class FileSystemConfig(BaseModel):
    """Filesystem configuration."""

    hdfs: HdfsConfig = Field(
        default_factory=HdfsConfig,
        description="HDFS settings",
    )
