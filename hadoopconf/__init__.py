"""hadoopconf: Hadoop configuration resolution and transport.

Usage:
    from hadoopconf import HADOOP_CONF_BYTES, get_hadoop_configuration, serialize_hadoop_conf
    from hadoopconf.config import get_settings

    conf = get_hadoop_configuration(get_settings())
    payload = {HADOOP_CONF_BYTES: serialize_hadoop_conf(conf)}
"""

from hadoopconf.codec import (
    HADOOP_CONF_BYTES,
    deserialize_hadoop_conf,
    serialize_hadoop_conf,
)
from hadoopconf.configuration import Configuration, HdfsConfiguration
from hadoopconf.resolver import ConfigResolver, get_hadoop_configuration
from hadoopconf.security import has_hdfs_delegation_token

__all__ = [
    "HADOOP_CONF_BYTES",
    "ConfigResolver",
    "Configuration",
    "HdfsConfiguration",
    "deserialize_hadoop_conf",
    "get_hadoop_configuration",
    "has_hdfs_delegation_token",
    "serialize_hadoop_conf",
]
