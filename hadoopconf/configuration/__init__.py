"""Hadoop-style configuration store.

    from hadoopconf.configuration import HdfsConfiguration

    conf = HdfsConfiguration()
    conf.add_resource("/etc/hadoop/conf/core-site.xml")
    conf.get("fs.defaultFS")
"""

from hadoopconf.configuration.configuration import Configuration, HdfsConfiguration
from hadoopconf.configuration.resources import Resource, load_resource

__all__ = [
    "Configuration",
    "HdfsConfiguration",
    "Resource",
    "load_resource",
]
