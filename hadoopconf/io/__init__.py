"""Binary stream primitives compatible with Hadoop Writables."""

from hadoopconf.io.datastream import DataInput, DataOutput

__all__ = ["DataInput", "DataOutput"]
