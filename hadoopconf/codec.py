"""Binary transport of Configuration objects.

``serialize_hadoop_conf`` and ``deserialize_hadoop_conf`` move a
configuration across a process boundary using the Configuration Writable
format. I/O failures of the write or read itself are reported as ``None``.
Failures while releasing the streams are not recoverable and raise
StreamCleanupError.
"""

import io
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from typing import Protocol, TypeVar

from hadoopconf.configuration import Configuration
from hadoopconf.exceptions import StreamCleanupError, WireFormatError
from hadoopconf.io.datastream import DataInput, DataOutput
from hadoopconf.observability.logging import get_logger

logger = get_logger(__name__)

# Key under which callers embed a serialized configuration in a larger payload
HADOOP_CONF_BYTES = "hadoop.conf.bytes"


class _Closeable(Protocol):
    def close(self) -> None: ...


T = TypeVar("T", bound=_Closeable)


@contextmanager
def _released(stream: T) -> Iterator[T]:
    """Yield stream and always close it, escalating close failures."""
    try:
        yield stream
    finally:
        try:
            stream.close()
        except OSError as exc:
            raise StreamCleanupError(
                f"Failed to release {type(stream).__name__}: {exc}"
            ) from exc


def serialize_hadoop_conf(conf: Configuration | None) -> bytes | None:
    """Serialize conf to bytes.

    Returns:
        The encoded configuration, or None if conf is not a Configuration or
        writing it failed
    """
    if not isinstance(conf, Configuration):
        logger.debug("hadoop_conf_serialize_skipped", reason="not a configuration")
        return None

    with ExitStack() as stack:
        sink = stack.enter_context(_released(io.BytesIO()))
        out = stack.enter_context(_released(DataOutput(sink)))
        try:
            conf.write(out)
        except (OSError, WireFormatError) as exc:
            logger.debug("hadoop_conf_serialize_failed", error=str(exc))
            return None
        out.flush()
        return sink.getvalue()


def deserialize_hadoop_conf(
    data: bytes | bytearray | memoryview | None,
) -> Configuration | None:
    """Rebuild a Configuration from bytes written by serialize_hadoop_conf.

    Returns:
        The decoded configuration, or None if data is not bytes-like or
        reading failed
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        logger.debug("hadoop_conf_deserialize_skipped", reason="not bytes-like")
        return None

    hadoop_conf = Configuration(load_defaults=False)

    with ExitStack() as stack:
        source = stack.enter_context(_released(io.BytesIO(bytes(data))))
        inp = stack.enter_context(_released(DataInput(source)))
        try:
            hadoop_conf.read_fields(inp)
        except (OSError, WireFormatError) as exc:
            logger.warning("hadoop_conf_deserialize_failed", error=str(exc))
            return None
        return hadoop_conf
