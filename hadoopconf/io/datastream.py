"""Hadoop Writable stream primitives.

DataOutput and DataInput wrap a binary stream and speak the encodings used by
Hadoop's ``DataOutputStream``/``WritableUtils``/``Text`` so that configuration
and token blobs are byte-compatible with the JVM side.
"""

import gzip
import struct
import zlib
from collections.abc import Sequence
from types import TracebackType
from typing import BinaryIO, Self

from hadoopconf.exceptions import WireFormatError

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1

_INT = struct.Struct(">i")


def decode_vint_size(first_byte: int) -> int:
    """Return the total encoded length of a VLong given its first byte."""
    if first_byte >= -112:
        return 1
    if first_byte < -120:
        return -119 - first_byte
    return -111 - first_byte


def is_negative_vint(first_byte: int) -> bool:
    """Return True if the VLong starting with first_byte is negative."""
    return first_byte < -120 or -112 <= first_byte < 0


def _encode_utf8(value: str) -> bytes:
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise WireFormatError(f"String is not encodable as UTF-8: {exc}") from exc


class DataOutput:
    """Writes Hadoop Writable primitives to a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def write(self, data: bytes) -> None:
        self._stream.write(data)

    def write_byte(self, value: int) -> None:
        """Write the low 8 bits of value."""
        self._stream.write(bytes((value & 0xFF,)))

    def write_int(self, value: int) -> None:
        """Write a 4-byte big-endian signed int."""
        if not INT_MIN <= value <= INT_MAX:
            raise WireFormatError(f"int out of range: {value}")
        self._stream.write(_INT.pack(value))

    def write_vlong(self, value: int) -> None:
        """Write a zero-compressed variable length long.

        Values in [-112, 127] take a single byte. Larger magnitudes are written
        as a length/sign marker byte followed by big-endian magnitude bytes.
        """
        if not LONG_MIN <= value <= LONG_MAX:
            raise WireFormatError(f"long out of range: {value}")
        if -112 <= value <= 127:
            self.write_byte(value)
            return

        length = -112
        if value < 0:
            value ^= -1
            length = -120

        tmp = value
        while tmp != 0:
            tmp >>= 8
            length -= 1

        self.write_byte(length)

        length = -(length + 120) if length < -120 else -(length + 112)
        for idx in range(length, 0, -1):
            shift = (idx - 1) * 8
            self.write_byte((value >> shift) & 0xFF)

    def write_vint(self, value: int) -> None:
        if not INT_MIN <= value <= INT_MAX:
            raise WireFormatError(f"vint out of range: {value}")
        self.write_vlong(value)

    def write_bytes(self, data: bytes) -> None:
        """Write a VInt length followed by the raw bytes."""
        self.write_vint(len(data))
        self.write(data)

    def write_string(self, value: str) -> None:
        """Write a string the way ``Text.writeString`` does."""
        self.write_bytes(_encode_utf8(value))

    def write_compressed_string(self, value: str | None) -> None:
        """Write a gzip'd UTF-8 string with a 4-byte length, -1 for None."""
        if value is None:
            self.write_int(-1)
            return
        payload = gzip.compress(_encode_utf8(value))
        self.write_int(len(payload))
        self.write(payload)

    def write_compressed_string_array(self, values: Sequence[str | None] | None) -> None:
        if values is None:
            self.write_vint(-1)
            return
        self.write_vint(len(values))
        for value in values:
            self.write_compressed_string(value)

    def getvalue(self) -> bytes:
        """Return everything written so far, for in-memory streams."""
        getvalue = getattr(self._stream, "getvalue", None)
        if getvalue is None:
            raise TypeError(f"{type(self._stream).__name__} does not buffer its output")
        return bytes(getvalue())

    def flush(self) -> None:
        self._stream.flush()

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class DataInput:
    """Reads Hadoop Writable primitives from a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def read_fully(self, size: int) -> bytes:
        """Read exactly size bytes or raise WireFormatError."""
        if size < 0:
            raise WireFormatError(f"negative length: {size}")
        data = self._stream.read(size)
        if data is None or len(data) != size:
            got = 0 if data is None else len(data)
            raise WireFormatError(f"unexpected end of stream: wanted {size} bytes, got {got}")
        return data

    def read_byte(self) -> int:
        """Read one signed byte."""
        value = self.read_fully(1)[0]
        return value - 256 if value > 127 else value

    def read_int(self) -> int:
        return _INT.unpack(self.read_fully(4))[0]

    def read_vlong(self) -> int:
        first_byte = self.read_byte()
        length = decode_vint_size(first_byte)
        if length == 1:
            return first_byte

        value = 0
        for byte in self.read_fully(length - 1):
            value = (value << 8) | byte

        return value ^ -1 if is_negative_vint(first_byte) else value

    def read_vint(self) -> int:
        value = self.read_vlong()
        if not INT_MIN <= value <= INT_MAX:
            raise WireFormatError(f"value too long to fit in integer: {value}")
        return value

    def read_bytes(self) -> bytes:
        return self.read_fully(self.read_vint())

    def read_string(self) -> str:
        raw = self.read_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise WireFormatError(f"invalid UTF-8 in string: {exc}") from exc

    def read_compressed_string(self) -> str | None:
        length = self.read_int()
        if length == -1:
            return None
        payload = self.read_fully(length)
        try:
            return gzip.decompress(payload).decode("utf-8")
        except (OSError, EOFError, zlib.error, UnicodeDecodeError) as exc:
            raise WireFormatError(f"invalid compressed string: {exc}") from exc

    def read_compressed_string_array(self) -> list[str | None] | None:
        count = self.read_vint()
        if count == -1:
            return None
        if count < 0:
            raise WireFormatError(f"invalid array length: {count}")
        return [self.read_compressed_string() for _ in range(count)]

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
