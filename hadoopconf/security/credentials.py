"""Tokens and credentials in Hadoop's Writable and token storage formats.

A token storage file (the file named by ``HADOOP_TOKEN_FILE_LOCATION``) is
the ``HDTS`` magic, a version byte and the Credentials Writable:

    VInt token count, then per token: alias (Text), Token
    VInt secret key count, then per key: alias (Text), VInt length, bytes

Only the Writable version (0) is supported.
"""

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from hadoopconf.exceptions import TokenStorageError, WireFormatError
from hadoopconf.io.datastream import DataInput, DataOutput

TOKEN_STORAGE_MAGIC = b"HDTS"
TOKEN_STORAGE_VERSION = 0


@dataclass(frozen=True)
class Token:
    """A credential with an opaque identifier and password.

    ``kind`` names the system the token authenticates against, ``service``
    the address it is valid for.
    """

    identifier: bytes
    password: bytes
    kind: str
    service: str = ""

    def write(self, out: DataOutput) -> None:
        out.write_bytes(self.identifier)
        out.write_bytes(self.password)
        out.write_string(self.kind)
        out.write_string(self.service)

    @classmethod
    def read(cls, inp: DataInput) -> "Token":
        identifier = inp.read_bytes()
        password = inp.read_bytes()
        kind = inp.read_string()
        service = inp.read_string()
        return cls(identifier=identifier, password=password, kind=kind, service=service)

    def __repr__(self) -> str:
        return f"Token(kind={self.kind!r}, service={self.service!r})"


@dataclass
class Credentials:
    """Tokens and secret keys keyed by alias."""

    tokens: dict[str, Token] = field(default_factory=dict)
    secret_keys: dict[str, bytes] = field(default_factory=dict, repr=False)

    def add_token(self, alias: str, token: Token) -> None:
        self.tokens[alias] = token

    def get_token(self, alias: str) -> Token | None:
        return self.tokens.get(alias)

    def all_tokens(self) -> list[Token]:
        return list(self.tokens.values())

    def number_of_tokens(self) -> int:
        return len(self.tokens)

    def add_secret_key(self, alias: str, key: bytes) -> None:
        self.secret_keys[alias] = key

    def get_secret_key(self, alias: str) -> bytes | None:
        return self.secret_keys.get(alias)

    def add_all(self, other: "Credentials") -> None:
        """Copy every token and secret key from other, overwriting aliases."""
        self.tokens.update(other.tokens)
        self.secret_keys.update(other.secret_keys)

    def write(self, out: DataOutput) -> None:
        out.write_vint(len(self.tokens))
        for alias, token in self.tokens.items():
            out.write_string(alias)
            token.write(out)

        out.write_vint(len(self.secret_keys))
        for alias, key in self.secret_keys.items():
            out.write_string(alias)
            out.write_bytes(key)

    def read_fields(self, inp: DataInput) -> None:
        self.tokens.clear()
        self.secret_keys.clear()

        for _ in range(inp.read_vint()):
            alias = inp.read_string()
            self.tokens[alias] = Token.read(inp)

        for _ in range(inp.read_vint()):
            alias = inp.read_string()
            self.secret_keys[alias] = inp.read_bytes()

    def write_token_storage(self, stream: BinaryIO) -> None:
        out = DataOutput(stream)
        out.write(TOKEN_STORAGE_MAGIC)
        out.write_byte(TOKEN_STORAGE_VERSION)
        self.write(out)

    @classmethod
    def read_token_storage(cls, stream: BinaryIO) -> "Credentials":
        """Read credentials in token storage format.

        Raises:
            TokenStorageError: On a bad magic, an unsupported version or a
                truncated/malformed body
        """
        inp = DataInput(stream)
        try:
            magic = inp.read_fully(len(TOKEN_STORAGE_MAGIC))
            if magic != TOKEN_STORAGE_MAGIC:
                raise TokenStorageError("Bad header found in token storage")
            version = inp.read_byte()
            if version != TOKEN_STORAGE_VERSION:
                raise TokenStorageError(f"Unsupported token storage version {version}")

            credentials = cls()
            credentials.read_fields(inp)
        except WireFormatError as exc:
            raise TokenStorageError(f"Malformed token storage: {exc.message}") from exc
        return credentials

    def write_token_storage_file(self, path: str | Path) -> None:
        with Path(path).open("wb") as f:
            self.write_token_storage(f)

    @classmethod
    def read_token_storage_file(cls, path: str | Path) -> "Credentials":
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise TokenStorageError(f"Unable to read token storage file {path}: {exc}") from exc
        return cls.read_token_storage(io.BytesIO(data))
