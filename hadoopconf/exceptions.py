"""Exception hierarchy for hadoopconf.

All errors raised by this package inherit from HadoopConfError. Soft I/O
failures in the codec are turned into ``None`` results and never surface as
exceptions; the classes here cover the failures that do propagate.
"""


class HadoopConfError(Exception):
    """Base exception for all hadoopconf errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ResourceLoadError(HadoopConfError):
    """Raised when an existing configuration resource cannot be parsed."""

    def __init__(self, message: str, resource: str | None = None) -> None:
        super().__init__(message)
        self.resource = resource


class WireFormatError(HadoopConfError):
    """Raised when binary data is truncated, malformed or out of range."""


class StreamCleanupError(HadoopConfError):
    """Raised when releasing a codec stream fails.

    This is fatal: callers are not expected to recover from it.
    """


class SecurityContextError(HadoopConfError):
    """Raised when the current user cannot be resolved."""


class TokenStorageError(SecurityContextError):
    """Raised when a token storage file is malformed or unsupported."""


class SubstitutionDepthError(HadoopConfError):
    """Raised when ``${var}`` expansion does not settle within the depth limit."""
