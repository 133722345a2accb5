"""The ambient user and the tokens it holds.

The login user is resolved once per process from ``HADOOP_USER_NAME`` (or the
OS login name) and picks up tokens from ``HADOOP_TOKEN_FILE_LOCATION``.
``do_as`` binds a different current user for the duration of a block; the
binding is per thread/task via contextvars.
"""

import getpass
import os
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from functools import lru_cache

from hadoopconf.exceptions import SecurityContextError
from hadoopconf.observability.logging import get_logger
from hadoopconf.security.credentials import Credentials, Token

logger = get_logger(__name__)

HADOOP_USER_NAME = "HADOOP_USER_NAME"
HADOOP_TOKEN_FILE_LOCATION = "HADOOP_TOKEN_FILE_LOCATION"


class UserGroupInformation:
    """A user together with its credentials."""

    def __init__(self, user_name: str, credentials: Credentials | None = None) -> None:
        if not user_name:
            raise ValueError("user_name must not be empty")
        self.user_name = user_name
        self.credentials = credentials if credentials is not None else Credentials()

    def get_tokens(self) -> list[Token]:
        return self.credentials.all_tokens()

    def add_token(self, token: Token, alias: str | None = None) -> None:
        """Add a token, keyed by alias or by its service when alias is None."""
        self.credentials.add_token(alias if alias is not None else token.service, token)

    def add_credentials(self, credentials: Credentials) -> None:
        self.credentials.add_all(credentials)

    def __repr__(self) -> str:
        return f"UserGroupInformation({self.user_name!r}, tokens={self.credentials.number_of_tokens()})"

    @classmethod
    def create_remote_user(cls, user_name: str) -> "UserGroupInformation":
        """Create a user with no credentials."""
        return cls(user_name)

    @classmethod
    def get_login_user(cls) -> "UserGroupInformation":
        return get_login_user()

    @classmethod
    def get_current_user(cls) -> "UserGroupInformation":
        """Return the user bound by do_as, falling back to the login user.

        Raises:
            SecurityContextError: If no login user can be resolved
        """
        current = _current_user.get()
        if current is not None:
            return current
        return get_login_user()


_current_user: ContextVar[UserGroupInformation | None] = ContextVar(
    "hadoopconf_current_user", default=None
)


def _resolve_user_name() -> str:
    user_name = os.environ.get(HADOOP_USER_NAME)
    if user_name:
        return user_name
    try:
        user_name = getpass.getuser()
    except (OSError, KeyError, ImportError) as exc:
        raise SecurityContextError(f"Unable to determine the login user: {exc}") from exc
    if not user_name:
        raise SecurityContextError("Unable to determine the login user")
    return user_name


@lru_cache(maxsize=1)
def get_login_user() -> UserGroupInformation:
    """Get the process-wide login user.

    The result is cached; call `reset_login_user()` to resolve it again.

    Raises:
        SecurityContextError: If no user name can be determined
        TokenStorageError: If the token file exists but cannot be read
    """
    user = UserGroupInformation(_resolve_user_name())

    token_file = os.environ.get(HADOOP_TOKEN_FILE_LOCATION)
    if token_file:
        user.add_credentials(Credentials.read_token_storage_file(token_file))
        logger.debug(
            "login_user_tokens_loaded",
            user=user.user_name,
            token_file=token_file,
            token_count=user.credentials.number_of_tokens(),
        )

    logger.debug("login_user_resolved", user=user.user_name)
    return user


def reset_login_user() -> None:
    get_login_user.cache_clear()


@contextmanager
def do_as(user: UserGroupInformation) -> Iterator[UserGroupInformation]:
    """Make user the current user inside the block."""
    reset_token = _current_user.set(user)
    try:
        yield user
    finally:
        _current_user.reset(reset_token)
