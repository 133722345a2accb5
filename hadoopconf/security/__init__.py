"""Security context: users, tokens and credentials."""

from hadoopconf.security.credentials import Credentials, Token
from hadoopconf.security.delegation import (
    HDFS_DELEGATION_TOKEN_KIND,
    has_hdfs_delegation_token,
)
from hadoopconf.security.ugi import (
    UserGroupInformation,
    do_as,
    get_login_user,
    reset_login_user,
)

__all__ = [
    "HDFS_DELEGATION_TOKEN_KIND",
    "Credentials",
    "Token",
    "UserGroupInformation",
    "do_as",
    "get_login_user",
    "has_hdfs_delegation_token",
    "reset_login_user",
]
