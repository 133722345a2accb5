"""HDFS delegation token lookup."""

from hadoopconf.security.ugi import UserGroupInformation

HDFS_DELEGATION_TOKEN_KIND = "HDFS_DELEGATION_TOKEN"


def has_hdfs_delegation_token() -> bool:
    """Indicate whether the current user has an HDFS delegation token.

    Raises:
        SecurityContextError: If the current user cannot be resolved; this is
            not caught here
    """
    user = UserGroupInformation.get_current_user()
    for token in user.get_tokens():
        if token.kind == HDFS_DELEGATION_TOKEN_KIND:
            return True
    return False
