"""
Session checks and SSO re-authentication.
"""

import logging
import subprocess

from ..errors import ReauthenticationFailed

__all__ = ['is_session_valid', 'reauthenticate']

logger = logging.getLogger(__name__)


def is_session_valid(cli, profile: str) -> bool:
    """
    Check whether the cached session for a profile still works.

    A failed probe is a normal negative result. Only a failure to start the
    AWS CLI at all is raised.

    Args:
        cli: AWS CLI runner (see ``AwsCli``)
        profile: Profile to probe

    Returns:
        True if the probe succeeded, False otherwise
    """
    try:
        returncode = cli.list_roles(profile)
    except subprocess.TimeoutExpired:
        logger.warning("Session probe for '%s' timed out, treating session as expired", profile)
        return False

    valid = returncode == 0
    logger.info("Session for '%s' is %s", profile, "valid" if valid else "not logged in")
    return valid


def reauthenticate(cli, profile: str) -> None:
    """
    Log in to a profile interactively.

    Raises:
        ReauthenticationFailed: If the login flow exits non-zero
    """
    logger.info("Starting SSO login for '%s'", profile)
    returncode = cli.sso_login(profile)
    if returncode != 0:
        raise ReauthenticationFailed(profile, returncode)
