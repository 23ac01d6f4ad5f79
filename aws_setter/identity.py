"""
Caller identity

Checks which principal a profile's stored credentials belong to.
"""

import logging
from typing import Dict, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import IdentityLookupError

__all__ = ['get_caller_identity', 'describe_arn']

logger = logging.getLogger(__name__)


def describe_arn(arn: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Work out the authentication method and identity name from an ARN.

    Args:
        arn: Caller ARN as returned by STS

    Returns:
        Tuple of (auth_method, user_identity)
    """
    auth_method = None
    user_identity = None

    if ":assumed-role/" in arn:
        auth_method = "role"
    elif ":user/" in arn:
        auth_method = "api_key"
    elif ":federated-user/" in arn:
        auth_method = "federated"

    if auth_method:
        # Format: arn:aws:sts::ACCOUNT:assumed-role/ROLE/SESSION
        parts = arn.split("/")
        if len(parts) >= 2:
            user_identity = parts[1]

    return auth_method, user_identity


def get_caller_identity(profile: str) -> Dict[str, Optional[str]]:
    """
    Call STS GetCallerIdentity with a profile's credentials.

    Args:
        profile: AWS profile name

    Returns:
        Dict with profile, account, arn, user_id, auth_method and identity

    Raises:
        IdentityLookupError: If the profile is unknown or the call fails
    """
    try:
        session = boto3.Session(profile_name=profile)
        identity = session.client("sts").get_caller_identity()
    except ClientError as e:
        error = e.response.get("Error", {})
        raise IdentityLookupError(
            f"STS rejected credentials of '{profile}': {error.get('Code')}: {error.get('Message')}"
        ) from e
    except BotoCoreError as e:
        raise IdentityLookupError(f"Could not check credentials of '{profile}': {e}") from e

    arn = identity.get("Arn", "")
    auth_method, user_identity = describe_arn(arn)
    logger.debug("Profile '%s' resolves to %s", profile, arn)

    return {
        "profile": profile,
        "account": identity.get("Account"),
        "arn": arn,
        "user_id": identity.get("UserId"),
        "auth_method": auth_method,
        "identity": user_identity,
    }
