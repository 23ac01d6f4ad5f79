"""
Credential Exchange

Exchanges a role ARN for temporary credentials through
``aws sts assume-role`` and parses the JSON response.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict

from ..errors import ExchangeRejected, ExchangeResponseMalformed

__all__ = [
    'TemporaryCredentials',
    'AssumedRoleUser',
    'AssumeRoleResponse',
    'exchange',
    'parse_assume_role_response',
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemporaryCredentials:
    """Short-lived credentials returned by STS."""

    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: str

    def __repr__(self) -> str:
        return (
            f"TemporaryCredentials(access_key_id={self.access_key_id[:8]}***, "
            f"expiration={self.expiration})"
        )


@dataclass(frozen=True)
class AssumedRoleUser:
    assumed_role_id: str
    arn: str


@dataclass(frozen=True)
class AssumeRoleResponse:
    credentials: TemporaryCredentials
    assumed_role_user: AssumedRoleUser


def _require_fields(data: Any, section: str, fields: tuple) -> Dict[str, str]:
    if not isinstance(data, dict):
        raise ExchangeResponseMalformed(f"'{section}' is missing or not an object")

    values = {}
    for field in fields:
        value = data.get(field)
        if not isinstance(value, str):
            raise ExchangeResponseMalformed(f"'{section}.{field}' is missing or not a string")
        values[field] = value
    return values


def parse_assume_role_response(text: str) -> AssumeRoleResponse:
    """
    Parse the JSON printed by ``aws sts assume-role``.

    Args:
        text: The command's stdout

    Returns:
        AssumeRoleResponse with credentials and assumed-role metadata

    Raises:
        ExchangeResponseMalformed: If the text is not JSON of the expected shape
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExchangeResponseMalformed(f"invalid JSON ({e})") from e

    if not isinstance(payload, dict):
        raise ExchangeResponseMalformed("response is not a JSON object")

    creds = _require_fields(
        payload.get("Credentials"), "Credentials",
        ("AccessKeyId", "SecretAccessKey", "SessionToken", "Expiration"),
    )
    user = _require_fields(
        payload.get("AssumedRoleUser"), "AssumedRoleUser",
        ("AssumedRoleId", "Arn"),
    )

    return AssumeRoleResponse(
        credentials=TemporaryCredentials(
            access_key_id=creds["AccessKeyId"],
            secret_access_key=creds["SecretAccessKey"],
            session_token=creds["SessionToken"],
            expiration=creds["Expiration"],
        ),
        assumed_role_user=AssumedRoleUser(
            assumed_role_id=user["AssumedRoleId"],
            arn=user["Arn"],
        ),
    )


def exchange(cli, profile: str, role_arn: str, session_name: str) -> AssumeRoleResponse:
    """
    Assume a role and return the temporary credentials.

    Anything on stderr fails the exchange, whatever the exit code, because
    the AWS CLI reports expired sessions and denied calls there.

    Args:
        cli: AWS CLI runner (see ``AwsCli``)
        profile: Profile whose session performs the call
        role_arn: ARN of the role to assume
        session_name: Role session name, shown in CloudTrail

    Raises:
        ExchangeRejected: If the AWS CLI reported an error
        ExchangeResponseMalformed: If stdout could not be understood
    """
    logger.info("Assuming %s via profile '%s'", role_arn, profile)
    result = cli.assume_role(profile, role_arn, session_name)

    stderr = result.stderr.decode("utf-8", errors="replace")
    if stderr.strip():
        raise ExchangeRejected(stderr)

    if result.returncode != 0:
        raise ExchangeRejected(f"aws sts assume-role exited with code {result.returncode}")

    try:
        stdout = result.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ExchangeResponseMalformed("stdout is not valid UTF-8") from e

    response = parse_assume_role_response(stdout)
    logger.info("Assumed %s, credentials expire at %s",
                response.assumed_role_user.arn, response.credentials.expiration)
    return response
