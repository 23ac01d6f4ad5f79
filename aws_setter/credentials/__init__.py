"""
Temporary credential handling: session checks, role assumption through the
AWS CLI and persistence into the shared credentials file.
"""

from .aws_cli import AwsCli, CommandResult
from .session import is_session_valid, reauthenticate
from .exchange import (
    exchange,
    parse_assume_role_response,
    TemporaryCredentials,
    AssumedRoleUser,
    AssumeRoleResponse
)
from .store import CredentialStore, merge_and_persist
