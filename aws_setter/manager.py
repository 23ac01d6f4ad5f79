"""
Credential Manager

Ties the credential steps together: probe the session, log in again when it
has expired, assume the role and write the credentials for the profile.
"""

import logging

from .config import SetterConfig
from .credentials import (
    AwsCli,
    AssumeRoleResponse,
    CredentialStore,
    exchange,
    is_session_valid,
    merge_and_persist,
    reauthenticate,
)
from .errors import UnknownProfile

__all__ = ['CredentialManager']

logger = logging.getLogger(__name__)


class CredentialManager:
    """
    Assumes roles for profiles and keeps the credentials file up to date.
    """

    def __init__(self, store: CredentialStore, cli=None):
        """
        Initialize the manager.

        Args:
            store: Loaded credentials file
            cli: AWS CLI runner, defaults to ``AwsCli()``
        """
        self.store = store
        self.cli = cli if cli is not None else AwsCli()

    def assume(self, profile: str, role_arn: str, session_name: str) -> AssumeRoleResponse:
        """
        Assume ``role_arn`` through ``profile`` and store the credentials under ``profile``.

        Every step runs once; the first failure is raised and later steps are skipped.

        Returns:
            The assume-role response, including the expiration

        Raises:
            CommandInvocationError: If the AWS CLI cannot be started
            ReauthenticationFailed: If the session had expired and login failed
            ExchangeRejected: If the role could not be assumed
            ExchangeResponseMalformed: If the AWS CLI output could not be parsed
            StoreWriteError: If the credentials file could not be written
        """
        if not is_session_valid(self.cli, profile):
            reauthenticate(self.cli, profile)

        response = exchange(self.cli, profile, role_arn, session_name)
        merge_and_persist(self.store, profile, response.credentials)
        logger.info("Stored new credentials for '%s' in %s", profile, self.store.path)
        return response

    def assume_profile(self, config: SetterConfig, profile: str) -> AssumeRoleResponse:
        """
        Assume the role configured for ``profile``, using the configured email as session name.

        Raises:
            UnknownProfile: If the profile has no role, before anything is run
        """
        role_arn = config.get_role(profile)
        if role_arn is None:
            raise UnknownProfile(profile)
        return self.assume(profile, role_arn, config.email)
