"""
Profile listing

Describes the profiles configured in aws-setter, enriched with what the AWS
config file says about them (region, SSO) and whether the credentials file
already holds an entry for them.
"""

import configparser
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from .config import SetterConfig
from .credentials import CredentialStore

__all__ = [
    'list_profiles',
    'get_current_profile',
    'load_aws_config',
    'ProfileInfo'
]

logger = logging.getLogger(__name__)


class ProfileInfo:
    """Contains information about a configured profile."""
    def __init__(self, name: str, role_arn: str, region: Optional[str] = None,
                 is_sso: bool = False, is_active: bool = False,
                 has_credentials: bool = False, sso_account_id: Optional[str] = None):
        self.name = name
        self.role_arn = role_arn
        self.region = region
        self.is_sso = is_sso
        self.is_active = is_active
        self.has_credentials = has_credentials
        self.sso_account_id = sso_account_id

    @property
    def role_name(self) -> str:
        # arn:aws:iam::ACCOUNT:role/path/NAME
        return self.role_arn.rsplit("/", 1)[-1]

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "role_arn": self.role_arn,
            "region": self.region,
            "is_sso": self.is_sso,
            "is_active": self.is_active,
            "has_credentials": self.has_credentials,
            "sso_account_id": self.sso_account_id,
        }

    def __str__(self) -> str:
        """Return string representation of the profile info."""
        status = []
        if self.is_active:
            status.append("ACTIVE")
        if self.is_sso:
            status.append("SSO")
        if not self.has_credentials:
            status.append("NO CREDENTIALS")

        status_str = f" ({', '.join(status)})" if status else ""
        region_str = f" - {self.region}" if self.region else ""
        account_str = f" - Account: {self.sso_account_id}" if self.sso_account_id else ""

        return f"{self.name}{region_str}{account_str} [{self.role_name}]{status_str}"


def get_current_profile() -> Optional[str]:
    """
    Get the name of the currently active AWS profile.

    Returns:
        Name of the active profile or None if using default credentials
    """
    profile = os.environ.get("AWS_PROFILE")
    if profile:
        return profile

    profile = os.environ.get("AWS_DEFAULT_PROFILE")
    if profile:
        return profile

    return None


def load_aws_config(path: Path) -> Dict[str, Dict[str, str]]:
    """
    Read profile sections from the AWS config file.

    Args:
        path: Path to the AWS config file

    Returns:
        Mapping of profile name to its settings; empty if the file is missing
        or cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        return {}

    config = configparser.ConfigParser(interpolation=None, default_section="\x00")
    try:
        config.read(path, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable AWS config %s: %s", path, e)
        return {}

    profiles = {}
    for section in config.sections():
        if section == "default":
            name = "default"
        elif section.startswith("profile "):
            name = section[8:].strip()  # Remove "profile " prefix
        else:
            # sso-session and services sections are not profiles
            continue
        profiles[name] = dict(config.items(section))

    return profiles


def list_profiles(config: SetterConfig, store: CredentialStore,
                  aws_config_path: Path) -> List[ProfileInfo]:
    """
    List the profiles configured in aws-setter.

    Args:
        config: Loaded setter config
        store: Loaded credentials file
        aws_config_path: Path to the AWS config file

    Returns:
        List of ProfileInfo objects, sorted by name
    """
    aws_profiles = load_aws_config(aws_config_path)
    current_profile = get_current_profile()

    profiles = []
    for name in config.list_profiles():
        settings = aws_profiles.get(name, {})
        is_sso = "sso_start_url" in settings or "sso_session" in settings

        profiles.append(ProfileInfo(
            name=name,
            role_arn=config.get_role(name),
            region=settings.get("region"),
            is_sso=is_sso,
            is_active=(current_profile == name),
            has_credentials=(name in store),
            sso_account_id=settings.get("sso_account_id")
        ))

    return profiles
