"""
Setter Config

Reads the operator's aws-setter config: the email used as role session name
and the role ARN to assume for each profile.

Example ``~/.config/aws_setter.yml``::

    email: jane.doe@example.com
    profiles:
      dev: arn:aws:iam::111111111111:role/Developer
      prod: arn:aws:iam::222222222222:role/ReadOnly
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from ..errors import ConfigLoadError

__all__ = ['SetterConfig']

logger = logging.getLogger(__name__)


class SetterConfig:
    """Operator email plus the profile to role ARN mapping."""
    def __init__(self, email: str, profiles: Dict[str, str]):
        self.email = email
        self.profiles = dict(profiles)

    @classmethod
    def from_dict(cls, data) -> "SetterConfig":
        """
        Validate parsed config data.

        Raises:
            ConfigLoadError: If keys are missing or have the wrong type
        """
        if not isinstance(data, dict):
            raise ConfigLoadError("Config must be a mapping with 'email' and 'profiles'")

        email = data.get("email")
        if not isinstance(email, str) or not email:
            raise ConfigLoadError("Config key 'email' must be a non-empty string")

        profiles = data.get("profiles")
        if not isinstance(profiles, dict):
            raise ConfigLoadError("Config key 'profiles' must be a mapping of profile to role ARN")

        for name, role_arn in profiles.items():
            if not isinstance(name, str) or not isinstance(role_arn, str):
                raise ConfigLoadError(f"Profile '{name}' must map to a role ARN string")

        return cls(email, profiles)

    @classmethod
    def load(cls, path: Path) -> "SetterConfig":
        """
        Load the config from a YAML (or JSON) file.

        Raises:
            ConfigLoadError: If the file is missing, unreadable or invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigLoadError(f"Config file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigLoadError(f"Could not read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"Could not parse config file {path}: {e}") from e

        config = cls.from_dict(data)
        logger.debug("Loaded %d profiles from %s", len(config.profiles), path)
        return config

    def get_role(self, profile: str) -> Optional[str]:
        """Role ARN configured for a profile, or None."""
        return self.profiles.get(profile)

    def list_profiles(self) -> List[str]:
        """Configured profile names, sorted."""
        return sorted(self.profiles)
