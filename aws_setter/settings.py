"""
Paths and tunables for aws-setter.

Every value can be overridden from the environment. The AWS file locations
honour the same variables the AWS CLI and boto3 use, so all three tools agree
on which files they touch.
"""

import os
from pathlib import Path
from typing import Optional

from .errors import ConfigLoadError

__all__ = [
    'Settings',
    'load_settings',
    'get_setter_config_path',
    'get_aws_credentials_path',
    'get_aws_config_path',
]

DEFAULT_AWS_CLI = "aws"
DEFAULT_PROBE_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "WARNING"


def get_setter_config_path() -> Path:
    """Get the path to the aws-setter config file."""
    env_path = os.environ.get("AWS_SETTER_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "aws_setter.yml"


def get_aws_credentials_path() -> Path:
    """Get the path to the AWS credentials file."""
    env_path = os.environ.get("AWS_SHARED_CREDENTIALS_FILE")
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".aws" / "credentials"


def get_aws_config_path() -> Path:
    """Get the path to the AWS config file."""
    env_path = os.environ.get("AWS_CONFIG_FILE")
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".aws" / "config"


class Settings:
    """Resolved runtime settings."""
    def __init__(self, setter_config_path: Path, credentials_path: Path,
                 aws_config_path: Path, aws_cli: str = DEFAULT_AWS_CLI,
                 probe_timeout: Optional[float] = DEFAULT_PROBE_TIMEOUT,
                 log_level: str = DEFAULT_LOG_LEVEL):
        self.setter_config_path = setter_config_path
        self.credentials_path = credentials_path
        self.aws_config_path = aws_config_path
        self.aws_cli = aws_cli
        self.probe_timeout = probe_timeout
        self.log_level = log_level

    def __repr__(self) -> str:
        return (f"Settings(setter_config_path={self.setter_config_path}, "
                f"credentials_path={self.credentials_path}, "
                f"aws_config_path={self.aws_config_path}, aws_cli={self.aws_cli!r}, "
                f"probe_timeout={self.probe_timeout}, log_level={self.log_level!r})")


def _probe_timeout_from_env() -> Optional[float]:
    raw = os.environ.get("AWS_SETTER_PROBE_TIMEOUT")
    if raw is None or raw == "":
        return DEFAULT_PROBE_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise ConfigLoadError(f"AWS_SETTER_PROBE_TIMEOUT must be a number, got {raw!r}")
    # zero or negative disables the timeout
    return value if value > 0 else None


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Build settings from the environment.

    Args:
        config_path: Explicit setter config path (the ``--config`` flag), which
            takes precedence over ``AWS_SETTER_CONFIG``

    Returns:
        Settings object
    """
    setter_config_path = Path(config_path).expanduser() if config_path else get_setter_config_path()

    return Settings(
        setter_config_path=setter_config_path,
        credentials_path=get_aws_credentials_path(),
        aws_config_path=get_aws_config_path(),
        aws_cli=os.environ.get("AWS_SETTER_AWS_CLI") or DEFAULT_AWS_CLI,
        probe_timeout=_probe_timeout_from_env(),
        log_level=os.environ.get("AWS_SETTER_LOG_LEVEL") or DEFAULT_LOG_LEVEL,
    )
