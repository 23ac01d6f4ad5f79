"""
aws-setter: assume IAM roles for AWS profiles and keep the shared
credentials file updated with the temporary credentials.
"""

from .config import SetterConfig
from .credentials import CredentialStore, TemporaryCredentials
from .manager import CredentialManager

__version__ = "0.1.0"

__all__ = [
    'CredentialManager',
    'CredentialStore',
    'SetterConfig',
    'TemporaryCredentials',
]
