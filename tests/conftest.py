"""
Shared test fixtures and configuration.
"""

import json
import pytest
import os
import sys

# Add the parent directory to the path so we can import the aws_setter package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from aws_setter.credentials import CommandResult

ROLE_ARN = "arn:aws:iam::123456789012:role/Developer"
SESSION_NAME = "jane.doe@example.com"

ASSUME_ROLE_OUTPUT = json.dumps({
    "Credentials": {
        "AccessKeyId": "ASIA2NEWKEY",
        "SecretAccessKey": "new/secret+key",
        "SessionToken": "FwoGZXIvYXdzEnewtoken%==",
        "Expiration": "2026-10-19T13:00:00+00:00"
    },
    "AssumedRoleUser": {
        "AssumedRoleId": "AROAEXAMPLE:jane.doe@example.com",
        "Arn": "arn:aws:sts::123456789012:assumed-role/Developer/jane.doe@example.com"
    }
}, indent=4)

CREDENTIALS_FILE = """[default]
aws_access_key_id = A1
aws_secret_access_key = S1
aws_session_token = T1

[prod]
aws_access_key_id = AKIAPROD
aws_secret_access_key = prodsecret
region = eu-west-1

[legacy]
aws_access_key_id = AKIALEGACY
aws_secret_access_key = legacy%secret
"""


class FakeAwsCli:
    """Stands in for AwsCli, returning scripted results and recording calls."""

    def __init__(self, probe_returncode=0, login_returncode=0, assume_result=None):
        self.probe_returncode = probe_returncode
        self.login_returncode = login_returncode
        self.assume_result = assume_result or CommandResult(0, ASSUME_ROLE_OUTPUT.encode("utf-8"))
        self.calls = []

    def list_roles(self, profile):
        self.calls.append(("list_roles", profile))
        if isinstance(self.probe_returncode, Exception):
            raise self.probe_returncode
        return self.probe_returncode

    def sso_login(self, profile):
        self.calls.append(("sso_login", profile))
        return self.login_returncode

    def assume_role(self, profile, role_arn, session_name):
        self.calls.append(("assume_role", profile, role_arn, session_name))
        return self.assume_result

    def called(self, name):
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def fake_cli():
    """Fake AWS CLI with a valid session and a successful assume-role."""
    return FakeAwsCli()


@pytest.fixture
def credentials_path(tmp_path):
    """Credentials file with three profiles."""
    path = tmp_path / ".aws" / "credentials"
    path.parent.mkdir()
    path.write_text(CREDENTIALS_FILE)
    return path


@pytest.fixture
def setter_config_path(tmp_path):
    """aws-setter config with two profiles."""
    path = tmp_path / "aws_setter.yml"
    path.write_text(
        "email: jane.doe@example.com\n"
        "profiles:\n"
        f"  default: {ROLE_ARN}\n"
        "  newprofile: arn:aws:iam::210987654321:role/ReadOnly\n"
    )
    return path
