"""
AWS CLI runner

Thin wrapper around ``subprocess.run`` for the three AWS CLI calls aws-setter
depends on. Everything that spawns a process goes through ``AwsCli`` so tests
can swap in a fake object with the same three methods.
"""

import logging
import subprocess
from typing import List, Optional

from ..errors import CommandInvocationError

__all__ = ['AwsCli', 'CommandResult']

logger = logging.getLogger(__name__)


class CommandResult:
    """Exit status and raw output of a finished AWS CLI call."""
    def __init__(self, returncode: int, stdout: bytes = b"", stderr: bytes = b""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr

    def __repr__(self) -> str:
        return (f"CommandResult(returncode={self.returncode}, "
                f"stdout={len(self.stdout)} bytes, stderr={len(self.stderr)} bytes)")


class AwsCli:
    """
    Runs AWS CLI commands scoped to a profile.
    """

    def __init__(self, binary: str = "aws", probe_timeout: Optional[float] = 30.0):
        """
        Initialize the runner.

        Args:
            binary: Name or path of the AWS CLI executable
            probe_timeout: Seconds to wait for the session probe, None for no limit
        """
        self.binary = binary
        self.probe_timeout = probe_timeout

    def _run(self, args: List[str], **kwargs) -> subprocess.CompletedProcess:
        cmd = [self.binary] + args
        logger.debug("Running %s", " ".join(cmd[:3]))
        try:
            return subprocess.run(cmd, **kwargs)
        except OSError as e:
            raise CommandInvocationError(f"Could not run '{self.binary}': {e}") from e

    def list_roles(self, profile: str) -> int:
        """
        List IAM roles with the profile's credentials, discarding the output.

        Raises:
            subprocess.TimeoutExpired: If the call outlives ``probe_timeout``
            CommandInvocationError: If the AWS CLI cannot be started
        """
        result = self._run(
            ["iam", "list-roles", "--profile", profile, "--no-cli-pager"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            timeout=self.probe_timeout,
        )
        if result.returncode != 0 and result.stderr:
            logger.debug("Probe for '%s' failed: %s", profile,
                         result.stderr.decode("utf-8", errors="replace").strip())
        return result.returncode

    def sso_login(self, profile: str) -> int:
        """Run the interactive SSO login; the operator's terminal is inherited."""
        result = self._run(["sso", "login", "--profile", profile])
        return result.returncode

    def assume_role(self, profile: str, role_arn: str, session_name: str) -> CommandResult:
        """Call STS AssumeRole, capturing stdout and stderr separately."""
        result = self._run(
            [
                "sts", "assume-role",
                "--profile", profile,
                "--role-arn", role_arn,
                "--role-session-name", session_name,
                "--output", "json",
            ],
            capture_output=True,
        )
        return CommandResult(result.returncode, result.stdout or b"", result.stderr or b"")
