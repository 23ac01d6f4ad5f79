"""
Error types raised by aws-setter.

Each error carries the process exit code the CLI uses for it, so every
failure class maps to one stable, distinct exit status.
"""


class AwsSetterError(Exception):
    """Base class for all aws-setter failures."""
    exit_code = 1


class ConfigLoadError(AwsSetterError):
    """The setter config (email and profile roles) could not be loaded."""
    exit_code = 1


class StoreLoadError(AwsSetterError):
    """The AWS credentials file exists but could not be read or parsed."""
    exit_code = 2


class CommandInvocationError(AwsSetterError):
    """The AWS CLI binary could not be started at all."""
    exit_code = 3


class UnknownProfile(AwsSetterError):
    """The requested profile has no role configured."""
    exit_code = 4

    def __init__(self, profile: str):
        super().__init__(f"Profile '{profile}' has no role configured")
        self.profile = profile


class ReauthenticationFailed(AwsSetterError):
    """Interactive SSO login exited with a non-zero status."""
    exit_code = 5

    def __init__(self, profile: str, returncode: int):
        super().__init__(f"Could not log in to profile '{profile}' (exit code {returncode})")
        self.profile = profile
        self.returncode = returncode


class ExchangeRejected(AwsSetterError):
    """The role could not be assumed; ``stderr`` holds the AWS CLI's text verbatim."""
    exit_code = 6

    def __init__(self, stderr: str):
        super().__init__(f"Role could not be assumed: {' '.join(stderr.split())}")
        self.stderr = stderr


class ExchangeResponseMalformed(AwsSetterError):
    """The assume-role output could not be understood."""
    exit_code = 7

    def __init__(self, reason: str):
        super().__init__(f"Could not handle output: {reason}")
        self.reason = reason


class StoreWriteError(AwsSetterError):
    """Updated credentials could not be written back to disk and are lost."""
    exit_code = 8


class IdentityLookupError(AwsSetterError):
    """The caller identity of a profile could not be determined."""
    exit_code = 9
