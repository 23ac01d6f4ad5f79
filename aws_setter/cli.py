"""
aws-setter CLI

Assume the roles configured for your AWS profiles and store the temporary
credentials in the AWS credentials file.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import SetterConfig
from .credentials import AwsCli, CredentialStore
from .errors import AwsSetterError
from .identity import get_caller_identity
from .logging_utils import configure_logging
from .manager import CredentialManager
from .profiles import list_profiles
from .settings import load_settings

logger = logging.getLogger(__name__)


def format_profile_list(profiles):
    """Format profiles for display."""
    if not profiles:
        return "No profiles configured."

    output = []
    for p in profiles:
        marker = "→ " if p.is_active else "  "
        output.append(f"{marker}{p}")

    return "\n".join(output)


def handle_list(args, context):
    """Handle the list command."""
    profiles = list_profiles(context["config"], context["store"], context["settings"].aws_config_path)

    if args.json:
        print(json.dumps([p.to_dict() for p in profiles], indent=2))
        return

    print("Profiles configured:")
    print()
    print(format_profile_list(profiles))


def handle_assume(args, context):
    """Handle the assume command."""
    settings = context["settings"]
    cli = AwsCli(settings.aws_cli, probe_timeout=settings.probe_timeout)
    manager = CredentialManager(context["store"], cli)

    response = manager.assume_profile(context["config"], args.profile)

    print(f"✅ Assumed {response.assumed_role_user.arn}")
    print(f"   Credentials for '{args.profile}' written to {settings.credentials_path}")
    print(f"   Expires: {response.credentials.expiration}")


def handle_whoami(args, context):
    """Handle the whoami command."""
    identity = get_caller_identity(args.profile)

    if args.json:
        print(json.dumps(identity, indent=2))
        return

    print(f"Profile:  {identity['profile']}")
    print(f"Account:  {identity['account']}")
    print(f"ARN:      {identity['arn']}")
    if identity["auth_method"]:
        print(f"Identity: {identity['identity']} ({identity['auth_method']})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aws-setter",
        description="Assume configured roles and store temporary credentials for AWS profiles"
    )
    parser.add_argument("--config", "-c",
                        help="Path to the aws-setter config file (default: ~/.config/aws_setter.yml)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # List command
    list_parser = subparsers.add_parser("list", help="List configured profiles")
    list_parser.add_argument("--json", action="store_true", help="Output in JSON format")
    list_parser.set_defaults(func=handle_list)

    # Assume command
    assume_parser = subparsers.add_parser("assume", help="Assume the role configured for a profile")
    assume_parser.add_argument("--profile", "-p", required=True, help="Profile name to assume")
    assume_parser.set_defaults(func=handle_assume)

    # Whoami command
    whoami_parser = subparsers.add_parser("whoami", help="Show who the stored credentials of a profile belong to")
    whoami_parser.add_argument("--profile", "-p", required=True, help="Profile to check")
    whoami_parser.add_argument("--json", action="store_true", help="Output in JSON format")
    whoami_parser.set_defaults(func=handle_whoami)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        settings = load_settings(args.config)
        configure_logging("DEBUG" if args.verbose else settings.log_level)
        logger.debug("Using %r", settings)

        context = {
            "settings": settings,
            "config": SetterConfig.load(settings.setter_config_path),
            "store": CredentialStore.load(settings.credentials_path),
        }
        args.func(args, context)
    except AwsSetterError as e:
        print(f"❌ {e}", file=sys.stderr)
        return e.exit_code

    return 0


if __name__ == "__main__":
    sys.exit(main())
