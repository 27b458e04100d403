"""CLI entry point for gitlab-smoke."""

from __future__ import annotations

import argparse
import sys

# Ensure all commands are registered by importing the commands package
import gitlab_smoke.commands  # noqa: F401
from gitlab_smoke.commands import Command, get_command_registry
from gitlab_smoke.logging_utils import setup_logging
from gitlab_smoke.models import Settings

DEFAULT_COMMAND = "test"


def _ordered_commands() -> list[type[Command]]:
    return sorted(get_command_registry().values(), key=lambda cmd_cls: cmd_cls.usage_order)


def usage_text(prog: str = "gitlab-smoke") -> str:
    commands = _ordered_commands()
    names = "|".join(cmd_cls.command_name for cmd_cls in commands)
    lines = [f"Usage: {prog} {{{names}}}"]
    width = max(len(cmd_cls.command_name) for cmd_cls in commands) + 1
    for cmd_cls in commands:
        lines.append(f"  {cmd_cls.command_name + ':':<{width}} {(cmd_cls.__doc__ or '').strip()}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitlab-smoke",
        description="Create a GitLab personal access token and smoke-test the GitLab API with it.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
{usage_text()}

Environment:
    NETWORK, ENVIRONMENT, SERVICE  - secret name parts (default: local, dev, gitlab)
    BWS_ACCESS_TOKEN, BWS_PROJECT_ID - Bitwarden Secrets credentials (optional)
    GITLAB_URL                     - GitLab instance URL (default: http://localhost)
    GITLAB_TOKEN_FILE              - token file (default: .gitlab_token)
    GITLAB_ROOT_PASSWORD           - root password (default: read from the gitlab container)
""",
    )
    parser.add_argument("command", nargs="?", default=DEFAULT_COMMAND, help="Command to run (default: test)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args, extra = parser.parse_known_args(argv)

    registry = get_command_registry()
    if extra or args.command not in registry:
        print(usage_text(parser.prog), file=sys.stderr)
        return 1

    settings = Settings.from_env()
    logger = setup_logging(json_mode=settings.json_output, verbose=settings.verbose)
    logger.debug(f"GitLab: {settings.gitlab_url}, secret name: {settings.secret_name}")

    command = registry[args.command](settings)
    try:
        succeeded = command.run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    return 0 if succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
