"""Commands for gitlab-smoke."""

from gitlab_smoke.commands.base import Command, get_command_registry, register_command

# Import all commands to register them
from gitlab_smoke.commands.create_token import CreateTokenCommand
from gitlab_smoke.commands.full import FullCommand
from gitlab_smoke.commands.smoke_test import SmokeTestCommand

__all__ = [
    "Command",
    "register_command",
    "get_command_registry",
    "CreateTokenCommand",
    "SmokeTestCommand",
    "FullCommand",
]
