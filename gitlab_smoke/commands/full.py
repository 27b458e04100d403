"""Token creation followed by the API smoke tests."""

from __future__ import annotations

from gitlab_smoke.commands.base import Command, register_command
from gitlab_smoke.commands.create_token import CreateTokenCommand
from gitlab_smoke.commands.smoke_test import SmokeTestCommand
from gitlab_smoke.models import Settings


@register_command("full")
class FullCommand(Command):
    """Create token and run tests"""

    usage_order = 2

    def __init__(
        self,
        settings: Settings,
        create: CreateTokenCommand | None = None,
        test: SmokeTestCommand | None = None,
    ):
        super().__init__(settings)
        self.create = create or CreateTokenCommand(settings)
        self.test = test or SmokeTestCommand(settings)

    def run(self) -> bool:
        if not self.create.run():
            self.results = list(self.create.results)
            self.skip("test", "token creation failed")
            return False

        passed = self.test.run()
        self.results = self.create.results + self.test.results
        return passed
