"""Base class and registry for commands."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from gitlab_smoke.logging_utils import LOGGER_NAME
from gitlab_smoke.models import Settings, StepResult

# ---------------------------------------------------------------------------
# Command Registry
# ---------------------------------------------------------------------------

_command_registry: dict[str, type[Command]] = {}


def register_command(name: str):
    """Decorator to register a command class under a CLI argument value."""

    def decorator(cls):
        _command_registry[name] = cls
        cls.command_name = name
        return cls

    return decorator


def get_command_registry() -> dict[str, type[Command]]:
    """Get the command registry."""
    return _command_registry


# ---------------------------------------------------------------------------
# Command Base Class
# ---------------------------------------------------------------------------


class Command(ABC):
    """Base class for all commands."""

    command_name: str = ""
    # Position in the usage text.
    usage_order: int = 0

    def __init__(self, settings: Settings):
        self.settings = settings
        self.logger = logging.getLogger(LOGGER_NAME)
        self.results: list[StepResult] = []

    @abstractmethod
    def run(self) -> bool:
        """Run the command; True when every required step succeeded."""
        ...

    def _record(self, result: StepResult) -> StepResult:
        self.results.append(result)
        icon = {
            "ok": "\u2713",
            "failed": "\u2717",
            "skipped": "\u2192",
            "warning": "!",
        }.get(result.status, "?")

        level = {"failed": logging.ERROR, "warning": logging.WARNING}.get(result.status, logging.INFO)
        message = f"{icon} {result.step}{': ' + result.detail if result.detail else ''}"

        handler = self.logger.handlers[0] if self.logger.handlers else None
        if handler and getattr(handler.formatter, "json_mode", False):
            # Structured record, serialised by StructuredFormatter
            record = self.logger.makeRecord(LOGGER_NAME, level, "", 0, result.step, (), None)
            record.step_result = result
            self.logger.handle(record)
        else:
            self.logger.log(level, message)
        return result

    def ok(self, step: str, detail: str = "") -> StepResult:
        return self._record(StepResult(step=step, status="ok", detail=detail))

    def fail(self, step: str, detail: str = "") -> StepResult:
        return self._record(StepResult(step=step, status="failed", detail=detail))

    def warn(self, step: str, detail: str = "") -> StepResult:
        return self._record(StepResult(step=step, status="warning", detail=detail))

    def skip(self, step: str, detail: str = "") -> StepResult:
        return self._record(StepResult(step=step, status="skipped", detail=detail))
