"""Data models and constants for gitlab-smoke."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_GITLAB_URL = "http://localhost"
API_V4 = "/api/v4"
SIGN_IN_PATH = "/users/sign_in"
PERSONAL_ACCESS_TOKENS_PATH = "/-/profile/personal_access_tokens"

DEFAULT_NETWORK = "local"
DEFAULT_ENVIRONMENT = "dev"
DEFAULT_SERVICE = "gitlab"
SECRET_SUFFIX = "gitlab_api_key"

DEFAULT_TOKEN_FILE = ".gitlab_token"
TOKEN_FILE_KEY = "GITLAB_TOKEN"

DEFAULT_ROOT_LOGIN = "root"
DEFAULT_COMPOSE_SERVICE = "gitlab"
INITIAL_ROOT_PASSWORD_FILE = "/etc/gitlab/initial_root_password"

TOKEN_NAME_PREFIX = "automated-test-token-"
PROJECT_NAME_PREFIX = "automated-test-"
TOKEN_SCOPES = ("api",)

TRUTHY = {"1", "true", "yes", "on"}


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class StoreStatus(Enum):
    STORED = "stored"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Data Classes
# ---------------------------------------------------------------------------


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in TRUTHY


@dataclass(frozen=True)
class Settings:
    """Resolved runtime configuration, built once from the environment."""

    network: str = DEFAULT_NETWORK
    environment: str = DEFAULT_ENVIRONMENT
    service: str = DEFAULT_SERVICE
    gitlab_url: str = DEFAULT_GITLAB_URL
    token_file: str = DEFAULT_TOKEN_FILE
    bws_access_token: str = ""
    bws_project_id: str = ""
    root_login: str = DEFAULT_ROOT_LOGIN
    root_password: str = ""
    compose_service: str = DEFAULT_COMPOSE_SERVICE
    verbose: bool = False
    json_output: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            network=env.get("NETWORK") or DEFAULT_NETWORK,
            environment=env.get("ENVIRONMENT") or DEFAULT_ENVIRONMENT,
            service=env.get("SERVICE") or DEFAULT_SERVICE,
            gitlab_url=(env.get("GITLAB_URL") or DEFAULT_GITLAB_URL).rstrip("/"),
            token_file=env.get("GITLAB_TOKEN_FILE") or DEFAULT_TOKEN_FILE,
            bws_access_token=env.get("BWS_ACCESS_TOKEN", ""),
            bws_project_id=env.get("BWS_PROJECT_ID", ""),
            root_login=env.get("GITLAB_ROOT_LOGIN") or DEFAULT_ROOT_LOGIN,
            root_password=env.get("GITLAB_ROOT_PASSWORD", ""),
            compose_service=env.get("GITLAB_COMPOSE_SERVICE") or DEFAULT_COMPOSE_SERVICE,
            verbose=_flag(env.get("GITLAB_SMOKE_VERBOSE")),
            json_output=_flag(env.get("GITLAB_SMOKE_JSON")),
        )

    @property
    def secret_name(self) -> str:
        return f"{self.network}_{self.environment}_{self.service}_{SECRET_SUFFIX}"

    @property
    def bws_configured(self) -> bool:
        return bool(self.bws_access_token and self.bws_project_id)


@dataclass
class StepResult:
    """Result of a single stage of a command."""

    step: str
    status: str  # "ok", "failed", "skipped", "warning"
    detail: str = ""

    def to_dict(self) -> dict:
        d = {"step": self.step, "status": self.status}
        if self.detail:
            d["detail"] = self.detail
        return d
