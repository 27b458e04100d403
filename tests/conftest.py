"""Shared test fixtures for gitlab-smoke tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gitlab_smoke.logging_utils import LOGGER_NAME
from gitlab_smoke.models import Settings

# Constants for use in tests - pytest makes conftest.py fixtures available,
# but these constants need to be imported directly from tests
MOCK_GITLAB_URL = "https://gitlab.example.com"
MOCK_API_URL = f"{MOCK_GITLAB_URL}/api/v4"

BWS_ENV = ("BWS_ACCESS_TOKEN", "BWS_PROJECT_ID")


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers main() attached so later tests don't write to a closed capture stream."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def token_path(tmp_path) -> Path:
    return tmp_path / ".gitlab_token"


@pytest.fixture
def settings(token_path) -> Settings:
    """Settings pointing at the mock server, Bitwarden disabled."""
    return Settings(gitlab_url=MOCK_GITLAB_URL, token_file=str(token_path), root_password="s3cret")


@pytest.fixture
def bws_settings(token_path) -> Settings:
    """Settings with Bitwarden credentials configured."""
    return Settings(
        gitlab_url=MOCK_GITLAB_URL,
        token_file=str(token_path),
        root_password="s3cret",
        bws_access_token="bws-access",
        bws_project_id="project-1",
    )


@pytest.fixture
def cli_env(monkeypatch, token_path):
    """Environment for driving main() against the mock server."""
    for name in BWS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GITLAB_URL", MOCK_GITLAB_URL)
    monkeypatch.setenv("GITLAB_TOKEN_FILE", str(token_path))
    monkeypatch.setenv("GITLAB_ROOT_PASSWORD", "s3cret")
    return token_path


def sign_in_html(csrf: str = "login-csrf") -> str:
    return (
        "<html><head>"
        f'<meta name="csrf-token" content="{csrf}" />'
        "</head><body><form>"
        f'<input type="hidden" name="authenticity_token" value="{csrf}" autocomplete="off" />'
        "</form></body></html>"
    )


def token_page_html(csrf: str = "pat-csrf") -> str:
    return (
        '<form class="js-new-access-token-form" action="/-/profile/personal_access_tokens" method="post">'
        f'<input type="hidden" name="authenticity_token" value="{csrf}" autocomplete="off" />'
        "</form>"
    )


def created_token_html(token: str = "glpat-abcdefghijklmnop") -> str:
    return (
        '<div class="created-personal-access-token-container">'
        '<input type="text" id="created-personal-access-token" class="form-control" '
        f'readonly="readonly" value="{token}" />'
        "</div>"
    )
