"""Create a GitLab personal access token through the web UI."""

from __future__ import annotations

import subprocess
import time
from pathlib import Path

import requests

from gitlab_smoke.client import GitLabWebSession
from gitlab_smoke.commands.base import Command, register_command
from gitlab_smoke.models import INITIAL_ROOT_PASSWORD_FILE, TOKEN_NAME_PREFIX, TOKEN_SCOPES, Settings, StoreStatus
from gitlab_smoke.scrape import extract_authenticity_token, extract_created_token, extract_root_password
from gitlab_smoke.secret_store import BitwardenStore
from gitlab_smoke.token_file import write_token


def mask_token(token: str) -> str:
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:4]}...{token[-4:]}"


@register_command("create-token")
class CreateTokenCommand(Command):
    """Create a GitLab Personal Access Token"""

    usage_order = 0

    def __init__(self, settings: Settings, store: BitwardenStore | None = None):
        super().__init__(settings)
        self.store = store or BitwardenStore(settings)

    def run(self) -> bool:
        self.logger.info("Creating GitLab Personal Access Token automatically...")

        existing = self.store.find_valid_token()
        if existing:
            path = self._save(existing)
            if path is None:
                return False
            self.ok("reuse-token", f"using existing valid token from Bitwarden Secrets, saved to {path}")
            return True

        password = self.root_password()
        if not password:
            self.fail("root-password", "Could not extract root password")
            return False
        self.ok("root-password")

        with GitLabWebSession(self.settings.gitlab_url) as web:
            try:
                token = self._create_via_web(web, password)
            except requests.RequestException as e:
                self.fail("web-session", f"Request to {self.settings.gitlab_url} failed: {e}")
                return False
        if token is None:
            return False

        path = self._save(token)
        if path is None:
            return False
        self.ok("write-token-file", str(path))

        status = self.store.store(token)
        if status is StoreStatus.STORED:
            self.ok("store-secret", self.settings.secret_name)
        else:
            self.warn("store-secret", f"{status.value}, token only stored locally")

        self.logger.info(f"Token saved to {path}")
        return True

    def _save(self, token: str) -> Path | None:
        try:
            return write_token(self.settings.token_file, token)
        except OSError as e:
            self.fail("write-token-file", f"Could not write {self.settings.token_file}: {e}")
            self.logger.error(f"Token {mask_token(token)} was not saved locally")
            return None

    def _create_via_web(self, web: GitLabWebSession, password: str) -> str | None:
        self.logger.info(f"Logging in as {self.settings.root_login}...")
        login_csrf = extract_authenticity_token(web.sign_in_page())
        resp = web.sign_in(self.settings.root_login, password, authenticity_token=login_csrf)
        self.ok("login", f"HTTP {resp.status_code}")

        self.logger.info("Getting authenticity token...")
        csrf = extract_authenticity_token(web.personal_access_tokens_page())
        if not csrf:
            self.fail("authenticity-token", "Could not get authenticity token")
            return None
        self.ok("authenticity-token")

        name = f"{TOKEN_NAME_PREFIX}{int(time.time())}"
        self.logger.info(f"Creating Personal Access Token '{name}'...")
        resp = web.create_personal_access_token(csrf, name, scopes=TOKEN_SCOPES)
        token = extract_created_token(resp.text)
        if not token:
            self.fail("create-token", "Could not create Personal Access Token")
            self.logger.debug(f"Response: {resp.text[:1000]}")
            return None
        self.ok("create-token", f"{name}: {mask_token(token)}")
        return token

    def root_password(self) -> str | None:
        """Return the configured root password, or read it from the GitLab container."""
        if self.settings.root_password:
            return self.settings.root_password

        cmd = [
            "docker",
            "compose",
            "exec",
            "-T",
            self.settings.compose_service,
            "grep",
            "Password:",
            INITIAL_ROOT_PASSWORD_FILE,
        ]
        self.logger.debug(f"Running: {' '.join(cmd)}")
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except (OSError, subprocess.SubprocessError) as e:
            self.logger.debug(f"docker compose exec failed: {e}")
            return None
        if proc.returncode != 0:
            self.logger.debug(f"docker compose exec exited {proc.returncode}: {proc.stderr.strip()}")
            return None
        return extract_root_password(proc.stdout)
