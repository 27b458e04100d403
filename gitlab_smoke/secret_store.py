"""Bitwarden Secrets Manager gateway, driven through the ``bws`` CLI."""

from __future__ import annotations

import json
import logging
import os
import shutil
import subprocess

import requests

from gitlab_smoke.client import GitLabClient
from gitlab_smoke.logging_utils import LOGGER_NAME
from gitlab_smoke.models import Settings, StoreStatus

BWS_COMMAND = "bws"


class BitwardenStore:
    """
    Optional remote copy of the GitLab token.

    Every method degrades to "unavailable" instead of raising: the local token
    file stays the source of truth when the secret store cannot be reached.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.secret_name = settings.secret_name
        self.logger = logging.getLogger(LOGGER_NAME)

    def available(self) -> bool:
        """True when the CLI is on PATH and both BWS_ACCESS_TOKEN and BWS_PROJECT_ID are set."""
        if not self.settings.bws_access_token:
            self.logger.warning("BWS_ACCESS_TOKEN not set - Bitwarden Secrets integration disabled")
            return False
        if not self.settings.bws_project_id:
            self.logger.warning("BWS_PROJECT_ID not set - Bitwarden Secrets integration disabled")
            return False
        if shutil.which(BWS_COMMAND) is None:
            self.logger.warning("Bitwarden Secrets CLI (bws) not available")
            return False
        return True

    def _run(self, *args: str) -> subprocess.CompletedProcess | None:
        cmd = [BWS_COMMAND, *args, "--project-id", self.settings.bws_project_id]
        env = {**os.environ, "BWS_ACCESS_TOKEN": self.settings.bws_access_token}
        self.logger.debug(f"Running: {BWS_COMMAND} {args[0]} {args[1]} {self.secret_name}")
        try:
            return subprocess.run(cmd, capture_output=True, text=True, env=env, check=False)
        except (OSError, subprocess.SubprocessError) as e:
            self.logger.warning(f"Could not run {BWS_COMMAND}: {e}")
            return None

    def get_secret(self) -> str | None:
        """Return the stored secret value, or None if it is absent or unreadable."""
        proc = self._run("secret", "get", self.secret_name)
        if proc is None or proc.returncode != 0:
            return None
        try:
            value = json.loads(proc.stdout).get("value")
        except (ValueError, AttributeError):
            return None
        if not value or value == "null":
            return None
        return str(value)

    def find_valid_token(self) -> str | None:
        """Return the stored token if it still authenticates against the GitLab API."""
        self.logger.info("Checking for existing token in Bitwarden Secrets...")
        if not self.available():
            self.logger.info("Bitwarden Secrets unavailable, a new token will be created")
            return None

        token = self.get_secret()
        if token is None:
            self.logger.info("No existing token found in Bitwarden Secrets")
            return None

        self.logger.info("Found existing token in Bitwarden Secrets, validating...")
        version = self._probe_version(token)
        if version is None:
            self.logger.warning("Existing token is invalid, will create new one")
            return None

        self.logger.info(f"Existing token is valid (GitLab version: {version})")
        return token

    def _probe_version(self, token: str) -> str | None:
        client = GitLabClient(self.settings.gitlab_url, token)
        try:
            return client.version()
        except (requests.RequestException, ValueError) as e:
            self.logger.debug(f"Version probe with stored token failed: {e}")
            return None
        finally:
            client.close()

    def store(self, token: str) -> StoreStatus:
        """Create or update the secret. Best effort: failures are reported, never raised."""
        if not self.available():
            self.logger.warning("Token only stored locally")
            return StoreStatus.UNAVAILABLE

        self.logger.info("Storing token in Bitwarden Secrets...")
        existing = self._run("secret", "get", self.secret_name)
        if existing is not None and existing.returncode == 0:
            self.logger.info("Updating existing secret in Bitwarden")
            proc = self._run("secret", "edit", self.secret_name, "--value", token)
            failure = "Failed to update token in Bitwarden Secrets"
        else:
            self.logger.info("Creating new secret in Bitwarden")
            proc = self._run("secret", "create", self.secret_name, token)
            failure = "Failed to store token in Bitwarden Secrets"

        if proc is None or proc.returncode != 0:
            stderr = proc.stderr.strip() if proc is not None and proc.stderr else ""
            self.logger.warning(f"{failure}{': ' + stderr if stderr else ''}")
            return StoreStatus.FAILED

        self.logger.info(f"Token stored in Bitwarden Secrets as {self.secret_name}")
        return StoreStatus.STORED
