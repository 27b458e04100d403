"""GitLab API and web-session clients."""

from __future__ import annotations

import logging
from typing import Any

import requests

from gitlab_smoke.logging_utils import LOGGER_NAME
from gitlab_smoke.models import API_V4, PERSONAL_ACCESS_TOKENS_PATH, SIGN_IN_PATH


class GitLabClient:
    """Thin wrapper around GitLab REST API v4 authenticated with a personal access token."""

    def __init__(self, base_url: str, token: str):
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}{API_V4}"
        self.session = requests.Session()
        self.session.headers.update(
            {
                "PRIVATE-TOKEN": token,
                "Content-Type": "application/json",
            }
        )
        self.logger = logging.getLogger(LOGGER_NAME)

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """Make a single HTTP request; errors are raised, never retried."""
        url = f"{self.api_url}{endpoint}"
        self.logger.debug(f"{method.upper()} {url} {kwargs.get('params', '')} {kwargs.get('json', '')}")
        resp = self.session.request(method, url, **kwargs)
        if resp.status_code >= 400:
            self.logger.error(f"API error {resp.status_code}: {resp.text[:500]}")
        resp.raise_for_status()
        return resp

    def get(self, endpoint: str, params: dict | None = None) -> Any:
        return self._request("GET", endpoint, params=params).json()

    def post(self, endpoint: str, data: dict | None = None) -> Any:
        return self._request("POST", endpoint, json=data).json()

    def delete(self, endpoint: str, params: dict | None = None) -> requests.Response:
        return self._request("DELETE", endpoint, params=params)

    def close(self) -> None:
        self.session.close()

    # -- Smoke-test helpers --

    def version(self) -> str | None:
        """Return the GitLab version string, or None when the answer carries none."""
        data = self.get("/version")
        if not isinstance(data, dict):
            return None
        version = data.get("version")
        return str(version) if version else None

    def create_project(self, name: str, visibility: str = "private") -> dict:
        return self.post("/projects", data={"name": name, "visibility": visibility})

    def delete_project(self, project_id: int) -> requests.Response:
        return self.delete(f"/projects/{project_id}")


class GitLabWebSession:
    """
    Cookie-backed session against the GitLab web UI (not the API).

    Holds the session cookies between the sign-in form and the personal access
    token page. Use as a context manager so the cookie jar is always dropped.
    """

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.logger = logging.getLogger(LOGGER_NAME)

    def __enter__(self) -> GitLabWebSession:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.cookies.clear()
        self.session.close()

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        self.logger.debug(f"{method.upper()} {url}")
        resp = self.session.request(method, url, **kwargs)
        self.logger.debug(f"{method.upper()} {url} -> {resp.status_code}")
        return resp

    def sign_in_page(self) -> str:
        return self._request("GET", SIGN_IN_PATH).text

    def sign_in(self, login: str, password: str, authenticity_token: str | None = None) -> requests.Response:
        form = {"user[login]": login, "user[password]": password}
        if authenticity_token:
            form["authenticity_token"] = authenticity_token
        return self._request("POST", SIGN_IN_PATH, data=form)

    def personal_access_tokens_page(self) -> str:
        return self._request("GET", PERSONAL_ACCESS_TOKENS_PATH).text

    def create_personal_access_token(
        self, authenticity_token: str, name: str, scopes: tuple[str, ...] = ("api",), expires_at: str = ""
    ) -> requests.Response:
        form: list[tuple[str, str]] = [
            ("authenticity_token", authenticity_token),
            ("personal_access_token[name]", name),
            ("personal_access_token[expires_at]", expires_at),
        ]
        form.extend(("personal_access_token[scopes][]", scope) for scope in scopes)
        return self._request("POST", PERSONAL_ACCESS_TOKENS_PATH, data=form)
