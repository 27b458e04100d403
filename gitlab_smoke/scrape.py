"""
Fixed-pattern extraction from GitLab web pages.

Each pattern depends on GitLab's markup and lives in its own function so a
markup change means replacing exactly one of them.
"""

from __future__ import annotations

import html
import json
import re

_AUTHENTICITY_INPUT = re.compile(r'name="authenticity_token"\s+value="([^"]*)"')
_CSRF_META = re.compile(r'<meta\s+name="csrf-token"\s+content="([^"]*)"')
_CREATED_TOKEN = re.compile(r'id="created-personal-access-token"[^>]*?\bvalue="([^"]*)"')
_PASSWORD_LINE = re.compile(r"^Password:[ \t]*(\S+)", re.MULTILINE)


def extract_authenticity_token(page: str) -> str | None:
    """Return the hidden authenticity_token form value, or the csrf-token meta tag as a fallback."""
    match = _AUTHENTICITY_INPUT.search(page) or _CSRF_META.search(page)
    if not match or not match.group(1):
        return None
    return html.unescape(match.group(1))


def extract_created_token(body: str) -> str | None:
    """
    Return the freshly created personal access token from the creation response.

    Older GitLab renders the token in an ``<input id="created-personal-access-token">``;
    newer releases answer the form post with JSON carrying ``new_token``.
    """
    match = _CREATED_TOKEN.search(body)
    if match and match.group(1):
        return html.unescape(match.group(1))

    try:
        data = json.loads(body)
    except ValueError:
        return None
    if isinstance(data, dict) and data.get("new_token"):
        return str(data["new_token"])
    return None


def extract_root_password(text: str) -> str | None:
    """Return the password from an ``initial_root_password`` file (``Password: <value>`` line)."""
    match = _PASSWORD_LINE.search(text)
    return match.group(1) if match else None
