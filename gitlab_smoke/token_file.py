"""Read and write the one-line ``GITLAB_TOKEN=<value>`` file."""

from __future__ import annotations

import os
from pathlib import Path

from gitlab_smoke.models import TOKEN_FILE_KEY

TOKEN_FILE_MODE = 0o600


def write_token(path: str | Path, token: str) -> Path:
    """Write the token, readable by the owner only."""
    path = Path(path)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, TOKEN_FILE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as fh:
        fh.write(f"{TOKEN_FILE_KEY}={token}\n")
    # os.open only applies the mode when it creates the file
    path.chmod(TOKEN_FILE_MODE)
    return path


def read_token(path: str | Path) -> str | None:
    """
    Return the token stored in ``path``, or None if the file is missing or holds no token.

    Unreadable or undecodable files raise ``OSError`` / ``UnicodeDecodeError``.
    """
    path = Path(path)
    if not path.is_file():
        return None
    for line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().partition("=")
        if sep and key.strip() == TOKEN_FILE_KEY:
            value = value.strip().strip("'\"")
            return value or None
    return None
