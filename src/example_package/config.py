"""Central configuration and API token handling for the packaging walkthrough.

This module centralizes configuration constants and the token load/persist
logic so the upload step can obtain credentials without duplicating code.

Security and persistence notes
- Do not commit the token file. It lives outside the project by default
    (``~/.config/example-package/token``).
- ``PYPI_API_TOKEN`` takes precedence over the persisted file so CI jobs can
    inject the token without touching disk.
"""
from __future__ import annotations

import os
import logging
from dataclasses import dataclass
from pathlib import Path


# App constants
APP_NAME = "example-package"

# Upload authentication: the index accepts API tokens as a password paired
# with this fixed username.
TOKEN_USERNAME = "__token__"
TOKEN_PREFIX = "pypi-"


# Index config
# Override at runtime with PACKAGE_REPOSITORY / PACKAGE_INDEX_URL to switch
# between TestPyPI and a real index.
DEFAULT_REPOSITORY = os.environ.get("PACKAGE_REPOSITORY", "testpypi")
DEFAULT_INDEX_URL = os.environ.get("PACKAGE_INDEX_URL", "https://test.pypi.org/simple/")


# Scaffold defaults
DEFAULT_USERNAME = os.environ.get("PACKAGE_USERNAME", "YOUR_USERNAME_HERE")
DEFAULT_AUTHOR_NAME = os.environ.get("PACKAGE_AUTHOR_NAME", "Example Author")
DEFAULT_AUTHOR_EMAIL = os.environ.get("PACKAGE_AUTHOR_EMAIL", "author@example.com")
DEFAULT_VERSION = "0.0.1"
DEFAULT_REQUIRES_PYTHON = ">=3.9"
DEFAULT_LICENSE = "MIT"


# Base paths
CREDENTIALS_DIR = Path(
    os.environ.get("PACKAGE_CREDENTIALS_DIR", Path.home() / ".config" / APP_NAME)
)
TOKEN_FILE = CREDENTIALS_DIR / "token"


# Basic logging setup; main will configure handlers/level.
DEFAULT_LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


@dataclass
class TokenFiles:
    token_file: Path = TOKEN_FILE


def _check_token(token: str) -> str:
    token = token.strip()
    if not token.startswith(TOKEN_PREFIX):
        raise ValueError(
            f"API token must start with '{TOKEN_PREFIX}'. Copy the full value shown "
            "once on the index's account page, including the prefix."
        )
    return token


def get_api_token(files: TokenFiles | None = None) -> str:
    """
    Load the index API token used by the upload step.

    Lookup order: the ``PYPI_API_TOKEN`` environment variable, then the
    persisted token file. The token is paired with :data:`TOKEN_USERNAME`
    at upload time.
    """
    files = files or TokenFiles()
    logger = logging.getLogger(APP_NAME)

    env_token = os.environ.get("PYPI_API_TOKEN", "")
    if env_token.strip():
        logger.debug("Using API token from PYPI_API_TOKEN")
        return _check_token(env_token)

    if not files.token_file.exists():
        raise FileNotFoundError(
            f"No API token found. Set PYPI_API_TOKEN or run 'example-package save-token' "
            f"to store one at {files.token_file}. Create the token on the index's account "
            "settings page after verifying your email address."
        )
    token = files.token_file.read_text(encoding="utf-8")
    logger.debug("Loaded API token from %s", files.token_file)
    return _check_token(token)


def save_api_token(token: str, files: TokenFiles | None = None) -> Path:
    """Persist ``token`` for later uploads and return the file path."""
    files = files or TokenFiles()
    token = _check_token(token)

    files.token_file.parent.mkdir(parents=True, exist_ok=True)
    # Owner read/write only, from creation; fchmod covers a pre-existing file.
    fd = os.open(files.token_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    os.fchmod(fd, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as fh:
        fh.write(token)
    logging.getLogger(APP_NAME).info("Saved API token to %s", files.token_file)
    return files.token_file
