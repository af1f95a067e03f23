"""
Validation utilities for input data.
"""
import re
from urllib.parse import urlparse

from config.settings import DEMO_REPOSITORIES

_REPO_PATH_PATTERN = re.compile(r"^[^/]+/[^/]+$")
_URL_PATH_PATTERN = re.compile(r"^/([^/]+/[^/]+)(/|$)")


def is_demo_repository(value: str) -> bool:
    """True for the repository names that switch the chat into demo mode."""
    return (value or "").strip().lower() in DEMO_REPOSITORIES


def extract_repo_path(value: str) -> str | None:
    """
    Extract ``owner/repo`` from user input.

    Accepts:
    - https://github.com/owner/repo (any trailing path, e.g. /tree/main)
    - https://www.github.com/owner/repo
    - owner/repo

    Args:
        value: Repository URL or path as typed by the user

    Returns:
        str: ``owner/repo`` or None if the input is not a GitHub repository
    """
    value = (value or "").strip()
    if not value:
        return None

    parsed = urlparse(value)
    if parsed.scheme in ("http", "https"):
        if parsed.hostname not in ("github.com", "www.github.com"):
            return None
        match = _URL_PATH_PATTERN.match(parsed.path)
        return match.group(1) if match else None

    if _REPO_PATH_PATTERN.match(value):
        return value

    return None


def validate_repository_input(value: str) -> tuple[bool, str]:
    """
    Validate what the user typed on the landing page.

    Returns:
        tuple: (is_valid, message)
    """
    if not value or not value.strip():
        return False, "GitHub repository URL is required."

    if is_demo_repository(value):
        return True, "Demo mode."

    if extract_repo_path(value) is None:
        return False, (
            "Invalid GitHub repository URL. Please use the format: "
            "https://github.com/owner/repo"
        )

    return True, "Valid GitHub repository URL."
