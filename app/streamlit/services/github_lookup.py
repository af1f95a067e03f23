"""
GitHub lookup run before ingestion, so typos fail fast instead of after
MindsDB has started provisioning.
"""

import logging
import requests
from github import Auth, Github
from github.GithubException import (
    GithubException,
    RateLimitExceededException,
    UnknownObjectException,
)
from config.settings import GITHUB_TOKEN

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Repository not found on GitHub or is not accessible"
RATE_LIMIT_MESSAGE = (
    "GitHub API rate limit exceeded. Please try again later or set GITHUB_TOKEN."
)
UNAVAILABLE_MESSAGE = "GitHub is currently unavailable. Please try again in a moment."


def check_repository(repo_path: str, token: str | None = None) -> tuple[bool, str]:
    """
    Check that ``owner/repo`` exists and is visible with the given token.

    Args:
        repo_path: ``owner/repo``
        token: Optional GitHub token (defaults to GITHUB_TOKEN)

    Returns:
        tuple: (is_accessible, full_name or error message)
    """
    token = token or GITHUB_TOKEN
    client = Github(auth=Auth.Token(token) if token else None)
    try:
        repo = client.get_repo(repo_path)
        logger.info(f"Found GitHub repository {repo.full_name}")
        return True, repo.full_name
    except UnknownObjectException:
        return False, NOT_FOUND_MESSAGE
    except RateLimitExceededException:
        logger.warning(f"GitHub rate limit hit looking up {repo_path}")
        return False, RATE_LIMIT_MESSAGE
    except GithubException as e:
        logger.error(f"GitHub API error looking up {repo_path}: {e}")
        if e.status and e.status >= 500:
            return False, UNAVAILABLE_MESSAGE
        return False, NOT_FOUND_MESSAGE
    except requests.RequestException as e:
        logger.error(f"Cannot reach GitHub looking up {repo_path}: {e}")
        return False, "Cannot connect to GitHub. Please check your network connection."
