"""
API client for the Askora backend.
Makes real HTTP calls to the FastAPI backend at app/api/routes.
"""

from typing import Any
import requests
import logging
from config.settings import API_BASE_URL, API_TIMEOUT

logger = logging.getLogger(__name__)


def _extract_error_detail(e: requests.HTTPError) -> str:
    """Pull a human-readable error string from an HTTPError response."""
    try:
        return e.response.json().get("error", str(e))
    except Exception:
        return str(e)


def _api_post(endpoint: str, json: dict | None = None) -> requests.Response:
    """Make a POST request to the backend API."""
    url = f"{API_BASE_URL}{endpoint}"
    return requests.post(url, json=json, timeout=API_TIMEOUT)


def ingest_repository(repository: str) -> dict[str, Any]:
    """
    Provision the MindsDB knowledge base and agent for a repository.

    Calls: POST /api/mindsdb/ingest

    Returns:
        dict with keys: success (bool), plus the backend fields on success
        or error (str) on failure
    """
    try:
        resp = _api_post("/api/mindsdb/ingest", json={"repository": repository})
        resp.raise_for_status()
        return resp.json()
    except requests.ConnectionError:
        return {"success": False, "error": "Cannot connect to backend API. Is it running?"}
    except requests.Timeout:
        return {"success": False, "error": "Ingestion request timed out. Please try again."}
    except requests.HTTPError as e:
        detail = _extract_error_detail(e)
        logger.error(f"Ingestion of {repository} failed: {detail}")
        return {"success": False, "error": detail or "Failed to ingest repository"}
    except Exception as e:
        logger.error(f"Unexpected error ingesting {repository}: {e}")
        return {"success": False, "error": f"Unexpected error: {e}"}


def query_repository(
    repository: str, query: str, conversation_history: list | None = None
) -> dict[str, Any]:
    """
    Ask the repository's agent a question.

    Args:
        repository: ``owner/repo``
        query: User's question
        conversation_history: Recent exchanges [{"question": str, "answer": str}]

    Calls: POST /api/mindsdb/query

    Returns:
        dict with keys: success (bool), response (str) on success or error (str)
    """
    payload = {
        "repository": repository,
        "query": query,
        "conversationHistory": conversation_history or [],
    }

    try:
        resp = _api_post("/api/mindsdb/query", json=payload)
        resp.raise_for_status()
        return resp.json()
    except requests.ConnectionError:
        return {"success": False, "error": "Cannot connect to backend API. Is it running?"}
    except requests.Timeout:
        return {"success": False, "error": "The request timed out. Please try again."}
    except requests.HTTPError as e:
        detail = _extract_error_detail(e)
        logger.error(f"Query for {repository} failed: {detail}")
        return {"success": False, "error": detail or "Failed to get response"}
    except Exception as e:
        logger.error(f"Unexpected error querying {repository}: {e}")
        return {"success": False, "error": f"Unexpected error: {e}"}
