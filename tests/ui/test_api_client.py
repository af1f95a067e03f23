"""
Unit Tests for the backend API client used by the Streamlit app.
"""

import json
from unittest.mock import MagicMock, patch

import requests

from github.GithubException import (
    GithubException,
    RateLimitExceededException,
    UnknownObjectException,
)
from services.api_client import ingest_repository, query_repository
from services.github_lookup import (
    NOT_FOUND_MESSAGE,
    RATE_LIMIT_MESSAGE,
    UNAVAILABLE_MESSAGE,
    check_repository,
)


def _response(status_code, payload):
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(payload).encode()
    response.url = "http://localhost:8000/api/mindsdb/query"
    return response


@patch("services.api_client.requests.post")
def test_query_repository_sends_history(mock_post):
    mock_post.return_value = _response(200, {"success": True, "response": "Hi"})
    history = [{"question": "A", "answer": "B"}]

    result = query_repository("mindsdb/mindsdb", "Why?", history)

    assert result["response"] == "Hi"
    url = mock_post.call_args.args[0]
    assert url.endswith("/api/mindsdb/query")
    assert mock_post.call_args.kwargs["json"] == {
        "repository": "mindsdb/mindsdb",
        "query": "Why?",
        "conversationHistory": history,
    }


@patch("services.api_client.requests.post")
def test_query_repository_returns_backend_error(mock_post):
    mock_post.return_value = _response(500, {"error": "Agent 'x' does not exist."})

    result = query_repository("mindsdb/mindsdb", "Why?")

    assert result == {"success": False, "error": "Agent 'x' does not exist."}


@patch("services.api_client.requests.post")
def test_ingest_repository_connection_error(mock_post):
    mock_post.side_effect = requests.ConnectionError()

    result = ingest_repository("mindsdb/mindsdb")

    assert result["success"] is False
    assert "Cannot connect to backend API" in result["error"]


@patch("services.api_client.requests.post")
def test_ingest_repository_timeout(mock_post):
    mock_post.side_effect = requests.Timeout()

    result = ingest_repository("mindsdb/mindsdb")

    assert result["success"] is False
    assert "timed out" in result["error"]


@patch("services.github_lookup.Github")
def test_check_repository_found(mock_github):
    mock_github.return_value.get_repo.return_value = MagicMock(full_name="mindsdb/mindsdb")

    assert check_repository("MindsDB/mindsdb") == (True, "mindsdb/mindsdb")
    mock_github.return_value.get_repo.assert_called_once_with("MindsDB/mindsdb")


@patch("services.github_lookup.Github")
def test_check_repository_missing(mock_github):
    mock_github.return_value.get_repo.side_effect = UnknownObjectException(404, {}, {})

    assert check_repository("mindsdb/nope") == (False, NOT_FOUND_MESSAGE)


@patch("services.github_lookup.Github")
def test_check_repository_rate_limited(mock_github):
    mock_github.return_value.get_repo.side_effect = RateLimitExceededException(
        403, {"message": "API rate limit exceeded"}, {}
    )

    found, message = check_repository("mindsdb/mindsdb")

    assert found is False
    assert message == RATE_LIMIT_MESSAGE
    assert message != NOT_FOUND_MESSAGE


@patch("services.github_lookup.Github")
def test_check_repository_github_unavailable(mock_github):
    mock_github.return_value.get_repo.side_effect = GithubException(502, {}, {})

    assert check_repository("mindsdb/mindsdb") == (False, UNAVAILABLE_MESSAGE)
