"""Shared test fixtures for the Askora test suite."""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Backend modules import as app.*, the Streamlit front end from its own directory.
# The Streamlit folder goes last so its app.py never shadows the app package.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.append(str(project_root / "app" / "streamlit"))

from app.config import Settings  # noqa: E402


class FakeMindsDB:
    """
    In-memory stand-in for the MindsDB HTTP API, used through httpx.MockTransport.

    Args:
        fail_on: Steps answering with HTTP 500 ("database", "knowledge_base",
            "insert", "agent", "drop")
        already_exists: Steps answering with an "already exists" error
        agent_exists: Whether GET on the agent returns 200
        database_ready: Whether GET on the database returns 200
        completions: Responses for the completions endpoint, in order; an
            Exception instance is raised instead of answered
    """

    def __init__(
        self,
        fail_on=(),
        already_exists=(),
        agent_exists=False,
        database_ready=True,
        completions=(),
    ):
        self.fail_on = set(fail_on)
        self.already_exists = set(already_exists)
        self.agent_exists = agent_exists
        self.database_ready = database_ready
        self.completions = list(completions)
        self.requests = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def sql(self):
        return [body["query"] for method, path, body in self.requests if path == "/api/sql/query"]

    @property
    def drops(self):
        return [query for query in self.sql if query.startswith("DROP")]

    @property
    def completion_requests(self):
        return [body for method, path, body in self.requests if path.endswith("/completions")]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        path = request.url.path
        self.requests.append((request.method, path, body))

        if path == "/api/sql/query":
            query = body["query"]
            if query.startswith("DROP"):
                return self._answer("drop", sql=True)
            if query.startswith("CREATE DATABASE"):
                return self._answer("database", sql=True)
            return httpx.Response(200, json={"type": "ok"})

        if path.startswith("/api/databases/"):
            return httpx.Response(200 if self.database_ready else 404, json={})

        if path.endswith("/completions"):
            result = self.completions.pop(0)
            if isinstance(result, Exception):
                raise result
            return result

        if "/knowledge_bases" in path:
            step = "insert" if request.method == "PUT" else "knowledge_base"
            return self._answer(step)

        if "/agents" in path:
            if request.method == "GET":
                return httpx.Response(200 if self.agent_exists else 404, json={})
            return self._answer("agent")

        return httpx.Response(404, text="not found")

    def _answer(self, step: str, sql: bool = False) -> httpx.Response:
        if step in self.fail_on:
            return httpx.Response(500, text=f"{step} exploded")
        if step in self.already_exists:
            if sql:
                return httpx.Response(
                    200, json={"type": "error", "error_message": f"{step} already exists"}
                )
            return httpx.Response(409, text=f"{step} already exists")
        return httpx.Response(200, json={"type": "ok"})


class SleepRecorder:
    """Records requested delays instead of waiting."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        openai_api_key="sk-test",
        mindsdb_url="http://mindsdb.test",
        mindsdb_project="mindsdb",
        github_token="",
    )


@pytest.fixture
def sleep():
    return SleepRecorder()
