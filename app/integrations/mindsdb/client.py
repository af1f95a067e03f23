"""
MindsDB HTTP Client

Responsibilities:
- SQL statements through the generic query endpoint (CREATE/DROP)
- Knowledge base REST operations (create, ingest URLs)
- Agent REST operations (lookup, create, completions)
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class MindsDBAPIError(Exception):
    """Raised when MindsDB answers with a non-success status or a SQL error."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"MindsDB API error ({status_code}): {body}")
        self.status_code = status_code
        self.body = body

    @property
    def already_exists(self) -> bool:
        """True when the failure only means the resource is already there."""
        return self.status_code == 409 or "already exists" in self.body.lower()


class MindsDBClient:
    """
    Async MindsDB API client.

    Use as an async context manager; one HTTP connection pool is opened per block:

        async with MindsDBClient(url, project) as mindsdb:
            await mindsdb.create_knowledge_base("kb_owner_repo")
    """

    def __init__(
        self,
        base_url: str,
        project: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.project = project
        self.timeout = timeout
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "MindsDBClient":
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers={"Content-Type": "application/json"},
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            raise RuntimeError("MindsDBClient must be used inside 'async with'")
        return self._http

    def _project_path(self, *parts: str) -> str:
        return "/".join(["/api/projects", self.project, *parts])

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = await self.http.request(method, path, **kwargs)
        if response.is_error:
            raise MindsDBAPIError(response.status_code, response.text)
        return response

    # ── SQL ────────────────────────────────────────────────────────────

    async def run_sql(self, query: str) -> Dict[str, Any]:
        """
        Execute a SQL statement.

        MindsDB reports SQL failures with HTTP 200 and ``{"type": "error"}``,
        those are raised as MindsDBAPIError as well.
        """
        logger.debug(f"Running SQL: {query}")
        response = await self._request("POST", "/api/sql/query", json={"query": query})

        try:
            data = response.json()
        except ValueError:
            return {}

        if isinstance(data, dict) and data.get("type") == "error":
            raise MindsDBAPIError(
                response.status_code, str(data.get("error_message", "SQL error"))
            )
        return data

    async def create_github_database(
        self, name: str, repository: str, token: Optional[str] = None
    ) -> None:
        parameters = {"repository": repository}
        if token:
            parameters["token"] = token

        await self.run_sql(
            f"CREATE DATABASE {name} WITH ENGINE='github', "
            f"PARAMETERS={json.dumps(parameters)};"
        )

    async def drop_database(self, name: str) -> None:
        await self.run_sql(f"DROP DATABASE {name};")

    async def drop_knowledge_base(self, name: str) -> None:
        await self.run_sql(f"DROP KNOWLEDGE_BASE {name};")

    async def drop_agent(self, name: str) -> None:
        await self.run_sql(f"DROP AGENT {name};")

    async def database_exists(self, name: str) -> bool:
        response = await self.http.get(f"/api/databases/{name}")
        return response.status_code == 200

    # ── Knowledge bases ────────────────────────────────────────────────

    async def create_knowledge_base(self, name: str) -> None:
        await self._request(
            "POST",
            self._project_path("knowledge_bases"),
            json={"knowledge_base": {"name": name}},
        )

    async def insert_urls(self, name: str, urls: List[str], crawl_depth: int) -> None:
        """Ask the knowledge base to crawl ``urls`` down to ``crawl_depth``."""
        await self._request(
            "PUT",
            self._project_path("knowledge_bases", name),
            json={"knowledge_base": {"urls": urls, "crawl_depth": crawl_depth}},
        )

    # ── Agents ─────────────────────────────────────────────────────────

    async def agent_exists(self, name: str) -> bool:
        response = await self.http.get(self._project_path("agents", name))
        return response.status_code == 200

    async def create_agent(
        self,
        name: str,
        model: Dict[str, Any],
        knowledge_bases: List[str],
        tables: List[str],
        prompt_template: str,
    ) -> None:
        await self._request(
            "POST",
            self._project_path("agents"),
            json={
                "agent": {
                    "name": name,
                    "model": model,
                    "data": {
                        "knowledge_bases": knowledge_bases,
                        "tables": tables,
                    },
                    "prompt_template": prompt_template,
                }
            },
        )

    async def agent_completion(
        self,
        name: str,
        messages: List[Dict[str, str]],
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        """
        Post a conversation to the agent's completions endpoint.

        The raw response is returned; status and body shape are left to the caller.
        """
        return await self.http.post(
            self._project_path("agents", name, "completions"),
            json={"messages": messages},
            timeout=timeout if timeout is not None else self.timeout,
        )
