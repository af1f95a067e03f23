"""
Repository Ingestion Service

Provisions the MindsDB resources that back a repository chat:
1. GitHub database connection (issues, PRs, commits... as tables)
2. Knowledge base populated by crawling the repository
3. Agent bound to both

If any step fails, whatever may have been created is dropped again
(best effort) and the original error is raised.
"""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

import httpx

from app.ai_core.prompts import create_agent_prompt, github_table_names
from app.config import Settings, get_settings
from app.exceptions import ConfigurationError, ProvisioningError
from app.integrations.mindsdb import MindsDBAPIError, MindsDBClient
from app.models.repository import RepositoryIdentifier, ResourceNames, resource_names

logger = logging.getLogger(__name__)


@dataclass
class ProvisioningResult:
    """Handles needed to query an ingested repository."""

    kb_name: str
    github_db: str
    agent_name: str
    already_provisioned: bool = False


class RepositoryIngestor:
    """
    Runs the ingestion steps against MindsDB, strictly one after another.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._sleep = sleep

    def _client(self) -> MindsDBClient:
        return MindsDBClient(
            self.settings.mindsdb_url,
            self.settings.mindsdb_project,
            timeout=self.settings.request_timeout,
            transport=self._transport,
        )

    async def ingest(self, repository: RepositoryIdentifier) -> ProvisioningResult:
        """
        Create database, knowledge base and agent for ``repository``.

        Returns as soon as the agent exists; the knowledge base may still be
        indexing at that point.

        Raises:
            ConfigurationError: OPENAI_API_KEY is not configured
            ProvisioningError: a step failed (cleanup has already been attempted)
        """
        if not self.settings.openai_api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY required", missing_vars=["OPENAI_API_KEY"]
            )

        names = resource_names(repository)
        result = ProvisioningResult(
            kb_name=names.knowledge_base,
            github_db=names.database,
            agent_name=names.agent,
        )

        async with self._client() as mindsdb:
            if self.settings.check_existing_agent and await self._agent_exists(
                mindsdb, names.agent
            ):
                logger.info(
                    f"Agent {names.agent} already exists, skipping ingestion of {repository}"
                )
                result.already_provisioned = True
                return result

            try:
                await self._provision(mindsdb, repository, names)
            except ProvisioningError as e:
                logger.error(f"Ingestion of {repository} failed at '{e.step}': {e.message}")
                await self._cleanup(mindsdb, names)
                raise

        logger.info(f"Repository {repository} ingested as {names}")
        return result

    async def _provision(
        self,
        mindsdb: MindsDBClient,
        repository: RepositoryIdentifier,
        names: ResourceNames,
    ) -> None:
        settings = self.settings
        project = settings.mindsdb_project

        # Step 1: GitHub database connection
        logger.info(f"Creating GitHub database {names.database}...")
        await self._run_step(
            "create GitHub database",
            mindsdb.create_github_database(
                names.database,
                repository.full_name,
                token=settings.github_token or None,
            ),
            accept_existing=True,
        )
        await self._wait_for_database(mindsdb, names.database)

        # Step 2: Empty knowledge base
        logger.info(f"Creating knowledge base {names.knowledge_base}...")
        await self._run_step(
            "create knowledge base",
            mindsdb.create_knowledge_base(names.knowledge_base),
            accept_existing=True,
        )

        # Step 3: Crawl the repository into it
        logger.info(
            f"Inserting {repository.url} into {names.knowledge_base} "
            f"(crawl depth {settings.crawl_depth})..."
        )
        await self._run_step(
            "insert data into knowledge base",
            mindsdb.insert_urls(
                names.knowledge_base, [repository.url], settings.crawl_depth
            ),
        )

        # No indexing status is exposed, give the crawl a head start
        await self._sleep(settings.knowledge_base_settle_seconds)

        # Step 4: Agent bound to the knowledge base and GitHub tables
        logger.info(f"Creating agent {names.agent}...")
        await self._run_step(
            "create agent",
            mindsdb.create_agent(
                names.agent,
                model={
                    "provider": "openai",
                    "model_name": settings.agent_model,
                    "api_key": settings.openai_api_key,
                },
                knowledge_bases=[f"{project}.{names.knowledge_base}"],
                tables=github_table_names(names.database),
                prompt_template=create_agent_prompt(
                    repository.full_name, project, names.knowledge_base, names.database
                ),
            ),
            accept_existing=True,
        )

    async def _run_step(
        self, step: str, operation: Awaitable[None], accept_existing: bool = False
    ) -> None:
        """Await one MindsDB call, translating failures into ProvisioningError."""
        try:
            await operation
        except MindsDBAPIError as e:
            if accept_existing and e.already_exists:
                logger.info(f"Skipping '{step}': resource already exists")
                return
            raise ProvisioningError(
                f"Failed to {step}: {e.body}", step=step, upstream_error=e.body
            ) from e
        except httpx.HTTPError as e:
            raise ProvisioningError(
                f"Failed to {step}: {e}", step=step, upstream_error=str(e)
            ) from e

    async def _agent_exists(self, mindsdb: MindsDBClient, agent_name: str) -> bool:
        try:
            return await mindsdb.agent_exists(agent_name)
        except httpx.HTTPError as e:
            logger.warning(f"Could not check for existing agent {agent_name}: {e}")
            return False

    async def _wait_for_database(self, mindsdb: MindsDBClient, name: str) -> None:
        """
        Poll until MindsDB lists the database, for at most
        ``database_settle_seconds``. Carries on regardless once the bound is hit.
        """
        settle = self.settings.database_settle_seconds
        interval = self.settings.readiness_poll_interval

        if interval <= 0:
            await self._sleep(settle)
            return

        for _ in range(max(1, math.ceil(settle / interval))):
            try:
                if await mindsdb.database_exists(name):
                    logger.debug(f"Database {name} is ready")
                    return
            except httpx.HTTPError as e:
                logger.debug(f"Readiness check for {name} failed: {e}")
            await self._sleep(interval)

        logger.warning(f"Database {name} not reported ready after {settle}s, continuing")

    async def _cleanup(self, mindsdb: MindsDBClient, names: ResourceNames) -> None:
        """Drop agent, knowledge base and database; one attempt each, errors logged."""
        drops = (
            ("agent", mindsdb.drop_agent, names.agent),
            ("knowledge base", mindsdb.drop_knowledge_base, names.knowledge_base),
            ("database", mindsdb.drop_database, names.database),
        )
        for label, drop, name in drops:
            try:
                await drop(name)
                logger.info(f"Cleanup: dropped {label} {name}")
            except Exception as e:
                logger.warning(f"Cleanup failed for {label} {name}: {e}")
