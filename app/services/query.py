"""
Agent Query Service

Sends a question plus recent conversation to a repository's MindsDB agent and
turns the answer (or the failure) into something a user can read.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import httpx

from app.config import Settings, get_settings
from app.exceptions import (
    AgentNotFoundError,
    AgentResponseError,
    AgentUnreachableError,
    QueryError,
    QueryExhaustedError,
    QueryTimeoutError,
    TransientQueryError,
    UpstreamQueryError,
)
from app.integrations.mindsdb import MindsDBClient
from app.models.repository import RepositoryIdentifier, resource_names

logger = logging.getLogger(__name__)

# Where the answer may live in a completions payload, most specific first.
# Different MindsDB versions use different shapes.
ANSWER_PATHS: Tuple[Tuple[str, ...], ...] = (
    ("answer",),
    ("message", "content"),
    ("content",),
)


def extract_answer(payload: Any) -> Optional[str]:
    """Return the first non-empty trimmed string found along ``ANSWER_PATHS``."""
    for path in ANSWER_PATHS:
        value = payload
        for key in path:
            value = value.get(key) if isinstance(value, dict) else None
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


class AgentQueryService:
    """Queries repository agents with retry and exponential backoff."""

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
            timeout=self.settings.query_timeout,
            transport=self._transport,
        )

    def build_messages(
        self, question: str, conversation_history: Optional[List[Dict[str, str]]] = None
    ) -> List[Dict[str, str]]:
        """Recent exchanges followed by the pending turn ``{question, answer: ""}``."""
        history = (conversation_history or [])[-self.settings.max_history_exchanges:]
        messages = [
            {"question": exchange["question"], "answer": exchange.get("answer", "")}
            for exchange in history
        ]
        messages.append({"question": question, "answer": ""})
        return messages

    async def query(
        self,
        repository: RepositoryIdentifier,
        question: str,
        conversation_history: Optional[List[Dict[str, str]]] = None,
    ) -> str:
        """
        Ask the repository's agent a question.

        Args:
            repository: Ingested repository
            question: User question
            conversation_history: Prior exchanges, oldest first

        Returns:
            The trimmed answer

        Raises:
            QueryError: one of its subclasses, carrying the user-facing message
        """
        agent_name = resource_names(repository).agent
        messages = self.build_messages(question, conversation_history)
        max_retries = max(1, self.settings.max_retries)

        logger.info(
            f"Querying {agent_name}: question length={len(question)}, "
            f"history={len(messages) - 1} exchanges"
        )

        async with self._client() as mindsdb:
            for attempt in range(max_retries):
                last_attempt = attempt == max_retries - 1

                try:
                    answer = await self._attempt(mindsdb, agent_name, messages)
                except QueryError as e:
                    if not e.retryable or last_attempt:
                        logger.error(f"Query to {agent_name} failed: {e.message}")
                        raise
                    reason = e.message
                else:
                    if answer is not None:
                        logger.info(f"Agent {agent_name} answered on attempt {attempt + 1}")
                        return answer
                    if last_attempt:
                        break
                    reason = "empty answer"

                delay = self.settings.backoff_base * 2 ** attempt
                logger.warning(
                    f"Attempt {attempt + 1}/{max_retries} for {agent_name} gave {reason!r}, "
                    f"retrying in {delay:g}s"
                )
                await self._sleep(delay)

        logger.error(f"Agent {agent_name} gave no answer after {max_retries} attempts")
        raise QueryExhaustedError()

    async def _attempt(
        self, mindsdb: MindsDBClient, agent_name: str, messages: List[Dict[str, str]]
    ) -> Optional[str]:
        """One completion call. Returns None when the agent gave no usable answer."""
        timeout = self.settings.query_timeout
        try:
            # httpx limits each phase separately; wait_for caps the whole call
            response = await asyncio.wait_for(
                mindsdb.agent_completion(agent_name, messages, timeout=timeout),
                timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise QueryTimeoutError(timeout) from e
        except httpx.RequestError as e:
            raise AgentUnreachableError() from e

        if response.status_code == 404:
            raise AgentNotFoundError(agent_name)
        if response.status_code == 500:
            raise TransientQueryError()
        if response.is_error:
            raise UpstreamQueryError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError:
            logger.warning(f"Agent {agent_name} returned a non-JSON body")
            return None

        answer = extract_answer(payload)
        if answer is not None:
            return answer

        if isinstance(payload, dict) and payload.get("error"):
            raise AgentResponseError(payload["error"])

        return None
