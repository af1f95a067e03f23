"""
MindsDB API Routes

Two endpoints used by the chat front end:
1. POST /api/mindsdb/ingest - Provision database, knowledge base and agent for a repository
2. POST /api/mindsdb/query - Ask the repository's agent a question

Errors are returned as {"error": message}; see the handlers in app.main.
"""

import logging

from fastapi import APIRouter, Depends

from app.exceptions import ValidationError
from app.models.api_responses import (
    ErrorResponse,
    IngestRequest,
    IngestResponse,
    QueryRequest,
    QueryResponse,
)
from app.models.repository import parse_repository
from app.services.ingestion import RepositoryIngestor
from app.services.query import AgentQueryService

logger = logging.getLogger(__name__)
router = APIRouter()

# Lazy initialization so settings are read on first request, not at import
_ingestor = None
_query_service = None

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    500: {"model": ErrorResponse, "description": "Upstream or configuration failure"},
}


def get_ingestor() -> RepositoryIngestor:
    """Get RepositoryIngestor instance with lazy initialization."""
    global _ingestor
    if _ingestor is None:
        _ingestor = RepositoryIngestor()
    return _ingestor


def get_query_service() -> AgentQueryService:
    """Get AgentQueryService instance with lazy initialization."""
    global _query_service
    if _query_service is None:
        _query_service = AgentQueryService()
    return _query_service


@router.post("/ingest", response_model=IngestResponse, responses=_ERROR_RESPONSES)
async def ingest_repository(
    request: IngestRequest,
    ingestor: RepositoryIngestor = Depends(get_ingestor),
):
    """
    Ingest a GitHub repository into MindsDB.

    Pipeline:
    1. Skip everything if the agent already exists
    2. Create the GitHub database connection
    3. Create the knowledge base and crawl the repository into it
    4. Create the agent bound to the knowledge base and GitHub tables

    Example request body:
    ```json
    {"repository": "mindsdb/mindsdb"}
    ```
    """
    repository = parse_repository(request.repository)
    logger.info(f"Ingest request: repository={repository}")

    result = await ingestor.ingest(repository)

    return IngestResponse(
        repository=repository.full_name,
        knowledge_base=result.kb_name,
        github_database=result.github_db,
        agent=result.agent_name,
        message=(
            "Repository setup complete. Agent can answer questions about code, "
            "issues, and PRs."
        ),
    )


@router.post("/query", response_model=QueryResponse, responses=_ERROR_RESPONSES)
async def query_repository(
    request: QueryRequest,
    query_service: AgentQueryService = Depends(get_query_service),
):
    """
    Ask the agent of an ingested repository a question.

    Example request body:
    ```json
    {
        "repository": "mindsdb/mindsdb",
        "query": "How are handlers registered?",
        "conversationHistory": [
            {"question": "What is this repo?", "answer": "An AI data platform..."}
        ]
    }
    ```
    """
    if not request.repository or not request.query or not request.query.strip():
        raise ValidationError("Repository and query are required")

    repository = parse_repository(request.repository)
    history = [
        exchange.model_dump() for exchange in (request.conversation_history or [])
    ]
    logger.info(
        f"Query request: repository={repository}, history={len(history)} exchanges"
    )

    answer = await query_service.query(repository, request.query.strip(), history)

    return QueryResponse(
        response=answer,
        repository=repository.full_name,
        query=request.query,
    )
