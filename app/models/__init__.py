# Shared data models
from app.models.repository import (
    RepositoryIdentifier,
    ResourceNames,
    parse_repository,
    resource_names,
)
from app.models.api_responses import (
    ConversationExchange,
    IngestRequest,
    IngestResponse,
    QueryRequest,
    QueryResponse,
    ErrorResponse,
)

__all__ = [
    "RepositoryIdentifier",
    "ResourceNames",
    "parse_repository",
    "resource_names",
    "ConversationExchange",
    "IngestRequest",
    "IngestResponse",
    "QueryRequest",
    "QueryResponse",
    "ErrorResponse",
]
