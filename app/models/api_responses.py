"""
API Request/Response Models

Pydantic models for the ingest and query endpoints. Field names follow the
JSON contract used by the web front end (camelCase on the wire).
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


class ConversationExchange(BaseModel):
    """One completed turn: a user question and the agent's answer."""

    question: str = Field(..., description="User question")
    answer: str = Field("", description="Agent answer (empty for the pending turn)")


class IngestRequest(BaseModel):
    """Request model for the ingest endpoint."""

    repository: Optional[str] = Field(
        None, description="GitHub repository in owner/repo form"
    )


class IngestResponse(BaseModel):
    """Response model for a successful ingestion."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    repository: str = Field(..., description="The ingested repository")
    knowledge_base: str = Field(..., alias="knowledgeBase")
    github_database: str = Field(..., alias="githubDatabase")
    agent: str = Field(..., description="Name of the MindsDB agent")
    message: str = Field(..., description="Human-readable status")


class QueryRequest(BaseModel):
    """Request model for the query endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    repository: Optional[str] = Field(
        None, description="GitHub repository in owner/repo form"
    )
    query: Optional[str] = Field(None, description="User's question about the repository")
    conversation_history: Optional[List[ConversationExchange]] = Field(
        None,
        alias="conversationHistory",
        description="Recent exchanges, oldest first. Format: [{'question': str, 'answer': str}]",
    )


class QueryResponse(BaseModel):
    """Response model for a successful query."""

    success: bool = True
    response: str = Field(..., description="The agent's answer (markdown)")
    repository: str = Field(..., description="The queried repository")
    query: str = Field(..., description="The original question")


class ErrorResponse(BaseModel):
    """Body returned for every 4xx/5xx from the API."""

    error: str
