"""
Askora exceptions

Every error raised by the orchestrators carries a user-readable message.
The API layer returns that message verbatim as ``{"error": message}``:
ValidationError maps to 400, every other AskoraError to 500.
"""

from typing import Any, Dict, Optional


class AskoraError(Exception):
    """Base exception for all Askora errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(AskoraError):
    """Raised when a required setting (e.g. OPENAI_API_KEY) is missing."""

    def __init__(self, message: str, missing_vars: Optional[list] = None):
        details = {}
        if missing_vars:
            details["missing_environment_variables"] = missing_vars
        super().__init__(message, details=details)


class ValidationError(AskoraError):
    """
    Raised when request input is malformed.
    This is a client error (400) - the user must correct the input.
    """

    pass


class ProvisioningError(AskoraError):
    """Raised when one of the ingestion steps fails."""

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        upstream_error: Optional[str] = None,
    ):
        details = {}
        if step:
            details["step"] = step
        if upstream_error:
            details["upstream_error"] = upstream_error
        super().__init__(message, details=details)
        self.step = step
        self.upstream_error = upstream_error


class QueryError(AskoraError):
    """Base class for failures of the agent completion call."""

    # Whether the query orchestrator may resend the request
    retryable = False


class AgentNotFoundError(QueryError):
    """The agent does not exist (HTTP 404)."""

    def __init__(self, agent_name: str):
        super().__init__(
            f"Agent '{agent_name}' does not exist. "
            "Please ingest the repository first to create the agent.",
            details={"agent": agent_name},
        )


class TransientQueryError(QueryError):
    """The agent failed internally (HTTP 500)."""

    retryable = True

    def __init__(self):
        super().__init__(
            "Agent encountered an error. This may happen if the knowledge base "
            "is still processing. Please try again in a moment."
        )


class UpstreamQueryError(QueryError):
    """Any other non-success status from the completions endpoint."""

    retryable = True

    def __init__(self, status_code: int, body: str):
        super().__init__(
            f"Failed to query agent ({status_code}): {body}",
            details={"status_code": status_code},
        )


class AgentResponseError(QueryError):
    """The agent answered with an explicit ``error`` field."""

    retryable = True

    def __init__(self, error: Any):
        super().__init__(f"Agent error: {error}")


class AgentUnreachableError(QueryError):
    """Network-level failure talking to MindsDB."""

    def __init__(self):
        super().__init__(
            "Cannot connect to MindsDB server. Please ensure MindsDB is running."
        )


class QueryTimeoutError(QueryError):
    """The per-attempt timeout fired."""

    def __init__(self, timeout: float):
        super().__init__(
            f"Request timed out after {timeout:g} seconds. The agent may be "
            "processing a complex query. Please try again or ask a narrower question."
        )


class QueryExhaustedError(QueryError):
    """Retries were used up without a usable answer."""

    def __init__(self):
        super().__init__(
            "The agent could not provide an answer. This might happen if:\n"
            "• The knowledge base is still being processed\n"
            "• The repository content hasn't been fully indexed\n\n"
            "Please wait a few minutes and try again, or re-ingest the repository."
        )
