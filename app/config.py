from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Askora"
    debug: bool = False

    # OpenAI (credential handed to the MindsDB agent)
    openai_api_key: str = ""
    agent_model: str = "gpt-4.1"

    # MindsDB
    mindsdb_url: str = "http://127.0.0.1:47334"
    mindsdb_project: str = "mindsdb"

    # GitHub (optional, raises the GitHub handler rate limits)
    github_token: str = ""

    # Ingestion
    crawl_depth: int = 2
    database_settle_seconds: float = 2.0  # Upper bound for the readiness poll
    knowledge_base_settle_seconds: float = 3.0
    readiness_poll_interval: float = 0.5
    check_existing_agent: bool = True
    request_timeout: float = 60.0  # Seconds

    # Query
    query_timeout: float = 30.0  # Seconds, per attempt
    max_retries: int = 3
    backoff_base: float = 1.0  # 1s, 2s, 4s...
    max_history_exchanges: int = 5

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
