"""Prompts package."""

from app.ai_core.prompts.agent import (
    GITHUB_TABLES,
    create_agent_prompt,
    github_table_names,
)

__all__ = [
    "GITHUB_TABLES",
    "create_agent_prompt",
    "github_table_names",
]
