"""
Prompt template for the repository agent.

The template names every knowledge base and table the agent is bound to, so
the model knows exactly which resources it may reference.
"""

from typing import List

# Tables exposed by the MindsDB GitHub handler, in the order they are bound
GITHUB_TABLES = [
    ("pull_requests", "Pull requests data"),
    ("issues", "Issues data"),
    ("commits", "Commit history"),
    ("branches", "Branch information"),
    ("files", "Repository files"),
    ("contributors", "Contributor data"),
    ("comments", "Comments on issues/PRs"),
    ("discussions", "GitHub discussions"),
    ("releases", "Release information"),
]


def github_table_names(database: str) -> List[str]:
    """Fully qualified GitHub tables for a database, e.g. ``github_x.issues``."""
    return [f"{database}.{table}" for table, _ in GITHUB_TABLES]


def create_agent_prompt(repository: str, project: str, knowledge_base: str, database: str) -> str:
    """
    Build the agent prompt template for one repository.

    Args:
        repository: ``owner/name`` of the analysed repository
        project: MindsDB project holding the knowledge base
        knowledge_base: Knowledge base name
        database: GitHub database name

    Returns:
        Prompt template text
    """
    prompt = f"""
You are Askora (askora.dev), an assistant analyzing the GitHub repository "{repository}".
You can use:

- {project}.{knowledge_base}: Repository codebase and documentation
"""

    for table, description in GITHUB_TABLES:
        prompt += f"- {database}.{table}: {description}\n"

    prompt += """
Answer questions concisely and accurately in markdown.
"""

    return prompt
