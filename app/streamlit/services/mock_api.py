"""
Mock API service for demo mode.
Lets the chat be walked through without a backend or MindsDB.
"""
import time
from config.settings import DEMO_DIGEST_DELAY

# Scripted answers, rotated per chat session
DEMO_RESPONSES = (
    "This is a **demo repository** for testing purposes. In a real scenario, "
    "I would analyze the actual repository structure and provide insights about the codebase.",
    "In demo mode I can't read real code, but with an ingested repository I could walk you through:\n"
    "• The main modules and how they depend on each other\n"
    "• Recent pull requests and open issues\n"
    "• Who contributes to which parts of the code",
    "Try pasting a real GitHub URL such as `https://github.com/mindsdb/mindsdb` "
    "on the home page to chat with an actual repository.",
)


def demo_response(index: int) -> str:
    """
    Scripted demo answer for the ``index``-th question of a session.

    Args:
        index: Zero-based count of demo answers already given in the session

    Returns:
        str: The answer, cycling through DEMO_RESPONSES
    """
    return DEMO_RESPONSES[index % len(DEMO_RESPONSES)]


def digest_demo_repository(repository: str, sleep=time.sleep) -> dict:
    """
    Mock ingestion of the demo repository.

    Returns:
        dict: Same shape as a successful ingest response
    """
    sleep(DEMO_DIGEST_DELAY)
    return {
        "success": True,
        "repository": repository,
        "knowledgeBase": None,
        "githubDatabase": None,
        "agent": None,
        "message": "Demo mode: responses are simulated.",
    }
