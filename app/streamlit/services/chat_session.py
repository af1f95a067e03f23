"""
Conversation state for one chat session.

Holds the message list, the in-flight flag and the demo rotation counter.
The exchange history sent with each query is rebuilt from the message list
before every request; there is no separate context object.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Literal

from config.settings import DEMO_RESPONSE_DELAY, MAX_HISTORY_EXCHANGES
from services.mock_api import demo_response

logger = logging.getLogger(__name__)

WELCOME_MESSAGE_ID = "welcome"

APOLOGY_MESSAGE = (
    "I'm sorry, I encountered an error while processing your request. Please try again."
)

_CAPABILITIES = """• Code structure and architecture
• Functions, classes, and modules
• Issues and pull requests
• Documentation and README files
• Dependencies and configurations
• Best practices and potential improvements"""


@dataclass
class Message:
    """One chat message, user or assistant."""

    role: Literal["user", "assistant"]
    content: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)


def welcome_text(repository: str, demo_mode: bool = False) -> str:
    if demo_mode:
        return (
            "Hello! I'm **Askora**, your AI-powered repository analysis assistant. "
            f"You're currently in **demo mode** with the **`{repository}`** repository. "
            "This is a testing environment with mock responses. I can help you understand:\n\n"
            f"{_CAPABILITIES}\n\n"
            "What would you like to explore? "
            "(Note: Responses are simulated for demonstration purposes)"
        )
    return (
        "Hello! I'm **Askora**, your AI-powered repository analysis assistant. "
        f"I've successfully analyzed and ingested the **`{repository}`** repository. "
        "I can help you understand:\n\n"
        f"{_CAPABILITIES}\n\n"
        "What would you like to explore about this repository?"
    )


class ChatSession:
    """
    Session-scoped chat state.

    Args:
        query_fn: Backend call ``(repository, query, history) -> dict`` returning
            ``{"success": True, "response": str}`` or ``{"success": False, "error": str}``
        sleep: Blocking sleep used for the simulated demo delay
        max_history: Most recent exchanges sent with each query
    """

    def __init__(
        self,
        query_fn: Callable[[str, str, list], dict] | None = None,
        sleep: Callable[[float], None] = time.sleep,
        max_history: int = MAX_HISTORY_EXCHANGES,
    ):
        if query_fn is None:
            from services.api_client import query_repository

            query_fn = query_repository

        self.messages: list[Message] = []
        self.is_loading = False
        self.demo_index = 0
        self._query_fn = query_fn
        self._sleep = sleep
        self._max_history = max_history

    def initialize_chat(self, repository: str, demo_mode: bool = False) -> None:
        """Start a fresh transcript containing only the welcome message."""
        self.messages = [
            Message(
                id=WELCOME_MESSAGE_ID,
                role="assistant",
                content=welcome_text(repository, demo_mode),
            )
        ]
        self.is_loading = False
        self.demo_index = 0

    def add_message(self, role: Literal["user", "assistant"], content: str) -> Message:
        message = Message(role=role, content=content)
        self.messages.append(message)
        return message

    def build_conversation_history(self) -> list[dict[str, str]]:
        """
        Pair each user message with the assistant message right after it.

        The welcome message is skipped, messages are read two at a time, and a
        trailing unpaired message is dropped. Only the last ``max_history``
        exchanges are returned.
        """
        filtered = [m for m in self.messages if m.id != WELCOME_MESSAGE_ID]

        history = []
        for i in range(0, len(filtered), 2):
            user_msg = filtered[i]
            assistant_msg = filtered[i + 1] if i + 1 < len(filtered) else None

            if user_msg.role == "user" and assistant_msg and assistant_msg.role == "assistant":
                history.append(
                    {"question": user_msg.content, "answer": assistant_msg.content}
                )

        return history[-self._max_history:] if self._max_history > 0 else []

    def send_message(
        self, content: str, repository: str, demo_mode: bool = False
    ) -> Message | None:
        """
        Send one user message and record exactly one assistant reply.

        Returns:
            The assistant message, or None when nothing was sent (empty input,
            or another message still in flight)
        """
        content = (content or "").strip()
        if not content or self.is_loading:
            return None

        # Rebuilt before the new user message is appended
        history = self.build_conversation_history()

        self.add_message("user", content)
        self.is_loading = True

        try:
            if demo_mode:
                self._sleep(DEMO_RESPONSE_DELAY)
                reply = demo_response(self.demo_index)
                self.demo_index += 1
                return self.add_message("assistant", reply)

            result = self._query_fn(repository, content, history)
            if result.get("success") and result.get("response"):
                return self.add_message("assistant", result["response"])

            error = result.get("error")
            logger.warning(f"Query for {repository} failed: {error}")
            reply = f"{APOLOGY_MESSAGE}\n\n{error}" if error else APOLOGY_MESSAGE
            return self.add_message("assistant", reply)
        except Exception as e:
            logger.error(f"Unexpected error sending message: {e}", exc_info=True)
            return self.add_message("assistant", APOLOGY_MESSAGE)
        finally:
            self.is_loading = False
