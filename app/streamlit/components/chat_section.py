"""
Chat section component for the Streamlit app.
Shows the transcript for the active repository and the message input.
"""

import logging
import re

import streamlit as st

from services.chat_session import ChatSession
from utils.formatting import format_message

# Configure logger for this module
logger = logging.getLogger(__name__)


def _render_message(role: str, content: str):
    with st.chat_message(role):
        if role == "user":
            # Preserve single newlines as hard line breaks in Markdown.
            st.markdown(re.sub(r"(?<!\n)\n(?!\n)", "  \n", content))
        else:
            st.markdown(format_message(content), unsafe_allow_html=True)


def render_chat_header():
    """Repository name, mode and a way back to the landing page."""
    repository = st.session_state.repository
    label = f"{repository} (Demo Mode)" if st.session_state.demo_mode else repository

    col_title, col_back = st.columns([5, 1])
    with col_title:
        st.markdown(f"### 💬 `{label}`")
    with col_back:
        if st.button("← New", key="back_btn", use_container_width=True):
            st.session_state.view = "landing"
            st.session_state.pending_user_input = None
            st.rerun()


def render_chat_section():
    """
    Render the chat transcript and the input bar.

    A submitted message is shown at once and answered on the following run,
    so the user sees their message while the agent is thinking.
    """
    chat: ChatSession = st.session_state.chat

    if "pending_user_input" not in st.session_state:
        st.session_state.pending_user_input = None

    render_chat_header()

    for message in chat.messages:
        _render_message(message.role, message.content)

    pending = st.session_state.pending_user_input
    if pending:
        _render_message("user", pending)
        with st.chat_message("assistant"):
            with st.spinner("Thinking..."):
                reply = chat.send_message(
                    pending,
                    st.session_state.repository,
                    demo_mode=st.session_state.demo_mode,
                )
        if reply is None:
            logger.info("send_message ignored the pending input")
        st.session_state.pending_user_input = None
        st.rerun()

    user_input = st.chat_input(
        "Ask about the code, issues, or pull requests...",
        disabled=chat.is_loading or bool(pending),
    )

    # ── handle send ────────────────────────────────────────────────────
    if user_input and user_input.strip() and not chat.is_loading:
        st.session_state.pending_user_input = user_input.strip()
        st.rerun()
