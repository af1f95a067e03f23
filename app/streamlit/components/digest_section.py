"""
Digest section component for the Streamlit app.
Shows progress while the repository is checked and ingested.
"""
import logging

import streamlit as st

from services.api_client import ingest_repository
from services.chat_session import ChatSession
from services.github_lookup import check_repository
from services.mock_api import digest_demo_repository
from utils.validators import extract_repo_path, is_demo_repository

logger = logging.getLogger(__name__)


def digest_repository(repo_input: str) -> dict:
    """
    Check and ingest the repository the user typed.

    Returns:
        dict with keys: success (bool), repository (str), demo_mode (bool),
        error (str, on failure)
    """
    if is_demo_repository(repo_input):
        digest_demo_repository(repo_input)
        return {"success": True, "repository": repo_input, "demo_mode": True}

    repo_path = extract_repo_path(repo_input)
    if not repo_path:
        return {"success": False, "error": "Invalid GitHub repository URL"}

    found, detail = check_repository(repo_path)
    if not found:
        return {"success": False, "error": detail}

    result = ingest_repository(repo_path)
    if not result.get("success"):
        return {"success": False, "error": result.get("error") or "Failed to ingest repository"}

    logger.info(f"Repository {repo_path} ready: agent={result.get('agent')}")
    return {"success": True, "repository": repo_path, "demo_mode": False}


def render_digest_section():
    """
    Render the digesting screen and switch to chat (or back) when done.
    """
    repo_input = st.session_state.repo_input
    shown = extract_repo_path(repo_input) or repo_input

    st.markdown("""
        <div class="app-header">
            <h1 class="app-title">Askora</h1>
        </div>
    """, unsafe_allow_html=True)

    with st.spinner(f"Digesting repository `{shown}`..."):
        st.markdown(
            f"I'm analyzing and ingesting `{shown}`. "
            "This may take a moment while the code, issues and pull requests are indexed."
        )
        result = digest_repository(repo_input)

    if not result["success"]:
        st.session_state.digest_error = result["error"]
        st.session_state.view = "landing"
        st.rerun()
        return

    chat = ChatSession()
    chat.initialize_chat(result["repository"], demo_mode=result["demo_mode"])

    st.session_state.chat = chat
    st.session_state.repository = result["repository"]
    st.session_state.demo_mode = result["demo_mode"]
    st.session_state.digest_error = None
    st.session_state.view = "chat"
    st.rerun()
