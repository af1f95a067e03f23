"""
Landing section component for the Streamlit app.
Asks for a GitHub repository and starts digesting it.
"""
import streamlit as st
from utils.validators import validate_repository_input


def render_landing_section():
    """
    Render the repository input form.
    """
    st.markdown("""
        <div class="app-header">
            <h1 class="app-title">Askora</h1>
            <p class="app-subtitle">Your Code, Answered</p>
        </div>
    """, unsafe_allow_html=True)

    st.markdown(
        "Paste a GitHub repository URL below and start chatting with your codebase."
    )

    with st.form("repository_form", border=False):
        repo_input = st.text_input(
            "Repository URL",
            value=st.session_state.get("repo_input", ""),
            placeholder="Paste a GitHub repo URL (e.g. https://github.com/vercel/next.js)",
            label_visibility="collapsed",
        )
        submitted = st.form_submit_button(
            "Digest & Chat", type="primary", use_container_width=True
        )

    if st.session_state.get("digest_error"):
        st.error(st.session_state.digest_error)

    if submitted:
        is_valid, message = validate_repository_input(repo_input)
        if not is_valid:
            st.session_state.digest_error = message
            st.rerun()
            return

        st.session_state.repo_input = repo_input.strip()
        st.session_state.digest_error = None
        st.session_state.view = "digesting"
        st.rerun()
