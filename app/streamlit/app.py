"""
Main Streamlit application for Askora.
Landing page -> digesting -> chat with the repository's agent.

Run with:
    streamlit run app/streamlit/app.py
"""
import streamlit as st
from components.chat_section import render_chat_section
from components.digest_section import render_digest_section
from components.landing_section import render_landing_section
from config.settings import PAGE_CONFIG


def main():
    """
    Main application entry point.
    """
    # Configure the page
    st.set_page_config(**PAGE_CONFIG)

    # Apply custom CSS
    st.markdown("""
        <style>
        /* Hide Streamlit default elements */
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
        [data-testid="stDecoration"] {display: none;}

        /* Header styling */
        .app-header {
            text-align: center;
            margin: 2rem 0 1rem 0;
        }

        .app-title {
            font-size: 3rem;
            font-weight: 700;
            margin-bottom: 0.25rem;
            background: linear-gradient(90deg, #7c3aed 0%, #f472b6 50%, #1A8596 100%);
            -webkit-background-clip: text;
            -webkit-text-fill-color: transparent;
        }

        .app-subtitle {
            font-size: 1.2rem;
            color: #666;
            font-weight: 400;
        }

        /* Chat message styling */
        .stChatMessage {
            padding: 1rem;
        }
        </style>
    """, unsafe_allow_html=True)

    # Initialize session state
    if "view" not in st.session_state:
        st.session_state.view = "landing"
    if "repo_input" not in st.session_state:
        st.session_state.repo_input = ""
    if "digest_error" not in st.session_state:
        st.session_state.digest_error = None
    if "repository" not in st.session_state:
        st.session_state.repository = ""
    if "demo_mode" not in st.session_state:
        st.session_state.demo_mode = False

    view = st.session_state.view
    if view == "chat" and "chat" in st.session_state:
        render_chat_section()
    elif view == "digesting" and st.session_state.repo_input:
        render_digest_section()
    else:
        render_landing_section()


if __name__ == "__main__":
    main()
