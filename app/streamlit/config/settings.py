"""
Configuration settings for the Streamlit application.
"""

import os

# Page configuration for Streamlit
PAGE_CONFIG = {
    "page_title": "Askora - Your Code, Answered",
    "page_icon": "💬",
    "layout": "centered",
    "initial_sidebar_state": "collapsed",
}

# API Configuration
# Backend API port is configurable via PORT environment variable (default: 8000)
API_PORT = os.getenv("PORT", "8000")
API_BASE_URL = os.getenv("ASKORA_API_URL", f"http://localhost:{API_PORT}")  # Backend API URL
API_TIMEOUT = 180  # seconds (3 minutes) - ingestion waits on MindsDB

# GitHub lookup before ingestion (token optional, raises rate limits)
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "")

# Conversation
MAX_HISTORY_EXCHANGES = 5  # Exchanges sent with every query

# Demo mode ("demo" or "testing" as repository)
DEMO_REPOSITORIES = ("demo", "testing")
DEMO_DIGEST_DELAY = 1.5  # seconds
DEMO_RESPONSE_DELAY = 0.8  # seconds
