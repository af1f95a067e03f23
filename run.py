"""
Uvicorn server runner with configurable logging.

Usage:
    python run.py

Environment variables (set in .env file):
    DEBUG=true - Enable debug logging
    PORT=8000 - Set server port (default: 8000)
    HOST=127.0.0.1 - Set server host (default: 127.0.0.1)
    OPENAI_API_KEY - Required for ingestion
    MINDSDB_URL, MINDSDB_PROJECT, GITHUB_TOKEN - Optional

The chat UI runs separately:
    streamlit run app/streamlit/app.py
"""

import uvicorn
from app.config import get_settings

if __name__ == "__main__":
    import os

    # Load settings from .env file
    settings = get_settings()

    # Note: HOST and PORT can be overridden via environment variables
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))

    # Set log level based on DEBUG setting from .env
    log_level = "debug" if settings.debug else "info"

    print(f"Starting {settings.app_name} server...")
    print(f"Host: {host}")
    print(f"Port: {port}")
    print(f"Log Level: {log_level}")
    print(f"MindsDB: {settings.mindsdb_url} (project: {settings.mindsdb_project})")
    if not settings.openai_api_key:
        print("Warning: OPENAI_API_KEY is not set, ingestion requests will fail")
    print(f"Docs available at: http://{host}:{port}/docs")
    print(f"API available at: http://{host}:{port}/api/mindsdb")

    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        reload=True,
        log_level=log_level,
        access_log=True,
    )
