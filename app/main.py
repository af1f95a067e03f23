import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from app.config import get_settings
from app.api.errors import (
    askora_exception_handler,
    generic_exception_handler,
    validation_exception_handler,
)
from app.api.routes import mindsdb
from app.exceptions import AskoraError

settings = get_settings()

# Configure application logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Set log level for app modules
logger = logging.getLogger("app")
logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

app = FastAPI(
    title=settings.app_name,
    description="Chat with any GitHub repository through a MindsDB agent",
    version="0.1.0",
)

# Register exception handlers
app.add_exception_handler(AskoraError, askora_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include routers
app.include_router(mindsdb.router, prefix="/api/mindsdb", tags=["MindsDB"])


@app.get("/")
async def root():
    return {
        "message": "Welcome to Askora - Your Code, Answered",
        "version": "0.1.0",
        "endpoints": {
            "ingest": "/api/mindsdb/ingest",
            "query": "/api/mindsdb/query",
            "health": "/health",
            "docs": "/docs",
            "redoc": "/redoc",
        },
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.app_name}
