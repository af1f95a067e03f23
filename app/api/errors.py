"""
Exception handlers - every failure leaves the API as {"error": message}.

ValidationError (and malformed request bodies) -> 400
Any other AskoraError -> 500 with its user-readable message
Anything unexpected -> 500 with a generic message, traceback in the log
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.exceptions import AskoraError, ValidationError

logger = logging.getLogger(__name__)


def create_error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def askora_exception_handler(request: Request, exc: AskoraError) -> JSONResponse:
    """Handle application exceptions raised by routes and services."""
    if isinstance(exc, ValidationError):
        logger.info(f"Rejected {request.url.path}: {exc.message}")
        return create_error_response(exc.message, status.HTTP_400_BAD_REQUEST)

    logger.error(
        f"{type(exc).__name__} on {request.url.path}: {exc.message}"
        + (f" details={exc.details}" if exc.details else "")
    )
    return create_error_response(exc.message, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request bodies that are not valid JSON or have the wrong types."""
    errors = []
    for error in exc.errors():
        loc = " -> ".join(str(part) for part in error["loc"])
        errors.append(f"{loc}: {error['msg']}")

    logger.info(f"Invalid request body on {request.url.path}: {errors}")
    return create_error_response(
        "Invalid request body: " + "; ".join(errors), status.HTTP_400_BAD_REQUEST
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unexpected error on {request.url.path}: {exc}", exc_info=exc)
    return create_error_response(
        "Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
