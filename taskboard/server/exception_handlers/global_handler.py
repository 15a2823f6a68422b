"""
Exception Handlers for the FastAPI Application.

Every failure is terminal for its request and is answered with a JSON body
of the form ``{"error": "<message>"}``:

- ``TaskboardError`` subclasses map to their own status code.
- Requests that cannot be parsed map to 500 with the parser's message.
- Datastore errors map to 500 and expose the driver's message.
- Anything else maps to 500 and is logged with the full request context.
"""

import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from taskboard.core.errors import TaskboardError
from taskboard.core.logging_config import get_logger

logger = get_logger(__name__)


def _request_context(request: Request) -> dict:
    return {
        "method": request.method,
        "path": request.url.path,
        "query_params": dict(request.query_params),
        "client": request.client.host if request.client else "unknown",
    }


async def taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    """Answer a service error with its own status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", extra=_request_context(request))
    else:
        logger.info(f"{request.method} {request.url.path} rejected with {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Answer a request that could not be parsed with 500 and the parser's message.

    Covers malformed bodies, query strings and path parameters alike.
    """
    message = str(exc)
    logger.info(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse(status_code=500, content={"error": message})


async def datastore_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """
    Answer a datastore failure with 500 and the driver's message.

    No rollback happens here; ``get_session`` closes the request's session,
    which rolls back any open transaction.

    Args:
        request: The HTTP request that caused the exception
        exc: The SQLAlchemy error raised while talking to the datastore

    Returns:
        JSONResponse with the raw error message
    """
    orig = getattr(exc, "orig", None)
    message = str(orig) if orig is not None else str(exc)
    logger.error(
        f"Datastore error in {request.method} {request.url.path}: {message}",
        exc_info=True,
        extra={**_request_context(request), "error_type": type(exc).__name__},
    )
    return JSONResponse(status_code=500, content={"error": message})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns a JSON response with an error ID
    that clients can use to reference the error when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            **_request_context(request),
            "error_id": error_id,
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": str(exc),
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(TaskboardError, taskboard_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, datastore_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
