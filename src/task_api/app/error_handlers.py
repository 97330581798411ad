"""Global exception handlers.

Every error leaves the API as {"error": message}:
    - TaskApiError -> its own status (400/404/500)
    - RequestValidationError (body, query, path) -> 400
    - Starlette HTTPException (unknown route, bad method) -> its status
    - anything else -> 500 built by AccessLogMiddleware via internal_error_response(),
      details only in the log
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_api.domain.errors import TaskApiError

logger = logging.getLogger("taskapi.errors")

_LOCATION_PREFIXES = ("body", "query", "path")


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(TaskApiError)
    async def task_api_error_handler(request: Request, exc: TaskApiError):
        logger.warning(
            "error.domain",
            extra={
                "category": "errors",
                "event": "error.domain",
                "error_type": type(exc).__name__,
                "status_code": exc.http_status,
                "path": request.url.path,
                "error": exc.message,
            },
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = format_validation_errors(exc.errors())
        logger.warning(
            "error.validation",
            extra={"category": "errors", "event": "error.validation", "path": request.url.path, "error": message},
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )


def internal_error_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def format_validation_errors(errors) -> str:
    """Flatten pydantic error dicts into 'field: reason; field: reason'."""
    parts = []
    for e in errors:
        loc = [str(p) for p in e.get("loc", ()) if p not in _LOCATION_PREFIXES]
        field = ".".join(loc)
        parts.append(f"{field}: {e['msg']}" if field else e["msg"])
    return "; ".join(parts) or "Invalid request"
