"""
Error handling middleware.

Every error leaves the API in the same envelope:
``{"error": {"code", "message", "details"?, "timestamp", "request_id"}}``.
"""

from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config.logging import get_logger
from src.domain.exceptions.dispatch_error import DispatchError
from src.domain.exceptions.storage_error import StorageError

logger = get_logger(__name__)

HTTP_STATUS_CODES = {
    400: "VALIDATION_ERROR",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
}


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Render the error envelope."""
    error: Dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    error["timestamp"] = datetime.now(timezone.utc).isoformat()
    error["request_id"] = getattr(request.state, "request_id", None)

    return JSONResponse(status_code=status_code, content={"error": error})


def validation_details(errors: List[Dict[str, Any]]) -> Dict[str, List[str]]:
    """Group pydantic errors by field name."""
    details: Dict[str, List[str]] = defaultdict(list)
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        details[field].append(error.get("msg", "Invalid value"))
    return dict(details)


class ErrorHandlerMiddleware:
    """Error handling middleware for FastAPI."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_error_handlers()

    def add_error_handlers(self) -> None:
        """Add custom error handlers to FastAPI app."""
        add_error_handlers(self.app)


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(DispatchError)
    async def dispatch_error_handler(request: Request, exc: DispatchError):
        log = logger.error if isinstance(exc, StorageError) else logger.warning
        log(
            "Request failed",
            code=exc.code,
            error=exc.message,
            path=request.url.path,
            request_id=getattr(request.state, "request_id", None),
        )
        return error_response(
            request, exc.status_code, exc.code, exc.message, exc.details
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ):
        details = validation_details(exc.errors())
        logger.warning("Validation error", details=details, path=request.url.path)
        return error_response(
            request, 400, "VALIDATION_ERROR", "Invalid request data", details
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error", error=str(exc), path=request.url.path)
        return error_response(
            request, 500, "DATABASE_ERROR", "A database error occurred"
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        code = HTTP_STATUS_CODES.get(exc.status_code, "INTERNAL_ERROR")
        return error_response(request, exc.status_code, code, str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            exc_info=True,
        )
        return error_response(
            request, 500, "INTERNAL_ERROR", "An unexpected error occurred"
        )
