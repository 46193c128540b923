"""
Request/Response logging middleware.

Assigns each request an ID (reusing the gateway's ``X-Request-ID`` when one is
present), binds it into the structlog context for the lifetime of the request
and echoes it back on the response.
"""

import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response

from src.api.security import ACTOR_ID_HEADER
from src.config.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"


class LoggingMiddleware:
    """Tags every request with a request ID and logs its outcome."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_logging_middleware()

    def add_logging_middleware(self) -> None:
        @self.app.middleware("http")
        async def logging_middleware(request: Request, call_next: Callable) -> Response:
            request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
            request.state.request_id = request_id

            structlog.contextvars.clear_contextvars()
            structlog.contextvars.bind_contextvars(
                request_id=request_id,
                actor_id=request.headers.get(ACTOR_ID_HEADER),
            )
            log = logger.bind(method=request.method, path=request.url.path)
            log.debug("Request started", client_host=getattr(request.client, "host", None))

            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception as e:
                log.error("Request failed", error=str(e), elapsed_ms=_elapsed_ms(started))
                raise

            elapsed = _elapsed_ms(started)
            log.info("Request completed", status_code=response.status_code, elapsed_ms=elapsed)

            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[PROCESS_TIME_HEADER] = f"{elapsed / 1000:.4f}"
            return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
