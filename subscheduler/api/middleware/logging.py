"""
Request/Response logging middleware.
"""

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response

from subscheduler.config.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
)
from subscheduler.infrastructure.monitoring.metrics import record_api_request

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _endpoint_label(request: Request) -> str:
    # Route templates keep the metric's label set bounded
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class LoggingMiddleware:
    """Binds a request id to the log context and records request metrics."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_logging_middleware()

    def add_logging_middleware(self) -> None:
        @self.app.middleware("http")
        async def logging_middleware(request: Request, call_next: Callable) -> Response:
            request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
            request.state.request_id = request_id
            bind_request_context(
                request_id=request_id, method=request.method, path=request.url.path
            )
            start = time.perf_counter()

            logger.debug(
                "Request started",
                query_params=str(request.query_params),
                client_host=request.client.host if request.client else None,
            )

            try:
                response = await call_next(request)
            except Exception as e:
                elapsed = time.perf_counter() - start
                record_api_request(request.method, _endpoint_label(request), 500, elapsed)
                logger.error("Request failed", error=str(e), elapsed=f"{elapsed:.4f}s")
                clear_request_context()
                raise

            elapsed = time.perf_counter() - start
            record_api_request(
                request.method, _endpoint_label(request), response.status_code, elapsed
            )
            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                "Request completed",
                status_code=response.status_code,
                elapsed=f"{elapsed:.4f}s",
            )
            clear_request_context()

            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers["X-Process-Time"] = f"{elapsed:.4f}"
            return response
