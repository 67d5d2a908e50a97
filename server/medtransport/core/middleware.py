"""Request correlation and access logging middleware."""

import time
import uuid
from typing import Callable, Iterable, Optional

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .config import settings
from .exceptions import InternalServerError
from .observability import get_logger, metrics_collector

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = ("/health", "/ready", "/metrics", "/favicon.ico")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Correlate every log line of a request under one ID.

    A caller-supplied X-Request-ID is reused; otherwise a UUID is minted. The
    ID is bound into structlog's contextvars while the request runs and is
    echoed on the response.
    """

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)

        response.headers[self.header_name] = request_id
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log one line per request and feed the request metrics."""

    def __init__(self, app: ASGIApp, quiet_paths: Optional[Iterable[str]] = None):
        super().__init__(app)
        self.quiet_paths = frozenset(QUIET_PATHS if quiet_paths is None else quiet_paths)

    @staticmethod
    def _client_ip(request: Request) -> str:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path in self.quiet_paths:
            return await call_next(request)

        log = logger.bind(method=request.method, path=path, client_ip=self._client_ip(request))
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            log.exception("request_failed")
            response = InternalServerError(instance=path).to_response()

        elapsed = time.perf_counter() - started
        metrics_collector.record_request(request.method, path, response.status_code, elapsed)

        log = log.bind(status_code=response.status_code, duration_ms=round(elapsed * 1000, 2))
        if response.status_code >= 500:
            log.error("request_completed")
        elif response.status_code >= 400:
            log.warning("request_completed")
        else:
            log.info("request_completed")

        return response


def setup_middleware(app: FastAPI) -> None:
    """Install access logging and request correlation; correlation runs outermost."""
    app.add_middleware(AccessLogMiddleware, quiet_paths=() if settings.debug else None)
    app.add_middleware(RequestIDMiddleware)
