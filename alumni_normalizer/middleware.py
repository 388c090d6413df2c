import time
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .logging_config import get_logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with its status and wall time."""

    def __init__(self, app):
        super().__init__(app)
        self.logger = get_logger(name="http")

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(
                "{method} {path} -> unhandled error ({duration:.2f} ms)",
                method=request.method,
                path=request.url.path,
                duration=(time.perf_counter() - start) * 1000,
            )
            raise

        self.logger.info(
            "{method} {path} -> {status} ({duration:.2f} ms)",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration=(time.perf_counter() - start) * 1000,
        )
        return response
