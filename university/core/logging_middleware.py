import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("university.access")


class LoggingMiddleware(BaseHTTPMiddleware):
    """One access line per request; 4xx at WARNING and 5xx at ERROR."""

    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        elapsed_ms = (time.monotonic() - start) * 1000

        status = response.status_code
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        client = request.client.host if request.client else "-"
        logger.log(
            level,
            "%s %s %s -> %s (%.1fms)",
            client,
            request.method,
            request.url.path,
            status,
            elapsed_ms,
        )
        return response
