import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


def _batch_suffix(request: Request) -> str:
    """Row counters left on request.state by the upload route, if any."""
    counts = getattr(request.state, "batch_counts", None)
    if counts is None:
        return ""
    total, valid, invalid = counts
    return f" [rows={total} valid={valid} invalid={invalid}]"


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()

        response = await call_next(request)

        logger.info(
            "%s %s -> %s in %.1fms%s",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
            _batch_suffix(request),
        )

        return response
