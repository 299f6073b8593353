"""
Request timing middleware

Captures high-resolution start time for each request, assigns a short
request ID and logs total request time.
"""

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..utils.debug_logger import debug_logger

logger = logging.getLogger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    """Middleware to capture request timing and log total request duration"""

    async def dispatch(self, request: Request, call_next):
        request.state.start_time = time.perf_counter()
        request.state.request_id = str(uuid.uuid4())[:8]

        debug_logger.log_route(
            request.state.request_id,
            f"Request started: {request.method} {request.url.path}",
            request
        )

        response = await call_next(request)

        total_time_ms = (time.perf_counter() - request.state.start_time) * 1000
        debug_logger.log_route(
            request.state.request_id,
            f"Request completed: {response.status_code} in {total_time_ms:.3f}ms",
            request
        )
        response.headers["X-Request-ID"] = request.state.request_id
        return response
