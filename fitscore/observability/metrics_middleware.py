"""
FastAPI middleware for automatic Prometheus metrics collection.

This middleware automatically tracks:
- Request counts by endpoint, method, and status code
- Request latency histograms
- Requests in progress (concurrent requests)
"""

import logging
import time
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from fitscore.config import ENABLE_METRICS
from fitscore.observability.metrics import (
    http_requests_total,
    http_request_duration_seconds,
    http_requests_in_progress,
)

logger = logging.getLogger(__name__)

# Path segments that are always identifiers
_USER_SEGMENT = "users"
_WEEK_SEGMENT = "week"


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware to collect Prometheus metrics for HTTP requests.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        method = request.method
        path = normalize_path(request.url.path)

        http_requests_in_progress.labels(method=method, endpoint=path).inc()
        start_time = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            logger.error(f"Request failed: {e}", exc_info=True)
            raise
        finally:
            http_requests_in_progress.labels(method=method, endpoint=path).dec()
            duration = time.perf_counter() - start_time
            http_requests_total.labels(
                method=method, endpoint=path, status=status_code
            ).inc()
            http_request_duration_seconds.labels(
                method=method, endpoint=path
            ).observe(duration)

        return response


def normalize_path(path: str) -> str:
    """
    Normalize request path to reduce label cardinality.

    - /api/v1/users/abc123/habits -> /api/v1/users/{user_id}/habits
    - /api/v1/users/abc123/habits/week/12 -> /api/v1/users/{user_id}/habits/week/{week_number}
    """
    if path in ("/metrics", "/health", "/"):
        return path

    parts = path.strip("/").split("/")
    normalized = []
    for index, part in enumerate(parts):
        previous = parts[index - 1] if index else ""
        if previous == _USER_SEGMENT:
            normalized.append("{user_id}")
        elif previous == _WEEK_SEGMENT:
            normalized.append("{week_number}")
        else:
            normalized.append(part)

    return "/" + "/".join(normalized)


def setup_metrics_middleware(app) -> None:
    """Add Prometheus metrics middleware to the FastAPI application."""
    if not ENABLE_METRICS:
        logger.info("Metrics collection is disabled (ENABLE_METRICS=false)")
        return

    app.add_middleware(PrometheusMiddleware)
    logger.info("Prometheus metrics middleware added to FastAPI")
