"""
Prometheus metrics definitions for fitscore.

Metrics are organized by category:
- HTTP/API metrics: Request counts, latency, in-flight requests
- Scoring metrics: How often each scoring computation runs
- Error metrics: Errors by type and component

Metrics are exposed at the /metrics endpoint for Prometheus scraping.
"""

import logging
from prometheus_client import Counter, Gauge, Histogram

logger = logging.getLogger(__name__)

# =============================================================================
# HTTP/API Metrics
# =============================================================================

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests received",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method", "endpoint"],
)

# =============================================================================
# Scoring Metrics
# =============================================================================

level_calculations_total = Counter(
    "level_calculations_total",
    "Total XP/level calculations served",
)

level_ups_detected_total = Counter(
    "level_ups_detected_total",
    "Level increases detected between two XP totals",
)

streak_calculations_total = Counter(
    "streak_calculations_total",
    "Total habit streak calculations served",
)

habit_logs_saved_total = Counter(
    "habit_logs_saved_total",
    "Habit logs inserted or updated",
)

media_priority_rankings_total = Counter(
    "media_priority_rankings_total",
    "Total exercise media priority rankings served",
)

media_priority_candidates = Histogram(
    "media_priority_candidates",
    "Exercises without approved public media considered per ranking",
    buckets=[0, 10, 50, 100, 250, 500, 1000, 5000],
)

# =============================================================================
# Error Metrics
# =============================================================================

errors_total = Counter(
    "errors_total",
    "Total errors by type and component",
    ["error_type", "component"],  # component: api/service/database
)


def track_error(error_type: str, component: str) -> None:
    """Increment the error counter for a component"""
    errors_total.labels(error_type=error_type, component=component).inc()
