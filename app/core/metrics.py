"""Prometheus metric inventory.

Every metric the service exports is declared here; the owning modules
import and update them.  Scraped from GET /metrics.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    # Authenticated page views include one provider round-trip, so the
    # upper buckets matter more than for a purely local API.
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Provider round-trips
# ---------------------------------------------------------------------------

TOKEN_EXCHANGES = Counter(
    "oauth_token_exchanges_total",
    "Authorization code exchanges against the provider token endpoint",
    ["result"],  # "success" or "failure"
)

PROFILE_FETCHES = Counter(
    "oauth_profile_fetches_total",
    "User-info lookups against the provider",
    ["result"],  # "success" or "failure"
)
