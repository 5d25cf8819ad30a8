"""Prometheus metrics."""

from prometheus_client import Counter

REQUESTS_TOTAL = Counter(
    "hashbrowns_http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "path"],
)

RESPONSES_TOTAL = Counter(
    "hashbrowns_http_responses_total",
    "Total number of HTTP responses",
    labelnames=["status_code"],
)

STORE_OPERATIONS = Counter(
    "hashbrowns_store_operations_total",
    "Content store operations by outcome",
    labelnames=["operation", "outcome"],
)
