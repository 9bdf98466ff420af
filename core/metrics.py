"""
Prometheus metrics for the license server.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
    ["plan"],
)

license_activations_total = Counter(
    "license_activations_total",
    "Total license activation attempts by outcome",
    ["outcome", "environment"],
)

license_deactivations_total = Counter(
    "license_deactivations_total",
    "Total license deactivation attempts by outcome",
    ["outcome"],
)

license_validations_total = Counter(
    "license_validations_total",
    "Total license validations by outcome",
    ["outcome"],
)

license_heartbeats_total = Counter(
    "license_heartbeats_total",
    "Total heartbeats by outcome",
    ["outcome"],
)

license_key_conflicts_total = Counter(
    "license_key_conflicts_total",
    "Generated license keys that collided with an existing key",
)

audit_failures_total = Counter(
    "audit_failures_total",
    "Audit entries that could not be written",
    ["action"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
