"""
Prometheus metrics for the license service.

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
licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total licenses issued",
    ["license_type"],
)

license_activations_total = Counter(
    "license_activations_total",
    "Activation attempts by outcome",
    ["outcome"],
)

license_verifications_total = Counter(
    "license_verifications_total",
    "Verification calls by outcome",
    ["outcome"],
)

admin_actions_total = Counter(
    "admin_actions_total",
    "Administrative actions",
    ["action"],
)

# Store metrics
store_operation_duration_seconds = Histogram(
    "store_operation_duration_seconds",
    "License store operation duration in seconds",
    ["operation"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
)

store_errors_total = Counter(
    "store_errors_total",
    "License store failures",
    ["operation", "error_type"],
)

# Telemetry metrics
telemetry_dispatch_failures_total = Counter(
    "telemetry_dispatch_failures_total",
    "Telemetry events that could not be handed to the broker",
    ["event"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
