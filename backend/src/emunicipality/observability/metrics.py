"""Prometheus metrics for eMunicipality.

Defines operational metrics exposed at /metrics.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "emunicipality_http_requests_total",
    "Total HTTP requests handled",
    ["method", "route", "status_code"]
)

http_request_duration_seconds = Histogram(
    "emunicipality_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "route"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
)

# Datastore metrics
datastore_statements_total = Counter(
    "emunicipality_datastore_statements_total",
    "Total SQL statements executed",
    ["verb", "status"]  # verb: SELECT|INSERT|UPDATE|DELETE, status: success|error
)

datastore_statement_duration_seconds = Histogram(
    "emunicipality_datastore_statement_duration_seconds",
    "SQL statement latency in seconds",
    ["verb"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Document request lifecycle
document_requests_total = Counter(
    "emunicipality_document_requests_total",
    "Document request lifecycle events",
    ["event"]  # event: created|updated|deleted
)

document_status_changes_total = Counter(
    "emunicipality_document_status_changes_total",
    "Document status changes",
    ["from_status", "to_status"]
)
