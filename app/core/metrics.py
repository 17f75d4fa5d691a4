"""Prometheus metric inventory for credential-registry.

Every metric the service exposes is defined here, in one place.  The
modules that own a behaviour import the metric they need and update it
at the point of action; GET /metrics renders the lot.

Two families:

  HTTP metrics: filled in by MetricsMiddleware for every request
  (except scrapes of /metrics itself).

  Registry metrics: filled in by CredentialRegistry.  Counters only go
  up, so "issued", "revoked" and every rejection reason are labels on a
  single counter, and rates come from rate() on the Prometheus side:

    sum by (outcome) (rate(registry_operations_total{operation="issue"}[5m]))

  The credentials gauge mirrors credential_count so a dashboard can
  show the size of the registry without scraping the API.
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
    # Registry calls are in-memory; anything past 250ms is the host, not us.
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Registry metrics (populated by CredentialRegistry)
# ---------------------------------------------------------------------------

REGISTRY_OPERATIONS = Counter(
    "registry_operations_total",
    "Registry operations by name and outcome",
    # operation: issue|revoke|authorize|revoke_access
    # outcome:   ok, or the error code of the rejection
    ["operation", "outcome"],
)

REGISTRY_CREDENTIALS = Gauge(
    "registry_credentials",
    "Number of credentials issued by this registry instance",
)
