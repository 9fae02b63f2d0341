# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and clients. Never instantiated elsewhere.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── Provider Metrics (used by the PagerDuty client) ──
PROVIDER_REQUESTS = Counter(
    "oncall_finder_provider_requests_total",
    "Total requests sent to the escalation-policy provider",
    ["endpoint", "status"],
)
PROVIDER_LATENCY = Histogram(
    "oncall_finder_provider_request_duration_seconds",
    "Provider request latency in seconds",
    ["endpoint"],
)
PROVIDER_ERRORS = Counter(
    "oncall_finder_provider_errors_total",
    "Total failed provider requests",
    ["endpoint"],
)

# ── Engine Metrics (updated by service layer only) ──
CATALOG_ENTRIES = Gauge(
    "oncall_finder_catalog_entries",
    "Number of searchable catalog entries",
    ["kind"],
)
SEARCHES_TOTAL = Counter(
    "oncall_finder_searches_total",
    "Total fuzzy searches answered",
)
RESOLUTIONS_TOTAL = Counter(
    "oncall_finder_resolutions_total",
    "Total on-call resolutions",
    ["path", "outcome"],
)
SUGGESTIONS_OFFERED = Counter(
    "oncall_finder_suggestions_offered_total",
    "Total alternative policies suggested after an empty resolution",
)
