"""Prometheus metrics for ethserver.

Metrics:
- ethserver_validations_total: Counter of connectivity checks by outcome
- ethserver_validation_duration_seconds: Histogram of check duration
"""

from prometheus_client import Counter, Histogram

# Counters
VALIDATIONS = Counter(
    "ethserver_validations_total",
    "Total number of server connectivity checks",
    ["outcome"],
)

# Histograms
VALIDATION_DURATION = Histogram(
    "ethserver_validation_duration_seconds",
    "Server connectivity check duration",
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)
