"""Observability module for ethserver."""

from .health import HealthCheck, HealthServer, HealthStatus, ServerConnectivityCheck
from .logging import configure_logging, get_logger, redact_url
from .metrics import VALIDATION_DURATION, VALIDATIONS

__all__ = [
    # Health
    "HealthCheck",
    "HealthServer",
    "HealthStatus",
    "ServerConnectivityCheck",
    # Logging
    "configure_logging",
    "get_logger",
    "redact_url",
    # Metrics
    "VALIDATION_DURATION",
    "VALIDATIONS",
]
