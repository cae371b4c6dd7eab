"""Ethereum network registry and connectivity checks."""

from .checker import ConnectivityChecker, FailureKind, ValidationResult
from .networks import NetworkEntry, NetworkRegistry

__all__ = [
    "ConnectivityChecker",
    "FailureKind",
    "NetworkEntry",
    "NetworkRegistry",
    "ValidationResult",
]
