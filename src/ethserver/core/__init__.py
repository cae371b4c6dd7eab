"""Core ethserver components."""

from .server import WILDCARD_NETWORK_ID, ServerRecord, normalize_network_id
from .store import InMemoryServerStore, ServerStore

__all__ = [
    "InMemoryServerStore",
    "ServerRecord",
    "ServerStore",
    "WILDCARD_NETWORK_ID",
    "normalize_network_id",
]
