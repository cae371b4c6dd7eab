"""Descriptive field set for displaying a server record.

Builds the labeled rows a host application needs to render a server
info table. No markup is produced here.
"""

from dataclasses import dataclass
from typing import Any

from ethserver.blockchain.networks import NetworkEntry, NetworkRegistry

from .server import ServerRecord

UNKNOWN_NETWORK_LABEL = "Unknown network"
NO_EXPLORER = "Not available"


@dataclass(frozen=True)
class ServerInfo:
    """A server record together with its resolved network."""

    record: ServerRecord
    network: NetworkEntry | None
    is_default: bool = False

    @property
    def network_label(self) -> str:
        """Network name with its ID, falling back for unknown networks."""
        label = self.network.label if self.network else UNKNOWN_NETWORK_LABEL
        return f"{label} (Ethereum Network Id: {self.record.network_id})"

    @property
    def explorer_link(self) -> str | None:
        """Block explorer link of the resolved network, if any."""
        if self.network is None:
            return None
        return self.network.explorer_link

    def rows(self) -> list[tuple[str, str]]:
        """Ordered ``(label, content)`` pairs for display."""
        node_info = self.record.label
        if self.record.description:
            node_info = f"{node_info}\n{self.record.description}"

        network_info = self.network_label
        if self.network and self.network.description:
            network_info = f"{network_info}\n{self.network.description}"

        return [
            ("Node info", node_info),
            ("Config name", self.record.id),
            ("RPC Url", self.record.url),
            ("Network info", network_info),
            ("Blockchain Explorer", self.explorer_link or NO_EXPLORER),
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "id": self.record.id,
            "label": self.record.label,
            "description": self.record.description,
            "url": self.record.url,
            "network_id": self.record.network_id,
            "network": self.network_label,
            "network_description": self.network.description if self.network else "",
            "explorer": self.explorer_link,
            "status": self.record.status,
            "is_default": self.is_default,
        }


def describe_server(
    record: ServerRecord,
    registry: NetworkRegistry,
    current_default_id: str | None = None,
) -> ServerInfo:
    """Resolve a record's network and build its descriptive field set.

    Parameters
    ----------
    record : ServerRecord
        The server to describe.
    registry : NetworkRegistry
        Registry used to resolve ``record.network_id``.
    current_default_id : str | None
        The caller's default server id, used to flag the default server.

    Returns
    -------
    ServerInfo
        Descriptive data. Unknown networks resolve to ``network=None``.
    """
    return ServerInfo(
        record=record,
        network=registry.lookup(record.network_id),
        is_default=record.is_default(current_default_id),
    )
