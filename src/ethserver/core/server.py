"""Ethereum server configuration record."""

from dataclasses import asdict, dataclass, replace
from typing import Any

# Stored network ID meaning "accept whatever network the node reports".
WILDCARD_NETWORK_ID = "*"


def normalize_network_id(network_id: int | str) -> str:
    """Coerce a network ID to its string form.

    Parameters
    ----------
    network_id : int | str
        A numeric network ID or the wildcard sentinel.

    Returns
    -------
    str
        The network ID as stored and compared by the checker.
    """
    if isinstance(network_id, bool):
        raise TypeError("network_id must be an int or str, not bool")
    if isinstance(network_id, int):
        return str(network_id)
    return network_id.strip()


@dataclass(frozen=True)
class ServerRecord:
    """One remote Ethereum node endpoint.

    Attributes
    ----------
    id : str
        Machine name of the server, unique within a store.
    label : str
        Human-readable name.
    url : str
        RPC endpoint address, including the port.
    network_id : str
        Declared Ethereum network ID, or ``"*"`` for any network.
    description : str
        Short free-text description.
    status : bool
        Whether the server is enabled.
    """

    id: str
    label: str
    url: str
    network_id: str = WILDCARD_NETWORK_ID
    description: str = ""
    status: bool = True

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Server id must not be empty")
        if not self.url:
            raise ValueError("Server url must not be empty")
        # Frozen dataclass: bypass __setattr__ to store the normalized id.
        object.__setattr__(self, "network_id", normalize_network_id(self.network_id))

    @property
    def is_wildcard(self) -> bool:
        """Whether the record accepts any reported network ID."""
        return self.network_id == WILDCARD_NETWORK_ID

    def is_default(self, current_default_id: str | None) -> bool:
        """Check whether this record is the currently selected default server.

        Parameters
        ----------
        current_default_id : str | None
            The default server id held by the caller's configuration.

        Returns
        -------
        bool
            True if ``current_default_id`` names this record.
        """
        return current_default_id is not None and self.id == current_default_id

    def with_changes(self, **changes: Any) -> "ServerRecord":
        """Return an edited copy of the record.

        Raises
        ------
        ValueError
            If the edit tries to change the record id.
        """
        if "id" in changes and changes["id"] != self.id:
            raise ValueError("Server id is immutable")
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict using the exported config keys."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServerRecord":
        """Build a record from a plain dict, ignoring unknown keys."""
        network_id = data.get("network_id")
        return cls(
            id=data["id"],
            label=data.get("label") or data["id"],
            url=data["url"],
            network_id=WILDCARD_NETWORK_ID if network_id is None else network_id,
            description=data.get("description") or "",
            status=bool(data.get("status", True)),
        )
