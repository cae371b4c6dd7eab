"""Registry of known Ethereum networks.

Entries describe a network for display: label, description and an
optional block explorer link. The embedded table covers the well-known
public networks; deployments may load their own table from a JSON file.
"""

import json
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from ethserver.core.server import WILDCARD_NETWORK_ID, normalize_network_id
from ethserver.exceptions import RegistryLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkEntry:
    """Descriptive metadata for one Ethereum network.

    Attributes
    ----------
    id : str
        The network ID as reported by ``net_version``.
    label : str
        Human-readable network name.
    description : str
        Short description of the network.
    explorer_link : str | None
        Block explorer base URL, or a template containing ``{address}``.
    """

    id: str
    label: str
    description: str = ""
    explorer_link: str | None = None

    def get_address_url(self, address: str) -> str | None:
        """Get the block explorer URL for an address.

        Parameters
        ----------
        address : str
            The address.

        Returns
        -------
        str | None
            The block explorer URL, or None if no explorer configured.
        """
        if not self.explorer_link:
            return None
        if "{address}" in self.explorer_link:
            return self.explorer_link.replace("{address}", address)
        return f"{self.explorer_link.rstrip('/')}/address/{address}"


DEFAULT_NETWORKS = (
    NetworkEntry(
        id="1",
        label="Ethereum Mainnet",
        description="The live Ethereum network.",
        explorer_link="https://etherscan.io",
    ),
    NetworkEntry(
        id="2",
        label="Morden",
        description="Deprecated original Ethereum testnet.",
    ),
    NetworkEntry(
        id="3",
        label="Ropsten",
        description="Deprecated proof-of-work testnet.",
        explorer_link="https://ropsten.etherscan.io",
    ),
    NetworkEntry(
        id="4",
        label="Rinkeby",
        description="Deprecated proof-of-authority testnet (Clique).",
        explorer_link="https://rinkeby.etherscan.io",
    ),
    NetworkEntry(
        id="5",
        label="Goerli",
        description="Deprecated cross-client testnet.",
        explorer_link="https://goerli.etherscan.io",
    ),
    NetworkEntry(
        id="42",
        label="Kovan",
        description="Deprecated proof-of-authority testnet (Aura).",
        explorer_link="https://kovan.etherscan.io",
    ),
    NetworkEntry(
        id="17000",
        label="Holesky",
        description="Staking and infrastructure testnet.",
        explorer_link="https://holesky.etherscan.io",
    ),
    NetworkEntry(
        id="11155111",
        label="Sepolia",
        description="Application development testnet.",
        explorer_link="https://sepolia.etherscan.io",
    ),
    NetworkEntry(
        id=WILDCARD_NETWORK_ID,
        label="Private network",
        description="Any network. The reported network ID is not checked.",
    ),
)



def _entry_from_dict(index: int, item: object) -> NetworkEntry:
    """Build one registry entry from a decoded networks file item."""
    if not isinstance(item, dict) or "id" not in item or "label" not in item:
        raise RegistryLoadError(f"Network entry {index} needs 'id' and 'label'")

    network_id = item["id"]
    if isinstance(network_id, bool) or not isinstance(network_id, (int, str)):
        raise RegistryLoadError(f"Network entry {index} has an invalid id: {network_id!r}")
    network_id = normalize_network_id(network_id)
    if not network_id:
        raise RegistryLoadError(f"Network entry {index} has an empty id")

    explorer_link = item.get("explorer_link")
    if explorer_link is not None and not isinstance(explorer_link, str):
        raise RegistryLoadError(
            f"Network entry {index} has an invalid explorer_link: {explorer_link!r}"
        )

    return NetworkEntry(
        id=network_id,
        label=str(item["label"]),
        description=str(item.get("description") or ""),
        explorer_link=explorer_link or None,
    )


class NetworkRegistry:
    """Read-only lookup of network metadata by network ID.

    Parameters
    ----------
    entries : Iterable[NetworkEntry]
        The networks to register. Later entries replace earlier ones
        with the same id.
    """

    def __init__(self, entries: Iterable[NetworkEntry]):
        self._entries: dict[str, NetworkEntry] = {}
        for entry in entries:
            self._entries[entry.id] = entry

    @classmethod
    def default(cls) -> "NetworkRegistry":
        """Create a registry from the embedded table of well-known networks."""
        return cls(DEFAULT_NETWORKS)

    @classmethod
    def from_file(cls, path: str | Path) -> "NetworkRegistry":
        """Load a registry from a JSON file.

        The file holds a list of objects with ``id``, ``label`` and
        optional ``description`` and ``explorer_link`` keys.

        Raises
        ------
        RegistryLoadError
            If the file is missing, not JSON, or has malformed entries.
        """
        file_path = Path(path).expanduser()
        try:
            raw = json.loads(file_path.read_text())
        except FileNotFoundError:
            raise RegistryLoadError(f"Networks file not found: {path}") from None
        except json.JSONDecodeError as e:
            raise RegistryLoadError(f"Networks file is not valid JSON: {e}") from e

        if not isinstance(raw, list):
            raise RegistryLoadError("Networks file must contain a list of networks")

        entries = [_entry_from_dict(index, item) for index, item in enumerate(raw)]

        logger.info("Network registry loaded", extra={"path": str(file_path), "count": len(entries)})
        return cls(entries)

    def lookup(self, network_id: int | str | None) -> NetworkEntry | None:
        """Find the entry for a network ID.

        Parameters
        ----------
        network_id : int | str | None
            The network ID to resolve.

        Returns
        -------
        NetworkEntry | None
            The matching entry, or None if the network is unknown.
        """
        if network_id is None or isinstance(network_id, bool):
            return None
        return self._entries.get(normalize_network_id(network_id))

    def __contains__(self, network_id: object) -> bool:
        if not isinstance(network_id, (int, str)):
            return False
        return self.lookup(network_id) is not None

    def __iter__(self) -> Iterator[NetworkEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
