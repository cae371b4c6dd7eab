"""Server record store.

The host application owns persistence; this module defines the CRUD
contract it must satisfy, plus an in-memory implementation.
"""

import logging
from abc import ABC, abstractmethod

from ethserver.exceptions import DuplicateServerError, ServerNotFoundError

from .server import ServerRecord

logger = logging.getLogger(__name__)


class ServerStore(ABC):
    """Abstract CRUD access to server records keyed by id."""

    @abstractmethod
    def create(self, record: ServerRecord) -> ServerRecord:
        """Add a new record.

        Raises
        ------
        DuplicateServerError
            If a record with the same id exists.
        """
        ...

    @abstractmethod
    def get(self, server_id: str) -> ServerRecord:
        """Get a record by id.

        Raises
        ------
        ServerNotFoundError
            If no record exists for ``server_id``.
        """
        ...

    @abstractmethod
    def update(self, record: ServerRecord) -> ServerRecord:
        """Replace an existing record with an edited version."""
        ...

    @abstractmethod
    def delete(self, server_id: str) -> None:
        """Delete a record by id."""
        ...

    @abstractmethod
    def list(self) -> list[ServerRecord]:
        """List all records ordered by id."""
        ...


class InMemoryServerStore(ServerStore):
    """Dict-backed store for development and testing.

    Parameters
    ----------
    records : list[ServerRecord] | None
        Records to preload.
    """

    def __init__(self, records: list[ServerRecord] | None = None):
        self._records: dict[str, ServerRecord] = {}
        for record in records or []:
            self.create(record)

    def create(self, record: ServerRecord) -> ServerRecord:
        if record.id in self._records:
            raise DuplicateServerError(f"Server already exists: {record.id}")
        self._records[record.id] = record
        logger.info("Server created", extra={"server_id": record.id})
        return record

    def get(self, server_id: str) -> ServerRecord:
        try:
            return self._records[server_id]
        except KeyError:
            raise ServerNotFoundError(server_id) from None

    def update(self, record: ServerRecord) -> ServerRecord:
        if record.id not in self._records:
            raise ServerNotFoundError(record.id)
        self._records[record.id] = record
        logger.info("Server updated", extra={"server_id": record.id})
        return record

    def delete(self, server_id: str) -> None:
        if self._records.pop(server_id, None) is None:
            raise ServerNotFoundError(server_id)
        logger.info("Server deleted", extra={"server_id": server_id})

    def list(self) -> list[ServerRecord]:
        return [self._records[key] for key in sorted(self._records)]

    def __len__(self) -> int:
        return len(self._records)
