"""Connectivity checks for Ethereum server records.

A check dials the record's RPC endpoint once, asks for ``net_version``
and compares the reported network ID against the declared one. Every
failure is reported through the returned ``ValidationResult``; nothing
is raised to the caller.
"""

import asyncio
import json
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import aiohttp
import requests
from web3 import AsyncWeb3, Web3
from web3.types import RPCEndpoint

from ethserver.core.server import ServerRecord
from ethserver.exceptions import (
    NetworkMismatchError,
    ProtocolError,
    ServerConnectionError,
    ServerValidationError,
)
from ethserver.observability.logging import redact_url
from ethserver.observability.metrics import VALIDATION_DURATION, VALIDATIONS

logger = logging.getLogger(__name__)

NET_VERSION = RPCEndpoint("net_version")

DEFAULT_TIMEOUT = 10.0


class FailureKind(str, Enum):
    """Why a connectivity check failed."""

    CONNECTION = "connection"
    PROTOCOL = "protocol"
    NETWORK_MISMATCH = "network_mismatch"


_FAILURE_KINDS: dict[type[ServerValidationError], FailureKind] = {
    ServerConnectionError: FailureKind.CONNECTION,
    ProtocolError: FailureKind.PROTOCOL,
    NetworkMismatchError: FailureKind.NETWORK_MISMATCH,
}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a connectivity check.

    Attributes
    ----------
    error : bool
        True if the check failed.
    message : str
        Human-readable outcome, including the underlying error on failure.
    failure : FailureKind | None
        Failure category, or None on success.
    reported_network_id : str | None
        The network ID returned by the endpoint, when one was received.
    """

    error: bool
    message: str
    failure: FailureKind | None = None
    reported_network_id: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the server passed the check."""
        return not self.error

    def to_dict(self) -> dict[str, Any]:
        """Convert to the ``{"error", "message"}`` mapping."""
        return {"error": self.error, "message": self.message}


def _extract_network_version(response: Any) -> str:
    """Pull the network ID out of a raw ``net_version`` JSON-RPC response."""
    if not isinstance(response, Mapping):
        raise ProtocolError(f"Protocol version is not valid: unexpected response {response!r}.")

    error = response.get("error")
    if error:
        detail = error.get("message", error) if isinstance(error, Mapping) else error
        raise ProtocolError(f"net_version returned an error: {detail}")

    result = response.get("result")
    if not isinstance(result, str):
        raise ProtocolError(f"Protocol version is not valid: net_version returned {result!r}.")
    return result


def endpoint_uri(url: str) -> str:
    """Return the URL to dial, defaulting to ``http://`` for bare ``host:port``."""
    if "://" in url:
        return url
    return f"http://{url}"


def _as_validation_error(exc: Exception, timeout: float) -> ServerValidationError:
    """Map any exception raised during a check onto the failure taxonomy."""
    if isinstance(exc, ServerValidationError):
        return exc
    if isinstance(exc, json.JSONDecodeError):
        return ProtocolError(f"Protocol version is not valid: {exc.msg}")
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, requests.exceptions.Timeout)):
        return ServerConnectionError(f"Request timed out after {timeout:g} seconds.")
    return ServerConnectionError(str(exc) or type(exc).__name__)


class ConnectivityChecker:
    """Checks that a server is reachable and on its declared network.

    Parameters
    ----------
    timeout : float
        Seconds to wait for the RPC response. Default is 10.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        """Request timeout in seconds."""
        return self._timeout

    def validate(self, record: ServerRecord) -> ValidationResult:
        """Check a server with one blocking ``net_version`` round trip.

        Parameters
        ----------
        record : ServerRecord
            The server to check.

        Returns
        -------
        ValidationResult
            The outcome. Failures are reported, never raised.
        """
        started = time.perf_counter()
        reported = None
        try:
            w3 = Web3(
                Web3.HTTPProvider(
                    endpoint_uri(record.url),
                    request_kwargs={"timeout": self._timeout},
                    exception_retry_configuration=None,
                )
            )
            reported = _extract_network_version(w3.provider.make_request(NET_VERSION, []))
            self._compare(record, reported)
        except Exception as e:
            return self._failure(record, e, reported, started)
        return self._success(record, reported, started)

    async def validate_async(
        self,
        record: ServerRecord,
        cancel: asyncio.Event | None = None,
    ) -> ValidationResult:
        """Check a server with one awaited ``net_version`` round trip.

        Parameters
        ----------
        record : ServerRecord
            The server to check.
        cancel : asyncio.Event | None
            Optional signal. If set before the response arrives, the
            in-flight request is cancelled and the check fails as a
            connection failure.

        Returns
        -------
        ValidationResult
            The outcome. Failures are reported, never raised.
        """
        started = time.perf_counter()
        reported = None
        try:
            reported = _extract_network_version(await self._request_async(record, cancel))
            self._compare(record, reported)
        except Exception as e:
            return self._failure(record, e, reported, started)
        return self._success(record, reported, started)

    async def _request_async(self, record: ServerRecord, cancel: asyncio.Event | None) -> Any:
        w3 = AsyncWeb3(
            AsyncWeb3.AsyncHTTPProvider(
                endpoint_uri(record.url),
                request_kwargs={"timeout": aiohttp.ClientTimeout(total=self._timeout)},
                exception_retry_configuration=None,
            )
        )
        request = asyncio.ensure_future(
            asyncio.wait_for(w3.provider.make_request(NET_VERSION, []), timeout=self._timeout)
        )
        try:
            if cancel is not None:
                waiter = asyncio.ensure_future(cancel.wait())
                try:
                    await asyncio.wait({request, waiter}, return_when=asyncio.FIRST_COMPLETED)
                finally:
                    waiter.cancel()
                if not request.done():
                    raise ServerConnectionError("Validation cancelled.")
            return await request
        finally:
            if not request.done():
                request.cancel()
                await asyncio.gather(request, return_exceptions=True)
            await w3.provider.disconnect()

    @staticmethod
    def _compare(record: ServerRecord, reported: str) -> None:
        if record.is_wildcard:
            return
        if reported != record.network_id:
            raise NetworkMismatchError(record.network_id, reported)

    def _success(self, record: ServerRecord, reported: str | None, started: float) -> ValidationResult:
        VALIDATIONS.labels(outcome="ok").inc()
        VALIDATION_DURATION.observe(time.perf_counter() - started)
        logger.info(
            "Server validated",
            extra={
                "server_id": record.id,
                "url": redact_url(record.url),
                "network_id": record.network_id,
                "reported_network_id": reported,
            },
        )
        return ValidationResult(
            error=False,
            message=f"{record.id} ({record.url}) is up and listening on network {record.network_id}",
            reported_network_id=reported,
        )

    def _failure(
        self,
        record: ServerRecord,
        exc: Exception,
        reported: str | None,
        started: float,
    ) -> ValidationResult:
        error = _as_validation_error(exc, self._timeout)
        kind = _FAILURE_KINDS.get(type(error), FailureKind.CONNECTION)
        VALIDATIONS.labels(outcome=kind.value).inc()
        VALIDATION_DURATION.observe(time.perf_counter() - started)
        logger.warning(
            "Server validation failed",
            extra={
                "server_id": record.id,
                "url": redact_url(record.url),
                "failure": kind.value,
                "error": str(error),
            },
        )
        return ValidationResult(
            error=True,
            message=f"Unable to connect to server {record.label}. {error}",
            failure=kind,
            reported_network_id=reported,
        )
