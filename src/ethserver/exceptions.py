"""Exception hierarchy for ethserver."""


class ServerValidationError(Exception):
    """Base class for failures raised while validating a server connection."""


class ServerConnectionError(ServerValidationError):
    """The endpoint could not be reached (refused, DNS, timeout, HTTP error)."""


class ProtocolError(ServerValidationError):
    """The endpoint answered, but the response was malformed."""


class NetworkMismatchError(ServerValidationError):
    """The endpoint reported a network ID other than the declared one.

    Parameters
    ----------
    expected : str
        The network ID declared on the server record.
    reported : str
        The network ID returned by the endpoint.
    """

    def __init__(self, expected: str, reported: str):
        self.expected = expected
        self.reported = reported
        super().__init__(f"Network ID does not match. Expected {expected}, got {reported}.")


class RegistryLoadError(Exception):
    """A network registry file could not be read or parsed."""


class ServerStoreError(Exception):
    """Base class for server store failures."""


class ServerNotFoundError(ServerStoreError, KeyError):
    """No server record exists for the requested id."""

    def __str__(self) -> str:
        return f"Server not found: {self.args[0]}"


class DuplicateServerError(ServerStoreError):
    """A server record with the same id already exists."""
