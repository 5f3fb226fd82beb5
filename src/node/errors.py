"""Errors raised by the node HTTP client.

Every error records the HTTP method and endpoint of the call that produced
it. None of them are retried by the client.
"""

from typing import Any


class NodeClientError(Exception):
    """Base class for all node client errors."""

    summary = "node request failed"

    def __init__(self, detail: str = "", *, method: str = "", endpoint: str = "") -> None:
        self.detail = detail
        self.method = method
        self.endpoint = endpoint

        msg = self.summary
        if method or endpoint:
            msg = f"{msg} ({method} {endpoint})"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class SerializationError(NodeClientError):
    summary = "failed to marshal JSON request body"


class RequestConstructionError(NodeClientError):
    summary = "failed to create HTTP request"


class TransportError(NodeClientError):
    summary = "failed to execute HTTP request"


class ReadError(NodeClientError):
    summary = "failed to read HTTP response body"


class HTTPStatusError(NodeClientError):
    """The node answered with something other than 200.

    The node returns 200 for every application-level outcome, so any other
    status is an infrastructure failure.
    """

    summary = "invalid http status"

    def __init__(self, status_code: int, *, method: str = "", endpoint: str = "") -> None:
        self.status_code = status_code
        super().__init__(str(status_code), method=method, endpoint=endpoint)


class RPCError(NodeClientError):
    """The node reported an application error through the ``Error`` key."""

    summary = "RPC returned error"

    def __init__(self, message: str, *, method: str = "", endpoint: str = "") -> None:
        self.message = message
        super().__init__(message, method=method, endpoint=endpoint)


class MalformedErrorFieldError(NodeClientError):
    summary = "failed to read JSON error field as string"

    def __init__(self, value: Any, *, method: str = "", endpoint: str = "") -> None:
        self.value = value
        super().__init__(repr(value), method=method, endpoint=endpoint)


class DeserializationError(NodeClientError):
    summary = "failed to unmarshal JSON response"


class ParameterEncodingError(NodeClientError):
    summary = "failed to encode params"


class MissingBlockHeaderError(NodeClientError):
    summary = "failed to retrieve block header"


class TransactionNotFoundError(NodeClientError):
    summary = "transaction not found"


class TransactionCreationError(NodeClientError):
    summary = "failed to create transaction"


class MissingContractABIError(NodeClientError):
    summary = "could not get contract ABI"


class _ResultCodeError(NodeClientError):
    """Failure signalled inside a 200 response by a ``result: false`` marker."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        response: Any = None,
        method: str = "",
        endpoint: str = "",
    ) -> None:
        self.code = code
        self.message = message
        self.response = response
        super().__init__(
            f"code: {code}, message: {message}", method=method, endpoint=endpoint
        )


class ContractCallError(_ResultCodeError):
    summary = "contract call failed"


class BroadcastError(_ResultCodeError):
    summary = "broadcasting failed"


__all__ = [
    "BroadcastError",
    "ContractCallError",
    "DeserializationError",
    "HTTPStatusError",
    "MalformedErrorFieldError",
    "MissingBlockHeaderError",
    "MissingContractABIError",
    "NodeClientError",
    "ParameterEncodingError",
    "RPCError",
    "ReadError",
    "RequestConstructionError",
    "SerializationError",
    "TransactionCreationError",
    "TransactionNotFoundError",
    "TransportError",
]
