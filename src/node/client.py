"""Generic request primitive for the node HTTP API."""

import json

from types import TracebackType
from typing import Any, Self, TypeVar

import httpx

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from src.helpers.constants import DEFAULT_TIMEOUT
from src.helpers.http import JSON_HEADERS, create_http_client
from src.helpers.http_models import JsonObject
from src.helpers.logging import get_logger
from src.node.errors import (
    DeserializationError,
    HTTPStatusError,
    MalformedErrorFieldError,
    ReadError,
    RequestConstructionError,
    RPCError,
    SerializationError,
    TransportError,
)
from src.node.request_models import NodeRequest


logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
RequestT = TypeVar("RequestT", bound=NodeRequest)

ERROR_KEY = "Error"


class NodeClient:
    """Typed JSON-over-HTTP client for a node's HTTP API.

    Holds only immutable configuration, so one instance can serve concurrent
    callers. Every call is a single request/response round trip and is never
    retried.
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API base URL including its prefix, e.g.
                ``https://api.trongrid.io/walletsolidity``
            http_client: Transport to use. When omitted one is created and
                owned by this client.
            timeout: Default timeout in seconds for an owned transport

        Raises:
            ValueError: If base_url is empty or None
        """
        if not base_url:
            msg = "Base URL cannot be empty"
            raise ValueError(msg)

        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self.http_client = http_client or create_http_client(timeout=timeout)

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def get(
        self,
        path: str,
        response_model: type[ModelT],
        *,
        timeout: float | None = None,
    ) -> ModelT:
        """GET ``path`` and decode the response into ``response_model``."""
        return await self._request("GET", path, None, response_model, timeout=timeout)

    async def post(
        self,
        path: str,
        body: BaseModel | JsonObject | None,
        response_model: type[ModelT],
        *,
        timeout: float | None = None,
    ) -> ModelT:
        """POST ``body`` as JSON to ``path`` and decode the response into ``response_model``."""
        return await self._request("POST", path, body, response_model, timeout=timeout)

    def build_body(self, path: str, request_model: type[RequestT], **fields: Any) -> RequestT:
        """Construct a request DTO, reporting invalid arguments against ``path``.

        Raises:
            RequestConstructionError: If the arguments fail validation
        """
        try:
            return request_model(**fields)
        except ValidationError as e:
            raise RequestConstructionError(
                str(e), method="POST", endpoint=self.base_url + path
            ) from e

    async def _request(
        self,
        method: str,
        path: str,
        body: BaseModel | JsonObject | None,
        response_model: type[ModelT],
        *,
        timeout: float | None = None,
    ) -> ModelT:
        endpoint = self.base_url + path
        where = {"method": method, "endpoint": endpoint}

        content = _encode_body(body, where) if body is not None else None

        # None keeps the transport default instead of disabling timeouts
        overrides: dict[str, Any] = {} if timeout is None else {"timeout": timeout}

        try:
            request = self.http_client.build_request(
                method,
                endpoint,
                content=content,
                headers=JSON_HEADERS,
                **overrides,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise RequestConstructionError(str(e), **where) from e

        logger.debug("%s %s", method, endpoint)
        try:
            response = await self.http_client.send(request, stream=True)
        except httpx.TransportError as e:
            raise TransportError(str(e) or type(e).__name__, **where) from e

        try:
            raw = await response.aread()
        except httpx.HTTPError as e:
            raise ReadError(str(e) or type(e).__name__, **where) from e
        finally:
            await response.aclose()

        # the node answers 200 for every application-level outcome
        if response.status_code != httpx.codes.OK:
            raise HTTPStatusError(response.status_code, **where)

        _raise_for_error_field(raw, where)

        try:
            result = response_model.model_validate_json(raw)
        except ValidationError as e:
            raise DeserializationError(str(e), **where) from e

        logger.debug("%s %s -> %d bytes", method, endpoint, len(raw))
        return result


def _encode_body(body: BaseModel | JsonObject, where: dict[str, str]) -> bytes:
    try:
        if isinstance(body, BaseModel):
            payload = body.model_dump(mode="json", by_alias=True, exclude_none=True)
        else:
            payload = body
        return json.dumps(payload, allow_nan=False).encode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise SerializationError(str(e), **where) from e


def _raise_for_error_field(raw: bytes, where: dict[str, str]) -> None:
    """Probe the body for a top-level ``Error`` key.

    Error and success responses share no envelope, so the body is parsed as a
    generic object before any typed decoding.
    """
    try:
        document = json.loads(raw)
    except ValueError as e:
        msg = f"for error check: {e}"
        raise DeserializationError(msg, **where) from e

    if not isinstance(document, dict):
        msg = f"for error check: expected JSON object, got {type(document).__name__}"
        raise DeserializationError(msg, **where)

    if ERROR_KEY not in document:
        return

    error = document[ERROR_KEY]
    if not isinstance(error, str):
        raise MalformedErrorFieldError(error, **where)

    logger.warning("Node returned error for %s %s: %s", where["method"], where["endpoint"], error)
    raise RPCError(error, **where)


__all__ = ["NodeClient"]
