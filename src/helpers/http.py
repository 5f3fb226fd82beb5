"""HTTP client utilities."""

from typing import Any

import httpx

from src.helpers.constants import (
    CONNECTION_TIMEOUT,
    DEFAULT_TIMEOUT,
    JSON_CONTENT_TYPE,
)


JSON_HEADERS = {
    "Content-Type": JSON_CONTENT_TYPE,
    "Accept": JSON_CONTENT_TYPE,
}


def create_http_client(
    timeout: float = DEFAULT_TIMEOUT, **kwargs: Any
) -> httpx.AsyncClient:
    """Create a configured httpx AsyncClient.

    Args:
        timeout: Default timeout in seconds (default: DEFAULT_TIMEOUT)
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance

    Example:
        ```python
        from src.helpers.http import create_http_client

        async with create_http_client(timeout=60.0) as client:
            response = await client.get("https://api.trongrid.io/wallet/getnowblock")
        ```
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout, connect=CONNECTION_TIMEOUT), **kwargs
    )


__all__ = [
    "JSON_HEADERS",
    "create_http_client",
]
