"""Configuration management and environment variable utilities."""

import os

from dotenv import load_dotenv

from src.helpers.constants import DEFAULT_TIMEOUT


# Load environment variables from .env file
load_dotenv()


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ValueError: If the environment variable is not set

    Example:
        ```python
        from src.helpers.config import get_required_env

        api_key = get_required_env("TRON_PRO_API_KEY")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ValueError(msg)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def _get_url(url: str | None, env_key: str) -> str:
    if url:
        return url

    env_url = os.getenv(env_key)
    if not env_url:
        msg = f"{env_key} must be provided or set in environment variables"
        raise ValueError(msg)

    return env_url


def get_fullnode_url(url: str | None = None) -> str:
    """Get the full-node HTTP API base URL from parameter or environment.

    The base URL includes the API prefix, e.g.
    ``https://api.shasta.trongrid.io/wallet``.

    Args:
        url: Optional base URL to use directly

    Returns:
        Full-node base URL

    Raises:
        ValueError: If URL is not provided and TRON_FULLNODE_URL env var is not set
    """
    return _get_url(url, "TRON_FULLNODE_URL")


def get_soliditynode_url(url: str | None = None) -> str:
    """Get the solidity-node HTTP API base URL from parameter or environment.

    Args:
        url: Optional base URL to use directly

    Returns:
        Solidity-node base URL, e.g. ``https://api.shasta.trongrid.io/walletsolidity``

    Raises:
        ValueError: If URL is not provided and TRON_SOLIDITYNODE_URL env var is not set
    """
    return _get_url(url, "TRON_SOLIDITYNODE_URL")


def get_http_timeout() -> float:
    """Get the default HTTP timeout in seconds from TRON_HTTP_TIMEOUT.

    Raises:
        ValueError: If TRON_HTTP_TIMEOUT is set but is not a positive number
    """
    raw = os.getenv("TRON_HTTP_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT

    try:
        timeout = float(raw)
    except ValueError as e:
        msg = f"TRON_HTTP_TIMEOUT must be a number, got {raw!r}"
        raise ValueError(msg) from e

    if timeout <= 0:
        msg = f"TRON_HTTP_TIMEOUT must be positive, got {raw!r}"
        raise ValueError(msg)
    return timeout


__all__ = [
    "get_fullnode_url",
    "get_http_timeout",
    "get_optional_env",
    "get_required_env",
    "get_soliditynode_url",
]
