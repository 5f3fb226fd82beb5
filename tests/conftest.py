"""Pytest configuration and shared fixtures for node client tests."""

import httpx
import pytest
import pytest_asyncio

from typing import TYPE_CHECKING

from src.node.fullnode import FullNodeClient
from src.node.solidity import SolidityNodeClient


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


FULLNODE_URL = "http://node.test/wallet"
SOLIDITY_URL = "http://node.test/walletsolidity"

OWNER = "TZ4UXDV5ZhNW7fb2AMSbgfAEZ7hWsnYS2g"
CONTRACT = "TG3XXyExBkPp9nzdajDZsozEu4BkaSJozs"


@pytest.fixture
def owner_address() -> str:
    """Base58 address used as the caller in contract tests."""
    return OWNER


@pytest.fixture
def contract_address() -> str:
    """Base58 address used as the callee in contract tests."""
    return CONTRACT


@pytest_asyncio.fixture
async def http_client() -> "AsyncGenerator[httpx.AsyncClient]":
    """Provide a plain AsyncClient; pytest-httpx intercepts its requests.

    Yields:
        httpx.AsyncClient: Transport shared by the node clients
    """
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def solidity_node(http_client: httpx.AsyncClient) -> SolidityNodeClient:
    """Solidity-node client bound to the test transport."""
    return SolidityNodeClient(SOLIDITY_URL, http_client)


@pytest.fixture
def full_node(http_client: httpx.AsyncClient) -> FullNodeClient:
    """Full-node client bound to the test transport."""
    return FullNodeClient(FULLNODE_URL, http_client)
