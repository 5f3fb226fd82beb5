"""Common configuration constants used across the client."""

# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default HTTP request timeout in seconds"""

CONNECTION_TIMEOUT = 3.0
"""Timeout for establishing connections"""

JSON_CONTENT_TYPE = "application/json"
"""Content type sent and accepted by the node HTTP API"""

# Resource Pricing
DEFAULT_ENERGY_UNIT_PRICE = 210
"""Fallback energy unit price in sun when the node's price list is unusable"""

SUN_PER_TRX = 1_000_000
"""Number of sun in one TRX"""


__all__ = [
    "CONNECTION_TIMEOUT",
    "DEFAULT_ENERGY_UNIT_PRICE",
    "DEFAULT_TIMEOUT",
    "JSON_CONTENT_TYPE",
    "SUN_PER_TRX",
]
