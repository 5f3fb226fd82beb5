"""Type definitions for HTTP request and response bodies."""

from typing import Any


# Generic JSON object, used for plain request bodies and the error check
type JsonObject = dict[str, Any]

__all__ = ["JsonObject"]
