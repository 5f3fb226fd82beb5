"""ABI parameter encoding for contract calls.

Thin adapter over eth-abi that accepts the loose argument forms used by
Tron tooling: base58 addresses, decimal or ``0x`` prefixed integer strings,
and hex encoded byte strings.
"""

import json
import re

from typing import Any

from eth_abi import encode
from eth_abi.exceptions import EncodingError, ParseError
from eth_abi.grammar import TupleType, parse

from src.tron.address import Address, InvalidAddressError


_ARRAY_SUFFIX_RE = re.compile(r"^(?P<inner>.+)\[(?P<size>\d*)\]$")


class AbiEncodingError(ValueError):
    """Raised when arguments cannot be ABI encoded."""


def _coerce_int(value: Any) -> int:
    if isinstance(value, bool):
        msg = f"expected integer, got bool {value!r}"
        raise AbiEncodingError(msg)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            return int(text, 16)
        return int(text)
    msg = f"expected integer, got {type(value).__name__}"
    raise AbiEncodingError(msg)


def _coerce_bytes(value: Any) -> bytes:
    if isinstance(value, bytes | bytearray):
        return bytes(value)
    if isinstance(value, str):
        return bytes.fromhex(value.removeprefix("0x"))
    if isinstance(value, list):
        return bytes(value)
    msg = f"expected bytes or hex string, got {type(value).__name__}"
    raise AbiEncodingError(msg)


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in {"true", "false"}:
        return value.lower() == "true"
    msg = f"expected bool, got {value!r}"
    raise AbiEncodingError(msg)


def _coerce_tuple(abi_type: str, value: Any) -> tuple[Any, ...]:
    parsed = parse(abi_type)
    if not isinstance(parsed, TupleType):
        msg = f"expected tuple type, got {abi_type}"
        raise AbiEncodingError(msg)

    components = [component.to_type_str() for component in parsed.components]
    if not isinstance(value, list | tuple) or len(value) != len(components):
        msg = f"{abi_type} expects {len(components)} values, got {value!r}"
        raise AbiEncodingError(msg)
    return tuple(_coerce(t, v) for t, v in zip(components, value, strict=True))


def _coerce(abi_type: str, value: Any) -> Any:
    """Convert a loosely typed argument into the form eth-abi expects."""
    array = _ARRAY_SUFFIX_RE.match(abi_type)
    if array:
        if not isinstance(value, list | tuple):
            msg = f"{abi_type} expects a list, got {type(value).__name__}"
            raise AbiEncodingError(msg)
        return [_coerce(array.group("inner"), item) for item in value]

    if abi_type.startswith("("):
        return _coerce_tuple(abi_type, value)

    if abi_type == "address":
        address = value if isinstance(value, Address) else Address.parse(value)
        return address.evm_bytes
    if abi_type.startswith(("uint", "int")):
        return _coerce_int(value)
    if abi_type == "bool":
        return _coerce_bool(value)
    if abi_type.startswith("bytes"):
        return _coerce_bytes(value)
    return value


def encode_args(types: list[str], values: list[Any]) -> bytes:
    """ABI encode ``values`` against ``types``.

    Raises:
        AbiEncodingError: If a value does not fit its type
    """
    try:
        coerced = [_coerce(t, v) for t, v in zip(types, values, strict=True)]
        return encode(types, coerced)
    except AbiEncodingError:
        raise
    except (EncodingError, InvalidAddressError, ParseError, TypeError, ValueError) as e:
        msg = f"failed to encode {types}: {e}"
        raise AbiEncodingError(msg) from e


def get_padded_param(params: list[Any]) -> bytes:
    """Encode a flat ``[type, value, type, value, ...]`` argument list.

    Args:
        params: Alternating ABI type names and values

    Returns:
        bytes: 32-byte padded ABI encoding, empty for an empty list

    Raises:
        AbiEncodingError: If the list has odd length or a value does not fit

    Example:
        >>> get_padded_param(["uint256", "0xABCD"]).hex()
        '000000000000000000000000000000000000000000000000000000000000abcd'
    """
    if len(params) % 2 != 0:
        msg = f"expected even number of params, got {len(params)}"
        raise AbiEncodingError(msg)

    types = [str(t) for t in params[0::2]]
    values = list(params[1::2])
    if not types:
        return b""
    return encode_args(types, values)


def load_abi_entries(abi_json: str) -> list[dict[str, Any]]:
    """Parse an ABI document, either a bare entry list or Tron's ``{"entrys": [...]}``.

    Raises:
        AbiEncodingError: If the document is not JSON or an entry is not an object
    """
    try:
        document = json.loads(abi_json)
    except json.JSONDecodeError as e:
        msg = f"failed to parse ABI JSON: {e}"
        raise AbiEncodingError(msg) from e

    if isinstance(document, dict):
        document = document.get("entrys", [])
    if not isinstance(document, list):
        msg = "ABI JSON must be a list of entries"
        raise AbiEncodingError(msg)

    for index, entry in enumerate(document):
        if not isinstance(entry, dict):
            msg = f"failed to parse ABI: entry {index} is {type(entry).__name__}, expected object"
            raise AbiEncodingError(msg)
    return document


def param_type(param: Any) -> str:
    """Canonical eth-abi type string for an ABI input or output.

    Struct parameters (``tuple``, ``tuple[]``, ``tuple[2]``) are expanded from
    their ``components`` into ``(type1,type2)`` form, recursively.

    Example:
        >>> param_type({"type": "tuple[]", "components": [{"type": "uint256"}, {"type": "address"}]})
        '(uint256,address)[]'
    """
    if not isinstance(param, dict):
        msg = f"failed to parse ABI: parameter is {type(param).__name__}, expected object"
        raise AbiEncodingError(msg)

    abi_type = param.get("type")
    if not isinstance(abi_type, str) or not abi_type:
        msg = f"failed to parse ABI: parameter {param.get('name', '')!r} has no type"
        raise AbiEncodingError(msg)

    if not abi_type.startswith("tuple"):
        return abi_type

    components = param.get("components")
    if not isinstance(components, list) or not components:
        msg = f"failed to parse ABI: tuple parameter {param.get('name', '')!r} has no components"
        raise AbiEncodingError(msg)

    inner = ",".join(param_type(component) for component in components)
    return f"({inner}){abi_type.removeprefix('tuple')}"


def encode_constructor_args(abi_json: str, args: list[Any] | None = None) -> bytes:
    """Encode constructor arguments for a contract deployment.

    A contract without a constructor entry accepts no arguments. Struct
    arguments are passed as lists or tuples in component order.

    Raises:
        AbiEncodingError: If the ABI is malformed or the arguments do not fit
    """
    args = args or []
    constructor = next(
        (
            entry
            for entry in load_abi_entries(abi_json)
            if str(entry.get("type", "")).lower() == "constructor"
        ),
        None,
    )

    inputs = (constructor.get("inputs") or []) if constructor else []
    if not isinstance(inputs, list):
        msg = "failed to parse ABI: constructor inputs must be a list"
        raise AbiEncodingError(msg)
    types = [param_type(inp) for inp in inputs]

    if len(types) != len(args):
        msg = f"constructor expects {len(types)} arguments, got {len(args)}"
        raise AbiEncodingError(msg)
    if not types:
        return b""
    return encode_args(types, args)


__all__ = [
    "AbiEncodingError",
    "encode_args",
    "encode_constructor_args",
    "get_padded_param",
    "load_abi_entries",
    "param_type",
]
