"""Tron address codec.

A Tron address is 21 bytes: the 0x41 network prefix followed by the 20-byte
EVM-style account id. On the wire it is usually base58check encoded
(``T...``, 34 characters) and sometimes Tron hex encoded (``41...``).
"""

import re

from dataclasses import dataclass
from typing import Self

import base58


ADDRESS_LENGTH = 21
"""Byte length of a Tron address"""

ADDRESS_LENGTH_BASE58 = 34
"""Character length of a base58check encoded Tron address"""

TRON_BYTE_PREFIX = 0x41
"""Leading byte of every Tron mainnet/testnet address"""

_EVM_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


class InvalidAddressError(ValueError):
    """Raised when a string cannot be decoded into a Tron address."""


@dataclass(frozen=True, slots=True)
class Address:
    """Immutable 21-byte Tron address."""

    raw: bytes

    def __post_init__(self) -> None:
        if len(self.raw) != ADDRESS_LENGTH:
            msg = f"address must be {ADDRESS_LENGTH} bytes, got {len(self.raw)}"
            raise InvalidAddressError(msg)
        if self.raw[0] != TRON_BYTE_PREFIX:
            msg = f"address must start with 0x{TRON_BYTE_PREFIX:02x}, got 0x{self.raw[0]:02x}"
            raise InvalidAddressError(msg)

    @classmethod
    def from_base58(cls, value: str) -> Self:
        try:
            raw = base58.b58decode_check(value)
        except ValueError as e:
            msg = f"invalid base58 address {value!r}: {e}"
            raise InvalidAddressError(msg) from e
        return cls(raw)

    @classmethod
    def from_hex(cls, value: str) -> Self:
        """Decode a Tron hex address (``41`` + 40 hex chars, optional ``0x``)."""
        stripped = value.removeprefix("0x")
        try:
            raw = bytes.fromhex(stripped)
        except ValueError as e:
            msg = f"invalid hex address {value!r}"
            raise InvalidAddressError(msg) from e
        return cls(raw)

    @classmethod
    def from_evm(cls, value: str | bytes) -> Self:
        """Build a Tron address from a 20-byte EVM address."""
        if isinstance(value, str):
            if not _EVM_ADDRESS_RE.match(value):
                msg = f"invalid EVM address {value!r}"
                raise InvalidAddressError(msg)
            value = bytes.fromhex(value[2:])
        return cls(bytes([TRON_BYTE_PREFIX]) + value)

    @classmethod
    def parse(cls, value: str) -> Self:
        """Decode any supported textual form: EVM hex, Tron hex or base58check.

        Raises:
            InvalidAddressError: If the format is not recognised or fails validation
        """
        if _EVM_ADDRESS_RE.match(value):
            return cls.from_evm(value)
        if len(value) == ADDRESS_LENGTH * 2 and value.startswith("41"):
            return cls.from_hex(value)
        if len(value) == ADDRESS_LENGTH_BASE58 and value.startswith("T"):
            return cls.from_base58(value)

        msg = f"invalid address format: {value}"
        raise InvalidAddressError(msg)

    def hex(self) -> str:
        """Tron hex representation, 41-prefixed, no ``0x``."""
        return self.raw.hex()

    @property
    def evm_bytes(self) -> bytes:
        """The 20-byte account id without the Tron prefix."""
        return self.raw[1:]

    def __str__(self) -> str:
        return base58.b58encode_check(self.raw).decode("ascii")


ZERO_ADDRESS = Address(bytes([TRON_BYTE_PREFIX]) + bytes(ADDRESS_LENGTH - 1))
"""Tron's burn address, T9yD14Nj9j7xAB4dbGeiX9h8unkKHxuWwb"""


def to_wire(address: Address | str) -> str:
    """Render an address for a ``visible=true`` request body.

    Strings are passed through untouched.
    """
    return str(address)


__all__ = [
    "ADDRESS_LENGTH",
    "ADDRESS_LENGTH_BASE58",
    "TRON_BYTE_PREFIX",
    "ZERO_ADDRESS",
    "Address",
    "InvalidAddressError",
    "to_wire",
]
