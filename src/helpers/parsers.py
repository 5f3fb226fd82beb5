"""Parsing utilities for common data transformations."""

from decimal import Decimal

from src.helpers.constants import DEFAULT_ENERGY_UNIT_PRICE, SUN_PER_TRX
from src.helpers.logging import get_logger


logger = get_logger(__name__)


def sun_to_trx(sun: int | None) -> Decimal | None:
    """Convert sun to TRX (divide by 1e6).

    Args:
        sun: Amount in sun, or None

    Returns:
        Decimal | None: Amount in TRX, or None if input was None

    Example:
        >>> sun_to_trx(2059504131)
        Decimal('2059.504131')
        >>> sun_to_trx(None)
        None
    """
    return Decimal(sun) / SUN_PER_TRX if sun is not None else None


def trx_to_sun(trx: Decimal | int | str | None) -> int | None:
    """Convert TRX to sun (multiply by 1e6), truncating sub-sun fractions.

    Example:
        >>> trx_to_sun("1.5")
        1500000
    """
    return int(Decimal(trx) * SUN_PER_TRX) if trx is not None else None


def parse_energy_prices(prices: str) -> list[tuple[int, int]]:
    """Parse the node's energy price history.

    Args:
        prices: Comma separated ``timestamp_ms:price_sun`` pairs, as returned
            by ``/getenergyprices``

    Returns:
        list[tuple[int, int]]: (timestamp_ms, price_sun) pairs in node order

    Raises:
        ValueError: If a component is not a ``timestamp:price`` pair of integers

    Example:
        >>> parse_energy_prices("0:100,1575871200000:10")
        [(0, 100), (1575871200000, 10)]
    """
    history: list[tuple[int, int]] = []
    for component in prices.split(","):
        parts = component.split(":")
        if len(parts) != 2:
            msg = f"invalid energy price component {component!r}, expected 'timestamp:price'"
            raise ValueError(msg)
        history.append((int(parts[0]), int(parts[1])))
    return history


def parse_latest_energy_price(prices: str) -> int:
    """Return the current energy unit price in sun.

    Falls back to DEFAULT_ENERGY_UNIT_PRICE when the price list cannot be parsed.
    """
    try:
        history = parse_energy_prices(prices)
    except ValueError as e:
        logger.warning("Unusable energy price list, using default: %s", e)
        return DEFAULT_ENERGY_UNIT_PRICE
    return history[-1][1]


__all__ = [
    "parse_energy_prices",
    "parse_latest_energy_price",
    "sun_to_trx",
    "trx_to_sun",
]
