"""
Daily and random word selection.

The daily word walks the catalog with a fixed stride that is coprime to the
catalog size, starting from a mixed offset. Consecutive days therefore never
repeat a word until the whole catalog has been used, and the walk does not
follow catalog order.
"""

from __future__ import annotations

import math
import random
from datetime import date, datetime, tzinfo
from typing import Optional

DEFAULT_EPOCH = date(2024, 1, 1)

# Fractional part of the golden ratio; spreads the stride across the catalog.
_GOLDEN_FRACTION = 0.6180339887498949
_OFFSET_SEED = 0x9E3779B9


def _require_size(catalog_size: int) -> None:
    if catalog_size <= 0:
        raise ValueError(f"catalog_size must be positive, got {catalog_size}")


def _stride(catalog_size: int) -> int:
    """Smallest step >= golden-ratio share of the catalog that is coprime to it."""
    step = max(1, int(catalog_size * _GOLDEN_FRACTION))
    while math.gcd(step, catalog_size) != 1:
        step += 1
    return step


def _mix(value: int) -> int:
    # 32-bit avalanche step (murmur3 finalizer).
    value &= 0xFFFFFFFF
    value ^= value >> 16
    value = (value * 0x85EBCA6B) & 0xFFFFFFFF
    value ^= value >> 13
    value = (value * 0xC2B2AE35) & 0xFFFFFFFF
    value ^= value >> 16
    return value


# PUBLIC_INTERFACE
def day_number(day: date, epoch: date = DEFAULT_EPOCH) -> int:
    """Return the number of calendar days between epoch and day (may be negative)."""
    return (day - epoch).days


# PUBLIC_INTERFACE
def today(tz: Optional[tzinfo] = None, now: Optional[datetime] = None) -> date:
    """Return the current calendar date in the reference timezone tz."""
    moment = now or datetime.now(tz)
    if tz is not None and moment.tzinfo is not None:
        moment = moment.astimezone(tz)
    return moment.date()


# PUBLIC_INTERFACE
def daily_index(catalog_size: int, day: date, epoch: date = DEFAULT_EPOCH) -> int:
    """Return the catalog index of the daily word for a calendar day.

    Parameters:
        catalog_size: number of catalog entries (must be > 0)
        day: calendar date in the reference timezone
        epoch: day 0 of the sequence

    Returns:
        index in [0, catalog_size); the same (catalog_size, day) always maps
        to the same index, and any catalog_size consecutive days map to
        distinct indices.

    Raises:
        ValueError: if catalog_size <= 0.
    """
    _require_size(catalog_size)
    offset = _mix(_OFFSET_SEED ^ catalog_size) % catalog_size
    return (offset + day_number(day, epoch) * _stride(catalog_size)) % catalog_size


# PUBLIC_INTERFACE
def random_index(catalog_size: int, rng: Optional[random.Random] = None) -> int:
    """Return a uniform pseudo-random index in [0, catalog_size)."""
    _require_size(catalog_size)
    return (rng or random).randrange(0, catalog_size)
