"""
Public word identifiers for shareable links.

A catalog index is pushed through a keyed 32-bit permutation and written in
base 36. The permutation is four invertible steps:

    x ^= key
    x = x * M1 mod 2**32        (M1 odd)
    x ^= x >> 16
    x = x * M2 mod 2**32        (M2 odd)

Odd multipliers are invertible modulo 2**32, and a 16-bit xorshift on a
32-bit word is its own inverse, so decoding runs the steps backwards. This
hides neighbouring answers from casual enumeration; it is not encryption.
"""

from __future__ import annotations

import re
import string
from typing import Optional

_MASK = 0xFFFFFFFF
_M1 = 0x2C1B3C6D
_M2 = 0x297A2D39
_M1_INV = pow(_M1, -1, 1 << 32)
_M2_INV = pow(_M2, -1, 1 << 32)

DEFAULT_KEY = 0x5EED_CA75

_ALPHABET = string.digits + string.ascii_lowercase
# 36**7 > 2**32, so no valid identifier is longer than 7 characters.
_ID_PATTERN = re.compile(r"^[0-9a-z]{1,7}$")


def _permute(value: int, key: int) -> int:
    value = (value ^ key) & _MASK
    value = (value * _M1) & _MASK
    value ^= value >> 16
    return (value * _M2) & _MASK


def _unpermute(value: int, key: int) -> int:
    value = (value * _M2_INV) & _MASK
    value ^= value >> 16
    value = (value * _M1_INV) & _MASK
    return (value ^ key) & _MASK


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


# PUBLIC_INTERFACE
class WordIdentifierCodec:
    """Bijective mapping between catalog indices and public identifiers.

    Parameters:
        catalog_size: number of valid indices; decode rejects anything outside
                      [0, catalog_size)
        key: 32-bit permutation key
    """

    def __init__(self, catalog_size: int, key: int = DEFAULT_KEY):
        if catalog_size <= 0:
            raise ValueError(f"catalog_size must be positive, got {catalog_size}")
        if catalog_size > _MASK + 1:
            raise ValueError("catalog_size does not fit the 32-bit identifier space")
        self.catalog_size = catalog_size
        self.key = key & _MASK

    # PUBLIC_INTERFACE
    def encode(self, index: int) -> str:
        """Return the public identifier for a catalog index.

        Raises:
            ValueError: if index is outside the catalog.
        """
        if not 0 <= index < self.catalog_size:
            raise ValueError(f"index {index} outside catalog of size {self.catalog_size}")
        return _to_base36(_permute(index, self.key))

    # PUBLIC_INTERFACE
    def decode(self, identifier: object) -> Optional[int]:
        """Return the catalog index for identifier, or None if it does not resolve.

        Never raises: malformed text, values beyond 32 bits and indices outside
        the catalog all come back as None.
        """
        if not isinstance(identifier, str):
            return None
        text = identifier.strip().lower()
        if not _ID_PATTERN.match(text):
            return None
        value = int(text, 36)
        # Leading zeros would give a second spelling of the same identifier.
        if value > _MASK or _to_base36(value) != text:
            return None
        index = _unpermute(value, self.key)
        if index >= self.catalog_size:
            return None
        return index
