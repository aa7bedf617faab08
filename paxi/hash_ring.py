"""Consistent hash ring ordered by MD5 digests."""

from __future__ import annotations

import bisect
import hashlib
from typing import Any


class HashRing:
    """Ring of values placed by the MD5 digest of a key, like Chord."""

    def __init__(self) -> None:
        self._hashes: list[bytes] = []
        self._values: list[Any] = []

    def __len__(self) -> int:
        return len(self._values)

    def insert(self, value: Any, key: bytes) -> None:
        """Place ``value`` on the ring at the digest of ``key``."""
        digest = hashlib.md5(key).digest()
        position = bisect.bisect_left(self._hashes, digest)
        self._hashes.insert(position, digest)
        self._values.insert(position, value)

    def get(self, key: bytes) -> Any:
        """Return the value that ``key`` belongs to.

        The first node, other than the last one, whose digest exceeds the
        key's digest owns the key; otherwise the head of the ring does.
        """
        if not self._values:
            raise LookupError("hash ring is empty")
        digest = hashlib.md5(key).digest()
        position = bisect.bisect_right(self._hashes, digest)
        if position < len(self._values) - 1:
            return self._values[position]
        return self._values[0]

    def next(self, value: Any) -> Any:
        """Return the value after ``value`` on the ring, or None if absent."""
        for position, candidate in enumerate(self._values):
            if candidate == value:
                return self._values[(position + 1) % len(self._values)]
        return None

    def __str__(self) -> str:
        return "".join(f"{value} -> " for value in self._values)