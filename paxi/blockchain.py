"""Blocks of a proof-of-work chain."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

from .logger import get_logger

PREFIX = b"\x00\x00\x00\x00"

_UINT64_MAX = (1 << 64) - 1


@dataclass
class Block:
    """A block of data linked to the hash of the block before it."""

    index: int = 0
    nonce: int = 0
    data: bytes = b""
    prev: bytes = b""
    hash: bytes = b""
    prefix: bytes = field(default=PREFIX, compare=False)
    successor: Block | None = field(default=None, compare=False, repr=False)

    def next(self, data: bytes) -> Block:
        """Mine and link the block that follows this one."""
        block = Block(index=self.index + 1, data=data, prev=self.hash, prefix=self.prefix)
        block.mine()
        self.successor = block
        return block

    def mine(self) -> None:
        """Search nonces until the hash begins with the block's prefix.

        The digest covers the block bytes followed by every nonce tried so
        far, each as a little-endian 64-bit number.
        """
        log = get_logger()
        log.debug("start mining block %d", self.index)
        hasher = hashlib.sha256(self.to_bytes())
        nonce = 0
        while nonce <= _UINT64_MAX:
            hasher.update(nonce.to_bytes(8, "little"))
            digest = hasher.digest()
            if digest.startswith(self.prefix):
                self.nonce = nonce
                self.hash = digest
                log.debug("block %d nonce found %d", self.index, nonce)
                return
            nonce += 1
        log.error("Cannot find nonce for block %d", self.index)

    def to_bytes(self) -> bytes:
        """Index as a little-endian 64-bit number, then data, then the previous hash."""
        return self.index.to_bytes(8, "little") + self.data + self.prev


def genesis(prefix: bytes = PREFIX) -> Block:
    """Mine the first block: 1024 zero bytes of data after a 256-byte zero hash."""
    block = Block(index=0, data=bytes(1024), prev=bytes(256), prefix=prefix)
    block.mine()
    return block