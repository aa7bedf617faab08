"""Chain replication: replica messages and a client that writes to the head and reads from the tail."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .client import HTTPClient
from .config import Config, get_config
from .db import Command
from .ident import ID

if TYPE_CHECKING:
    from .ballot import Ballot


@dataclass
class Accept:
    """Passes a write down the chain."""

    ballot: Ballot
    command: Command
    lsn: int
    from_: ID

    def __str__(self) -> str:
        return (f"Accept {{b={self.ballot} cmd={self.command} "
                f"lsn={self.lsn} from={self.from_}}}")


@dataclass
class Ack:
    """Acknowledges a write back up the chain."""

    ballot: Ballot
    lsn: int
    from_: ID

    def __str__(self) -> str:
        return f"Ack {{b={self.ballot} lsn={self.lsn} from={self.from_}}}"


class Client(HTTPClient):
    """Client that sends writes to the chain's head and reads to its tail."""

    def __init__(self, config: Config | None = None) -> None:
        cfg = config if config is not None else get_config()
        super().__init__("", cfg)
        ids = sorted((ID(node) for node in cfg.addrs), key=ID.sort_key)
        if not ids:
            raise ValueError("chain client needs at least one node")
        self.head: ID = ids[0]
        self.tail: ID = ids[-1]

    def get(self, key: int) -> bytes:
        """Read ``key`` from the tail of the chain."""
        value, _ = self.rest_get(self.tail, key)
        return value

    def put(self, key: int, value: bytes) -> None:
        """Write ``value`` under ``key`` through the head of the chain."""
        self.cid += 1
        self.rest_put(self.head, key, value)