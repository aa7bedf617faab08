"""Messages exchanged between replicas of the ABD, Dynamo-style and hierarchical Paxos protocols."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .db import Command
from .ident import ID

if TYPE_CHECKING:
    from .ballot import Ballot


@dataclass
class Get:
    """ABD request for a replica's value and version of a key."""

    id: ID
    cid: int
    key: int


@dataclass
class GetReply:
    """ABD reply carrying a value and its version."""

    id: ID
    cid: int
    key: int
    value: bytes | None
    version: int


@dataclass
class Set:
    """ABD request to store a value if its version is newer."""

    id: ID
    cid: int
    key: int
    value: bytes | None
    version: int


@dataclass
class SetReply:
    """ABD acknowledgement of a set, whether or not it was applied."""

    id: ID
    cid: int
    key: int


@dataclass
class Replicate:
    """Asks a replica to apply a command asynchronously."""

    command: Command = field(default_factory=Command)


@dataclass
class P1a:
    """Prepare."""

    ballot: Ballot
    slot: int

    def __str__(self) -> str:
        return f"P1a {{b={self.ballot} s={self.slot}}}"


@dataclass
class P1b:
    """Promise."""

    ballot: Ballot
    slot: int
    id: ID
    command: Command = field(default_factory=Command)

    def __str__(self) -> str:
        return f"P1b {{b={self.ballot} s={self.slot} id={self.id} cmd={self.command}}}"


@dataclass
class P2a:
    """Accept."""

    ballot: Ballot
    slot: int
    command: Command = field(default_factory=Command)

    def __str__(self) -> str:
        return f"P2a {{b={self.ballot} s={self.slot} cmd={self.command}}}"


@dataclass
class P2b:
    """Accepted."""

    ballot: Ballot
    id: ID
    slot: int

    def __str__(self) -> str:
        return f"P2b {{b={self.ballot} id={self.id} s={self.slot}}}"


@dataclass
class P3:
    """Commit."""

    ballot: Ballot
    slot: int
    command: Command = field(default_factory=Command)

    def __str__(self) -> str:
        return f"P3 {{b={self.ballot} s={self.slot} cmd={self.command}}}"