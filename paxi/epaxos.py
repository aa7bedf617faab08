"""Egalitarian Paxos instance state and replica messages."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping

from .db import Command
from .ident import ID

if TYPE_CHECKING:
    from .ballot import Ballot


class Status(enum.IntEnum):
    """Progress of an instance, in the order it is reached."""

    NONE = 0
    PREACCEPTED = 1
    ACCEPTED = 2
    COMMITTED = 3
    EXECUTED = 4


def _format_dep(dep: Mapping[ID, int]) -> str:
    items = " ".join(f"{node}:{dep[node]}" for node in sorted(dep, key=str))
    return f"map[{items}]"


@dataclass
class Instance:
    """One command slot with its sequence number and dependencies."""

    cmd: Command = field(default_factory=Command)
    ballot: int = 0
    status: Status = Status.NONE
    seq: int = 0
    dep: dict[ID, int] = field(default_factory=dict)

    # leader bookkeeping
    request: Any = None
    quorum: Any = None
    changed: bool = False

    def merge(self, seq: int, dep: Mapping[ID, int]) -> None:
        """Raise sequence and dependencies to the larger values, noting any change."""
        if seq > self.seq:
            self.seq = seq
            self.changed = True
        for node, slot in dep.items():
            if slot > self.dep.get(node, 0):
                self.dep[node] = slot
                self.changed = True

    def copy_dep(self) -> dict[ID, int]:
        """An independent copy of the dependencies."""
        return dict(self.dep)


@dataclass
class PreAccept:
    ballot: Ballot
    replica: ID
    slot: int
    command: Command
    seq: int
    dep: dict[ID, int] = field(default_factory=dict)

    def __str__(self) -> str:
        return (f"PreAccept {{bal={int(self.ballot)} id={self.replica} s={self.slot} "
                f"cmd={self.command} seq={self.seq} dep={_format_dep(self.dep)}}}")


@dataclass
class PreAcceptReply:
    ballot: Ballot
    replica: ID
    slot: int
    seq: int
    dep: dict[ID, int] = field(default_factory=dict)
    committed: dict[ID, int] = field(default_factory=dict)

    def __str__(self) -> str:
        return (f"PreAcceptReply {{bal={int(self.ballot)} id={self.replica} s={self.slot} "
                f"seq={self.seq} dep={_format_dep(self.dep)} "
                f"c={_format_dep(self.committed)}}}")


@dataclass
class Accept:
    ballot: Ballot
    replica: ID
    slot: int
    seq: int
    dep: dict[ID, int] = field(default_factory=dict)


@dataclass
class AcceptReply:
    ballot: Ballot
    replica: ID
    slot: int


@dataclass
class Commit:
    ballot: Ballot
    replica: ID
    slot: int
    command: Command
    seq: int
    dep: dict[ID, int] = field(default_factory=dict)