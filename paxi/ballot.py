"""Ballot numbers: a 32-bit counter followed by the proposer's zone and node."""

from __future__ import annotations

from .ident import ID, new_id

_MASK64 = (1 << 64) - 1
_MASK32 = (1 << 32) - 1
_MASK16 = (1 << 16) - 1


class Ballot(int):
    """Ballot number ``<n, zone, node>`` packed into an unsigned 64-bit int."""

    __slots__ = ()

    def n(self) -> int:
        """Return the counter held in the upper 32 bits."""
        return int(self) >> 32

    def id(self) -> ID:
        """Return the proposer identifier held in the lower 32 bits."""
        low = int(self) & _MASK32
        return new_id(low >> 16, low & _MASK16)

    def next(self, id: ID) -> Ballot:
        """Return the following ballot, owned by ``id``."""
        return new_ballot(self.n() + 1, id)

    def __str__(self) -> str:
        return f"{self.n()}.{self.id()}"

    def __repr__(self) -> str:
        return f"Ballot({self})"


def new_ballot(n: int, id: ID) -> Ballot:
    """Build the ballot ``<n, zone, node>`` for identifier ``id``."""
    return Ballot(((n << 32) | (id.zone() << 16) | id.node()) & _MASK64)


def ballot_from_string(text: str) -> Ballot:
    """Parse ``n.zone.node`` (or a bare ``n``) as written by ``str(ballot)``."""
    if "." in text:
        counter, ident = text.split(".", 1)
    else:
        counter, ident = text, ""
    if not (counter.isascii() and counter.isdigit()) or int(counter) > _MASK64:
        raise ValueError(f"Failed to convert counter {counter!r} to uint64")
    return new_ballot(int(counter), ID(ident))


def next_ballot(ballot: int, id: ID) -> int:
    """Return the plain-int ballot after ``ballot``, owned by ``id``."""
    owner = (id.zone() << 16) | id.node()
    return (((ballot >> 32) + 1) << 32) | owner


def leader_id(ballot: int) -> ID:
    """Return the proposer identifier encoded in a plain-int ballot."""
    low = ballot & _MASK32
    return new_id(low >> 16, low & _MASK16)