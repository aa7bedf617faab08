"""Key-value commands and the replicated state machine database."""

from __future__ import annotations

import base64
import json
import threading
from dataclasses import dataclass, field
from typing import Iterable

from .ident import ID

Key = int
Value = bytes


@dataclass(eq=False)
class Command:
    """A read (``value`` is None) or write against one key."""

    key: Key = 0
    value: Value | None = None
    client_id: ID = field(default_factory=lambda: ID(""))
    command_id: int = 0

    def empty(self) -> bool:
        """True when every field still has its zero value."""
        return (self.key == 0 and self.value is None
                and self.client_id == "" and self.command_id == 0)

    def is_read(self) -> bool:
        return self.value is None

    def is_write(self) -> bool:
        return self.value is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Command):
            return NotImplemented
        return (self.key == other.key
                and (self.value or b"") == (other.value or b"")
                and self.client_id == other.client_id
                and self.command_id == other.command_id)

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        if self.value is None:
            return f"Get{{key={self.key} id={self.client_id} cid={self.command_id}}}"
        return (f"Put{{key={self.key} value={self.value.hex()} "
                f"id={self.client_id} cid={self.command_id}}}")


class Database:
    """Thread-safe key-value store, optionally keeping every written value."""

    def __init__(self, multiversion: bool = False) -> None:
        self._lock = threading.RLock()
        self._data: dict[Key, Value] = {}
        self._version = 0
        self._multiversion = multiversion
        self._history: dict[Key, list[Value]] = {}

    def execute(self, command: Command) -> Value | None:
        """Apply ``command`` and return the value the key held before."""
        with self._lock:
            previous = self._data.get(command.key)
            self._put(command.key, command.value)
            return previous

    def get(self, key: Key) -> Value | None:
        with self._lock:
            return self._data.get(key)

    def _put(self, key: Key, value: Value | None) -> None:
        if value is None:
            return
        self._data[key] = value
        self._version += 1
        if self._multiversion:
            self._history.setdefault(key, []).append(value)

    def put(self, key: Key, value: Value | None) -> None:
        """Store ``value`` under ``key``; a None value is ignored."""
        with self._lock:
            self._put(key, value)

    def version(self, key: Key) -> int:
        """Return the number of writes applied to the database so far."""
        with self._lock:
            return self._version

    def history(self, key: Key) -> list[Value]:
        """Return every value written to ``key``, oldest first."""
        with self._lock:
            return list(self._history.get(key, ()))

    def __str__(self) -> str:
        with self._lock:
            payload = {
                str(key): base64.b64encode(self._data[key]).decode("ascii")
                for key in sorted(self._data, key=str)
            }
        return json.dumps(payload, separators=(",", ":"))


def conflict(gamma: Command, delta: Command) -> bool:
    """True when reordering the two commands could change the final state."""
    return gamma.key == delta.key and not (gamma.is_read() and delta.is_read())


def conflict_batch(batch1: Iterable[Command], batch2: Iterable[Command]) -> bool:
    """True when any command of one batch conflicts with any of the other."""
    second = list(batch2)
    return any(conflict(a, b) for a in batch1 for b in second)