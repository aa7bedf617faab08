"""Small thread-safe maps and sets, plus a FIFO queue and a LIFO stack."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Hashable


class ConcurrentMap:
    """Dictionary guarded by a lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._data: dict[Hashable, Any] = {}

    def get(self, key: Hashable) -> Any:
        """Return the value for ``key``, or None."""
        with self._lock:
            return self._data.get(key)

    def put(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def keys(self) -> list[Hashable]:
        with self._lock:
            return list(self._data)


class ConcurrentSet:
    """Set guarded by a lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._data: set[Hashable] = set()

    def put(self, element: Hashable) -> None:
        with self._lock:
            self._data.add(element)

    def get(self) -> Any:
        """Return an arbitrary element, or None when the set is empty."""
        with self._lock:
            return next(iter(self._data), None)

    def __contains__(self, element: object) -> bool:
        with self._lock:
            return element in self._data

    def remove(self, element: Hashable) -> None:
        """Remove ``element`` if present."""
        with self._lock:
            self._data.discard(element)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def array(self) -> list[Hashable]:
        with self._lock:
            return list(self._data)


class MultiMap:
    """Two-level dictionary guarded by a lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._data: dict[Hashable, dict[Hashable, Any]] = {}

    def keys(self) -> list[Hashable]:
        with self._lock:
            return list(self._data)

    def secondary_keys(self, key: Hashable) -> list[Hashable]:
        """Return the inner keys stored under ``key``."""
        with self._lock:
            return list(self._data.get(key, ()))

    def get(self, key: Hashable, key2: Hashable) -> Any:
        """Return the value at ``key``/``key2``, or None."""
        with self._lock:
            return self._data.get(key, {}).get(key2)

    def put(self, key: Hashable, key2: Hashable, value: Any) -> None:
        with self._lock:
            self._data.setdefault(key, {})[key2] = value


class Queue:
    """First-in first-out queue."""

    def __init__(self) -> None:
        self._items: deque[Any] = deque()

    def __len__(self) -> int:
        return len(self._items)

    def push(self, element: Any) -> None:
        self._items.append(element)

    def pop(self) -> Any:
        """Remove and return the oldest element, or None when empty."""
        return self._items.popleft() if self._items else None


class Stack:
    """Last-in first-out stack."""

    def __init__(self) -> None:
        self._items: list[Any] = []

    def __len__(self) -> int:
        return len(self._items)

    def peek(self) -> Any:
        """Return the top element without removing it, or None when empty."""
        return self._items[-1] if self._items else None

    def pop(self) -> Any:
        """Remove and return the top element, or None when empty."""
        return self._items.pop() if self._items else None

    def push(self, value: Any) -> None:
        self._items.append(value)

    def empty(self) -> bool:
        return not self._items