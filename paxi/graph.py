"""Directed graph with traversal, cycle detection and strongly connected components."""

from __future__ import annotations

import enum
from collections import deque
from typing import Hashable, Iterator


class _Color(enum.Enum):
    WHITE = 0  # unvisited
    GRAY = 1   # on the current search path
    BLACK = 2  # finished


class Graph:
    """Directed graph over hashable vertices, kept in insertion order."""

    def __init__(self) -> None:
        self._succ: dict[Hashable, dict[Hashable, None]] = {}
        self._pred: dict[Hashable, dict[Hashable, None]] = {}

    def __len__(self) -> int:
        return len(self._succ)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._succ

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._succ))

    def add(self, vertex: Hashable) -> None:
        """Add ``vertex`` if it is not in the graph yet."""
        if vertex not in self._succ:
            self._succ[vertex] = {}
            self._pred[vertex] = {}

    def remove(self, vertex: Hashable) -> None:
        """Remove ``vertex`` and every edge touching it; unknown vertices are ignored."""
        if vertex not in self._succ:
            return
        del self._succ[vertex]
        del self._pred[vertex]
        for other in self._succ:
            self._succ[other].pop(vertex, None)
            self._pred[other].pop(vertex, None)

    def add_edge(self, source: Hashable, target: Hashable) -> None:
        """Add an edge, adding missing endpoints. Self edges are rejected."""
        if source == target:
            raise ValueError("graph: adding self edge")
        self.add(source)
        self.add(target)
        self._succ[source][target] = None
        self._pred[target][source] = None

    def remove_edge(self, source: Hashable, target: Hashable) -> None:
        """Remove the edge if both endpoints exist."""
        if source not in self._succ or target not in self._succ:
            return
        self._succ[source].pop(target, None)
        self._pred[target].pop(source, None)

    def vertices(self) -> list[Hashable]:
        """All vertices, in the order they were added."""
        return list(self._succ)

    def successors(self, vertex: Hashable) -> list[Hashable]:
        """Vertices reachable from ``vertex`` by one edge."""
        return list(self._succ.get(vertex, ()))

    def predecessors(self, vertex: Hashable) -> list[Hashable]:
        """Vertices with an edge into ``vertex``."""
        return list(self._pred.get(vertex, ()))

    def _breadth_first(self, vertex: Hashable,
                       edges: dict[Hashable, dict[Hashable, None]]) -> list[Hashable]:
        result: list[Hashable] = []
        visited = {vertex}
        queue = deque([vertex])
        while queue:
            current = queue.popleft()
            result.append(current)
            for neighbour in edges.get(current, ()):
                if neighbour not in visited:
                    visited.add(neighbour)
                    queue.append(neighbour)
        return result

    def bfs(self, vertex: Hashable) -> list[Hashable]:
        """Breadth-first order of vertices reachable from ``vertex``."""
        return self._breadth_first(vertex, self._succ)

    def bfs_reverse(self, vertex: Hashable) -> list[Hashable]:
        """Breadth-first order following edges backwards from ``vertex``."""
        return self._breadth_first(vertex, self._pred)

    def dfs(self, vertex: Hashable) -> list[Hashable]:
        """Depth-first order of vertices reachable from ``vertex``."""
        result: list[Hashable] = []
        visited: set[Hashable] = set()
        stack = [vertex]
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                result.append(current)
            stack.extend(n for n in self._succ.get(current, ()) if n not in visited)
        return result

    def transpose(self) -> Graph:
        """Return a new graph with every edge reversed."""
        result = Graph()
        for vertex in self._succ:
            result._succ[vertex] = dict(self._pred[vertex])
            result._pred[vertex] = dict(self._succ[vertex])
        return result

    def _gray_path(self) -> list[Hashable] | None:
        colors = dict.fromkeys(self._succ, _Color.WHITE)
        for root in self._succ:
            if colors[root] is not _Color.WHITE:
                continue
            colors[root] = _Color.GRAY
            stack = [(root, iter(list(self._succ[root])))]
            while stack:
                vertex, neighbours = stack[-1]
                for neighbour in neighbours:
                    state = colors[neighbour]
                    if state is _Color.GRAY:
                        return [v for v, _ in stack]
                    if state is _Color.WHITE:
                        colors[neighbour] = _Color.GRAY
                        stack.append((neighbour, iter(list(self._succ[neighbour]))))
                        break
                else:
                    colors[vertex] = _Color.BLACK
                    stack.pop()
        return None

    def cyclic(self) -> bool:
        """True if the graph contains a cycle."""
        return self._gray_path() is not None

    def cycle(self) -> list[Hashable] | None:
        """Vertices on the search path where the first cycle was found, or None."""
        return self._gray_path()

    def scc(self) -> list[list[Hashable]]:
        """Strongly connected components, found with Tarjan's algorithm."""
        index: dict[Hashable, int] = {}
        low: dict[Hashable, int] = {}
        on_stack: set[Hashable] = set()
        stack: list[Hashable] = []
        output: list[list[Hashable]] = []

        def visit(vertex: Hashable) -> None:
            index[vertex] = low[vertex] = len(index)
            stack.append(vertex)
            on_stack.add(vertex)

        for root in self._succ:
            if root in index:
                continue
            visit(root)
            work = [(root, iter(list(self._succ[root])))]
            while work:
                vertex, neighbours = work[-1]
                descended = False
                for neighbour in neighbours:
                    if neighbour not in index:
                        visit(neighbour)
                        work.append((neighbour, iter(list(self._succ[neighbour]))))
                        descended = True
                        break
                    if neighbour in on_stack:
                        low[vertex] = min(low[vertex], index[neighbour])
                if descended:
                    continue
                work.pop()
                if work:
                    parent = work[-1][0]
                    low[parent] = min(low[parent], low[vertex])
                if low[vertex] == index[vertex]:
                    component: list[Hashable] = []
                    while True:
                        member = stack.pop()
                        on_stack.discard(member)
                        component.append(member)
                        if member == vertex:
                            break
                    output.append(component)
        return output