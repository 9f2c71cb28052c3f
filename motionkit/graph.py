"""Directed graphs stored as adjacency lists indexed by integer nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

E = TypeVar("E")

_ANY_EDGE: Any = object()


@dataclass
class AdjacencyList(Generic[E]):
    """Parallel lists of destination nodes and the edges that lead to them."""

    nodes: list[int] = field(default_factory=list)
    edges: list[E] = field(default_factory=list)

    def connect(self, node: int, edge: E) -> int:
        """Add a connection and return the number of connections held."""
        self.nodes.append(node)
        self.edges.append(edge)
        return len(self.nodes)

    def disconnect(self, node: int, edge: E = _ANY_EDGE) -> int:
        """Remove connections to ``node`` (optionally only with ``edge``); return how many."""
        if edge is _ANY_EDGE:
            return self.disconnect_if(lambda n, _e: n == node)
        return self.disconnect_if(lambda n, e: n == node and e == edge)

    def disconnect_if(self, predicate: Callable[[int, E], bool]) -> int:
        """Remove every connection for which ``predicate(node, edge)`` holds."""
        kept = [(n, e) for n, e in zip(self.nodes, self.edges) if not predicate(n, e)]
        removed = len(self.nodes) - len(kept)
        self.nodes[:] = [n for n, _ in kept]
        self.edges[:] = [e for _, e in kept]
        return removed

    def __len__(self) -> int:
        return len(self.edges)


@dataclass
class _Connections(Generic[E]):
    forward: AdjacencyList[E] = field(default_factory=AdjacencyList)
    backward: AdjacencyList[E] = field(default_factory=AdjacencyList)


class Graph(Generic[E]):
    """Directed multigraph; a reversible graph also tracks incoming connections."""

    def __init__(self, reversible: bool = True) -> None:
        self._reversible = reversible
        self._lists: list[_Connections[E]] = []

    @property
    def reversible(self) -> bool:
        return self._reversible

    def __len__(self) -> int:
        return len(self._lists)

    def nodes(self) -> list[int]:
        """Nodes that take part in at least one connection, in ascending order."""
        return [
            node
            for node, conns in enumerate(self._lists)
            if conns.forward or conns.backward
        ]

    def connect(self, src: int, dst: int, edge: E) -> None:
        """Add a directed connection from ``src`` to ``dst`` carrying ``edge``."""
        if src < 0 or dst < 0:
            raise ValueError("node indices must be non-negative")
        needed = max(src, dst) + 1
        if needed > len(self._lists):
            self._lists.extend(_Connections() for _ in range(needed - len(self._lists)))
        self._lists[src].forward.connect(dst, edge)
        if self._reversible:
            self._lists[dst].backward.connect(src, edge)

    def _entry(self, node: int) -> _Connections[E]:
        if not 0 <= node < len(self._lists):
            raise IndexError(f"node {node} is not in the graph")
        return self._lists[node]

    def _require_reversible(self, operation: str) -> None:
        if not self._reversible:
            raise TypeError(f"graph must be reversible to {operation}")

    def children(self, node: int) -> list[int]:
        return list(self._entry(node).forward.nodes)

    def outgoing_edges(self, node: int) -> list[E]:
        return list(self._entry(node).forward.edges)

    def parents(self, node: int) -> list[int]:
        self._require_reversible("query parents")
        return list(self._entry(node).backward.nodes)

    def incoming_edges(self, node: int) -> list[E]:
        self._require_reversible("query incoming edges")
        return list(self._entry(node).backward.edges)

    def disconnect(self, src: int, dst: int, edge: E = _ANY_EDGE) -> bool:
        """Remove connections from ``src`` to ``dst``; return whether any existed."""
        if not (0 <= src < len(self._lists) and 0 <= dst < len(self._lists)):
            raise IndexError("disconnection nodes not found")
        if not self._lists[src].forward.disconnect(dst, edge):
            return False
        if self._reversible and not self._lists[dst].backward.disconnect(src, edge):
            raise RuntimeError("disconnection found in forward, but not backward")
        return True

    def reverse(self) -> None:
        """Flip the direction of every connection."""
        self._require_reversible("reverse it")
        for conns in self._lists:
            conns.forward, conns.backward = conns.backward, conns.forward

    def format(self, heading: str = "") -> str:
        """Describe the outgoing connections of every node as text."""
        lines = [f"{heading}:"] if heading else []
        for node, conns in enumerate(self._lists):
            if conns.forward:
                lines.append(f"Node {node} is connected to:")
            for child, edge in zip(conns.forward.nodes, conns.forward.edges):
                lines.append(f"    - child node {child} with edge: {edge}")
        return "\n".join(lines)

    def clear(self) -> None:
        self._lists.clear()