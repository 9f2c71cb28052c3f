"""A* and Dijkstra shortest-path search over weighted directed graphs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping, Sequence

from motionkit.graph import Graph

logger = logging.getLogger(__name__)

_MAX_STEPS = 10000


@dataclass
class GraphSearchResult:
    """Outcome of a search: whether a goal was reached, the node path and its cost."""

    success: bool
    node_path: list[int] = field(default_factory=list)
    path_cost: float = 0.0


@dataclass
class _SearchNode:
    index: int
    parent: int
    cost: float
    priority: float


class AStar:
    """Best-first search; with ``dijkstra`` set the heuristic is ignored."""

    def __init__(self, dijkstra: bool = False) -> None:
        self.dijkstra = dijkstra

    def search(
        self,
        graph: Graph[float],
        init: int,
        goal: int,
        heuristic: Callable[[int], float] | None = None,
    ) -> GraphSearchResult:
        """Shortest path from ``init`` to ``goal`` along the graph's outgoing edges."""

        def expand(node: int) -> Iterable[tuple[int, float]]:
            try:
                return zip(graph.children(node), graph.outgoing_edges(node))
            except IndexError:
                return ()

        if self.dijkstra or heuristic is None:
            estimate: Callable[[int], float] = lambda _node: 0.0
        else:
            estimate = heuristic
        logger.debug("Init->goal: %d --> %d", init, goal)
        return self._run(init, lambda node: node == goal, expand, estimate)

    def search_goals(
        self,
        init: int,
        goals: Iterable[int],
        neighbors: Mapping[int, Sequence[int]],
        weights: Mapping[int, Sequence[float]],
    ) -> GraphSearchResult:
        """Uniform-cost search from ``init`` to whichever of ``goals`` is cheapest.

        Every expanded node must appear in both maps; a missing one raises ``KeyError``.
        """
        goal_set = frozenset(goals)

        def expand(node: int) -> Iterable[tuple[int, float]]:
            return zip(neighbors[node], weights[node])

        return self._run(init, goal_set.__contains__, expand, lambda _node: 0.0)

    @staticmethod
    def _run(
        init: int,
        is_goal: Callable[[int], bool],
        expand: Callable[[int], Iterable[tuple[int, float]]],
        heuristic: Callable[[int], float],
    ) -> GraphSearchResult:
        current = _SearchNode(init, init, 0.0, 0.0)
        queue: list[_SearchNode] = [current]
        open_nodes: dict[int, _SearchNode] = {init: current}
        processed: dict[int, _SearchNode] = {}
        success = False
        steps = 0
        while True:
            # Stable descending sort; the last entry has the lowest priority.
            queue.sort(key=lambda n: -n.priority)
            current = queue.pop()
            open_nodes.pop(current.index, None)
            processed[current.index] = current
            if is_goal(current.index):
                success = True
                break
            for child, weight in expand(current.index):
                if child in processed:
                    continue
                cost = current.cost + weight
                candidate = _SearchNode(child, current.index, cost, cost + heuristic(child))
                known = open_nodes.get(child)
                if known is None:
                    queue.append(candidate)
                    open_nodes[child] = candidate
                elif known.cost > cost:
                    queue[:] = [n for n in queue if n.index != child]
                    queue.append(candidate)
                    open_nodes[child] = candidate
            if not queue:
                break
            steps += 1
            if steps > _MAX_STEPS:
                break

        path = [current.index]
        index = current.index
        while index != init:
            index = processed[index].parent
            path.append(index)
        path.reverse()
        result = GraphSearchResult(success, path, current.cost)
        logger.debug(
            "Valid path: %s, path length: %d, path cost: %s, iterations: %d",
            success, len(path), result.path_cost, steps,
        )
        return result