import pytest

from motionkit.astar import AStar, GraphSearchResult
from motionkit.graph import Graph


def _graph(edges):
    graph = Graph(reversible=True)
    for src, dst, weight in edges:
        graph.connect(src, dst, weight)
    return graph


def _path_cost(graph, path):
    total = 0.0
    for src, dst in zip(path, path[1:]):
        children = graph.children(src)
        weights = graph.outgoing_edges(src)
        total += min(w for c, w in zip(children, weights) if c == dst)
    return total


DIAMOND = [(0, 1, 1.0), (0, 2, 4.0), (1, 3, 5.0), (2, 3, 1.0), (1, 2, 1.0)]


@pytest.mark.parametrize("dijkstra", [True, False])
def test_finds_cheapest_path(dijkstra):
    graph = _graph(DIAMOND)
    result = AStar(dijkstra).search(graph, 0, 3, lambda node: 0.0)
    assert result.success
    assert result.node_path == [0, 1, 2, 3]
    assert result.path_cost == pytest.approx(_path_cost(graph, result.node_path))


def test_admissible_heuristic_matches_dijkstra():
    graph = _graph(DIAMOND)
    heuristic = {0: 2.0, 1: 1.0, 2: 1.0, 3: 0.0}.__getitem__
    astar = AStar(False).search(graph, 0, 3, heuristic)
    dijkstra = AStar(True).search(graph, 0, 3, heuristic)
    assert astar.node_path == dijkstra.node_path
    assert astar.path_cost == pytest.approx(dijkstra.path_cost)


def test_path_endpoints():
    graph = _graph(DIAMOND)
    result = AStar().search(graph, 0, 3)
    assert result.node_path[0] == 0
    assert result.node_path[-1] == 3


def test_unreachable_goal_fails():
    graph = _graph([(0, 1, 1.0), (1, 2, 1.0)])
    result = AStar().search(graph, 0, 5)
    assert result.success is False
    assert result.node_path == [0, 1, 2]


def test_init_is_goal():
    graph = _graph(DIAMOND)
    result = AStar().search(graph, 0, 0)
    assert result == GraphSearchResult(True, [0], 0.0)


def test_init_without_edges_fails():
    graph = _graph([(1, 2, 1.0)])
    result = AStar().search(graph, 0, 2)
    assert result.success is False
    assert result.node_path == [0]


def test_search_goals_reaches_nearest_goal():
    neighbors = {0: [1, 2], 1: [3], 2: [4], 3: [], 4: []}
    weights = {0: [1.0, 3.0], 1: [1.0], 2: [1.0], 3: [], 4: []}
    result = AStar().search_goals(0, {3, 4}, neighbors, weights)
    assert result.success
    assert result.node_path == [0, 1, 3]
    assert result.path_cost == pytest.approx(weights[0][0] + weights[1][0])


def test_search_goals_improves_open_node():
    neighbors = {0: [1, 2], 1: [2], 2: []}
    weights = {0: [1.0, 5.0], 1: [1.0], 2: []}
    result = AStar().search_goals(0, [2], neighbors, weights)
    assert result.node_path == [0, 1, 2]
    assert result.path_cost == pytest.approx(weights[0][0] + weights[1][0])


def test_search_goals_missing_node_raises():
    with pytest.raises(KeyError):
        AStar().search_goals(0, [1], {0: [1]}, {})


def test_search_goals_unreachable():
    neighbors = {0: [1], 1: []}
    weights = {0: [1.0], 1: []}
    result = AStar().search_goals(0, [7], neighbors, weights)
    assert result.success is False
    assert result.node_path == [0, 1]