import pytest

from motionkit.graph import AdjacencyList, Graph


def test_adjacency_connect_returns_size():
    adj = AdjacencyList()
    assert adj.connect(3, 1.5) == 1
    assert adj.connect(4, 2.5) == 2
    assert len(adj) == 2
    assert adj.nodes == [3, 4]
    assert adj.edges == [1.5, 2.5]


def test_adjacency_disconnect_all_to_node():
    adj = AdjacencyList()
    adj.connect(1, 1.0)
    adj.connect(2, 2.0)
    adj.connect(1, 3.0)
    assert adj.disconnect(1) == 2
    assert adj.nodes == [2]
    assert adj.edges == [2.0]


def test_adjacency_disconnect_specific_edge():
    adj = AdjacencyList()
    adj.connect(1, 1.0)
    adj.connect(1, 3.0)
    assert adj.disconnect(1, 3.0) == 1
    assert adj.edges == [1.0]
    assert adj.disconnect(1, 9.0) == 0


def test_adjacency_disconnect_if():
    adj = AdjacencyList()
    for node in range(5):
        adj.connect(node, float(node))
    removed = adj.disconnect_if(lambda n, e: n % 2 == 0)
    assert removed == 3
    assert adj.nodes == [1, 3]
    assert adj.edges == [1.0, 3.0]


def test_connect_grows_graph_and_lists_children():
    g = Graph()
    g.connect(0, 3, 2.0)
    assert len(g) == 4
    assert g.children(0) == [3]
    assert g.outgoing_edges(0) == [2.0]
    assert g.parents(3) == [0]
    assert g.incoming_edges(3) == [2.0]


def test_nodes_only_connected():
    g = Graph()
    g.connect(0, 2, 1.0)
    g.connect(5, 2, 1.0)
    assert g.nodes() == [0, 2, 5]


def test_disconnect():
    g = Graph()
    g.connect(0, 1, 1.0)
    g.connect(0, 1, 2.0)
    assert g.disconnect(0, 1, 2.0) is True
    assert g.outgoing_edges(0) == [1.0]
    assert g.incoming_edges(1) == [1.0]
    assert g.disconnect(1, 0) is False
    assert g.disconnect(0, 1) is True
    assert g.children(0) == []
    assert g.parents(1) == []


def test_disconnect_out_of_range():
    g = Graph()
    g.connect(0, 1, 1.0)
    with pytest.raises(IndexError):
        g.disconnect(0, 7)


def test_reverse_swaps_direction():
    g = Graph()
    g.connect(0, 1, 4.0)
    g.reverse()
    assert g.children(1) == [0]
    assert g.parents(0) == [1]
    assert g.children(0) == []


def test_non_reversible_rejects_backward_queries():
    g = Graph(reversible=False)
    g.connect(0, 1, 1.0)
    assert g.children(0) == [1]
    with pytest.raises(TypeError):
        g.parents(1)
    with pytest.raises(TypeError):
        g.incoming_edges(1)
    with pytest.raises(TypeError):
        g.reverse()


def test_unknown_node_raises():
    g = Graph()
    with pytest.raises(IndexError):
        g.children(0)


def test_negative_node_rejected():
    g = Graph()
    with pytest.raises(ValueError):
        g.connect(-1, 0, 1.0)


def test_format_lists_connections():
    g = Graph()
    g.connect(0, 1, 1.5)
    text = g.format("My graph")
    lines = text.splitlines()
    assert lines[0] == "My graph:"
    assert "Node 0 is connected to:" in lines
    assert any("child node 1" in line and "1.5" in line for line in lines)


def test_clear_empties():
    g = Graph()
    g.connect(0, 1, 1.0)
    g.clear()
    assert len(g) == 0
    assert g.nodes() == []