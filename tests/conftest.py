import pytest

from pagerank_graph import Graph


@pytest.fixture
def cycle_graph() -> Graph:
    """0 -> 1 -> 2 -> 0"""
    return Graph.from_edges(["a", "b", "c"], [(0, 1), (1, 2), (2, 0)])


@pytest.fixture
def leaky_graph() -> Graph:
    """
    0 -> 1, 1 -> 0, 1 -> 2, 2 -> 0
    in-degree (2, 1, 1), out-degree (1, 2, 1)
    """
    return Graph.from_edges(["x", "y", "z"], [(0, 1), (1, 0), (1, 2), (2, 0)])


@pytest.fixture
def dangling_graph() -> Graph:
    """0 -> 1, 0 -> 2, 2 -> 1; node 1 has no outlinks"""
    return Graph.from_edges(["p0", "p1", "p2"], [(0, 1), (0, 2), (2, 1)])
