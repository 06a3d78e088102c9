import pytest

from maze_graph.errors import InvalidArgumentError
from maze_graph.graph.edges import WeightedEdge


def test_other_vertex():
    edge: WeightedEdge[str] = WeightedEdge("a", "b", 2.5)
    assert edge.other_vertex("a") == "b"
    assert edge.other_vertex("b") == "a"
    with pytest.raises(InvalidArgumentError):
        edge.other_vertex("c")


def test_self_loop():
    loop: WeightedEdge[str] = WeightedEdge("a", "a")
    assert loop.is_self_loop
    assert loop.other_vertex("a") == "a"
    assert loop.weight == 1.0


def test_ordered_by_weight():
    light: WeightedEdge[str] = WeightedEdge("a", "b", 1)
    heavy: WeightedEdge[str] = WeightedEdge("a", "b", 5)
    assert light < heavy
    assert not heavy < light
    assert sorted([heavy, light]) == [light, heavy]


@pytest.mark.parametrize("other", [3, "b", None])
def test_compare_with_non_edge(other):
    edge: WeightedEdge[str] = WeightedEdge("a", "b", 1)
    assert edge.__lt__(other) is NotImplemented
    with pytest.raises(TypeError):
        edge < other


def test_parallel_edges_are_distinct():
    edge_1: WeightedEdge[str] = WeightedEdge("a", "b", 1)
    edge_2: WeightedEdge[str] = WeightedEdge("a", "b", 1)
    assert edge_1 != edge_2
    assert len({edge_1, edge_2}) == 2
    assert edge_1 == edge_1
