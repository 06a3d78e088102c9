import typing
from dataclasses import dataclass
from typing import Generic, Hashable, TypeVar

from maze_graph.errors import InvalidArgumentError

V = TypeVar("V", bound=Hashable)


class Edge(typing.Protocol[V]):
    """what `WeightedGraph` needs from an edge

    an unordered pair of vertices with a non-negative weight, ordered by weight.
    edges are hashed by identity, so parallel edges stay distinct.
    """

    @property
    def vertex1(self) -> V:
        ...

    @property
    def vertex2(self) -> V:
        ...

    @property
    def weight(self) -> float:
        ...

    def other_vertex(self, vertex: V) -> V:
        ...

    def __lt__(self, other: typing.Any) -> bool:
        ...


@dataclass(frozen=True, eq=False)
class WeightedEdge(Generic[V]):
    """undirected edge between `vertex1` and `vertex2`

    `eq=False` keeps identity equality and hashing: two edges joining the same
    pair of vertices with the same weight are still two edges.
    """

    vertex1: V
    vertex2: V
    weight: float = 1.0

    @property
    def is_self_loop(self) -> bool:
        return self.vertex1 == self.vertex2

    def other_vertex(self, vertex: V) -> V:
        """return the endpoint which is not `vertex`"""
        if vertex == self.vertex1:
            return self.vertex2
        elif vertex == self.vertex2:
            return self.vertex1
        else:
            raise InvalidArgumentError(f"{vertex!r} is not an endpoint of {self!r}")

    def __lt__(self, other: "WeightedEdge") -> bool:
        if not isinstance(other, WeightedEdge):
            return NotImplemented
        return self.weight < other.weight

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.vertex1!r} <--> {self.vertex2!r}, weight={self.weight})"
