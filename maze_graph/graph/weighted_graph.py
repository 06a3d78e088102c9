"""undirected weighted graph with minimum spanning tree and shortest path queries

self-loops, parallel edges and unconnected components are all allowed. the
graph is built once from its vertices and edges and never modified afterwards.
"""

import heapq
import logging
import math
import typing
from dataclasses import dataclass, field
from typing import Generic, Hashable, TypeVar

from maze_graph.datastructures.disjoint_set import DisjointSet
from maze_graph.errors import InvalidArgumentError, NoPathExistsError
from maze_graph.graph.edges import Edge
from maze_graph.utils.sorting import top_k_sort

V = TypeVar("V", bound=Hashable)
E = TypeVar("E", bound=Edge)


@dataclass(order=True)
class _SearchPath(Generic[V, E]):
    """partial path from the start vertex, ordered only by its cumulative weight"""

    weight: float
    vertex: V = field(compare=False)
    edges: tuple[E, ...] = field(default=tuple(), compare=False)

    def extend(self, edge: E) -> "_SearchPath[V, E]":
        return _SearchPath(
            weight=self.weight + edge.weight,
            vertex=edge.other_vertex(self.vertex),
            edges=self.edges + (edge,),
        )


class WeightedGraph(Generic[V, E]):
    """undirected weighted graph over `vertices`, joined by `edges`

    # Parameters
    - `vertices: typing.Sequence[V]`: vertices of the graph. duplicates are tolerated
    - `edges: typing.Sequence[E]`: edges of the graph, each with both endpoints in `vertices`
        and a non-negative weight. parallel edges are kept

    # Raises
    - `InvalidArgumentError`: if `vertices` or `edges` is `None` or contains `None`,
        if an edge has a negative weight, or if an edge has an endpoint not in `vertices`
    """

    def __init__(
        self,
        vertices: typing.Sequence[V],
        edges: typing.Sequence[E],
    ) -> None:
        if vertices is None or edges is None:
            raise InvalidArgumentError(
                f"vertices and edges must not be None, got {vertices = }, {edges = }"
            )

        self._vertices: typing.Sequence[V] = vertices
        self._edges: typing.Sequence[E] = edges
        self._adjacency: dict[V, list[E]] = dict()

        vertex: V
        for vertex in vertices:
            if vertex is None:
                raise InvalidArgumentError("vertices must not contain None")
            self._adjacency.setdefault(vertex, list())

        edge: E
        for edge in edges:
            if edge is None:
                raise InvalidArgumentError("edges must not contain None")
            # negated comparison so that NaN weights are rejected too
            if not edge.weight >= 0:
                raise InvalidArgumentError(
                    f"edge weights must be non-negative, got {edge!r}"
                )
            for endpoint in (edge.vertex1, edge.vertex2):
                if endpoint not in self._adjacency:
                    raise InvalidArgumentError(
                        f"edge {edge!r} connects to {endpoint!r}, which is not a vertex of the graph"
                    )
            # a self-loop ends up in its vertex's list twice
            self._adjacency[edge.vertex1].append(edge)
            self._adjacency[edge.vertex2].append(edge)

    @classmethod
    def from_sets(
        cls,
        vertices: typing.AbstractSet[V],
        edges: typing.AbstractSet[E],
    ) -> "WeightedGraph[V, E]":
        """create a graph from sets of vertices and edges, in their iteration order"""
        if vertices is None or edges is None:
            raise InvalidArgumentError(
                f"vertices and edges must not be None, got {vertices = }, {edges = }"
            )
        return cls(list(vertices), list(edges))

    @property
    def vertices(self) -> typing.Sequence[V]:
        return self._vertices

    @property
    def edges(self) -> typing.Sequence[E]:
        return self._edges

    def num_vertices(self) -> int:
        """number of vertices given at construction, duplicates included"""
        return len(self._vertices)

    def num_edges(self) -> int:
        """number of edges given at construction"""
        return len(self._edges)

    def has_vertex(self, vertex: V) -> bool:
        return vertex in self._adjacency

    def incident_edges(self, vertex: V) -> tuple[E, ...]:
        """edges touching `vertex`, a self-loop appearing twice"""
        if vertex not in self._adjacency:
            raise InvalidArgumentError(f"{vertex!r} is not a vertex of the graph")
        return tuple(self._adjacency[vertex])

    def find_minimum_spanning_tree(self) -> set[E]:
        """return the edges of a minimum spanning tree, using Kruskal's algorithm

        edges are visited in ascending order of weight (stable, so equal weights
        are visited in input order), and an edge is kept whenever its endpoints
        are not yet connected. if several spanning trees have minimum weight,
        any one of them is returned.

        assumes the graph is connected: otherwise the result is a minimum
        spanning forest, with one tree per component.
        """
        disjoint_set: DisjointSet[V] = DisjointSet.from_items(self._adjacency)
        sorted_edges: list[E] = top_k_sort(len(self._edges), self._edges)

        mst: set[E] = set()
        edge: E
        for edge in sorted_edges:
            # self-loops always resolve to the same set, so they are skipped here
            if disjoint_set.find_set(edge.vertex1) != disjoint_set.find_set(
                edge.vertex2
            ):
                mst.add(edge)
                disjoint_set.union(edge.vertex1, edge.vertex2)

        logging.debug(
            f"minimum spanning tree: kept {len(mst)} of {len(self._edges)} edges over {len(self._adjacency)} vertices, total weight {math.fsum(e.weight for e in mst)}"
        )
        return mst

    def find_shortest_path_between(self, start: V, end: V) -> list[E]:
        """return the edges of a minimum weight path from `start` to `end`

        the first edge leaves `start` and the last edge arrives at `end`. the
        path is empty if `start` and `end` are the same vertex.

        uniform cost search over a heap of partial paths. rather than
        decreasing keys in place, extended paths are pushed again and any path
        whose frontier vertex was already visited is discarded when popped.

        # Raises
        - `InvalidArgumentError`: if `start` or `end` is `None` or not a vertex of the graph
        - `NoPathExistsError`: if `end` is not reachable from `start`
        """
        if start is None or end is None:
            raise InvalidArgumentError(
                f"start and end must not be None, got {start = }, {end = }"
            )
        for vertex in (start, end):
            if vertex not in self._adjacency:
                raise InvalidArgumentError(f"{vertex!r} is not a vertex of the graph")

        if start == end:
            return list()

        visited: set[V] = set()
        frontier: list[_SearchPath[V, E]] = [_SearchPath(weight=0.0, vertex=start)]

        while frontier:
            if frontier[0].vertex == end:
                return list(frontier[0].edges)

            current: _SearchPath[V, E] = heapq.heappop(frontier)
            if current.vertex in visited:
                # stale entry, a cheaper path already reached this vertex
                continue
            visited.add(current.vertex)

            for edge in self._adjacency[current.vertex]:
                if edge.other_vertex(current.vertex) not in visited:
                    heapq.heappush(frontier, current.extend(edge))

        raise NoPathExistsError(f"no path exists from {start!r} to {end!r}")
