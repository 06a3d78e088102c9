import logging
import typing
from typing import Any, Callable

import numpy as np

from maze_graph.generation.constants import Coord, CoordArray, CoordTup
from maze_graph.generation.lattice_maze import (
    LatticeMaze,
    SolvedMaze,
    Wall,
    as_coord_tup,
    lattice_walls,
)
from maze_graph.graph.weighted_graph import WeightedGraph


def carve_walls_kruskal(
    rooms: typing.Collection[CoordTup],
    walls: typing.Collection[Wall],
) -> set[Wall]:
    """choose which walls to remove so that every room is reachable by exactly one route

    every wall gets a random weight, and the walls to remove are those of a
    minimum spanning tree over the rooms. the returned walls are members of
    `walls` themselves, with their original weights untouched.

    weights are handed out in the iteration order of `walls`, so pass an
    ordered collection for the result to be reproducible under a fixed seed.
    """
    weights: np.ndarray = np.random.random(len(walls))
    # weighted copy -> the wall it was made from
    originals: dict[Wall, Wall] = {
        wall.with_weight(float(weight)): wall for wall, weight in zip(walls, weights)
    }

    graph: WeightedGraph[CoordTup, Wall] = WeightedGraph(
        list(rooms), list(originals.keys())
    )
    mst: set[Wall] = graph.find_minimum_spanning_tree()

    return {originals[wall] for wall in mst}


class LatticeMazeGenerators:
    """namespace for lattice maze generation algorithms"""

    @staticmethod
    def gen_kruskal(
        grid_shape: Coord | CoordTup,
        lattice_dim: int = 2,
    ) -> LatticeMaze:
        """generate a lattice maze using randomized Kruskal's algorithm

        algorithm:
        1. Give every wall of the lattice a random weight
        2. Find a minimum spanning tree of the graph of rooms and weighted walls
        3. Remove exactly the walls in the spanning tree

        the result is acyclic and fully connected. random weights are drawn
        from the global numpy RNG, see `set_reproducibility`
        """
        if lattice_dim != 2:
            raise NotImplementedError(
                f"only 2D lattices are supported, got {lattice_dim = }"
            )
        grid_shape = as_coord_tup(grid_shape)
        if any(n < 1 for n in grid_shape):
            raise ValueError(f"grid_shape must be positive, got {grid_shape = }")

        rooms: list[CoordTup] = list(np.ndindex(*grid_shape))
        walls: list[Wall] = lattice_walls(grid_shape)
        removed_walls: set[Wall] = carve_walls_kruskal(rooms, walls)

        logging.debug(
            f"gen_kruskal: removed {len(removed_walls)} of {len(walls)} walls in a {grid_shape} grid"
        )

        return LatticeMaze.from_walls(
            grid_shape,
            removed_walls,
            generation_meta=dict(
                func_name="gen_kruskal",
                grid_shape=np.array(grid_shape),
                n_walls=len(walls),
                n_removed_walls=len(removed_walls),
                fully_connected=True,
            ),
        )


GENERATORS_MAP: dict[str, Callable[[Coord, Any], "LatticeMaze"]] = {
    "gen_kruskal": LatticeMazeGenerators.gen_kruskal,
}


def get_maze_with_solution(
    gen_name: str,
    grid_shape: Coord | CoordTup,
    maze_ctor_kwargs: dict | None = None,
) -> SolvedMaze:
    """generate a maze with `gen_name`, and solve it between two random rooms"""
    if gen_name not in GENERATORS_MAP:
        raise ValueError(
            f"unknown generator {gen_name!r}, expected one of {list(GENERATORS_MAP.keys())}"
        )
    if maze_ctor_kwargs is None:
        maze_ctor_kwargs = dict()
    maze: LatticeMaze = GENERATORS_MAP[gen_name](grid_shape, **maze_ctor_kwargs)
    solution: CoordArray = np.array(maze.generate_random_path())
    return SolvedMaze.from_lattice_maze(lattice_maze=maze, solution=solution)
