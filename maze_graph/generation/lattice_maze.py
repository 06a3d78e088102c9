import typing
from dataclasses import dataclass, replace

import numpy as np
from jaxtyping import Bool, Int, Shaped
from muutils.json_serialize.serializable_dataclass import (
    SerializableDataclass,
    serializable_dataclass,
    serializable_field,
)

from maze_graph.datastructures.disjoint_set import DisjointSet
from maze_graph.errors import InvalidArgumentError
from maze_graph.generation.constants import (
    NEIGHBORS_MASK,
    WALL_DISTANCE,
    Coord,
    CoordArray,
    CoordTup,
)
from maze_graph.graph.edges import WeightedEdge
from maze_graph.graph.weighted_graph import WeightedGraph

RGB = tuple[int, int, int]

PixelGrid = Int[np.ndarray, "x y rgb"]
BinaryPixelGrid = Bool[np.ndarray, "x y"]
ConnectionList = Bool[np.ndarray, "lattice_dim x y"]


@dataclass(frozen=True)
class PixelColors:
    WALL: RGB = (0, 0, 0)
    OPEN: RGB = (255, 255, 255)
    START: RGB = (0, 255, 0)
    END: RGB = (255, 0, 0)
    PATH: RGB = (0, 0, 255)


@dataclass(frozen=True)
class AsciiChars:
    WALL: str = "#"
    OPEN: str = " "
    START: str = "S"
    END: str = "E"
    PATH: str = "X"


ASCII_PIXEL_PAIRINGS: dict[str, RGB] = {
    AsciiChars.WALL: PixelColors.WALL,
    AsciiChars.OPEN: PixelColors.OPEN,
    AsciiChars.START: PixelColors.START,
    AsciiChars.END: PixelColors.END,
    AsciiChars.PATH: PixelColors.PATH,
}


def as_coord_tup(coord: Coord | typing.Sequence[int]) -> CoordTup:
    """convert a numpy coord (or any pair of ints) to a hashable tuple of python ints"""
    return tuple(int(x) for x in coord)


@dataclass(frozen=True, eq=False, repr=False)
class Wall(WeightedEdge[CoordTup]):
    """wall between two adjacent rooms of a lattice maze

    `distance` is the wall's own weight. carving algorithms may work on copies
    carrying a temporary `weight` (see `with_weight`). `reset_weight` gives a
    copy with the weight set back to `distance`.
    """

    weight: float = WALL_DISTANCE
    distance: float = WALL_DISTANCE

    def __post_init__(self) -> None:
        # rooms as tuples of python ints, so they hash like the rooms of the maze
        object.__setattr__(self, "vertex1", as_coord_tup(self.vertex1))
        object.__setattr__(self, "vertex2", as_coord_tup(self.vertex2))
        delta: Coord = np.subtract(self.vertex2, self.vertex1)
        if np.abs(delta).sum() != 1:
            raise InvalidArgumentError(
                f"rooms {self.vertex1} and {self.vertex2} are not adjacent, can't have a wall between them"
            )

    @property
    def room1(self) -> CoordTup:
        return self.vertex1

    @property
    def room2(self) -> CoordTup:
        return self.vertex2

    @property
    def dim(self) -> int:
        """0 if the wall is below `clist_node`, 1 if it is to its right"""
        return 0 if self.vertex1[0] != self.vertex2[0] else 1

    @property
    def clist_node(self) -> CoordTup:
        """the room above or to the left of the wall, where the connection list stores it"""
        return min(self.vertex1, self.vertex2)

    def with_weight(self, weight: float) -> "Wall":
        return replace(self, weight=weight)

    def reset_weight(self) -> "Wall":
        return replace(self, weight=self.distance)


def lattice_walls(grid_shape: Coord | CoordTup) -> list[Wall]:
    """every wall of a rectangular lattice, i.e. one per pair of adjacent rooms"""
    n_rows, n_cols = as_coord_tup(grid_shape)
    walls: list[Wall] = list()
    for row, col in np.ndindex(n_rows, n_cols):
        if row + 1 < n_rows:
            walls.append(Wall((row, col), (row + 1, col)))
        if col + 1 < n_cols:
            walls.append(Wall((row, col), (row, col + 1)))
    return walls


@serializable_dataclass(
    frozen=True,
    kw_only=True,
    properties_to_serialize=["lattice_dim", "generation_meta"],
)
class LatticeMaze(SerializableDataclass):
    """lattice maze (rooms on a lattice, passages only between neighboring rooms)

    Connection List represents which rooms are connected in each direction.

    First and second elements represent downward and rightward connections,
    respectively.

    Example:
      Connection list:
        [
          [ # down
            [F T],
            [F F]
          ],
          [ # right
            [T F],
            [T F]
          ]
        ]

      Rooms with connections
        N T N F
        F   T
        N T N F
        F   F

      Graph:
        N - N
            |
        N - N

    Note: the bottom row connections going down, and the
    right-hand connections going right, will always be False.
    """

    connection_list: ConnectionList
    generation_meta: dict | None = serializable_field(default=None, compare=False)

    lattice_dim = property(lambda self: self.connection_list.shape[0])
    grid_shape = property(lambda self: self.connection_list.shape[1:])
    n_connections = property(lambda self: self.connection_list.sum())

    def __hash__(self) -> int:
        return hash(self.connection_list.tobytes())

    # ============================================================
    # rooms, walls, and connections
    # ============================================================
    def in_bounds(self, c: Coord | CoordTup) -> bool:
        return (0 <= c[0] < self.grid_shape[0]) and (0 <= c[1] < self.grid_shape[1])

    def nodes_connected(self, a: Coord, b: Coord, /) -> bool:
        """returns whether two nodes are connected"""
        delta: Coord = np.subtract(b, a)
        if np.abs(delta).sum() != 1:
            # return false if not even adjacent
            return False
        else:
            # test for wall
            dim: int = np.argmax(np.abs(delta))
            clist_node: Coord = a if (delta.sum() > 0) else b
            return bool(self.connection_list[dim, clist_node[0], clist_node[1]])

    def get_coord_neighbors(self, c: Coord) -> CoordArray:
        """rooms reachable from `c` in a single step"""
        neighbors: list[Coord] = [
            neighbor
            for neighbor in (np.array(c) + NEIGHBORS_MASK)
            if self.in_bounds(neighbor) and self.nodes_connected(c, neighbor)
        ]

        output: CoordArray = np.array(neighbors)
        if len(neighbors) > 0:
            assert output.shape == (
                len(neighbors),
                2,
            ), f"invalid shape: {output.shape}, expected ({len(neighbors)}, 2))\n{c = }\n{neighbors = }"
        return output

    def get_nodes(self) -> CoordArray:
        """return an array of all nodes in the maze"""
        rows: Int[np.ndarray, "x y"]
        cols: Int[np.ndarray, "x y"]
        rows, cols = np.meshgrid(
            range(self.grid_shape[0]),
            range(self.grid_shape[1]),
            indexing="ij",
        )
        nodes: CoordArray = np.vstack((rows.ravel(), cols.ravel())).T
        return nodes

    def get_rooms(self) -> list[CoordTup]:
        """all rooms of the maze as tuples, in row-major order"""
        return list(np.ndindex(*self.grid_shape))

    def get_walls(self) -> list[Wall]:
        """every wall the lattice could have, whether or not it has been removed"""
        return lattice_walls(self.grid_shape)

    def get_open_walls(self) -> list[Wall]:
        """walls which have been removed, i.e. the passages between rooms"""
        open_walls: list[Wall] = list()
        for d, x, y in np.ndindex(self.connection_list.shape):
            if self.connection_list[d, x, y]:
                open_walls.append(
                    Wall(
                        (x, y),
                        (x + (1 if d == 0 else 0), y + (1 if d == 1 else 0)),
                    )
                )
        return open_walls

    @classmethod
    def from_walls(
        cls,
        grid_shape: Coord | CoordTup,
        walls: typing.Iterable[Wall],
        generation_meta: dict | None = None,
    ) -> "LatticeMaze":
        """create a maze of shape `grid_shape` in which exactly `walls` are open"""
        grid_shape = as_coord_tup(grid_shape)
        connection_list: ConnectionList = np.zeros((2, *grid_shape), dtype=np.bool_)
        for wall in walls:
            for room in (wall.room1, wall.room2):
                if not (0 <= room[0] < grid_shape[0] and 0 <= room[1] < grid_shape[1]):
                    raise ValueError(
                        f"wall {wall!r} is out of bounds for grid shape {grid_shape}"
                    )
            connection_list[wall.dim, wall.clist_node[0], wall.clist_node[1]] = True

        return cls(connection_list=connection_list, generation_meta=generation_meta)

    def as_weighted_graph(self) -> WeightedGraph[CoordTup, Wall]:
        """graph whose vertices are the rooms and whose edges are the open walls"""
        return WeightedGraph(self.get_rooms(), self.get_open_walls())

    def get_connected_components(self) -> list[CoordArray]:
        """rooms grouped by connected component, largest component first"""
        rooms_sets: DisjointSet[CoordTup] = DisjointSet.from_items(
            self.get_rooms(),
            initial_capacity=max(1, int(np.prod(self.grid_shape))),
        )
        for wall in self.get_open_walls():
            rooms_sets.union(wall.room1, wall.room2)

        components: list[list[CoordTup]] = sorted(
            rooms_sets.get_sets().values(),
            key=len,
            reverse=True,
        )
        return [np.array(component) for component in components]

    # ============================================================
    # paths
    # ============================================================
    def find_shortest_path(
        self,
        c_start: Coord | CoordTup,
        c_end: Coord | CoordTup,
    ) -> CoordArray:
        """find the shortest path between two coordinates, as an array of the rooms visited

        raises `NoPathExistsError` if `c_end` can't be reached from `c_start`
        """
        c_start = as_coord_tup(c_start)
        c_end = as_coord_tup(c_end)

        walls: list[Wall] = self.as_weighted_graph().find_shortest_path_between(
            c_start, c_end
        )

        path: list[CoordTup] = [c_start]
        for wall in walls:
            path.append(wall.other_vertex(path[-1]))
        return np.array(path)

    def generate_random_path(self) -> CoordArray:
        """return a path between randomly chosen start and end nodes within the largest connected component"""

        connected_component: CoordArray = self.get_connected_components()[0]
        # we can't create a "path" with fewer than two rooms
        if len(connected_component) < 2:
            raise ValueError(
                f"need at least 2 connected rooms to generate a path, largest component has {len(connected_component)}"
            )

        positions: Int[np.ndarray, "2 2"] = connected_component[
            np.random.choice(
                len(connected_component),
                size=2,
                replace=False,
            )
        ]

        return self.find_shortest_path(positions[0], positions[1])

    # ============================================================
    # to and from pixels
    # ============================================================
    def _as_pixels_bw(self) -> BinaryPixelGrid:
        assert self.lattice_dim == 2, "only 2D mazes are supported"
        # Create an empty pixel grid with walls
        pixel_grid: Int[np.ndarray, "x y"] = np.full(
            (self.grid_shape[0] * 2 + 1, self.grid_shape[1] * 2 + 1),
            False,
            dtype=np.bool_,
        )

        # Set white nodes
        pixel_grid[1::2, 1::2] = True

        # Set white connections (downward)
        for i, row in enumerate(self.connection_list[0]):
            for j, connected in enumerate(row):
                if connected:
                    pixel_grid[i * 2 + 2, j * 2 + 1] = True

        # Set white connections (rightward)
        for i, row in enumerate(self.connection_list[1]):
            for j, connected in enumerate(row):
                if connected:
                    pixel_grid[i * 2 + 1, j * 2 + 2] = True

        return pixel_grid

    def as_pixels(
        self,
        show_endpoints: bool = True,
        show_solution: bool = True,
    ) -> PixelGrid:
        """RGB pixel grid of the maze, two pixels per room plus a border

        `show_endpoints` and `show_solution` are only used by `SolvedMaze`
        """
        pixel_grid_bw: BinaryPixelGrid = self._as_pixels_bw()
        pixel_grid: PixelGrid = np.full(
            (*pixel_grid_bw.shape, 3), PixelColors.WALL, dtype=np.uint8
        )
        pixel_grid[pixel_grid_bw] = PixelColors.OPEN
        return pixel_grid

    @classmethod
    def _from_pixel_grid_bw(
        cls, pixel_grid: BinaryPixelGrid
    ) -> tuple[ConnectionList, tuple[int, int]]:
        grid_shape: tuple[int, int] = (
            pixel_grid.shape[0] // 2,
            pixel_grid.shape[1] // 2,
        )
        connection_list: ConnectionList = np.zeros((2, *grid_shape), dtype=np.bool_)

        # Extract downward connections
        connection_list[0] = pixel_grid[2::2, 1::2]

        # Extract rightward connections
        connection_list[1] = pixel_grid[1::2, 2::2]

        return connection_list, grid_shape

    # ============================================================
    # to and from ASCII
    # ============================================================
    def as_ascii(
        self,
        show_endpoints: bool = True,
        show_solution: bool = True,
    ) -> str:
        """return an ASCII grid of the maze"""
        pixel_grid: PixelGrid = self.as_pixels(
            show_endpoints=show_endpoints, show_solution=show_solution
        )
        ascii_grid: Shaped[np.ndarray, "x y"] = np.full(
            pixel_grid.shape[:2], AsciiChars.WALL, dtype=str
        )

        for ascii_char, pixel_color in ASCII_PIXEL_PAIRINGS.items():
            ascii_grid[(pixel_grid == pixel_color).all(axis=-1)] = ascii_char

        return "\n".join("".join(row) for row in ascii_grid)

    @classmethod
    def from_ascii(cls, ascii_str: str) -> "LatticeMaze":
        """read a maze back from `as_ascii`, ignoring any endpoints or solution"""
        lines: list[str] = ascii_str.strip().split("\n")
        ascii_grid: Shaped[np.ndarray, "x y"] = np.array(
            [list(line) for line in lines], dtype=str
        )
        connection_list, _ = cls._from_pixel_grid_bw(ascii_grid != AsciiChars.WALL)
        return LatticeMaze(connection_list=connection_list)


@serializable_dataclass(frozen=True, kw_only=True)
class SolvedMaze(LatticeMaze):
    """Stores a maze and a solution, the rooms visited from `start_pos` to `end_pos`"""

    solution: CoordArray

    def __post_init__(self) -> None:
        # make things numpy arrays (very jank to override frozen dataclass)
        self.__dict__["solution"] = np.array(self.solution)
        if len(self.solution.shape) != 2 or self.solution.shape[1] != 2:
            raise ValueError(
                f"solution must have shape (n, 2), got {self.solution.shape}"
            )
        for a, b in zip(self.solution[:-1], self.solution[1:]):
            if not self.nodes_connected(a, b):
                raise ValueError(
                    f"solution steps from {a} to {b}, which are not connected"
                )

    start_pos = property(lambda self: self.solution[0])
    end_pos = property(lambda self: self.solution[-1])

    def __hash__(self) -> int:
        return hash((self.connection_list.tobytes(), self.solution.tobytes()))

    def as_pixels(
        self,
        show_endpoints: bool = True,
        show_solution: bool = True,
    ) -> PixelGrid:
        if show_solution and not show_endpoints:
            raise ValueError("show_solution=True requires show_endpoints=True")
        pixel_grid: PixelGrid = super().as_pixels()

        # set solution
        if show_solution:
            for coord in self.solution:
                pixel_grid[coord[0] * 2 + 1, coord[1] * 2 + 1] = PixelColors.PATH

            # set pixels between coords
            for coord, next_coord in zip(self.solution[:-1], self.solution[1:]):
                pixel_grid[
                    coord[0] * 2 + 1 + next_coord[0] - coord[0],
                    coord[1] * 2 + 1 + next_coord[1] - coord[1],
                ] = PixelColors.PATH

        # set endpoints (after the path, which would overwrite them)
        if show_endpoints:
            pixel_grid[
                self.start_pos[0] * 2 + 1, self.start_pos[1] * 2 + 1
            ] = PixelColors.START
            pixel_grid[
                self.end_pos[0] * 2 + 1, self.end_pos[1] * 2 + 1
            ] = PixelColors.END

        return pixel_grid

    @classmethod
    def from_lattice_maze(
        cls, lattice_maze: LatticeMaze, solution: CoordArray | list[CoordTup]
    ) -> "SolvedMaze":
        return cls(
            connection_list=lattice_maze.connection_list,
            solution=np.array(solution),
            generation_meta=lattice_maze.generation_meta,
        )
