import numpy as np
from jaxtyping import Int8

Coord = Int8[np.ndarray, "x y"]
CoordTup = tuple[int, int]
CoordArray = Int8[np.ndarray, "coord x y"]
CoordList = list[CoordTup]

# original weight of every wall between two adjacent rooms
WALL_DISTANCE: float = 1.0

NEIGHBORS_MASK: Int8[np.ndarray, "coord point"] = np.array(
    [
        [0, 1],  # right
        [0, -1],  # left
        [1, 0],  # down
        [-1, 0],  # up
    ]
)
