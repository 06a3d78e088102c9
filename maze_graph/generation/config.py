import json
from typing import Callable

import numpy as np
from muutils.json_serialize import (
    SerializableDataclass,
    serializable_dataclass,
    serializable_field,
)
from muutils.misc import sanitize_fname, stable_hash

from maze_graph.generation.constants import Coord, CoordTup
from maze_graph.generation.generators import GENERATORS_MAP
from maze_graph.generation.lattice_maze import LatticeMaze
from maze_graph.utils.utils import DEFAULT_SEED


@serializable_dataclass(kw_only=True)
class MazeGenConfig(SerializableDataclass):
    """configuration for generating a batch of square mazes

    # Parameters
    - `name: str`: name of the configuration
    - `grid_n: int`: mazes are `grid_n` by `grid_n` rooms, at least 2 so that each maze can be solved
    - `n_mazes: int`: how many mazes to generate
    - `gen_name: str`: key of the generator in `GENERATORS_MAP`
    - `gen_kwargs: dict`: extra kwargs passed to the generator
    - `seed: int | None`: seed passed to `set_reproducibility` before generating.
        if `None`, the global RNG state is used as is
    """

    name: str
    grid_n: int
    n_mazes: int
    gen_name: str = serializable_field(default="gen_kruskal")
    gen_kwargs: dict = serializable_field(
        default_factory=dict,
        loading_fn=lambda data: data.get("gen_kwargs", None) or dict(),
    )
    seed: int | None = serializable_field(default=DEFAULT_SEED)

    def __post_init__(self):
        # every generated maze is solved between two distinct rooms
        if self.grid_n < 2:
            raise ValueError(f"grid_n must be >= 2, got {self.grid_n = }")
        if self.n_mazes < 0:
            raise ValueError(f"n_mazes must be >= 0, got {self.n_mazes = }")
        if self.gen_name not in GENERATORS_MAP:
            raise ValueError(
                f"unknown generator {self.gen_name!r}, expected one of {list(GENERATORS_MAP.keys())}"
            )

    @property
    def grid_shape(self) -> CoordTup:
        return (self.grid_n, self.grid_n)

    @property
    def grid_shape_np(self) -> Coord:
        return np.array(self.grid_shape)

    @property
    def maze_ctor(self) -> Callable[..., LatticeMaze]:
        return GENERATORS_MAP[self.gen_name]

    def stable_hash_cfg(self) -> int:
        return stable_hash(json.dumps(self.serialize()))

    def to_fname(self) -> str:
        """convert config to a filename"""
        return sanitize_fname(
            f"{self.name}-g{self.grid_n}-n{self.n_mazes}-a_{self.gen_name.removeprefix('gen_')}-h{self.stable_hash_cfg()%10**5}"
        )

    def summary(self) -> dict:
        """return a human-readable summary of the config"""
        return dict(
            name=self.name,
            fname=self.to_fname(),
            grid_n=self.grid_n,
            n_mazes=self.n_mazes,
            gen_name=self.gen_name,
            gen_kwargs=self.gen_kwargs,
            seed=self.seed,
        )


MAZE_GEN_CONFIGS: dict[str, MazeGenConfig] = {
    cfg.to_fname(): cfg
    for cfg in [
        MazeGenConfig(
            name="test",
            grid_n=3,
            n_mazes=5,
        ),
        MazeGenConfig(
            name="demo_small",
            grid_n=6,
            n_mazes=100,
        ),
        MazeGenConfig(
            name="demo",
            grid_n=16,
            n_mazes=10000,
        ),
    ]
}
