import logging

from tqdm import tqdm

from maze_graph.generation.config import MAZE_GEN_CONFIGS, MazeGenConfig
from maze_graph.generation.generators import get_maze_with_solution
from maze_graph.generation.lattice_maze import SolvedMaze
from maze_graph.logging_config import configure_logging
from maze_graph.utils.utils import set_reproducibility


def generate_from_config(
    cfg: MazeGenConfig,
    show_solution: bool = True,
    quiet: bool = False,
) -> list[SolvedMaze]:
    """generate and solve `cfg.n_mazes` mazes, printing each one unless `quiet`"""
    if cfg.seed is not None:
        set_reproducibility(cfg.seed)

    logging.info(f"generating mazes: {cfg.summary()}")
    mazes: list[SolvedMaze] = list()
    for _ in tqdm(
        range(cfg.n_mazes),
        total=cfg.n_mazes,
        unit="maze",
        desc="generating & solving mazes",
        disable=quiet,
    ):
        maze: SolvedMaze = get_maze_with_solution(
            cfg.gen_name,
            cfg.grid_shape,
            maze_ctor_kwargs=cfg.gen_kwargs,
        )
        mazes.append(maze)
        if not quiet:
            print(
                maze.as_ascii(show_endpoints=show_solution, show_solution=show_solution)
                + "\n"
            )

    logging.info(f"generated {len(mazes)} mazes")
    return mazes


def generate(
    grid_n: int = 5,
    n_mazes: int = 1,
    seed: int | None = None,
    gen_name: str = "gen_kruskal",
    show_solution: bool = True,
    quiet: bool = False,
    verbose: bool = False,
) -> list[SolvedMaze]:
    """generate `n_mazes` mazes of `grid_n` by `grid_n` rooms, each solved between two random rooms"""
    configure_logging(verbose=verbose)
    cfg: MazeGenConfig = MazeGenConfig(
        name="cli",
        grid_n=grid_n,
        n_mazes=n_mazes,
        gen_name=gen_name,
        seed=seed,
    )
    return generate_from_config(cfg, show_solution=show_solution, quiet=quiet)


def from_config(
    name: str,
    show_solution: bool = True,
    quiet: bool = False,
    verbose: bool = False,
) -> list[SolvedMaze]:
    """run one of the preset configs in `MAZE_GEN_CONFIGS`, by name or by fname"""
    configure_logging(verbose=verbose)
    matches: list[MazeGenConfig] = [
        cfg
        for fname, cfg in MAZE_GEN_CONFIGS.items()
        if name in (fname, cfg.name)
    ]
    if len(matches) != 1:
        raise ValueError(
            f"no unique preset config named {name!r}, options are: {[cfg.name for cfg in MAZE_GEN_CONFIGS.values()]}"
        )
    return generate_from_config(matches[0], show_solution=show_solution, quiet=quiet)


def list_configs() -> None:
    """print a summary of every preset config"""
    for cfg in MAZE_GEN_CONFIGS.values():
        print(cfg.summary())


if __name__ == "__main__":
    import fire

    fire.Fire(
        dict(
            generate=generate,
            from_config=from_config,
            list_configs=list_configs,
        )
    )
