import numpy as np
import pytest

from maze_graph.generation.config import MazeGenConfig
from scripts.generate_mazes import from_config, generate, generate_from_config, list_configs


def test_generate(capsys):
    mazes = generate(grid_n=4, n_mazes=3, seed=1)
    assert len(mazes) == 3
    for maze in mazes:
        assert maze.grid_shape == (4, 4)
        assert maze.n_connections == 15

    printed: str = capsys.readouterr().out
    assert "S" in printed and "E" in printed


def test_generate_quiet(capsys):
    mazes = generate(grid_n=3, n_mazes=2, seed=1, quiet=True)
    assert len(mazes) == 2
    assert "#" not in capsys.readouterr().out


def test_generate_reproducible():
    mazes_a = generate(grid_n=5, n_mazes=2, seed=11, quiet=True)
    mazes_b = generate(grid_n=5, n_mazes=2, seed=11, quiet=True)
    for maze_a, maze_b in zip(mazes_a, mazes_b):
        assert np.array_equal(maze_a.connection_list, maze_b.connection_list)
        assert np.array_equal(maze_a.solution, maze_b.solution)


def test_generate_invalid_values():
    with pytest.raises(ValueError):
        generate(grid_n=1, n_mazes=1, quiet=True)
    with pytest.raises(ValueError):
        generate(grid_n=3, n_mazes=-1, quiet=True)


def test_generate_from_config_zero_mazes():
    cfg: MazeGenConfig = MazeGenConfig(name="empty", grid_n=3, n_mazes=0)
    assert generate_from_config(cfg, quiet=True) == []


def test_from_config():
    mazes = from_config("test", quiet=True)
    assert len(mazes) == 5
    with pytest.raises(ValueError):
        from_config("nonexistent", quiet=True)


def test_list_configs(capsys):
    list_configs()
    printed: str = capsys.readouterr().out
    assert "demo_small" in printed
