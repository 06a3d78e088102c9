import pytest

from maze_graph.utils.utils import DEFAULT_SEED, set_reproducibility


# When this module becomes unmanageable we can organise the fixtures into multiple modules and import them here
# See https://gist.github.com/peterhurford/09f7dcda0ab04b95c026c60fa49c2a68
@pytest.fixture()
def seeded() -> int:
    """seed the global RNGs, so that generated mazes are reproducible within a test"""
    set_reproducibility(DEFAULT_SEED)
    return DEFAULT_SEED
