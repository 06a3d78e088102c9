import random

import numpy as np

DEFAULT_SEED: int = 42
GLOBAL_SEED: int = DEFAULT_SEED


def set_reproducibility(seed: int = DEFAULT_SEED):
    """
    Seed every random number generator used during maze generation.

    Wall weights are drawn from the global numpy RNG, so after calling this
    the same generator and grid shape always produce the same maze.
    """
    global GLOBAL_SEED

    GLOBAL_SEED = seed

    random.seed(seed)
    np.random.seed(seed)
