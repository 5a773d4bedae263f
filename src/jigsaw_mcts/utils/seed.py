"""Global seeding."""

import random

import numpy as np


def set_seed(seed: int) -> None:
    """Seed the global generators used by environments."""
    random.seed(seed)
    np.random.seed(seed)
