"""MCTS move advisor for the Jigsaw tile-placement puzzle.

Searches possible futures with Monte Carlo Tree Search and recommends
the move that was visited most.

Components:
- mcts/ - Environment contract, node arena, UCB, backprop, search loop
- games/ - Jigsaw environment
- manager - Runs a search on a worker thread and publishes snapshots
- utils/ - Logging, YAML config, seeding
"""

__version__ = "0.1.0"

from .mcts.search import SearchConfig, TreeSearch, compute
from .mcts.stats import Stats, best_action
from .mcts.environment import Environment
from .games.jigsaw import Jigsaw
from .manager import SearchManager

__all__ = [
    "SearchConfig",
    "TreeSearch",
    "compute",
    "Stats",
    "best_action",
    "Environment",
    "Jigsaw",
    "SearchManager",
    "recommend"
]


def recommend(state: Environment, **kwargs):
    """High-level API: search ``state`` and return the best action.

    Args:
        state: Position to search from
        **kwargs: SearchConfig fields

    Returns:
        Most visited root action, or None if the state is finished
    """
    config = SearchConfig(**kwargs)
    tree = compute(state, config)
    return tree.best_action()
