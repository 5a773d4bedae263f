"""Main MCTS search loop.

One iteration:

    node = select(root)              # UCB descent while fully expanded
    if finished or too deep:
        backprop(node, eval(state))
    else:
        leaf = expand(node)          # first untried action
        reward = rollout(leaf)       # uniform random playout
        backprop(leaf, reward)

The tree is rebuilt for every search. Nothing survives between calls,
so a new root position always means a new TreeSearch.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Hashable, Optional

import numpy as np

from .backprop import backpropagate
from .environment import Environment
from .stats import Stats
from .tree import NodeArena
from .ucb import ucb_select

logger = logging.getLogger(__name__)

StatsCallback = Callable[[Stats], None]


@dataclass
class SearchConfig:
    """Configuration for the tree search.

    The engine trusts these values. ``validate`` exists for callers that
    take them from a user.
    """
    max_iterations: int = 300_000
    max_depth: int = 10
    c: float = math.sqrt(2.0)
    callback_interval: int = 1000
    # Rollout RNG seed; None draws fresh entropy
    seed: Optional[int] = None

    def validate(self) -> "SearchConfig":
        """Check the ranges the application exposes.

        Raises:
            ValueError: If any field is out of range
        """
        if not 0.0 <= self.c <= 16.0:
            raise ValueError(f"Exploration constant must be in [0, 16], got {self.c}")
        if not 1 <= self.max_iterations <= 800_000:
            raise ValueError(
                f"max_iterations must be in [1, 800000], got {self.max_iterations}"
            )
        if not 1 <= self.callback_interval <= self.max_iterations:
            raise ValueError(
                f"callback_interval must be in [1, {self.max_iterations}], "
                f"got {self.callback_interval}"
            )
        if not 1 <= self.max_depth <= 16:
            raise ValueError(f"max_depth must be in [1, 16], got {self.max_depth}")
        return self


class TreeSearch:
    """Monte Carlo Tree Search over an arbitrary environment.

    Holds a private copy of the root position, the node arena and the
    config. Single-threaded; run it on a worker thread to keep a caller
    responsive (see ``jigsaw_mcts.manager``).
    """

    def __init__(self, initial_state: Environment, config: Optional[SearchConfig] = None):
        self.config = config or SearchConfig()
        self.root_state = initial_state.copy()
        self.arena = NodeArena()
        self.iterations = 0
        self._rng = np.random.default_rng(self.config.seed)

    @property
    def root(self):
        return self.arena.root

    def compute(self, callback: Optional[StatsCallback] = None) -> None:
        """Run the full iteration budget.

        Args:
            callback: Receives a Stats snapshot every ``callback_interval``
                iterations and before the final one
        """
        max_iterations = self.config.max_iterations
        logger.info(
            f"Starting search: iterations={max_iterations}, depth={self.config.max_depth}, "
            f"c={self.config.c:.3f}"
        )

        for i in range(1, max_iterations + 1):
            if callback is not None and self._should_report(i):
                stats = self.snapshot(i)
                logger.debug(
                    f"Iteration {i}/{max_iterations}: nodes={len(self.arena)}, "
                    f"best={stats.best_action()}"
                )
                callback(stats)

            self.iterate()

        logger.info(
            f"Search finished: nodes={len(self.arena)}, root_visits={self.root.visit_count}"
        )

    def iterate(self) -> int:
        """Run a single select/expand/simulate/backprop pass.

        Returns:
            Reward that was backpropagated
        """
        state = self.root_state.copy()
        index, depth = self.select(state)

        if state.has_finished() or depth > self.config.max_depth:
            reward = state.eval()
            backpropagate(self.arena, index, reward, 1)
        else:
            index = self.expand(index, state)
            reward = self.simulate(state, self.config.max_depth - depth)
            backpropagate(self.arena, index, reward, 1)

        self.iterations += 1
        return reward

    def select(self, state: Environment):
        """Descend by UCB while the current node is fully expanded.

        Mutates ``state`` along the chosen path.

        Returns:
            (node index, number of actions applied)
        """
        index = NodeArena.ROOT
        depth = 0

        while not state.has_finished():
            legal_actions = state.legal_actions()
            if not legal_actions:
                raise RuntimeError("Environment has no legal actions but is not finished")

            children = self.arena[index].children
            if not all(action in children for action in legal_actions):
                break

            action = ucb_select(self.arena, index, legal_actions, self.config.c)
            state.perform_action(action)
            index = children[action]
            depth += 1

        return index, depth

    def expand(self, index: int, state: Environment) -> int:
        """Create the child for the first untried legal action.

        Applies that action to ``state``.

        Returns:
            Index of the new leaf

        Raises:
            RuntimeError: If every legal action already has a child
        """
        children = self.arena[index].children
        action = next(
            (action for action in state.legal_actions() if action not in children),
            None
        )
        if action is None:
            raise RuntimeError(f"Node {index} has no untried action to expand")

        child = self.arena.create_node()
        self.arena.link(index, action, child)
        state.perform_action(action)
        return child

    def simulate(self, state: Environment, max_steps: int) -> int:
        """Uniform random playout; only the final position is evaluated."""
        steps = 0
        while not state.has_finished() and steps < max_steps:
            legal_actions = state.legal_actions()
            if not legal_actions:
                raise RuntimeError("Environment has no legal actions but is not finished")
            state.perform_action(legal_actions[int(self._rng.integers(len(legal_actions)))])
            steps += 1

        return state.eval()

    def snapshot(self, iteration: Optional[int] = None) -> Stats:
        """Stats for the root's currently expanded children."""
        return Stats(
            iterations_completed=self.iterations if iteration is None else iteration,
            actions=tuple(self.arena.root_visits_by_action().items())
        )

    def best_action(self) -> Optional[Hashable]:
        """Most visited root action so far."""
        return self.snapshot().best_action()

    def _should_report(self, iteration: int) -> bool:
        return (iteration % self.config.callback_interval == 0
                or iteration == self.config.max_iterations)


def compute(
    initial_state: Environment,
    config: Optional[SearchConfig] = None,
    callback: Optional[StatsCallback] = None
) -> TreeSearch:
    """Build a tree for ``initial_state`` and run it to completion.

    Returns:
        The finished TreeSearch, for inspection
    """
    tree = TreeSearch(initial_state, config)
    tree.compute(callback)
    return tree
