"""Background runner for the tree search.

The search runs synchronously on a worker thread. The only state shared
with the caller is the latest Stats snapshot, the per-action visit
history and the error of a failed run, all written by the worker under
a single lock. Readers poll
whenever they like; snapshots only ever move forward in iteration order.
"""

import logging
import threading
from typing import Dict, Hashable, List, Optional, Tuple

from .mcts.environment import Environment
from .mcts.search import SearchConfig, TreeSearch
from .mcts.stats import Stats

logger = logging.getLogger(__name__)


class SearchManager:
    """Owns a position and runs searches for it in the background.

    There is no cancellation: a started search runs its whole budget.
    Check ``is_computing`` before starting another one.
    """

    def __init__(self, state: Environment):
        self.state = state
        self.config: Optional[SearchConfig] = None

        self._lock = threading.Lock()
        self._current_stats: Optional[Stats] = None
        self._last_error: Optional[BaseException] = None
        self._history: Dict[Hashable, List[Tuple[int, int]]] = {}
        # Bumped on every reset; reports from older workers are dropped
        self._generation = 0
        self._worker: Optional[threading.Thread] = None

    def compute(self, config: SearchConfig) -> None:
        """Start a search for the current state on a worker thread.

        Raises:
            RuntimeError: If a search is already running
        """
        if self.is_computing():
            raise RuntimeError("A search is already running")

        self.config = config
        with self._lock:
            self._last_error = None
        generation = self.reset_stats()

        worker = threading.Thread(
            target=self._run,
            args=(self.state.copy(), config, generation),
            name="tree-search",
            daemon=True
        )
        self._worker = worker
        worker.start()

    def _run(self, state: Environment, config: SearchConfig, generation: int) -> None:
        logger.info(f"Worker started: {config.max_iterations} iterations")
        try:
            TreeSearch(state, config).compute(
                lambda stats: self._publish(stats, generation)
            )
        except Exception as e:
            with self._lock:
                self._last_error = e
            logger.exception("Search worker failed")
            raise
        logger.info("Worker finished")

    def _publish(self, stats: Stats, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            for action, visits in stats.actions:
                self._history.setdefault(action, []).append(
                    (stats.iterations_completed, visits)
                )
            self._current_stats = stats

    def is_computing(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the worker finishes.

        Returns:
            True if no search is running afterwards
        """
        if self._worker is not None:
            self._worker.join(timeout)
        return not self.is_computing()

    @property
    def last_error(self) -> Optional[BaseException]:
        """Exception that ended the last search, if it failed."""
        with self._lock:
            return self._last_error

    def current_stats(self) -> Optional[Stats]:
        """Latest snapshot, or None before the first report."""
        with self._lock:
            return self._current_stats

    def action_history(self) -> Dict[Hashable, List[Tuple[int, int]]]:
        """Copy of (iteration, visits) series per root action."""
        with self._lock:
            return {action: list(series) for action, series in self._history.items()}

    def optimal_action(self) -> Optional[Hashable]:
        stats = self.current_stats()
        return stats.best_action() if stats is not None else None

    def progress(self) -> float:
        stats = self.current_stats()
        if stats is None or self.config is None:
            return 0.0
        return stats.progress(self.config.max_iterations)

    def perform(self, action: Hashable) -> None:
        """Play ``action`` on the managed state; old results no longer apply."""
        self.state.perform_action(action)
        self.reset_stats()

    def reset(self, state: Optional[Environment] = None) -> None:
        if state is not None:
            self.state = state
        self.reset_stats()

    def reset_stats(self) -> int:
        """Forget all reported results. Returns the new generation."""
        with self._lock:
            self._generation += 1
            self._current_stats = None
            self._history = {}
            return self._generation
