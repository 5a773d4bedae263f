"""Progress snapshots emitted by the search."""

from dataclasses import dataclass
from typing import Hashable, Optional, Tuple


@dataclass(frozen=True)
class Stats:
    """Point-in-time summary of the root's expanded children.

    Attributes:
        iterations_completed: Iteration index the snapshot was taken at
        actions: (action, visit_count) pairs in expansion order
    """
    iterations_completed: int
    actions: Tuple[Tuple[Hashable, int], ...] = ()

    @property
    def total_visits(self) -> int:
        return sum(visits for _, visits in self.actions)

    def best_action(self) -> Optional[Hashable]:
        """Most visited action; first one wins ties. None if nothing expanded."""
        best = None
        best_visits = -1
        for action, visits in self.actions:
            if visits > best_visits:
                best = action
                best_visits = visits
        return best

    def progress(self, max_iterations: int) -> float:
        """Fraction of the iteration budget reached."""
        return self.iterations_completed / max_iterations

    def visits_of(self, action: Hashable) -> int:
        """Visit count of ``action``; 0 if it was never expanded."""
        for candidate, visits in self.actions:
            if candidate == action:
                return visits
        return 0


def best_action(stats: Optional[Stats]) -> Optional[Hashable]:
    """Best action of a possibly missing snapshot."""
    if stats is None:
        return None
    return stats.best_action()
