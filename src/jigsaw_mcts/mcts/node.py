"""MCTS node for the arena-backed search tree."""

from dataclasses import dataclass, field
from typing import Dict, Hashable, Optional


@dataclass
class Node:
    """One vertex of the search tree.

    Nodes do not hold game state. The position of a node is recovered by
    replaying the actions on the path from the root.

    Attributes:
        visit_count: N - number of backpropagations through this node
        accumulated_reward: W - sum of backpropagated rewards
        parent: Arena index of the parent (None for root)
        children: Action -> arena index of the child reached by it
    """
    visit_count: int = 0
    accumulated_reward: int = 0
    parent: Optional[int] = None
    children: Dict[Hashable, int] = field(default_factory=dict)

    @property
    def mean_reward(self) -> float:
        """Average reward (W / N). Only meaningful once visited."""
        return self.accumulated_reward / self.visit_count

    def update(self, reward: int, visits: int) -> None:
        """Accumulate one backpropagation step."""
        self.accumulated_reward += reward
        self.visit_count += visits

    def is_leaf(self) -> bool:
        """Check if node has no children."""
        return len(self.children) == 0

    def __repr__(self) -> str:
        return (f"Node(visits={self.visit_count}, reward={self.accumulated_reward}, "
                f"parent={self.parent}, children={len(self.children)})")
