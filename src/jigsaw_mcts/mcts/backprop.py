"""Backpropagation for the search tree.

Each rollout updates visit counts and accumulated reward of every node
on the path back to the root. Rewards are added as-is at every level.
"""

from .tree import NodeArena


def backpropagate(arena: NodeArena, index: int, reward: int, visits: int = 1) -> None:
    """Backpropagate reward from node to root.

    Args:
        arena: Node storage
        index: Node the rollout ended at
        reward: Reward returned by the environment
        visits: Visit increment
    """
    current = index

    while current is not None:
        node = arena[current]
        node.update(reward, visits)
        current = node.parent
