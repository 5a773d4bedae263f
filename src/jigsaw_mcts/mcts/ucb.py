"""UCB selection for the search tree."""

import math
import struct
from typing import Hashable, Sequence

import numpy as np

from .node import Node
from .tree import NodeArena


def ucb_score(node: Node, parent_visits: int, c: float) -> float:
    """Compute UCB1 score.

    UCB = W / N + c * sqrt(ln(N_parent)) / N

    Zero visit counts do not raise; they yield inf or NaN, which
    ``total_order_key`` still ranks deterministically.

    Args:
        node: Child node
        parent_visits: Visit count of the child's parent
        c: Exploration constant

    Returns:
        UCB score
    """
    if node.visit_count > 0 and parent_visits > 0:
        exploitation = node.accumulated_reward / node.visit_count
        exploration = c * math.sqrt(math.log(parent_visits)) / node.visit_count
        return exploitation + exploration

    with np.errstate(divide="ignore", invalid="ignore"):
        visits = np.float64(node.visit_count)
        exploitation = np.float64(node.accumulated_reward) / visits
        exploration = c * np.sqrt(np.log(np.float64(parent_visits))) / visits
        return float(exploitation + exploration)


def total_order_key(value: float) -> int:
    """Integer key implementing IEEE-754 totalOrder for doubles.

    -NaN < -inf < ... < -0.0 < +0.0 < ... < +inf < +NaN
    """
    bits = struct.unpack(">q", struct.pack(">d", value))[0]
    if bits < 0:
        bits ^= 0x7FFFFFFFFFFFFFFF
    return bits


def ucb_select(
    arena: NodeArena,
    index: int,
    actions: Sequence[Hashable],
    c: float
) -> Hashable:
    """Select the action whose child has the best UCB score.

    Every action must already have a child. Ties go to the action
    listed first.

    Args:
        arena: Node storage
        index: Parent node index
        actions: Legal actions, all expanded
        c: Exploration constant

    Returns:
        Selected action
    """
    node = arena[index]
    children = node.children
    parent_visits = node.visit_count

    return max(
        actions,
        key=lambda action: total_order_key(
            ucb_score(arena[children[action]], parent_visits, c)
        )
    )
