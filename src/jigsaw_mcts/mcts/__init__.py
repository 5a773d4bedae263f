"""MCTS module: generic tree search.

Environment-agnostic Monte Carlo Tree Search.
The arena stores the tree.
UCB1 picks the next child to descend into.
Random rollouts estimate new leaves.
Snapshots of root visit counts report progress.
"""

from .environment import Environment
from .node import Node
from .tree import NodeArena
from .ucb import ucb_select, ucb_score, total_order_key
from .backprop import backpropagate
from .stats import Stats, best_action
from .search import SearchConfig, TreeSearch, compute

__all__ = [
    "Environment",
    "Node",
    "NodeArena",
    "ucb_select",
    "ucb_score",
    "total_order_key",
    "backpropagate",
    "Stats",
    "best_action",
    "SearchConfig",
    "TreeSearch",
    "compute"
]
