"""Append-only node storage for the search tree."""

from typing import Dict, Hashable, Iterator, List

from .node import Node


class NodeArena:
    """Flat list of nodes addressed by dense integer index.

    Index 0 is the root. Indices are never reused or moved, and a child
    is always appended after its parent, so parent links can never form
    a cycle.
    """

    ROOT = 0

    def __init__(self):
        self.nodes: List[Node] = []
        self.create_node()

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    @property
    def root(self) -> Node:
        return self.nodes[self.ROOT]

    def create_node(self) -> int:
        """Append an empty node and return its index."""
        index = len(self.nodes)
        self.nodes.append(Node())
        return index

    def link(self, parent: int, action: Hashable, child: int) -> None:
        """Attach ``child`` under ``parent`` as the result of ``action``."""
        self.nodes[child].parent = parent
        self.nodes[parent].children[action] = child

    def get_path_to_root(self, index: int) -> List[int]:
        """Get indices from ``index`` up to and including the root."""
        path = []
        current = index
        while current is not None:
            path.append(current)
            current = self.nodes[current].parent
        return path

    def depth(self, index: int) -> int:
        """Number of edges between ``index`` and the root."""
        return len(self.get_path_to_root(index)) - 1

    def root_visits_by_action(self) -> Dict[Hashable, int]:
        """Visit count of every expanded root child, in expansion order."""
        return {
            action: self.nodes[child].visit_count
            for action, child in self.root.children.items()
        }

    def get_statistics(self) -> dict:
        """Get tree statistics."""
        root = self.root
        return {
            "total_nodes": len(self.nodes),
            "root_visits": root.visit_count,
            "root_mean_reward": root.mean_reward if root.visit_count else 0.0,
            "root_children": len(root.children),
            "max_depth": max(self.depth(i) for i in range(len(self.nodes))),
        }
