"""Test UCB scoring and selection."""

import math

import pytest

from jigsaw_mcts.mcts.node import Node
from jigsaw_mcts.mcts.tree import NodeArena
from jigsaw_mcts.mcts.ucb import total_order_key, ucb_score, ucb_select


def _arena_with_children(stats):
    """Root with one child per (action, visits, reward); root visits = sum."""
    arena = NodeArena()
    for action, visits, reward in stats:
        child = arena.create_node()
        arena.link(NodeArena.ROOT, action, child)
        arena[child].update(reward, visits)
    arena.root.update(sum(r for _, _, r in stats), sum(v for _, v, _ in stats))
    return arena


def test_ucb_formula():
    """UCB = W/N + c * sqrt(ln N_parent) / N."""
    node = Node(visit_count=4, accumulated_reward=2)
    expected = 0.5 + 1.5 * math.sqrt(math.log(10)) / 4
    assert ucb_score(node, 10, 1.5) == pytest.approx(expected)


def test_zero_exploration_constant_is_mean():
    node = Node(visit_count=8, accumulated_reward=6)
    assert ucb_score(node, 100, 0.0) == pytest.approx(0.75)


def test_larger_c_favors_less_visited_sibling():
    """Raising c widens the low-visit node's lead over the high-visit one."""
    low = Node(visit_count=2, accumulated_reward=1)
    high = Node(visit_count=20, accumulated_reward=10)
    parent_visits = 22

    gap_small_c = ucb_score(low, parent_visits, 0.5) - ucb_score(high, parent_visits, 0.5)
    gap_large_c = ucb_score(low, parent_visits, 2.0) - ucb_score(high, parent_visits, 2.0)

    assert gap_large_c > gap_small_c


def test_degenerate_inputs_do_not_raise():
    """Zero visits give non-finite scores instead of exceptions."""
    unvisited = Node()
    assert math.isnan(ucb_score(unvisited, 5, 1.0))

    orphan = Node(visit_count=1, accumulated_reward=1)
    assert math.isnan(ucb_score(orphan, 0, 1.0))


def test_total_order_key():
    """NaN and infinities sort deterministically."""
    values = [math.inf, float("nan"), -math.inf, 0.0, -1.0, 2.5]
    ordered = sorted(values, key=total_order_key)

    assert ordered[:5] == [-math.inf, -1.0, 0.0, 2.5, math.inf]
    assert math.isnan(ordered[5])

    negative_nan = math.copysign(float("nan"), -1.0)
    assert total_order_key(negative_nan) < total_order_key(-math.inf)
    assert total_order_key(-0.0) < total_order_key(0.0)


def test_select_highest_score():
    arena = _arena_with_children([(0, 10, 2), (1, 10, 8)])
    assert ucb_select(arena, NodeArena.ROOT, [0, 1], c=0.0) == 1


def test_select_ties_go_to_first_listed():
    arena = _arena_with_children([(0, 5, 3), (1, 5, 3)])
    assert ucb_select(arena, NodeArena.ROOT, [0, 1], c=1.4) == 0
    assert ucb_select(arena, NodeArena.ROOT, [1, 0], c=1.4) == 1


def test_select_prefers_unvisited_exploration():
    """With a large c the rarely visited child wins despite lower mean."""
    arena = _arena_with_children([(0, 100, 60), (1, 2, 0)])
    assert ucb_select(arena, NodeArena.ROOT, [0, 1], c=0.0) == 0
    assert ucb_select(arena, NodeArena.ROOT, [0, 1], c=16.0) == 1
