"""Test progress snapshots."""

import pytest

from jigsaw_mcts.mcts.stats import Stats, best_action


def test_best_action_most_visited():
    stats = Stats(iterations_completed=10, actions=((3, 2), (5, 7), (1, 1)))
    assert stats.best_action() == 5


def test_best_action_tie_goes_to_first():
    stats = Stats(iterations_completed=10, actions=((4, 5), (2, 5)))
    assert stats.best_action() == 4


def test_best_action_empty():
    assert Stats(iterations_completed=1).best_action() is None
    assert best_action(None) is None


def test_progress_and_totals():
    stats = Stats(iterations_completed=250, actions=((0, 100), (1, 149)))
    assert stats.progress(1000) == pytest.approx(0.25)
    assert stats.total_visits == 249
    assert stats.visits_of(1) == 149
    assert stats.visits_of(9) == 0


def test_snapshot_is_immutable():
    stats = Stats(iterations_completed=1)
    with pytest.raises(AttributeError):
        stats.iterations_completed = 2
