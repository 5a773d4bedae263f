"""Pytest fixtures for testing."""

import threading

import pytest
import numpy as np

from jigsaw_mcts.mcts.search import SearchConfig


class TwoWayEnv:
    """Root offers actions 0 and 1; either one ends the game.

    Action 0 is worth 1, action 1 is worth 0.
    """

    def __init__(self, chosen=None):
        self.chosen = chosen

    def has_finished(self):
        return self.chosen is not None

    def legal_actions(self):
        return [] if self.has_finished() else [0, 1]

    def perform_action(self, action):
        if action not in self.legal_actions():
            raise ValueError(f"Illegal action {action}")
        self.chosen = action

    def eval(self):
        return 1 if self.chosen == 0 else 0

    def copy(self):
        return TwoWayEnv(self.chosen)


class FinishedEnv:
    """Already terminal position."""

    def has_finished(self):
        return True

    def legal_actions(self):
        return []

    def perform_action(self, action):
        raise ValueError("Game is over")

    def eval(self):
        return 3

    def copy(self):
        return FinishedEnv()


class BitsEnv:
    """Pick ``length`` bits one at a time; reward is the number of ones.

    Transitions are deterministic.
    """

    def __init__(self, length=4, bits=()):
        self.length = length
        self.bits = tuple(bits)

    def has_finished(self):
        return len(self.bits) >= self.length

    def legal_actions(self):
        return [] if self.has_finished() else [0, 1]

    def perform_action(self, action):
        if action not in self.legal_actions():
            raise ValueError(f"Illegal action {action}")
        self.bits = self.bits + (action,)

    def eval(self):
        return sum(self.bits)

    def copy(self):
        return BitsEnv(self.length, self.bits)


class StuckEnv:
    """Unfinished but without legal actions: a broken environment."""

    def has_finished(self):
        return False

    def legal_actions(self):
        return []

    def perform_action(self, action):
        raise ValueError("No actions")

    def eval(self):
        return 0

    def copy(self):
        return StuckEnv()


class GatedEnv(TwoWayEnv):
    """TwoWayEnv whose moves block until ``gate`` is set."""

    def __init__(self, gate, chosen=None):
        super().__init__(chosen)
        self.gate = gate

    def perform_action(self, action):
        self.gate.wait(10)
        super().perform_action(action)

    def copy(self):
        return GatedEnv(self.gate, self.chosen)


@pytest.fixture
def seed():
    """Set random seed for reproducibility."""
    seed_value = 42
    np.random.seed(seed_value)
    return seed_value


@pytest.fixture
def two_way_env():
    return TwoWayEnv()


@pytest.fixture
def finished_env():
    return FinishedEnv()


@pytest.fixture
def bits_env():
    return BitsEnv(length=4)


@pytest.fixture
def stuck_env():
    return StuckEnv()


@pytest.fixture
def gate():
    event = threading.Event()
    yield event
    event.set()


@pytest.fixture
def gated_env(gate):
    return GatedEnv(gate)


@pytest.fixture
def small_config(seed):
    """Fast config for unit tests."""
    return SearchConfig(
        max_iterations=500,
        max_depth=6,
        callback_interval=100,
        seed=seed
    )
