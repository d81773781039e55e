"""Shared fixtures for the qmaze test suite."""

import pytest

from qmaze.domain.gridworld import GridWorld
from qmaze.domain.qlearning import QTable
from qmaze.domain.types import Direction
from qmaze.utils.maze_factory import DEFAULT_GOAL, DEFAULT_MAZE, DEFAULT_START
from qmaze.utils.rng import SeededRNG


class FixedRNG(SeededRNG):
    """RNG whose choice() replays a scripted sequence of directions."""

    def __init__(self, directions, seed=0):
        super().__init__(seed)
        self._directions = list(directions)

    def choice(self, seq):
        if self._directions and isinstance(self._directions[0], Direction):
            return self._directions.pop(0)
        return super().choice(seq)


@pytest.fixture
def world():
    return GridWorld(DEFAULT_MAZE, DEFAULT_GOAL)


@pytest.fixture
def start():
    return DEFAULT_START


@pytest.fixture
def q_table():
    return QTable()


@pytest.fixture
def rng():
    return SeededRNG(1234)


@pytest.fixture
def open_room():
    """5x5 room with a wall border and the goal in the middle."""
    rows = [
        [1, 1, 1, 1, 1],
        [1, 0, 0, 0, 1],
        [1, 0, 0, 0, 1],
        [1, 0, 0, 0, 1],
        [1, 1, 1, 1, 1],
    ]
    return GridWorld(rows, (2, 2))


@pytest.fixture
def fixed_rng():
    """Factory for an RNG that picks the given directions in order."""
    return FixedRNG
