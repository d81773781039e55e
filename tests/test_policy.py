"""Tests for the exploration and replay policies."""

from qmaze.domain.qlearning import (
    QTable, exploration_direction, greedy_direction, random_direction
)
from qmaze.domain.types import Direction, DIRECTIONS
from qmaze.utils.rng import SeededRNG


def teach(q_table, world, cell, direction, times=1):
    for _ in range(times):
        q_table.update(cell, direction, 0.4, 1.0, world.goal, world.is_wall, world.move)


class TestRandomDirection:
    def test_covers_all_directions(self, rng):
        seen = {random_direction(rng) for _ in range(200)}
        assert seen == set(DIRECTIONS)

    def test_seeded_is_reproducible(self):
        first_rng, second_rng = SeededRNG(5), SeededRNG(5)
        first = [random_direction(first_rng) for _ in range(20)]
        second = [random_direction(second_rng) for _ in range(20)]
        assert first == second


class TestGreedyDirection:
    def test_picks_unique_maximum(self, q_table, world):
        teach(q_table, world, (9, 1), Direction.RIGHT)
        for seed in range(50):
            assert greedy_direction(q_table, (9, 1), SeededRNG(seed)) == Direction.RIGHT

    def test_ties_broken_across_all_directions(self, q_table):
        seen = {greedy_direction(q_table, (4, 4), SeededRNG(seed)) for seed in range(200)}
        assert seen == set(DIRECTIONS)

    def test_partial_tie_never_picks_lower_value(self, q_table, world):
        # (1, 1) has walls above and to the left
        teach(q_table, world, (1, 1), Direction.UP)
        teach(q_table, world, (1, 1), Direction.LEFT)
        seen = {greedy_direction(q_table, (1, 1), SeededRNG(seed)) for seed in range(200)}
        assert seen == {Direction.DOWN, Direction.RIGHT}

    def test_greedy_lookup_materializes_cell(self, q_table, rng):
        greedy_direction(q_table, (2, 2), rng)
        assert (2, 2) in q_table


class TestExplorationDirection:
    def test_baseline_is_random_walk(self, q_table, world, rng):
        teach(q_table, world, (9, 1), Direction.RIGHT, times=10)
        seen = {exploration_direction(q_table, (9, 1), rng) for _ in range(200)}
        assert seen == set(DIRECTIONS)

    def test_baseline_never_reads_table(self, rng):
        q_table = QTable()
        for _ in range(100):
            exploration_direction(q_table, (3, 3), rng)
        assert len(q_table) == 0

    def test_epsilon_zero_is_greedy(self, q_table, world, rng):
        teach(q_table, world, (9, 1), Direction.RIGHT)
        for _ in range(100):
            assert exploration_direction(q_table, (9, 1), rng, epsilon=0.0) == Direction.RIGHT

    def test_epsilon_one_explores(self, q_table, world, rng):
        teach(q_table, world, (9, 1), Direction.RIGHT)
        seen = {exploration_direction(q_table, (9, 1), rng, epsilon=1.0) for _ in range(200)}
        assert seen == set(DIRECTIONS)

    def test_epsilon_mixes(self, q_table, world, rng):
        teach(q_table, world, (9, 1), Direction.RIGHT)
        picks = [exploration_direction(q_table, (9, 1), rng, epsilon=0.5) for _ in range(400)]
        greedy_share = picks.count(Direction.RIGHT) / len(picks)
        # 0.5 greedy plus a quarter of the random half
        assert 0.5 < greedy_share < 0.75
