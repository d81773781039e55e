"""Tabular Q-learning engine: value table, update rule and action policies."""

import numpy as np
from typing import Callable, Dict, Iterator, Optional, Tuple

from .gridworld import GridWorld
from .types import (
    Cell, Direction, DIRECTIONS, QValues, RLConfig, LearningResult, PathfindingResult
)
from ..utils.rng import SeededRNG, default_rng

# Reference reward magnitudes
REWARD_GOAL = 10.0
REWARD_WALL = -10.0
REWARD_STEP = 0.0


def immediate_reward(next_cell: Cell, goal: Cell, is_wall: Callable[[Cell], bool],
                     reward_goal: float = REWARD_GOAL, reward_wall: float = REWARD_WALL,
                     reward_step: float = REWARD_STEP) -> float:
    """Reward for arriving at next_cell. The goal check comes before the wall check."""
    if next_cell == goal:
        return reward_goal
    if is_wall(next_cell):
        return reward_wall
    return reward_step


class QTable:
    """
    Q-value estimates for every (cell, direction) pair.

    Rows are dense arrays of four floats indexed by Direction value. A row is
    created, filled with 0.0, the first time any of its pairs is read through
    q_value(); from then on it lives as long as the table and is only changed
    by update().
    """

    def __init__(self):
        self._values: Dict[Cell, np.ndarray] = {}

    def _row(self, cell: Cell) -> np.ndarray:
        row = self._values.get(cell)
        if row is None:
            row = np.zeros(len(DIRECTIONS))
            self._values[cell] = row
        return row

    def q_value(self, cell: Cell, direction: Direction) -> float:
        """Get Q-value for a state-action pair, recording the 0.0 default on first access."""
        return float(self._row(cell)[direction.value])

    def peek(self, cell: Cell, direction: Direction) -> float:
        """Get Q-value without creating an entry; for display."""
        row = self._values.get(cell)
        if row is None:
            return 0.0
        return float(row[direction.value])

    def values(self, cell: Cell) -> QValues:
        """Snapshot of the four values at cell, without creating an entry."""
        row = self._values.get(cell)
        if row is None:
            return QValues()
        return QValues.from_array(row)

    def max_value(self, cell: Cell) -> float:
        """Maximum Q-value at cell over all directions (materializing)."""
        return max(self.q_value(cell, direction) for direction in DIRECTIONS)

    def update(self, cell: Cell, direction: Direction, alpha: float, discount: float,
               goal: Cell, is_wall: Callable[[Cell], bool], move: Callable[[Cell, Direction], Cell],
               reward_goal: float = REWARD_GOAL, reward_wall: float = REWARD_WALL,
               reward_step: float = REWARD_STEP) -> float:
        """
        Apply the one-step Q-learning update to (cell, direction).

        Args:
            cell: Cell the action is taken from
            direction: Action taken
            alpha: Learning rate
            discount: Discount factor applied to the next cell's best value
            goal: Goal cell
            is_wall: Wall test for the moved-to cell
            move: Transition function

        Returns:
            The newly stored value

        Raises:
            BoundaryViolation: Propagated from is_wall for out-of-range cells
        """
        original_q = self.q_value(cell, direction)
        next_cell = move(cell, direction)

        reward = immediate_reward(next_cell, goal, is_wall,
                                  reward_goal, reward_wall, reward_step)
        next_max = self.max_value(next_cell)

        new_q = original_q + alpha * (reward + discount * next_max - original_q)
        self._row(cell)[direction.value] = new_q
        return new_q

    def cells(self) -> Iterator[Cell]:
        """Cells that have entries."""
        return iter(list(self._values))

    def items(self) -> Iterator[Tuple[Cell, QValues]]:
        """(cell, snapshot) pairs for every cell that has entries."""
        for cell, row in list(self._values.items()):
            yield cell, QValues.from_array(row)

    def __contains__(self, cell) -> bool:
        return cell in self._values

    def __len__(self) -> int:
        return len(self._values)


# Policies

def random_direction(rng: SeededRNG) -> Direction:
    """Uniformly random direction."""
    return rng.choice(DIRECTIONS)


def greedy_direction(q_table: QTable, cell: Cell, rng: SeededRNG) -> Direction:
    """Direction with the highest Q-value at cell, ties broken uniformly at random.

    Directions are put in a random order first and the first maximal value in
    that order wins.
    """
    order = [DIRECTIONS[i] for i in rng.permutation(len(DIRECTIONS))]
    q_values = [q_table.q_value(cell, direction) for direction in order]
    return order[int(np.argmax(q_values))]


def exploration_direction(q_table: QTable, cell: Cell, rng: SeededRNG,
                          epsilon: Optional[float] = None) -> Direction:
    """
    Choose a direction during learning.

    With epsilon None the choice is a pure random walk and the table is never
    consulted. With an explicit epsilon, explore with probability epsilon and
    otherwise take the greedy direction.
    """
    if epsilon is None:
        return random_direction(rng)
    if rng.random() < epsilon:
        return random_direction(rng)
    return greedy_direction(q_table, cell, rng)


class QLearningAgent:
    """Q-Learning agent bound to one maze."""

    def __init__(self, world: GridWorld, config: Optional[RLConfig] = None,
                 rng: Optional[SeededRNG] = None, q_table: Optional[QTable] = None):
        self.world = world
        self.config = (config or RLConfig()).validate()
        self.rng = rng if rng is not None else default_rng
        self.q_table = q_table if q_table is not None else QTable()

    def update(self, cell: Cell, direction: Direction) -> float:
        """Update Q-value using the world's goal and transition model."""
        return self.q_table.update(
            cell, direction,
            alpha=self.config.learning_rate,
            discount=self.config.discount_factor,
            goal=self.world.goal,
            is_wall=self.world.is_wall,
            move=self.world.move,
            reward_goal=self.config.reward_goal,
            reward_wall=self.config.reward_wall,
            reward_step=self.config.reward_step,
        )

    def select_learning_direction(self, cell: Cell) -> Direction:
        return exploration_direction(self.q_table, cell, self.rng, self.config.epsilon)

    def select_replay_direction(self, cell: Cell) -> Direction:
        return greedy_direction(self.q_table, cell, self.rng)

    def learn_step(self, position: Cell) -> Tuple[Cell, Direction]:
        """
        Execute one learning step from position.

        The chosen (position, direction) pair is always updated, including
        moves into a wall, but the agent only relocates onto a non-wall cell.

        Returns:
            Tuple of (new_position, direction_taken)
        """
        direction = self.select_learning_direction(position)
        self.update(position, direction)
        next_cell = self.world.move(position, direction)
        if self.world.is_wall(next_cell):
            return position, direction
        return next_cell, direction

    def learn(self, start: Cell, steps: int) -> LearningResult:
        """Run a batch of learning steps starting at start."""
        if steps < 0:
            raise ValueError(f"Steps must not be negative, got {steps}")

        position = start
        goal_arrivals = 0
        wall_hits = 0
        for _ in range(steps):
            next_position, _direction = self.learn_step(position)
            if next_position == position:
                wall_hits += 1
            elif next_position == self.world.goal:
                goal_arrivals += 1
            position = next_position

        return LearningResult(
            steps=steps,
            final_position=position,
            goal_arrivals=goal_arrivals,
            wall_hits=wall_hits,
        )

    def replay_step(self, position: Cell) -> Cell:
        """One greedy step with no update; a move into a wall leaves position unchanged."""
        direction = self.select_replay_direction(position)
        next_cell = self.world.move(position, direction)
        if self.world.is_wall(next_cell):
            return position
        return next_cell

    def find_path(self, start: Cell, max_steps: Optional[int] = None) -> PathfindingResult:
        """Follow the greedy policy from start until the goal or max_steps."""
        if max_steps is None:
            max_steps = self.config.max_replay_steps
        goal = self.world.goal

        path = [start]
        position = start
        wall_hits = 0
        steps = 0
        while position != goal and steps < max_steps:
            next_position = self.replay_step(position)
            steps += 1
            if next_position == position:
                wall_hits += 1
            else:
                path.append(next_position)
            position = next_position

        return PathfindingResult(
            path=path,
            steps_taken=steps,
            found=position == goal,
            wall_hits=wall_hits,
        )
