"""Core type definitions for the Q-learning maze engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

# Grid coordinate as (column, row), i.e. (x, y)
Cell = Tuple[int, int]

# Cell kinds stored in the maze rows
FREE = 0
WALL = 1

# Rectangular grid of cell kinds, indexed maze[row][column]
Maze = Sequence[Sequence[int]]


class Direction(Enum):
    """Movement directions; the value is the ordinal used to index Q-value arrays."""
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def offset(self) -> Tuple[int, int]:
        """(d_row, d_col) applied by a move in this direction."""
        return DIRECTION_OFFSETS[self]


DIRECTIONS: Tuple[Direction, ...] = tuple(Direction)

DIRECTION_OFFSETS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


class BoundaryViolation(IndexError):
    """Raised when a cell outside the maze's rectangular extent is queried."""

    def __init__(self, cell: Cell, width: int, height: int):
        self.cell = cell
        self.width = width
        self.height = height
        super().__init__(f"Cell {cell} is outside the {width}x{height} maze")


@dataclass(frozen=True)
class QValues:
    """Read-only snapshot of the Q-values for all directions at one cell."""
    up: float = 0.0
    down: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def from_array(cls, values: np.ndarray) -> "QValues":
        """Build a snapshot from an array ordered by Direction value."""
        return cls(
            up=float(values[Direction.UP.value]),
            down=float(values[Direction.DOWN.value]),
            left=float(values[Direction.LEFT.value]),
            right=float(values[Direction.RIGHT.value]),
        )

    def as_array(self) -> np.ndarray:
        """Return Q-values as numpy array."""
        return np.array([self.up, self.down, self.left, self.right])

    def get(self, direction: Direction) -> float:
        """Get the value stored for one direction."""
        return getattr(self, direction.name.lower())

    def max_value(self) -> float:
        """Get the maximum Q-value."""
        return max(self.up, self.down, self.left, self.right)

    def best_direction(self) -> Direction:
        """Direction with the highest value; ties go to declaration order."""
        return DIRECTIONS[int(np.argmax(self.as_array()))]


@dataclass
class RLConfig:
    """Configuration for learning and replay."""
    learning_rate: float = 0.4
    discount_factor: float = 1.0
    reward_goal: float = 10.0
    reward_wall: float = -10.0
    reward_step: float = 0.0
    # None keeps exploration a pure random walk; a float enables epsilon-greedy
    epsilon: Optional[float] = None
    learn_steps_per_tick: int = 32
    play_tick_interval: int = 40  # idle ticks between greedy moves during replay
    max_replay_steps: int = 100

    def validate(self) -> "RLConfig":
        """Check value ranges, raising ValueError on the first bad field."""
        if not (0.0 < self.learning_rate <= 1.0):
            raise ValueError(f"Learning rate must be in (0, 1], got {self.learning_rate}")
        if not (0.0 <= self.discount_factor <= 1.0):
            raise ValueError(f"Discount factor must be in [0, 1], got {self.discount_factor}")
        if self.epsilon is not None and not (0.0 <= self.epsilon <= 1.0):
            raise ValueError(f"Epsilon must be in [0, 1], got {self.epsilon}")
        if self.learn_steps_per_tick <= 0:
            raise ValueError(f"Learning steps per tick must be positive, got {self.learn_steps_per_tick}")
        if self.play_tick_interval < 0:
            raise ValueError(f"Play tick interval must not be negative, got {self.play_tick_interval}")
        if self.max_replay_steps <= 0:
            raise ValueError(f"Max replay steps must be positive, got {self.max_replay_steps}")
        return self


@dataclass
class SimulationState:
    """Mutable driver state carried across the LEARN and PLAY phases."""
    position: Cell
    play_frame: int = 0
    ticks: int = 0
    learning_steps: int = 0
    replay_steps: int = 0
    replay_path: List[Cell] = field(default_factory=list)


@dataclass
class LearningResult:
    """Summary of a batch of random-walk learning steps."""
    steps: int
    final_position: Cell
    goal_arrivals: int = 0
    wall_hits: int = 0


@dataclass
class PathfindingResult:
    """Result of replaying the greedy policy."""
    path: List[Cell] = field(default_factory=list)
    steps_taken: int = 0
    found: bool = False
    wall_hits: int = 0

    @property
    def path_length(self) -> int:
        """Number of cells on the path, start included."""
        return len(self.path)

    @property
    def success(self) -> bool:
        """Whether the replay reached the goal."""
        return self.found and len(self.path) > 0
