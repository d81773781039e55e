"""Maze factory for the reference maze, walled grids, parsed and generated mazes."""

from typing import Iterable, List, Optional, Tuple

from ..domain.gridworld import GridWorld
from ..domain.types import Cell, FREE, WALL
from .rng import SeededRNG, default_rng

# Reference maze: walled border, the start in the top-left corridor and the
# goal at the end of the top-right corridor
DEFAULT_MAZE: Tuple[Tuple[int, ...], ...] = (
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
    (1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 1),
    (1, 0, 1, 1, 0, 1, 0, 1, 0, 1, 1, 1),
    (1, 0, 1, 1, 0, 1, 0, 1, 0, 0, 0, 1),
    (1, 0, 1, 1, 0, 1, 0, 1, 1, 1, 0, 1),
    (1, 0, 1, 1, 1, 1, 0, 0, 0, 1, 0, 1),
    (1, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 1),
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
)
DEFAULT_START: Cell = (1, 1)
DEFAULT_GOAL: Cell = (10, 1)

MAZE_CHARS = {
    "#": WALL,
    ".": FREE,
    " ": FREE,
    "S": FREE,
    "G": FREE,
}


def create_default_world() -> Tuple[GridWorld, Cell]:
    """The reference maze and its start cell."""
    return GridWorld(DEFAULT_MAZE, DEFAULT_GOAL), DEFAULT_START


def create_walled_grid(width: int, height: int) -> List[List[int]]:
    """
    Create rows for an empty room surrounded by walls.

    Args:
        width: Grid width including the border (must be >= 3)
        height: Grid height including the border (must be >= 3)

    Raises:
        ValueError: If the grid leaves no interior cell
    """
    if width < 3 or height < 3:
        raise ValueError(f"Walled grid needs at least 3x3 cells, got {width}x{height}")

    rows = []
    for y in range(height):
        if y in (0, height - 1):
            rows.append([WALL] * width)
        else:
            rows.append([WALL] + [FREE] * (width - 2) + [WALL])
    return rows


def parse_maze(lines: Iterable[str]) -> Tuple[List[List[int]], Optional[Cell], Optional[Cell]]:
    """
    Parse an ASCII maze.

    '#' is a wall, '.' or ' ' a free cell, 'S' the start and 'G' the goal.

    Returns:
        Tuple of (rows, start, goal); start/goal are None when not marked

    Raises:
        ValueError: On unknown characters or repeated S/G markers
    """
    rows = []
    start = None
    goal = None
    for y, line in enumerate(line.rstrip("\n") for line in lines):
        if not line.strip():
            continue
        row_index = len(rows)
        row = []
        for x, char in enumerate(line):
            if char not in MAZE_CHARS:
                raise ValueError(f"Unknown maze character {char!r} at {(x, y)}")
            if char == "S":
                if start is not None:
                    raise ValueError("Maze has more than one start")
                start = (x, row_index)
            elif char == "G":
                if goal is not None:
                    raise ValueError("Maze has more than one goal")
                goal = (x, row_index)
            row.append(MAZE_CHARS[char])
        rows.append(row)
    return rows, start, goal


def place_start_and_goal(rows: List[List[int]], start: Optional[Cell] = None,
                         goal: Optional[Cell] = None,
                         rng: Optional[SeededRNG] = None) -> Tuple[Cell, Cell]:
    """
    Pick start and goal cells on free cells of rows.

    Args:
        rows: Maze rows
        start: Specific start cell (random if None)
        goal: Specific goal cell (random if None)
        rng: Random number generator to use

    Returns:
        Tuple of (start, goal)

    Raises:
        ValueError: If no valid positions are available or positions overlap
    """
    if rng is None:
        rng = default_rng

    free = [(x, y) for y, row in enumerate(rows) for x, kind in enumerate(row) if kind == FREE]
    if len(free) < 2:
        raise ValueError("Not enough free cells for start and goal")

    if start is None:
        start = rng.choice(free)
    elif start not in free:
        raise ValueError(f"Start position {start} is not a free cell")

    available_for_goal = [cell for cell in free if cell != start]
    if goal is None:
        goal = rng.choice(available_for_goal)
    elif goal == start:
        raise ValueError("Start and goal positions cannot be the same")
    elif goal not in free:
        raise ValueError(f"Goal position {goal} is not a free cell")

    return start, goal


def generate_maze_grid(width: int, height: int, seed: Optional[int] = None,
                       rng: Optional[SeededRNG] = None) -> Tuple[GridWorld, Cell, Cell]:
    """
    Generate a walled maze using recursive backtracking.

    Args:
        width: Grid width (bumped to the next odd number)
        height: Grid height (bumped to the next odd number)
        seed: Random seed for reproducibility, used when rng is None
        rng: Random number generator to use

    Returns:
        Tuple of (world, start, goal)
    """
    if rng is None:
        rng = SeededRNG(seed)

    # Make dimensions odd so carved cells sit on odd coordinates inside the border
    if width % 2 == 0:
        width += 1
    if height % 2 == 0:
        height += 1
    if width < 5 or height < 5:
        raise ValueError(f"Generated maze needs at least 5x5 cells, got {width}x{height}")

    rows = [[WALL] * width for _ in range(height)]

    def carve_passages(x: int, y: int, visited: set):
        visited.add((x, y))
        rows[y][x] = FREE

        directions = [(0, -2), (0, 2), (-2, 0), (2, 0)]
        rng.shuffle(directions)

        for dx, dy in directions:
            nx, ny = x + dx, y + dy
            if 1 <= nx < width - 1 and 1 <= ny < height - 1 and (nx, ny) not in visited:
                # Carve wall between current and next cell
                rows[y + dy // 2][x + dx // 2] = FREE
                carve_passages(nx, ny, visited)

    carve_passages(1, 1, set())

    start, goal = place_start_and_goal(rows, rng=rng)
    return GridWorld(rows, goal), start, goal
