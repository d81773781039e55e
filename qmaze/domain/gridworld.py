"""Immutable maze geometry and the transition model the agent moves through."""

from typing import Iterator, List, Tuple

from .types import Cell, Direction, Maze, BoundaryViolation, FREE, WALL


class GridWorld:
    """Rectangular maze of free and wall cells with a designated goal."""

    def __init__(self, maze: Maze, goal: Cell):
        """
        Create a world from rows of cell kinds.

        Args:
            maze: Rows of FREE (0) / WALL (1), indexed maze[row][column]
            goal: Goal cell as (column, row)

        Raises:
            ValueError: If the grid is empty or not rectangular, contains an
                unknown cell kind, or the goal is out of bounds or a wall
        """
        rows = tuple(tuple(int(kind) for kind in row) for row in maze)
        if not rows or not rows[0]:
            raise ValueError("Maze must have at least one row and one column")

        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Maze must be rectangular: row {y} has {len(row)} cells, expected {width}")
            for x, kind in enumerate(row):
                if kind not in (FREE, WALL):
                    raise ValueError(f"Unknown cell kind {kind} at {(x, y)}")

        self._maze = rows
        self._width = width
        self._height = len(rows)

        goal = (int(goal[0]), int(goal[1]))
        if not self.in_bounds(goal):
            raise ValueError(f"Goal {goal} is out of bounds")
        if self.is_wall(goal):
            raise ValueError(f"Goal {goal} is a wall")
        self._goal = goal

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def maze(self) -> Tuple[Tuple[int, ...], ...]:
        """Read-only rows of cell kinds."""
        return self._maze

    @property
    def goal(self) -> Cell:
        return self._goal

    def in_bounds(self, cell: Cell) -> bool:
        """Check if cell is within the maze's rectangular extent."""
        x, y = cell
        return 0 <= x < self._width and 0 <= y < self._height

    def move(self, cell: Cell, direction: Direction) -> Cell:
        """Cell reached by stepping in direction; no clamping or wall check."""
        d_row, d_col = direction.offset
        return (cell[0] + d_col, cell[1] + d_row)

    def is_wall(self, cell: Cell) -> bool:
        """
        Check whether cell is a wall.

        Raises:
            BoundaryViolation: If cell lies outside the maze
        """
        if not self.in_bounds(cell):
            raise BoundaryViolation(cell, self._width, self._height)
        x, y = cell
        return self._maze[y][x] == WALL

    def cells(self) -> Iterator[Cell]:
        """Iterate over every cell in row-major order."""
        for y in range(self._height):
            for x in range(self._width):
                yield (x, y)

    def free_cells(self) -> List[Cell]:
        """All non-wall cells in row-major order."""
        return [cell for cell in self.cells() if not self.is_wall(cell)]

    def has_wall_border(self) -> bool:
        """True if every cell on the outer border is a wall."""
        for x, y in self.cells():
            on_border = x in (0, self._width - 1) or y in (0, self._height - 1)
            if on_border and self._maze[y][x] != WALL:
                return False
        return True

    def __repr__(self) -> str:
        return f"GridWorld({self._width}x{self._height}, goal={self._goal})"
