"""Plain-text views of the maze, the agent and the learned Q-values.

Everything here reads the table through QTable.peek()/values(), so drawing a
frame never creates entries.
"""

from typing import List, Optional, Sequence

from ..domain.gridworld import GridWorld
from ..domain.qlearning import QTable
from ..domain.types import Cell, Direction, DIRECTIONS

WALL_CHAR = "#"
FREE_CHAR = "."
START_CHAR = "S"
GOAL_CHAR = "G"
AGENT_CHAR = "@"
UNLEARNED_CHAR = "·"

POLICY_ARROWS = {
    Direction.UP: "↑",
    Direction.DOWN: "↓",
    Direction.LEFT: "←",
    Direction.RIGHT: "→",
}


def render_maze(world: GridWorld, position: Optional[Cell] = None,
                start: Optional[Cell] = None) -> str:
    """One character per cell; agent is drawn over goal, goal over start."""
    lines = []
    for y in range(world.height):
        row = []
        for x in range(world.width):
            cell = (x, y)
            if cell == position:
                row.append(AGENT_CHAR)
            elif cell == world.goal:
                row.append(GOAL_CHAR)
            elif cell == start:
                row.append(START_CHAR)
            elif world.is_wall(cell):
                row.append(WALL_CHAR)
            else:
                row.append(FREE_CHAR)
        lines.append("".join(row))
    return "\n".join(lines)


def render_q_values(world: GridWorld, q_table: QTable, precision: int = 2) -> str:
    """Per free cell, its coordinates followed by one line per direction."""
    blocks = []
    for cell in world.free_cells():
        x, y = cell
        lines = [f"x:{x}, y:{y}"]
        for direction in DIRECTIONS:
            lines.append(f"  {direction.name}: {q_table.peek(cell, direction):.{precision}f}")
        blocks.append("\n".join(lines))
    return "\n".join(blocks)


def render_policy(world: GridWorld, q_table: QTable) -> str:
    """Arrow for the best known direction at each free cell."""
    lines = []
    for y in range(world.height):
        row = []
        for x in range(world.width):
            cell = (x, y)
            if world.is_wall(cell):
                row.append(WALL_CHAR)
            elif cell == world.goal:
                row.append(GOAL_CHAR)
            elif cell not in q_table:
                row.append(UNLEARNED_CHAR)
            else:
                values = q_table.values(cell)
                if not values.as_array().any():
                    row.append(UNLEARNED_CHAR)
                else:
                    row.append(POLICY_ARROWS[values.best_direction()])
        lines.append("".join(row))
    return "\n".join(lines)


def format_path(path: Sequence[Cell], limit: Optional[int] = None) -> str:
    """Path as '(x,y) -> (x,y) ...', optionally truncated."""
    shown: List[Cell] = list(path if limit is None else path[:limit])
    text = " -> ".join(f"({x},{y})" for x, y in shown)
    if limit is not None and len(path) > limit:
        text += " ..."
    return text
