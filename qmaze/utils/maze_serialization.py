"""
Maze serialization utilities for saving and loading maze layouts.
Only geometry, start and goal are stored; learned Q-values never are.
"""

import json
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..domain.gridworld import GridWorld
from ..domain.types import Cell

FORMAT_VERSION = "1.0"


def _parse_cell(value: Any, field: str) -> Cell:
    """Read an (x, y) pair of whole numbers from a JSON list."""
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{field} must be an [x, y] pair, got {value!r}")
    coords = []
    for coord in value:
        if isinstance(coord, bool) or not isinstance(coord, (int, float)):
            raise ValueError(f"{field} coordinates must be integers, got {value!r}")
        if isinstance(coord, float) and not coord.is_integer():
            raise ValueError(f"{field} coordinates must be integers, got {value!r}")
        coords.append(int(coord))
    return coords[0], coords[1]


class MazeData:
    """Container for maze layout with metadata."""

    def __init__(self, rows: List[List[int]], start: Cell, goal: Cell,
                 name: str = "", description: str = ""):
        self.rows = [list(row) for row in rows]
        self.start = start
        self.goal = goal
        self.name = name
        self.description = description
        self.created_at = datetime.now().isoformat()

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def to_dict(self) -> Dict[str, Any]:
        """Convert maze data to dictionary for serialization."""
        return {
            'width': self.width,
            'height': self.height,
            'rows': self.rows,
            'start': list(self.start),
            'goal': list(self.goal),
            'name': self.name,
            'description': self.description,
            'created_at': self.created_at,
            'version': FORMAT_VERSION
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MazeData':
        """Create maze data from dictionary."""
        maze = cls(
            rows=data['rows'],
            start=_parse_cell(data['start'], "start"),
            goal=_parse_cell(data['goal'], "goal"),
            name=data.get('name', ''),
            description=data.get('description', '')
        )
        maze.created_at = data.get('created_at', datetime.now().isoformat())
        return maze

    @classmethod
    def from_world(cls, world: GridWorld, start: Cell, name: str = "",
                   description: str = "") -> 'MazeData':
        """Capture the layout of a world."""
        return cls(rows=[list(row) for row in world.maze], start=start, goal=world.goal,
                   name=name, description=description)

    def to_world(self) -> GridWorld:
        """
        Build the world described by this layout.

        Raises:
            ValueError: If the layout is invalid, the border is open or the start
                is not a free cell
        """
        world = GridWorld(self.rows, self.goal)
        if not world.has_wall_border():
            raise ValueError("Maze border must be walled")
        if not world.in_bounds(self.start) or world.is_wall(self.start):
            raise ValueError(f"Start position {self.start} is not a free cell")
        return world


def save_maze(maze_data: MazeData, filepath: str) -> bool:
    """Save maze data to a JSON file."""
    try:
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(filepath, 'w') as f:
            json.dump(maze_data.to_dict(), f, indent=2)
        return True
    except OSError as e:
        print(f"Error saving maze: {e}")
        return False


def load_maze(filepath: str) -> Optional[MazeData]:
    """Load maze data from a JSON file."""
    try:
        with open(filepath, 'r') as f:
            data = json.load(f)
        return MazeData.from_dict(data)
    except (OSError, KeyError, TypeError, ValueError) as e:
        print(f"Error loading maze: {e}")
        return None
