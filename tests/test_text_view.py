"""Tests for the plain-text presentation."""

from qmaze.domain.types import Direction
from qmaze.ui.text_view import format_path, render_maze, render_policy, render_q_values


def teach(q_table, world, cell, direction):
    q_table.update(cell, direction, 0.4, 1.0, world.goal, world.is_wall, world.move)


class TestRenderMaze:
    def test_layout(self, world, start):
        lines = render_maze(world, start=start).splitlines()
        assert len(lines) == 8
        assert all(len(line) == 12 for line in lines)
        assert lines[0] == "#" * 12
        assert lines[1] == "#S...#.#..G#"

    def test_agent_drawn_over_goal(self, world):
        lines = render_maze(world, position=world.goal).splitlines()
        assert lines[1][10] == "@"

    def test_agent_position(self, world, start):
        lines = render_maze(world, position=(1, 6), start=start).splitlines()
        assert lines[6][1] == "@"
        assert lines[1][1] == "S"


class TestRenderQValues:
    def test_cell_blocks(self, world, q_table):
        teach(q_table, world, (9, 1), Direction.RIGHT)
        text = render_q_values(world, q_table)
        assert "x:1, y:1\n  UP: 0.00\n  DOWN: 0.00\n  LEFT: 0.00\n  RIGHT: 0.00" in text
        assert "x:9, y:1\n  UP: 0.00\n  DOWN: 0.00\n  LEFT: 0.00\n  RIGHT: 4.00" in text
        assert "x:0, y:0" not in text

    def test_precision(self, world, q_table):
        teach(q_table, world, (9, 1), Direction.RIGHT)
        assert "RIGHT: 4.0\n" in render_q_values(world, q_table, precision=1)

    def test_rendering_does_not_mutate(self, world, q_table):
        render_q_values(world, q_table)
        render_policy(world, q_table)
        assert len(q_table) == 0


class TestRenderPolicy:
    def test_arrows(self, world, q_table):
        teach(q_table, world, (9, 1), Direction.RIGHT)
        lines = render_policy(world, q_table).splitlines()
        assert lines[1][9] == "→"
        assert lines[1][10] == "G"
        assert lines[1][1] == "·"
        assert lines[0] == "#" * 12

    def test_negative_only_cell(self, world, q_table):
        teach(q_table, world, (1, 1), Direction.UP)
        lines = render_policy(world, q_table).splitlines()
        # Walls scored -4.0, every free move still 0.0
        assert lines[1][1] == "↓"


class TestFormatPath:
    def test_format(self):
        assert format_path([(1, 1), (1, 2)]) == "(1,1) -> (1,2)"

    def test_limit(self):
        path = [(x, 0) for x in range(5)]
        assert format_path(path, limit=2) == "(0,0) -> (1,0) ..."
        assert format_path(path, limit=10) == format_path(path)
