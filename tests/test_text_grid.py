"""
文本网格读写与渲染的测试模块。
"""

import pytest

from gridpath.core.astar import Pathfinder
from gridpath.exceptions import MalformedGridError
from gridpath.io.text_grid import format_grid, format_path, load_text_grid, parse_grid_text


def test_format_grid_prints_rows():
    grid = parse_grid_text("0 0 0\n0 1 0\n")

    assert format_grid(grid) == "000\n010"
    assert format_grid(grid, separator=" ") == "0 0 0\n0 1 0"


def test_format_path_marks_cells(open_grid):
    path = Pathfinder(open_grid).find((0, 0), (2, 2))
    text = format_path(open_grid, path)
    lines = text.splitlines()

    assert len(lines) == 5
    assert all(len(line) == 10 for line in lines)
    assert lines[0].startswith("XX")
    assert lines[1][2:4] == "XX"
    assert lines[2][4:6] == "XX"
    assert text.count("XX") == 3


def test_format_path_with_obstacles(maze_grid):
    text = format_path(maze_grid, [], mark="*", blank=".", obstacle="#", is_obstacle=lambda v: v < 0)

    assert text.splitlines()[0] == ".#..."
    assert text.splitlines()[4] == "..#.."


def test_parse_grid_text_skips_comments_and_blank_lines():
    grid = parse_grid_text("# maze\n\n0 -1 0\n 0  0 0 \n")

    assert grid.size() == (3, 2)
    assert grid.get(1, 0) == -1


def test_parse_grid_text_errors():
    with pytest.raises(MalformedGridError):
        parse_grid_text("0 0\n0\n")
    with pytest.raises(MalformedGridError):
        parse_grid_text("0 x\n0 0\n")
    with pytest.raises(MalformedGridError):
        parse_grid_text("# only a comment\n")


def test_load_text_grid(tmp_path):
    path = tmp_path / "grid.txt"
    path.write_text("0 0\n-1 0\n", encoding="utf-8")

    grid = load_text_grid(path)
    assert grid.to_rows() == [[0, 0], [-1, 0]]
