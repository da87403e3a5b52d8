"""
文本网格读写与渲染。

- format_grid: 逐行打印单元值；
- format_path: 路径格子渲染为 "XX"，其余为空白（每格两个字符）；
- parse_grid_text / load_text_grid: 读取空白分隔的整数行。
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from ..core.grid import Coordinate, CoordinateLike, Grid, as_coordinate
from ..exceptions import MalformedGridError


def format_grid(grid: Grid, separator: str = "") -> str:
    """按行输出网格单元值，行之间以换行分隔。"""
    return "\n".join(separator.join(str(v) for v in row) for row in grid)


def format_path(
    grid: Grid,
    path: Iterable[CoordinateLike],
    mark: str = "XX",
    blank: str = "  ",
    obstacle: str | None = None,
    is_obstacle=None,
) -> str:
    """
    渲染路径：路径上的格子输出 mark，其余输出 blank。

    若提供 obstacle 与 is_obstacle(value)，障碍格输出 obstacle。
    """
    on_path = {as_coordinate(c) for c in path}
    lines = []
    for y in range(grid.height):
        cells = []
        for x in range(grid.width):
            if Coordinate(x, y) in on_path:
                cells.append(mark)
            elif obstacle is not None and is_obstacle is not None and is_obstacle(grid.get(x, y)):
                cells.append(obstacle)
            else:
                cells.append(blank)
        lines.append("".join(cells))
    return "\n".join(lines)


def parse_grid_text(text: str) -> Grid[int]:
    """
    解析空白分隔的整数网格，空行与 # 开头的注释行会被忽略。

    Raises:
        MalformedGridError: 行长度不一致或包含非整数
    """
    rows: list[Sequence[int]] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        try:
            rows.append([int(token) for token in stripped.split()])
        except ValueError as e:
            raise MalformedGridError(f"line {lineno} contains a non-integer cell", str(e)) from e
    return Grid.from_rows(rows)


def load_text_grid(path: str | Path) -> Grid[int]:
    """从文本文件读取整数网格。"""
    return parse_grid_text(Path(path).read_text(encoding="utf-8"))
