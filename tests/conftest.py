from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure(config):
    # 确保本仓库根目录排在 sys.path 最前，未安装时也能导入 gridpath
    if str(PROJECT_ROOT) in sys.path:
        sys.path.remove(str(PROJECT_ROOT))
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def open_grid():
    """5x5 全 0 网格。"""
    from gridpath.core.grid import Grid

    return Grid.filled(5, 5, 0)


@pytest.fixture
def obstacle_grid():
    """
    5x5 网格，(1,2) (2,2) (3,2) (3,3) 为障碍（-1），阻断 (4,4) -> (0,0) 的对角直线。
    """
    from gridpath.core.grid import Grid

    grid = Grid.filled(5, 5, 0)
    for x, y in [(1, 2), (2, 2), (3, 2), (3, 3)]:
        grid.set(x, y, -1)
    return grid


@pytest.fixture
def maze_grid():
    """原始测试程序里的 5x5 迷宫（行优先，rows[y][x]）。"""
    from gridpath.core.grid import Grid

    return Grid.from_rows(
        [
            [0, -1, 0, 0, 0],
            [0, -1, 0, -1, 0],
            [0, -1, 0, -1, 0],
            [0, -1, 0, -1, 0],
            [0, 0, -1, 0, 0],
        ]
    )
