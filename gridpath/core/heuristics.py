"""
启发函数。

默认使用欧氏距离：当每一步的真实代价不小于其直线长度时（默认核 + 默认成本即满足），
欧氏距离是可采纳且一致的，A* 给出最优解。
使用自定义成本函数时可采纳性由调用方负责；不满足时搜索退化为最佳优先，不保证最优。
"""

from __future__ import annotations

import math
from typing import Callable

from .grid import Coordinate

Heuristic = Callable[[Coordinate, Coordinate], float]


def euclidean(a: Coordinate, b: Coordinate) -> float:
    """欧氏距离启发函数。"""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def manhattan(a: Coordinate, b: Coordinate) -> float:
    """曼哈顿距离，适用于四邻接核。"""
    return float(abs(b[0] - a[0]) + abs(b[1] - a[1]))


def octile(a: Coordinate, b: Coordinate) -> float:
    """八邻接（斜向代价 sqrt(2)）下的精确无障碍距离。"""
    dx = abs(b[0] - a[0])
    dy = abs(b[1] - a[1])
    return (dx + dy) + (math.sqrt(2.0) - 2.0) * min(dx, dy)


def zero(a: Coordinate, b: Coordinate) -> float:
    # 退化为 Dijkstra
    return 0.0


HEURISTICS: dict[str, Heuristic] = {
    "euclidean": euclidean,
    "manhattan": manhattan,
    "octile": octile,
    "zero": zero,
}


def get_heuristic(name: str) -> Heuristic:
    try:
        return HEURISTICS[name]
    except KeyError:
        raise ValueError(f"unknown heuristic {name!r}, expected one of {sorted(HEURISTICS)}") from None
