"""
邻域核（neighbor kernel）模块。

核是一个奇数 x 奇数的小网格，中心对应零位移，每个元素是该相对位移的移动代价倍率；
倍率 <= 0（或非有限值）表示该位移不可走。
"""

from __future__ import annotations

import math
from typing import Iterator, NamedTuple, Sequence, Union

import numpy as np

from ..exceptions import MalformedKernelError
from .grid import Coordinate, Grid


class KernelMove(NamedTuple):
    """一个合法的相对移动：位移 (dx, dy) 与代价倍率。"""

    dx: int
    dy: int
    multiplier: float


class Kernel:
    """
    邻域核。

    构造时即校验形状：空核或任一维为偶数时抛出 MalformedKernelError，
    保证错误在搜索开始之前暴露。
    """

    def __init__(self, weights: Union[Grid, np.ndarray, Sequence[Sequence[float]]]) -> None:
        if isinstance(weights, Grid):
            weights = weights.values
        try:
            array = np.asarray(weights, dtype=float)
        except (TypeError, ValueError) as e:
            raise MalformedKernelError("kernel weights must be numeric rows", str(e)) from e

        if array.ndim != 2 or array.size == 0:
            raise MalformedKernelError("kernel must be a non-empty 2D grid", f"shape={array.shape}")
        height, width = array.shape
        if width % 2 == 0 or height % 2 == 0:
            raise MalformedKernelError(
                "kernel dimensions must be odd",
                f"size=({width}, {height})",
            )
        self.weights: Grid[float] = Grid(array.copy())

    @classmethod
    def coerce(cls, kernel: Union["Kernel", Grid, np.ndarray, Sequence[Sequence[float]], None]) -> "Kernel":
        """接受 Kernel / Grid / 嵌套序列，None 表示默认核。"""
        if kernel is None:
            return cls.default()
        if isinstance(kernel, Kernel):
            return kernel
        return cls(kernel)

    @classmethod
    def default(cls) -> "Kernel":
        """3x3 默认核：直行 1，斜行 sqrt(2)，中心 0（禁止原地移动）。"""
        d = math.sqrt(2.0)
        return cls([[d, 1.0, d], [1.0, 0.0, 1.0], [d, 1.0, d]])

    @classmethod
    def cardinal(cls) -> "Kernel":
        """3x3 四邻接核。"""
        return cls([[0.0, 1.0, 0.0], [1.0, 0.0, 1.0], [0.0, 1.0, 0.0]])

    @classmethod
    def blocked(cls, size: int = 3) -> "Kernel":
        """全部为 0 的核，任何移动都不合法。"""
        return cls(np.zeros((size, size)))

    def size(self) -> tuple[int, int]:
        return self.weights.size()

    @property
    def center(self) -> Coordinate:
        width, height = self.size()
        return Coordinate(width // 2, height // 2)

    def multiplier(self, dx: int, dy: int, reverse: bool = False) -> float:
        """
        返回位移 (dx, dy) 对应的倍率；超出核范围的位移返回 0。

        reverse=True 时读取镜像位置 (kw-1-ox, kh-1-oy)，
        即反向搜索时使调用方感受到的移动方向与核的原始含义一致。
        """
        width, height = self.size()
        cx, cy = self.center
        ox, oy = dx + cx, dy + cy
        if not (0 <= ox < width and 0 <= oy < height):
            return 0.0
        if reverse:
            ox, oy = width - 1 - ox, height - 1 - oy
        return float(self.weights.get(ox, oy))

    def moves(self, reverse: bool = False) -> tuple[KernelMove, ...]:
        """
        所有合法移动，按核内行优先顺序排列。

        每次调用都从当前 weights 重新计算，weights 在两次搜索之间被修改后立即生效。
        """
        width, height = self.size()
        cx, cy = width // 2, height // 2
        moves: list[KernelMove] = []
        for oy in range(height):
            for ox in range(width):
                dx, dy = ox - cx, oy - cy
                m = self.multiplier(dx, dy, reverse=reverse)
                if not math.isfinite(m) or m <= 0:
                    continue
                moves.append(KernelMove(dx, dy, m))
        return tuple(moves)

    def neighbors(self, grid: Grid, x: int, y: int, reverse: bool = False) -> Iterator[tuple[Coordinate, float]]:
        """生成 (x, y) 的合法邻居及其倍率，已过滤越界坐标。"""
        for dx, dy, m in self.moves(reverse):
            nx, ny = x + dx, y + dy
            if grid.in_bounds(nx, ny):
                yield Coordinate(nx, ny), m

    def is_blocked(self) -> bool:
        return not self.moves()

    def __repr__(self) -> str:
        width, height = self.size()
        return f"Kernel(size=({width}, {height}), moves={len(self.moves())})"
