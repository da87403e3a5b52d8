"""
邻域核的测试模块。

测试核的形状校验、合法移动枚举以及镜像读取。
"""

import math

import numpy as np
import pytest

from gridpath.core.grid import Coordinate, Grid
from gridpath.core.kernel import Kernel, KernelMove
from gridpath.exceptions import MalformedKernelError


def test_default_kernel_moves():
    """默认核：8 个方向，直行 1，斜行 sqrt(2)，中心不可走。"""
    kernel = Kernel.default()
    moves = {(m.dx, m.dy): m.multiplier for m in kernel.moves()}

    assert len(moves) == 8
    assert (0, 0) not in moves
    for d in [(1, 0), (-1, 0), (0, 1), (0, -1)]:
        assert moves[d] == pytest.approx(1.0)
    for d in [(1, 1), (-1, 1), (1, -1), (-1, -1)]:
        assert moves[d] == pytest.approx(math.sqrt(2))


def test_cardinal_kernel_has_four_moves():
    kernel = Kernel.cardinal()

    assert sorted((m.dx, m.dy) for m in kernel.moves()) == [(-1, 0), (0, -1), (0, 1), (1, 0)]


@pytest.mark.parametrize(
    "weights",
    [
        [],
        [[]],
        [[1.0, 1.0], [1.0, 1.0]],
        [[1.0, 0.0, 1.0], [1.0, 0.0, 1.0]],
        [[1.0, 1.0]],
        [1.0, 0.0, 1.0],
    ],
)
def test_malformed_kernels_rejected(weights):
    """空核或任一维为偶数的核在构造时就被拒绝。"""
    with pytest.raises(MalformedKernelError) as exc_info:
        Kernel(weights)
    assert exc_info.value.code == "malformed_kernel"


def test_non_numeric_kernel_rejected():
    with pytest.raises(MalformedKernelError):
        Kernel([["a", "b", "c"], ["d", "e", "f"], ["g", "h", "i"]])


def test_one_by_one_kernel_is_valid_but_has_no_moves():
    kernel = Kernel([[0.0]])

    assert kernel.size() == (1, 1)
    assert kernel.moves() == ()
    assert kernel.is_blocked()


def test_kernel_from_grid():
    grid = Grid.from_rows([[0.0, 2.0, 0.0], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
    kernel = Kernel.coerce(grid)

    assert kernel.moves() == (KernelMove(0, -1, 2.0),)


def test_coerce_none_is_default():
    kernel = Kernel.coerce(None)

    assert len(kernel.moves()) == 8
    assert Kernel.coerce(kernel) is kernel


def test_non_positive_and_non_finite_entries_are_blocked():
    kernel = Kernel([[-1.0, 0.0, np.nan], [np.inf, 0.0, 3.0], [0.0, 0.0, 0.0]])

    assert kernel.moves() == (KernelMove(1, 0, 3.0),)


def test_mirrored_reading():
    """
    reverse=True 读取镜像位置 (kw-1-ox, kh-1-oy)：
    核中只允许向右 (+1, 0) 时，镜像读取只允许向左 (-1, 0)。
    """
    kernel = Kernel([[0.0, 0.0, 0.0], [0.0, 0.0, 5.0], [0.0, 0.0, 0.0]])

    assert kernel.moves() == (KernelMove(1, 0, 5.0),)
    assert kernel.moves(reverse=True) == (KernelMove(-1, 0, 5.0),)
    assert kernel.multiplier(1, 0) == 5.0
    assert kernel.multiplier(-1, 0, reverse=True) == 5.0
    assert kernel.multiplier(-1, 0) == 0.0


def test_multiplier_outside_kernel_is_zero():
    kernel = Kernel.default()

    assert kernel.multiplier(2, 0) == 0.0
    assert kernel.multiplier(0, -5) == 0.0


def test_large_kernel_offsets():
    """5x5 核的偏移为 (ox - 2, oy - 2)。"""
    weights = np.zeros((5, 5))
    weights[0, 4] = 1.5  # oy=0, ox=4 -> (+2, -2)
    weights[3, 1] = 2.5  # oy=3, ox=1 -> (-1, +1)
    kernel = Kernel(weights)

    moves = {(m.dx, m.dy): m.multiplier for m in kernel.moves()}
    assert moves == {(2, -2): 1.5, (-1, 1): 2.5}
    assert kernel.center == Coordinate(2, 2)


def test_neighbors_filters_out_of_bounds():
    grid = Grid.filled(3, 3, 0)
    kernel = Kernel.default()

    corner = {c for c, _ in kernel.neighbors(grid, 0, 0)}
    assert corner == {Coordinate(1, 0), Coordinate(0, 1), Coordinate(1, 1)}

    center = list(kernel.neighbors(grid, 1, 1))
    assert len(center) == 8


def test_kernel_weights_are_copied():
    weights = np.ones((3, 3))
    kernel = Kernel(weights)
    weights[:] = 0

    assert len(kernel.moves()) == 9
