"""
网格与坐标模块。

提供 Coordinate 坐标类型和 Grid 矩形网格容器。
Grid 内部使用 numpy 数组存储，形状为 (height, width)，按 values[y, x] 索引；
对外接口一律使用 (x, y) 顺序。
"""

from __future__ import annotations

from typing import Any, Generic, Iterator, NamedTuple, Sequence, TypeVar, Union

import numpy as np

from ..exceptions import MalformedGridError, OutOfRangeError

T = TypeVar("T")


class Coordinate(NamedTuple):
    """网格坐标 (x, y)，按值比较，可作为字典键。"""

    x: int
    y: int


CoordinateLike = Union[Coordinate, tuple[int, int]]


def as_coordinate(value: CoordinateLike) -> Coordinate:
    """将 (x, y) 元组规范化为 Coordinate。"""
    if isinstance(value, Coordinate):
        return value
    try:
        x, y = value
    except (TypeError, ValueError) as e:
        raise TypeError(f"coordinate must be an (x, y) pair, got {value!r}") from e
    return Coordinate(int(x), int(y))


def _unwrap(value: Any) -> Any:
    # numpy 标量转为 Python 原生类型，方便用户的成本函数直接比较
    if isinstance(value, np.generic):
        return value.item()
    return value


class Grid(Generic[T]):
    """
    矩形 2D 网格。

    - 构造时校验所有行等长（不等长抛出 MalformedGridError）；
    - size() 返回 (width, height)；
    - 越界访问抛出 OutOfRangeError，不会像 numpy 负索引那样回绕；
    - 尺寸构造后固定，单元值可在两次搜索之间通过 set() 修改。
    """

    def __init__(self, values: np.ndarray) -> None:
        values = np.asarray(values)
        if values.ndim != 2:
            raise MalformedGridError("grid must be two-dimensional", f"ndim={values.ndim}")
        height, width = values.shape
        if width == 0 or height == 0:
            raise MalformedGridError("grid must not be empty", f"shape={values.shape}")
        self.values = values

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[T]], dtype: Any = None) -> "Grid[T]":
        """
        从按行排列的嵌套序列构造网格（rows[y][x]）。

        数值型数据保存为数值数组，其它任意类型的数据保存为 object 数组。
        """
        if isinstance(rows, np.ndarray):
            return cls(rows.astype(dtype) if dtype is not None else rows.copy())

        rows = [list(row) for row in rows]
        if not rows:
            raise MalformedGridError("grid must contain at least one row")
        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise MalformedGridError(
                    "all grid rows must have the same length",
                    f"row 0 has {width} cells, row {y} has {len(row)}",
                )

        if dtype is None:
            try:
                values = np.array(rows)
            except ValueError:
                values = None
            if values is None or values.ndim != 2 or values.dtype.kind not in "biuf":
                values = cls._object_array(rows, width)
        elif np.dtype(dtype) == np.dtype(object):
            values = cls._object_array(rows, width)
        else:
            values = np.array(rows, dtype=dtype)
        return cls(values)

    @staticmethod
    def _object_array(rows: list[list[Any]], width: int) -> np.ndarray:
        # 逐格填充，避免 numpy 把元组等单元值展开成额外维度
        values = np.empty((len(rows), width), dtype=object)
        for y, row in enumerate(rows):
            for x, cell in enumerate(row):
                values[y, x] = cell
        return values

    @classmethod
    def filled(cls, width: int, height: int, value: T, dtype: Any = None) -> "Grid[T]":
        """构造 width x height、所有单元均为 value 的网格。"""
        if width <= 0 or height <= 0:
            raise MalformedGridError("grid size must be positive", f"size=({width}, {height})")
        if dtype is None and not isinstance(value, (bool, int, float, np.number)):
            dtype = object
        return cls(np.full((height, width), value, dtype=dtype))

    @property
    def width(self) -> int:
        return int(self.values.shape[1])

    @property
    def height(self) -> int:
        return int(self.values.shape[0])

    def size(self) -> tuple[int, int]:
        """返回网格尺寸 (width, height)。"""
        return self.width, self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfRangeError(
                f"cell ({x}, {y}) is outside the grid",
                f"size=({self.width}, {self.height})",
            )

    def get(self, x: int, y: int) -> T:
        """读取 (x, y) 处的值，越界抛出 OutOfRangeError。"""
        self._check(x, y)
        return _unwrap(self.values[y, x])

    def set(self, x: int, y: int, value: T) -> None:
        """写入 (x, y) 处的值，越界抛出 OutOfRangeError。"""
        self._check(x, y)
        self.values[y, x] = value

    def __getitem__(self, coord: CoordinateLike) -> T:
        c = as_coordinate(coord)
        return self.get(c.x, c.y)

    def __setitem__(self, coord: CoordinateLike, value: T) -> None:
        c = as_coordinate(coord)
        self.set(c.x, c.y, value)

    def __iter__(self) -> Iterator[list[T]]:
        """按行迭代（从 y=0 开始），每行为 Python 列表。"""
        for row in self.values:
            yield [_unwrap(v) for v in row]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.values.shape == other.values.shape and bool(np.all(self.values == other.values))

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, dtype={self.values.dtype})"

    def coordinates(self) -> Iterator[Coordinate]:
        """按行优先顺序遍历全部坐标。"""
        for y in range(self.height):
            for x in range(self.width):
                yield Coordinate(x, y)

    def copy(self) -> "Grid[T]":
        return Grid(self.values.copy())

    def to_rows(self) -> list[list[T]]:
        return list(self)
