"""
成本模型模块。

成本函数签名为 cost(from_value, to_value) -> float：
  - 返回值 < 0 表示不能从源格进入目标格；
  - 返回值 >= 0 为该步的加性代价（再乘以核倍率）。
非有限值（NaN / inf）同样视为不可通行。
"""

from __future__ import annotations

import math
from typing import Any, Callable, Container, Protocol, TypeVar

T_contra = TypeVar("T_contra", contravariant=True)


class CostFunction(Protocol[T_contra]):
    def __call__(self, from_value: T_contra, to_value: T_contra) -> float:
        ...


BLOCKED = -1.0


def default_cost(from_value: float, to_value: float) -> float:
    """整数网格的默认成本：负值为障碍，否则代价为 to_value + 1。"""
    if to_value < 0:
        return BLOCKED
    return to_value + 1


def uniform_cost(from_value: Any, to_value: Any) -> float:
    """所有格子代价均为 1。"""
    return 1.0


def obstacle_cost(obstacles: Container[Any], step: float = 1.0) -> Callable[[Any, Any], float]:
    """目标格的值属于 obstacles 时不可通行，否则代价为 step。"""

    def _cost(from_value: Any, to_value: Any) -> float:
        if to_value in obstacles:
            return BLOCKED
        return step

    return _cost


def scaled_cost(base: Callable[[Any, Any], float], factor: float) -> Callable[[Any, Any], float]:
    """
    将 base 的可通行代价统一乘以 factor，不可通行的保持不可通行。

    factor 必须 >= 0，否则会把可通行的格子变成障碍。
    """
    if factor < 0:
        raise ValueError(f"factor must be >= 0, got {factor}")

    def _cost(from_value: Any, to_value: Any) -> float:
        value = base(from_value, to_value)
        if is_blocked(value):
            return value
        return value * factor

    return _cost


def is_blocked(value: float) -> bool:
    """成本值是否表示不可通行（负数或非有限值）。"""
    return not math.isfinite(value) or value < 0
