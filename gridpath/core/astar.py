"""
A* 网格寻路模块。

提供基于邻域核的 A* 搜索引擎 Pathfinder、每次搜索的节点状态 SearchNode、
带诊断信息的 SearchResult，以及路径重建与路径代价计算工具。

实现要点：
  - 每次搜索按网格大小一次性分配节点数组（arena），父节点用数组下标表示；
  - 节点状态显式区分 UNVISITED / OPEN / CLOSED，不用 g = -1 之类的哨兵值；
  - open set 使用 heapq 二叉堆，降低 f 值时重新入堆，出堆时跳过过期条目；
  - f 相同时按入堆顺序（FIFO）出堆，结果确定；
  - 正向搜索后显式反转父链，返回的路径总是 start -> goal。
"""

from __future__ import annotations

import heapq
import itertools
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Optional, Sequence, TypeVar, Union

import numpy as np

from ..exceptions import NoPathFoundError, OutOfRangeError, SearchBudgetExceededError
from .cost import default_cost, is_blocked
from .grid import Coordinate, CoordinateLike, Grid, as_coordinate
from .heuristics import Heuristic, euclidean
from .hooks import NodeHook, fire
from .kernel import Kernel

T = TypeVar("T")

KernelLike = Union[Kernel, Grid, np.ndarray, Sequence[Sequence[float]], None]

REASON_NO_PATH = "no_path"
REASON_MAX_EXPANSIONS = "max_expansions_reached"

logger = logging.getLogger(__name__)


class NodeState(Enum):
    UNVISITED = "unvisited"
    OPEN = "open"
    CLOSED = "closed"


@dataclass
class SearchNode:
    """单个格子在一次搜索中的状态。g 为 None 表示尚未被松弛。"""

    coord: Coordinate
    state: NodeState = NodeState.UNVISITED
    g: Optional[float] = None
    h: float = 0.0
    f: float = math.inf
    parent: Optional[int] = None


@dataclass
class SearchResult:
    path: list[Coordinate]
    reachable: bool
    reason: Optional[str]
    expanded: int
    cost: Optional[float] = None
    start: Optional[Coordinate] = None
    goal: Optional[Coordinate] = None
    nodes: list[SearchNode] = field(default_factory=list, repr=False)
    width: int = 0

    def node_at(self, coord: CoordinateLike) -> SearchNode:
        """返回 coord 对应的搜索节点；越界时抛出 OutOfRangeError，不做回绕。"""
        c = as_coordinate(coord)
        height = len(self.nodes) // self.width if self.width else 0
        if not (0 <= c.x < self.width and 0 <= c.y < height):
            raise OutOfRangeError(f"({c.x}, {c.y}) is outside the grid", f"size=({self.width}, {height})")
        return self.nodes[c.y * self.width + c.x]


def reconstruct_path(nodes: Sequence[SearchNode], index: int) -> list[Coordinate]:
    """
    从 nodes[index] 沿父节点下标回溯到根节点，返回根 -> index 顺序的坐标列表。
    """
    path: list[Coordinate] = []
    current: Optional[int] = index
    while current is not None:
        node = nodes[current]
        path.append(node.coord)
        current = node.parent
    path.reverse()
    return path


class Pathfinder(Generic[T]):
    """
    基于邻域核的 A* 寻路器。

    示例:
        ```python
        grid = Grid.from_rows([[0, 0, 0], [0, -1, 0], [0, 0, 0]])
        finder = Pathfinder(grid)
        path = finder.find((0, 0), (2, 2))
        ```

    Args:
        grid: 搜索所用网格，搜索期间只读
        cost: 成本函数 cost(from_value, to_value)，< 0 表示不可通行
        heuristic: 启发函数，默认欧氏距离；可采纳性由调用方保证
        on_node_finalized: 节点出堆定型时的回调（每格至多一次）
        on_path_emitted: 路径重建时按 start -> goal 顺序对每格调用的回调
        max_expansions: 可选的扩展预算，超出时以 "max_expansions_reached" 失败
    """

    def __init__(
        self,
        grid: Grid[T],
        cost: Callable[[T, T], float] = default_cost,
        heuristic: Heuristic = euclidean,
        on_node_finalized: Optional[NodeHook] = None,
        on_path_emitted: Optional[NodeHook] = None,
        max_expansions: Optional[int] = None,
    ) -> None:
        if max_expansions is not None and max_expansions < 0:
            raise ValueError(f"max_expansions must be >= 0, got {max_expansions}")
        self.grid = grid
        self.cost = cost
        self.heuristic = heuristic
        self.on_node_finalized = on_node_finalized
        self.on_path_emitted = on_path_emitted
        self.max_expansions = max_expansions

    def _checked(self, coord: CoordinateLike, label: str) -> Coordinate:
        c = as_coordinate(coord)
        if not self.grid.in_bounds(c.x, c.y):
            width, height = self.grid.size()
            raise OutOfRangeError(f"{label} ({c.x}, {c.y}) is outside the grid", f"size=({width}, {height})")
        return c

    def find(self, start: CoordinateLike, goal: CoordinateLike, kernel: KernelLike = None) -> list[Coordinate]:
        """
        搜索 start -> goal 的最小代价路径并返回坐标列表。

        Raises:
            OutOfRangeError: 起点或终点越界
            MalformedKernelError: 核为空或尺寸为偶数
            NoPathFoundError: open set 耗尽仍未到达终点
            SearchBudgetExceededError: 超过 max_expansions
        """
        result = self.search(start, goal, kernel)
        if result.reachable:
            return result.path

        detail = f"expanded={result.expanded}"
        if result.reason == REASON_MAX_EXPANSIONS:
            raise SearchBudgetExceededError(
                f"search budget of {self.max_expansions} expansions exhausted", detail
            )
        raise NoPathFoundError(
            f"no path from ({result.start.x}, {result.start.y}) to ({result.goal.x}, {result.goal.y})",
            detail,
        )

    def search(self, start: CoordinateLike, goal: CoordinateLike, kernel: KernelLike = None) -> SearchResult:
        """
        执行一次 A* 搜索，返回带可达性与失败原因的 SearchResult（不因无路可走而抛异常）。

        失败原因：
          - no_path（open set 耗尽）
          - max_expansions_reached
        """
        start = self._checked(start, "start")
        goal = self._checked(goal, "goal")
        kernel = Kernel.coerce(kernel)
        moves = kernel.moves()

        grid = self.grid
        width, height = grid.size()
        nodes = [SearchNode(Coordinate(i % width, i // width)) for i in range(width * height)]
        target = goal.y * width + goal.x

        logger.debug(
            "search start=%s goal=%s grid=(%d, %d) moves=%d", tuple(start), tuple(goal), width, height, len(moves)
        )

        root_index = start.y * width + start.x
        root = nodes[root_index]
        root.g = 0.0
        root.h = self.heuristic(start, goal)
        root.f = root.g + root.h
        root.state = NodeState.OPEN

        seq = itertools.count()
        open_heap: list[tuple[float, int, int]] = [(root.f, next(seq), root_index)]
        expanded = 0

        while open_heap:
            f, _, index = heapq.heappop(open_heap)
            node = nodes[index]

            # 已定型或已被更低 f 取代的过期条目
            if node.state is NodeState.CLOSED or f > node.f:
                continue

            node.state = NodeState.CLOSED
            expanded += 1
            fire(self.on_node_finalized, node.coord)

            if index == target:
                path = reconstruct_path(nodes, index)
                for coord in path:
                    fire(self.on_path_emitted, coord)
                logger.debug("path found: length=%d cost=%.4f expanded=%d", len(path), node.g, expanded)
                return SearchResult(path, True, None, expanded, node.g, start, goal, nodes, width)

            if self.max_expansions is not None and expanded > self.max_expansions:
                logger.debug("search budget exhausted: expanded=%d", expanded)
                return SearchResult([], False, REASON_MAX_EXPANSIONS, expanded, None, start, goal, nodes, width)

            cx, cy = node.coord
            from_value = grid.get(cx, cy)

            # 探索邻接格点
            for dx, dy, multiplier in moves:
                nx, ny = cx + dx, cy + dy
                if not (0 <= nx < width and 0 <= ny < height):
                    continue

                n_index = ny * width + nx
                neighbor = nodes[n_index]
                if neighbor.state is NodeState.CLOSED:
                    continue

                raw = self.cost(from_value, grid.get(nx, ny))
                if is_blocked(raw):
                    continue

                tentative_g = node.g + raw * multiplier
                if neighbor.g is None or tentative_g < neighbor.g:
                    neighbor.parent = index
                    neighbor.g = tentative_g
                    neighbor.h = self.heuristic(neighbor.coord, goal)
                    neighbor.f = tentative_g + neighbor.h
                    neighbor.state = NodeState.OPEN
                    heapq.heappush(open_heap, (neighbor.f, next(seq), n_index))

        # 不可达
        logger.debug("no path: start=%s goal=%s expanded=%d", tuple(start), tuple(goal), expanded)
        return SearchResult([], False, REASON_NO_PATH, expanded, None, start, goal, nodes, width)


def find_path(
    grid: Grid[T],
    start: CoordinateLike,
    goal: CoordinateLike,
    kernel: KernelLike = None,
    cost: Callable[[T, T], float] = default_cost,
    **kwargs: Any,
) -> list[Coordinate]:
    """
    便捷接口：仅返回路径坐标列表；若不可达则返回空列表。
    """
    return Pathfinder(grid, cost=cost, **kwargs).search(start, goal, kernel).path


def path_cost(
    grid: Grid[T],
    path: Sequence[CoordinateLike],
    cost: Callable[[T, T], float] = default_cost,
    kernel: KernelLike = None,
) -> float:
    """
    按成本函数与核重新计算一条显式路径的总代价。

    相邻两格必须是核中合法且可通行的移动，否则抛出 ValueError。
    """
    if not path:
        raise ValueError("path must not be empty")
    kernel = Kernel.coerce(kernel)
    coords = [as_coordinate(c) for c in path]

    total = 0.0
    for a, b in zip(coords, coords[1:]):
        multiplier = kernel.multiplier(b.x - a.x, b.y - a.y)
        if not math.isfinite(multiplier) or multiplier <= 0:
            raise ValueError(f"step {tuple(a)} -> {tuple(b)} is not a legal kernel move")
        raw = cost(grid.get(a.x, a.y), grid.get(b.x, b.y))
        if is_blocked(raw):
            raise ValueError(f"step {tuple(a)} -> {tuple(b)} is blocked by the cost function")
        total += raw * multiplier
    return total
