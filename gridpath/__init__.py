"""gridpath: kernel-driven A* shortest paths on rectangular grids."""

from __future__ import annotations

from .core.astar import Pathfinder, SearchNode, SearchResult, find_path, path_cost, reconstruct_path
from .core.cost import default_cost
from .core.grid import Coordinate, Grid
from .core.hooks import SearchTrace
from .core.kernel import Kernel
from .exceptions import (
    MalformedGridError,
    MalformedKernelError,
    NoPathFoundError,
    OutOfRangeError,
    PathfindingError,
    SearchBudgetExceededError,
)

__version__ = "0.1.0"

__all__ = [
    "Coordinate",
    "Grid",
    "Kernel",
    "Pathfinder",
    "SearchNode",
    "SearchResult",
    "SearchTrace",
    "default_cost",
    "find_path",
    "path_cost",
    "reconstruct_path",
    "PathfindingError",
    "OutOfRangeError",
    "MalformedGridError",
    "MalformedKernelError",
    "NoPathFoundError",
    "SearchBudgetExceededError",
]
