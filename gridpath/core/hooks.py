"""Observation hooks fired by the search engine for tracing and visualization."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from .grid import Coordinate

NodeHook = Callable[[Coordinate], None]


def fire(hook: Optional[NodeHook], coord: Coordinate) -> None:
    """Call ``hook`` if it is set; its return value is ignored."""
    if hook is not None:
        hook(coord)


@dataclass
class SearchTrace:
    """Records finalized cells and emitted path cells in the order they occur.

    Pass the bound methods as hooks::

        trace = SearchTrace()
        finder = Pathfinder(grid, on_node_finalized=trace.on_node_finalized,
                            on_path_emitted=trace.on_path_emitted)
    """

    finalized: list[Coordinate] = field(default_factory=list)
    emitted: list[Coordinate] = field(default_factory=list)

    def on_node_finalized(self, coord: Coordinate) -> None:
        self.finalized.append(coord)

    def on_path_emitted(self, coord: Coordinate) -> None:
        self.emitted.append(coord)

    def clear(self) -> None:
        self.finalized.clear()
        self.emitted.clear()
