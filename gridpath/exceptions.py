from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(eq=False)
class PathfindingError(Exception):
    """Base exception carrying a stable error code for callers and the CLI."""

    code: str
    message: str
    detail: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.__str__())

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.detail:
            return f"{base}: {self.detail}"
        return base

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"code": self.code, "message": self.message, "detail": self.detail}


class OutOfRangeError(PathfindingError, IndexError):
    """Grid access outside [0, width) x [0, height)."""

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__("out_of_range", message, detail)


class MalformedGridError(PathfindingError, ValueError):
    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__("malformed_grid", message, detail)


class MalformedKernelError(PathfindingError, ValueError):
    """Kernel is empty or has an even dimension (no well-defined center)."""

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__("malformed_kernel", message, detail)


class NoPathFoundError(PathfindingError):
    """Open set exhausted without reaching the goal."""

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__("no_path", message, detail)


class SearchBudgetExceededError(PathfindingError):
    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__("max_expansions_reached", message, detail)


class ConfigError(PathfindingError, ValueError):
    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__("config", message, detail)


__all__ = [
    "PathfindingError",
    "OutOfRangeError",
    "MalformedGridError",
    "MalformedKernelError",
    "NoPathFoundError",
    "SearchBudgetExceededError",
    "ConfigError",
]
