"""Input/output adapters: text grids and images."""

from .image_grid import SearchCanvas, grid_from_image, load_rgba
from .text_grid import format_grid, format_path, load_text_grid, parse_grid_text

__all__ = [
    "SearchCanvas",
    "grid_from_image",
    "load_rgba",
    "format_grid",
    "format_path",
    "load_text_grid",
    "parse_grid_text",
]
