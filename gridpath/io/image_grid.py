"""Image adapter: build obstacle grids from pictures and paint searches back onto them."""

from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from ..core.grid import Coordinate, Grid

ImageSource = Union[str, Path, Image.Image, np.ndarray]

PATH_COLOR = (255, 0, 0)


def load_rgba(source: ImageSource) -> np.ndarray:
    """Load ``source`` as an (height, width, 4) uint8 RGBA array."""
    if isinstance(source, np.ndarray):
        array = source
        if array.ndim == 2:
            array = np.stack([array, array, array], axis=-1)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"image array must be HxW, HxWx3 or HxWx4, got shape {array.shape}")
        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array.astype(np.uint8), alpha], axis=-1)
        return array.astype(np.uint8).copy()

    img = source if isinstance(source, Image.Image) else Image.open(source)
    return np.array(img.convert("RGBA"))


def grid_from_image(source: ImageSource, obstacle: int = -1, free: int = 0) -> Grid[int]:
    """
    Translate pixels into a Grid[int]: pure black (R+G+B == 0) becomes ``obstacle``,
    every other pixel ``free``. Alpha is ignored.
    """
    rgba = load_rgba(source)
    rgb_sum = rgba[..., :3].astype(np.int32).sum(axis=-1)
    values = np.where(rgb_sum == 0, obstacle, free).astype(np.int64)
    return Grid(values)


class SearchCanvas:
    """RGBA pixel buffer that paints search progress through the observation hooks.

    Finalized cells lose their red and blue channels (green is kept); path cells
    are painted pure red. Path painting happens after finalization so it wins.
    """

    def __init__(self, source: ImageSource) -> None:
        self.pixels = load_rgba(source)

    @property
    def size(self) -> tuple[int, int]:
        height, width = self.pixels.shape[:2]
        return width, height

    def on_node_finalized(self, coord: Coordinate) -> None:
        x, y = coord
        self.pixels[y, x, 0] = 0
        self.pixels[y, x, 2] = 0

    def on_path_emitted(self, coord: Coordinate) -> None:
        x, y = coord
        self.pixels[y, x, :3] = PATH_COLOR

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    def save(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        self.to_image().save(out)
        return out
