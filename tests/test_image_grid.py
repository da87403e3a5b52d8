"""
图像适配器测试：黑色像素 -> 障碍，搜索过程回绘到像素缓冲区。
"""

import numpy as np
import pytest
from PIL import Image

from gridpath.core.astar import Pathfinder
from gridpath.io.image_grid import SearchCanvas, grid_from_image, load_rgba

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


def _maze_pixels() -> np.ndarray:
    """5x5 白底，(1,2) (2,2) (3,2) (3,3) 为黑色。"""
    pixels = np.full((5, 5, 3), 255, dtype=np.uint8)
    for x, y in [(1, 2), (2, 2), (3, 2), (3, 3)]:
        pixels[y, x] = BLACK
    return pixels


def test_grid_from_array():
    grid = grid_from_image(_maze_pixels())

    assert grid.size() == (5, 5)
    assert grid.get(1, 2) == -1
    assert grid.get(3, 3) == -1
    assert grid.get(0, 0) == 0
    assert sum(v < 0 for row in grid for v in row) == 4


def test_only_pure_black_is_obstacle():
    pixels = np.array([[[0, 0, 0], [1, 0, 0], [0, 0, 1], [128, 128, 128]]], dtype=np.uint8)

    grid = grid_from_image(pixels, obstacle=-5, free=2)
    assert grid.to_rows() == [[-5, 2, 2, 2]]


def test_grid_from_file_and_pil_image(tmp_path):
    path = tmp_path / "maze.png"
    Image.fromarray(_maze_pixels()).save(path)

    from_file = grid_from_image(path)
    from_pil = grid_from_image(Image.open(path))
    assert from_file == from_pil
    assert from_file.get(2, 2) == -1


def test_load_rgba_shapes():
    gray = np.zeros((2, 3), dtype=np.uint8)
    rgba = load_rgba(gray)

    assert rgba.shape == (2, 3, 4)
    assert np.all(rgba[..., 3] == 255)
    with pytest.raises(ValueError):
        load_rgba(np.zeros((2, 3, 2), dtype=np.uint8))


def test_canvas_paints_search(tmp_path):
    pixels = _maze_pixels()
    grid = grid_from_image(pixels)
    canvas = SearchCanvas(pixels)
    finder = Pathfinder(grid, on_node_finalized=canvas.on_node_finalized, on_path_emitted=canvas.on_path_emitted)

    result = finder.search((4, 4), (0, 0))
    assert result.reachable

    out = canvas.pixels
    for c in result.path:
        assert tuple(out[c.y, c.x]) == (255, 0, 0, 255), f"path cell {c} should be red"

    finalized_only = [
        c for c in grid.coordinates()
        if result.node_at(c).state.value == "closed" and c not in result.path
    ]
    for c in finalized_only:
        assert tuple(out[c.y, c.x, :3]) == (0, 255, 0), f"finalized cell {c} should be green"

    # 源数组未被修改
    assert tuple(pixels[0, 0]) == WHITE

    saved = canvas.save(tmp_path / "out" / "maze_path.png")
    reloaded = np.array(Image.open(saved).convert("RGBA"))
    assert np.array_equal(reloaded, out)
    assert canvas.size == (5, 5)
