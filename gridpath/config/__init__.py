"""
gridpath 配置模块。

包含邻域核预设与搜索默认参数。
"""

from .kernels import (
    DEFAULT_KERNELS_PATH,
    KernelPreset,
    SearchDefaults,
    get_kernel,
    get_kernel_preset,
    list_kernels,
    load_kernel_presets,
    load_search_defaults,
)

__all__ = [
    "DEFAULT_KERNELS_PATH",
    "KernelPreset",
    "SearchDefaults",
    "get_kernel",
    "get_kernel_preset",
    "list_kernels",
    "load_kernel_presets",
    "load_search_defaults",
]
