"""
gridpath core module.

包含网格、邻域核、成本模型、启发函数、A* 搜索引擎与观测回调等核心功能。
"""

__all__ = ["grid", "kernel", "cost", "heuristics", "hooks", "astar"]
