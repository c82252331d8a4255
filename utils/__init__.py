"""
utils - 工具函数模块

包含:
- geometry: 三维向量操作
- integrals: 数值积分工具
"""

from .geometry import as_point, as_points, lerp, distance, move_towards
from .integrals import gauss_legendre, arc_length_integral

__all__ = [
    "as_point",
    "as_points",
    "lerp",
    "distance",
    "move_towards",
    "gauss_legendre",
    "arc_length_integral",
]
