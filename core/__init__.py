"""
core - 核心算法模块

包含:
- bezier: 三次 Bézier 曲线、速端曲线求导、弧长估计
- sampler: 曲线按弧长等距采样
"""

from .bezier import CubicCurve, derive, de_casteljau, estimate_length_gauss, estimate_length_polygon
from .sampler import ArcLengthSampler

__all__ = [
    "CubicCurve",
    "derive",
    "de_casteljau",
    "estimate_length_gauss",
    "estimate_length_polygon",
    "ArcLengthSampler",
]
