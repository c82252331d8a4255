"""
bezier_path - 三次 Bézier 平滑移动路径

由一组有序三维航点构造平滑的三次 Bézier 曲线链，
并按沿路径的距离快速查询位置（弧长参数化）。
"""

from .algorithm import MovementPath
from .core.bezier import CubicCurve
from .core.sampler import ArcLengthSampler
from .exceptions import (
    BezierPathError,
    DegenerateCurveError,
    DegenerateInputError,
    OutOfRangeQueryError,
)

__version__ = "0.1.0"
__all__ = [
    "MovementPath",
    "CubicCurve",
    "ArcLengthSampler",
    "BezierPathError",
    "DegenerateInputError",
    "DegenerateCurveError",
    "OutOfRangeQueryError",
]
