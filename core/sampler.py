"""
sampler - 曲线按弧长等距采样

将一条 CubicCurve 预先离散为间距约为 segment_size 的折线，
之后按距离查询只需一次下标计算和一次定长步进。
"""

import logging
import math

import numpy as np

from ..exceptions import DegenerateCurveError, DegenerateInputError, OutOfRangeQueryError
from ..utils.geometry import move_towards
from .bezier import CubicCurve

_LOG = logging.getLogger(__name__)


class ArcLengthSampler:
    """
    单条曲线的等距采样表。

    采样点数 K = floor(L / segment_size)，第 i 个采样点对应距离 i * segment_size。
    默认用 curve.normalize 把距离换算为参数，速度不均匀时间距只是近似；
    exact=True 时改用 curve.parameter_at_length 得到真实弧长间距。

    Attributes:
        curve: 被采样的曲线
        segment_size: 实际使用的采样间距
        points: (K, 3) 只读采样点
    """

    def __init__(
        self,
        curve: CubicCurve,
        segment_size: float,
        fit_segment_size: bool = False,
        exact: bool = False,
    ):
        """
        Args:
            curve: 非退化曲线
            segment_size: 期望采样间距
            fit_segment_size: 为 True 时改用 L / K 使采样恰好均分曲线
            exact: 为 True 时按精确弧长反求参数
        """
        if not (math.isfinite(segment_size) and segment_size > 0):
            raise DegenerateInputError(f"segment_size must be positive, got {segment_size}")
        if curve.is_degenerate:
            raise DegenerateCurveError("cannot sample a zero-length curve")

        self.curve = curve
        self.exact = exact

        sample_count = int(math.floor(curve.estimated_length / segment_size))
        if fit_segment_size and sample_count > 0:
            segment_size = curve.estimated_length / sample_count
        self.segment_size = float(segment_size)

        self.points = self._build_points(sample_count)
        self.points.setflags(write=False)

        _LOG.debug(
            "sampled curve length=%.6f into %d points (segment_size=%.6f, exact=%s)",
            curve.estimated_length,
            sample_count,
            self.segment_size,
            exact,
        )

    def _build_points(self, sample_count: int) -> np.ndarray:
        distances = self.segment_size * np.arange(sample_count)
        if self.exact:
            params = np.array([self.curve.parameter_at_length(d) for d in distances])
        else:
            params = self.curve.normalize(distances)
        return np.array(self.curve.point_at(params), dtype=np.float64).reshape(sample_count, 3)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def length(self) -> float:
        return self.curve.estimated_length

    def point_at_distance(self, distance: float) -> np.ndarray:
        """
        查询曲线局部距离 distance 处的点。

        在相邻采样点之间按剩余距离定长步进；越过最后一个采样点时返回最后一个采样点。

        Raises:
            OutOfRangeQueryError: distance 为负或 NaN
        """
        if not distance >= 0:
            raise OutOfRangeQueryError(f"distance must be non-negative, got {distance}")
        if len(self.points) == 0:
            return np.array(self.curve.start_point)

        index = int(distance // self.segment_size)
        if index + 1 >= len(self.points):
            return np.array(self.points[-1])

        remainder = distance - index * self.segment_size
        return move_towards(self.points[index], self.points[index + 1], remainder)

    def __repr__(self) -> str:
        return (
            f"ArcLengthSampler(points={len(self.points)}, "
            f"segment_size={self.segment_size:.4f}, length={self.length:.4f})"
        )


if __name__ == "__main__":
    print("=== 等距采样测试 ===")

    curve = CubicCurve((0, 0, 0), (10, 0, 0), (0, 5, 0), (10, 5, 0))
    approx = ArcLengthSampler(curve, 0.5)
    exact = ArcLengthSampler(curve, 0.5, exact=True)

    gaps_approx = np.linalg.norm(np.diff(approx.points, axis=0), axis=1)
    gaps_exact = np.linalg.norm(np.diff(exact.points, axis=0), axis=1)
    print(f"曲线弧长: {curve.estimated_length:.4f}, 采样点数: {len(approx)}")
    print(f"近似采样间距: min={gaps_approx.min():.4f}, max={gaps_approx.max():.4f}")
    print(f"精确采样间距: min={gaps_exact.min():.4f}, max={gaps_exact.max():.4f}")
