"""
algorithm - 按距离查询的平滑移动路径

MovementPath 为每个航点构造一条三次 Bézier 曲线：曲线从前一段的中点出发，
到后一段的中点结束，控制点按 smoothness 向航点收拢。路径只近似经过航点本身。

按距离查询时，用二分查找定位累积弧长区间所在的曲线，再把局部距离换算为曲线参数。
"""

import logging
import math
import threading
from dataclasses import dataclass

import numpy as np

from .core.bezier import LENGTH_METHODS, CubicCurve
from .core.sampler import ArcLengthSampler
from .exceptions import DegenerateInputError, OutOfRangeQueryError
from .utils.geometry import as_points, lerp

_LOG = logging.getLogger(__name__)

DUPLICATE_POINT_EPSILON = 1e-9


@dataclass(frozen=True, eq=False)
class _PathState:
    """一次构建的完整结果，发布后不再修改。"""

    waypoints: np.ndarray
    smoothness: float
    curves: tuple
    ranges: np.ndarray  # (K, 2) 每条曲线的 [start_distance, end_distance)
    length: float

    @classmethod
    def empty(cls) -> "_PathState":
        return cls(np.zeros((0, 3)), 0.0, (), np.zeros((0, 2)), 0.0)


def _check_smoothness(smoothness: float) -> float:
    smoothness = float(smoothness)
    if not (math.isfinite(smoothness) and 0.0 <= smoothness <= 1.0):
        raise DegenerateInputError(f"smoothness must be in [0, 1], got {smoothness}")
    return smoothness


class MovementPath:
    """
    经过一组三维航点的平滑移动路径。

    每个航点对应一条曲线，曲线 i 由航点 i-1, i, i+1 决定（首尾航点充当自身缺失的邻居）。
    rebuild/clear 在锁内构建全新的 _PathState 并以一次赋值发布，
    并发读取者只会看到完整的旧路径或完整的新路径。

    Attributes:
        length_method: 曲线弧长估计方法
    """

    def __init__(self, waypoints=None, smoothness: float = 0.0, length_method: str = "gauss"):
        """
        Args:
            waypoints: (N, 3) 有序航点；为 None 时创建空路径
            smoothness: 平滑系数 [0, 1]，0 为尖角，1 为控制点收拢到航点
            length_method: "gauss" 或 "polygon"
        """
        if length_method not in LENGTH_METHODS:
            raise ValueError(f"Unknown length method: {length_method!r}")
        self.length_method = length_method
        self._write_lock = threading.Lock()
        self._state = _PathState.empty()

        if waypoints is not None:
            self.rebuild(waypoints, smoothness)

    def rebuild(self, waypoints, smoothness: float) -> "MovementPath":
        """
        用新的航点和平滑系数整体重建路径。返回 self 以支持链式调用。

        Raises:
            DegenerateInputError: 航点为空、形状错误或 smoothness 越界
        """
        points = as_points(waypoints)
        if len(points) == 0:
            raise DegenerateInputError("at least one waypoint is required")
        smoothness = _check_smoothness(smoothness)

        with self._write_lock:
            state = self._build_state(points, smoothness)
            self._state = state

        _LOG.debug(
            "rebuilt path: %d waypoints, %d curves, length=%.6f, smoothness=%.3f",
            len(state.waypoints),
            len(state.curves),
            state.length,
            smoothness,
        )
        return self

    def clear(self):
        """清空路径。"""
        with self._write_lock:
            self._state = _PathState.empty()
        _LOG.debug("cleared path")

    def _build_state(self, waypoints: np.ndarray, smoothness: float) -> _PathState:
        waypoints = np.array(waypoints, dtype=np.float64)
        waypoints.setflags(write=False)
        n = len(waypoints)

        curves = []
        for i, center in enumerate(waypoints):
            previous_center = waypoints[max(i - 1, 0)]
            next_center = waypoints[min(i + 1, n - 1)]

            enter_point = lerp(previous_center, center, 0.5)
            exit_point = lerp(center, next_center, 0.5)

            enter_tangent = lerp(enter_point, center, smoothness)
            exit_tangent = lerp(exit_point, center, smoothness)

            curves.append(
                CubicCurve(enter_point, exit_point, enter_tangent, exit_tangent, self.length_method)
            )

        lengths = np.array([curve.estimated_length for curve in curves])
        ends = np.cumsum(lengths)
        starts = np.concatenate([[0.0], ends[:-1]])
        ranges = np.column_stack([starts, ends])
        ranges.setflags(write=False)

        degenerate = sum(curve.is_degenerate for curve in curves)
        if degenerate:
            _LOG.debug("%d of %d curves have zero length", degenerate, n)

        return _PathState(waypoints, smoothness, tuple(curves), ranges, float(ends[-1]))

    @property
    def waypoints(self) -> np.ndarray:
        return self._state.waypoints

    @property
    def smoothness(self) -> float:
        return self._state.smoothness

    @property
    def curves(self) -> tuple:
        return self._state.curves

    @property
    def curve_ranges(self) -> np.ndarray:
        """(K, 2) 每条曲线的 [start_distance, end_distance)。"""
        return self._state.ranges

    def total_length(self) -> float:
        """路径总估计弧长。"""
        return self._state.length

    def __len__(self) -> int:
        return len(self._state.curves)

    @staticmethod
    def _require_curves(state: _PathState):
        if not state.curves:
            raise DegenerateInputError("path is empty")

    @staticmethod
    def _curve_index(state: _PathState, distance: float | np.ndarray) -> int | np.ndarray:
        indices = np.searchsorted(state.ranges[:, 1], distance, side="left")
        return np.minimum(indices, len(state.curves) - 1)

    def last_point(self) -> np.ndarray:
        """最后一条曲线的终点。"""
        state = self._state
        self._require_curves(state)
        return np.array(state.curves[-1].end_point)

    def curve_at_distance(self, distance: float) -> tuple[int, CubicCurve, float]:
        """
        定位距离 distance 所在的曲线。

        Returns:
            index: 曲线下标
            curve: 曲线
            start_distance: 曲线起点的累积距离
        """
        state = self._state
        self._require_curves(state)
        if not distance >= 0:
            raise OutOfRangeQueryError(f"distance must be non-negative, got {distance}")

        index = int(self._curve_index(state, min(distance, state.length)))
        return index, state.curves[index], float(state.ranges[index, 0])

    def point_at_distance(self, distance: float) -> np.ndarray:
        """
        查询沿路径距离 distance 处的点。

        超过总长时返回终点；负距离视为调用错误。

        Args:
            distance: 沿路径的距离

        Returns:
            (3,) 位置

        Raises:
            OutOfRangeQueryError: distance 为负或 NaN
            DegenerateInputError: 路径为空
        """
        state = self._state
        self._require_curves(state)
        if not distance >= 0:
            raise OutOfRangeQueryError(f"distance must be non-negative, got {distance}")

        if distance > state.length:
            return np.array(state.curves[-1].end_point)

        index = int(self._curve_index(state, distance))
        curve = state.curves[index]
        return curve.point_at(curve.normalize(distance - state.ranges[index, 0]))

    def points_at_distances(self, distances: np.ndarray) -> np.ndarray:
        """
        批量按距离查询（向量化版本）。

        Args:
            distances: (M,) 距离数组

        Returns:
            (M, 3) 位置数组
        """
        return self._points_at(self._state, distances)

    def _points_at(self, state: _PathState, distances: np.ndarray) -> np.ndarray:
        self._require_curves(state)
        distances = np.atleast_1d(np.asarray(distances, dtype=np.float64))
        if not np.all(distances >= 0):
            raise OutOfRangeQueryError("distances must be non-negative")

        points = np.empty((len(distances), 3))
        overshoot = distances > state.length
        points[overshoot] = state.curves[-1].end_point

        indices = self._curve_index(state, distances)
        for i in np.unique(indices[~overshoot]):
            mask = (indices == i) & ~overshoot
            curve = state.curves[i]
            points[mask] = curve.point_at(curve.normalize(distances[mask] - state.ranges[i, 0]))

        return points

    def sample_uniform(self, num_points: int) -> tuple[np.ndarray, np.ndarray]:
        """
        沿路径距离均匀采样。

        Returns:
            distances: (M,) 距离值
            points: (M, 3) 位置
        """
        state = self._state
        distances = np.linspace(0, state.length, num_points)
        return distances, self._points_at(state, distances)

    def samplers(
        self,
        segment_size: float,
        fit_segment_size: bool = False,
        exact: bool = False,
    ) -> list[ArcLengthSampler]:
        """为每条非零长度曲线构造等距采样表。"""
        return self._samplers(self._state, segment_size, fit_segment_size, exact)

    @staticmethod
    def _samplers(state, segment_size, fit_segment_size, exact) -> list[ArcLengthSampler]:
        return [
            ArcLengthSampler(curve, segment_size, fit_segment_size, exact)
            for curve in state.curves
            if not curve.is_degenerate
        ]

    def polyline(
        self,
        segment_size: float,
        fit_segment_size: bool = False,
        exact: bool = False,
    ) -> np.ndarray:
        """
        拼接各曲线的采样点为整条路径的折线。

        去除相邻重复点，并补上路径终点。

        每条曲线只采样 K = floor(L / segment_size) 个点，最后一个采样点之后剩余的
        不足一个 segment_size 的弧长并入曲线交界处的间距，因此交界处间距最大
        接近但小于 2 * segment_size。exact=False 时曲线内部按参数近似换算，
        曲率变化处的间距只是近似均匀。

        Returns:
            (K, 3) 折线点
        """
        state = self._state
        self._require_curves(state)

        chunks = [s.points for s in self._samplers(state, segment_size, fit_segment_size, exact)]
        chunks.append(state.curves[-1].end_point[np.newaxis])
        points = np.concatenate(chunks)

        keep = np.ones(len(points), dtype=bool)
        keep[1:] = np.linalg.norm(np.diff(points, axis=0), axis=1) > DUPLICATE_POINT_EPSILON
        return points[keep]

    def __repr__(self) -> str:
        state = self._state
        if not state.curves:
            return "MovementPath(empty)"
        return (
            f"MovementPath(N={len(state.waypoints)}, length={state.length:.2f}, "
            f"smoothness={state.smoothness:.2f})"
        )


if __name__ == "__main__":
    from bezier_path.datasets import zigzag_route

    waypoints, settings = zigzag_route()

    print("=== 移动路径测试 ===")
    print(f"航点数: {len(waypoints)}")

    path = MovementPath(waypoints, settings.smoothness)
    print(path)
    print(f"曲线数: {len(path)}")
    print(f"总长度: {path.total_length():.4f}")

    d = path.total_length() / 2
    print(f"\n在 d={d:.2f} 处: {path.point_at_distance(d)}")
    print(f"越界 d={path.total_length() + 1000:.2f}: {path.point_at_distance(path.total_length() + 1000)}")

    line = path.polyline(settings.segment_size)
    gaps = np.linalg.norm(np.diff(line, axis=0), axis=1)
    print(f"\n折线点数: {len(line)}, 间距 min={gaps.min():.4f}, max={gaps.max():.4f}")
