"""
bezier - 三次 Bézier 曲线

实现:
1. 速端曲线 (hodograph) 逐级降阶求导
2. 弧长估计：24 点 Gauss-Legendre 求积 (默认) 或控制多边形近似
3. De Casteljau 求值
4. 弧长 -> 参数的精确反求 (Brent 求根)

控制点顺序为 [start_point, start_tangent, end_tangent, end_point]。
"""

import numpy as np
from scipy.optimize import brentq

from ..utils.geometry import as_point, distance, lerp
from ..utils.integrals import arc_length_integral

STRAIGHT_LINE_EPSILON = 1e-5
ZERO_LENGTH_EPSILON = 1e-12


def derive(points: np.ndarray) -> list[np.ndarray]:
    """
    Bézier 曲线的速端曲线逐级降阶。

    每一级将相邻控制点之差乘以当前次数:
        d_j = n * (p_{j+1} - p_j)

    Args:
        points: (n+1, D) 控制点

    Returns:
        长度为 n 的列表，第 k 项为 (n-k, D) 的 k+1 阶导数控制点
    """
    levels = []
    current = np.asarray(points, dtype=np.float64)
    while len(current) > 1:
        degree = len(current) - 1
        current = degree * np.diff(current, axis=0)
        levels.append(current)
    return levels


def hodograph_point(dpoints: np.ndarray, t: float | np.ndarray) -> np.ndarray:
    """
    用二次 Bernstein 基计算一阶导数 B'(t)。

    Args:
        dpoints: (3, D) 一阶导数控制点
        t: 参数值或 (M,) 参数数组

    Returns:
        (D,) 或 (M, D) 导数向量
    """
    t = np.asarray(t, dtype=np.float64)[..., np.newaxis]
    mt = 1 - t
    a = mt * mt
    b = mt * t * 2
    c = t * t
    return a * dpoints[0] + b * dpoints[1] + c * dpoints[2]


def de_casteljau(control_points: np.ndarray, t: float | np.ndarray) -> np.ndarray:
    """
    三次 De Casteljau 求值。

    Args:
        control_points: (4, 3) 控制点
        t: 参数值或 (M,) 参数数组

    Returns:
        (3,) 或 (M, 3) 曲线点
    """
    t = np.asarray(t, dtype=np.float64)[..., np.newaxis]
    p0, p1, p2, p3 = control_points

    q = lerp(p0, p1, t)
    r = lerp(p1, p2, t)
    s = lerp(p2, p3, t)

    p = lerp(q, r, t)
    u = lerp(r, s, t)

    return lerp(p, u, t)


def estimate_length_polygon(control_points: np.ndarray) -> float:
    """
    控制多边形弧长近似: (弦长 + 控制网长度) / 2。

    O(1)，误差随曲率增大。
    """
    p0, p1, p2, p3 = control_points
    chord = distance(p0, p3)
    control_net = distance(p0, p1) + distance(p1, p2) + distance(p2, p3)
    return (chord + control_net) / 2


def estimate_length_gauss(control_points: np.ndarray) -> float:
    """24 点 Gauss-Legendre 求积计算 ∫_0^1 ||B'(t)|| dt。"""
    dpoints = derive(control_points)[0]
    return arc_length_integral(lambda t: hodograph_point(dpoints, t), 0.0, 1.0)


_LENGTH_ESTIMATORS = {
    "gauss": estimate_length_gauss,
    "polygon": estimate_length_polygon,
}
LENGTH_METHODS = tuple(_LENGTH_ESTIMATORS)


def _frozen(array: np.ndarray) -> np.ndarray:
    array = np.array(array, dtype=np.float64)
    array.setflags(write=False)
    return array


class CubicCurve:
    """
    三次 Bézier 曲线段。

    构造后不可变：控制点数组为只读，弧长估计与直线判定只在构造时计算一次。

    Attributes:
        start_point, end_point: (3,) 端点
        start_tangent, end_tangent: (3,) 内部控制点
        control_points: (4, 3) Bézier 顺序的控制点
        estimated_length: 估计弧长
        is_straight_line: 弧长与弦长之差小于 1e-5 时为 True，此时按直线插值
    """

    def __init__(
        self,
        start_point,
        end_point,
        start_tangent,
        end_tangent,
        length_method: str = "gauss",
    ):
        """
        Args:
            start_point: 起点
            end_point: 终点
            start_tangent: 起点侧控制点
            end_tangent: 终点侧控制点
            length_method: 弧长估计方法，"gauss" 或 "polygon"
        """
        if length_method not in _LENGTH_ESTIMATORS:
            raise ValueError(f"Unknown length method: {length_method!r}")

        self.start_point = _frozen(as_point(start_point))
        self.end_point = _frozen(as_point(end_point))
        self.start_tangent = _frozen(as_point(start_tangent))
        self.end_tangent = _frozen(as_point(end_tangent))
        self.control_points = _frozen(
            [self.start_point, self.start_tangent, self.end_tangent, self.end_point]
        )
        self.length_method = length_method

        self._hodograph = derive(self.control_points)[0]
        self.estimated_length = float(_LENGTH_ESTIMATORS[length_method](self.control_points))
        self.is_straight_line = (
            abs(distance(self.start_point, self.end_point) - self.estimated_length)
            < STRAIGHT_LINE_EPSILON
        )

    @property
    def is_degenerate(self) -> bool:
        """弧长为零（例如重复航点）。"""
        return self.estimated_length < ZERO_LENGTH_EPSILON

    def normalize(self, distance_along_curve: float | np.ndarray) -> float | np.ndarray:
        """
        将曲线上的移动距离换算为参数 t = d / L。

        这只是近似：Bézier 曲线速度不恒定。零长度曲线返回 0。
        """
        d = np.asarray(distance_along_curve, dtype=np.float64)
        if self.is_degenerate:
            t = np.zeros_like(d)
        else:
            t = d / self.estimated_length
        return float(t) if t.ndim == 0 else t

    def point_at(self, t: float | np.ndarray) -> np.ndarray:
        """
        在参数 t 处求曲线点。

        Args:
            t: 参数值或 (M,) 参数数组，通常在 [0, 1] 内

        Returns:
            (3,) 或 (M, 3) 曲线点
        """
        if self.is_straight_line:
            t = np.asarray(t, dtype=np.float64)[..., np.newaxis]
            return lerp(self.start_point, self.end_point, t)
        return de_casteljau(self.control_points, t)

    def derivative(self, t: float | np.ndarray) -> np.ndarray:
        """一阶导数 B'(t)。"""
        return hodograph_point(self._hodograph, t)

    def arc_length(self, t_end: float = 1.0, t_start: float = 0.0) -> float:
        """
        参数区间 [t_start, t_end] 上的弧长。

        直线段按均匀插值计算，与 point_at 的行为一致。
        """
        if self.is_straight_line:
            return (t_end - t_start) * self.estimated_length
        return arc_length_integral(self.derivative, t_start, t_end)

    def parameter_at_length(self, length: float) -> float:
        """
        精确弧长反求：找到 t 使得 arc_length(t) = length。

        length 截断到 [0, estimated_length]。使用 "polygon" 估计时，
        先按比例换算到求积弧长。

        Args:
            length: 从起点开始的弧长

        Returns:
            参数 t ∈ [0, 1]
        """
        length = min(max(float(length), 0.0), self.estimated_length)
        if self.is_straight_line or self.is_degenerate:
            return self.normalize(length)

        total = self.arc_length()
        target = length / self.estimated_length * total
        if target <= 0.0:
            return 0.0
        if target >= total:
            return 1.0
        return float(brentq(lambda t: self.arc_length(t) - target, 0.0, 1.0, xtol=1e-12))

    def __repr__(self) -> str:
        kind = "straight" if self.is_straight_line else "curved"
        return (
            f"CubicCurve(start={self.start_point.tolist()}, end={self.end_point.tolist()}, "
            f"length={self.estimated_length:.4f}, {kind})"
        )

    def __str__(self) -> str:
        return ", ".join(str(p.tolist()) for p in self.control_points)


if __name__ == "__main__":
    print("=== 三次 Bézier 曲线测试 ===")

    curve = CubicCurve((0, 0, 0), (10, 0, 0), (0, 5, 0), (10, 5, 0))
    print(curve)
    print(f"Gauss 弧长: {curve.estimated_length:.6f}")
    print(f"多边形弧长: {estimate_length_polygon(curve.control_points):.6f}")
    print(f"弦长: {distance(curve.start_point, curve.end_point):.6f}")

    t_half = curve.parameter_at_length(curve.estimated_length / 2)
    print(f"半弧长参数: t={t_half:.6f}, 点={curve.point_at(t_half)}")

    line = CubicCurve((0, 0, 0), (2, 0, 0), (1, 0, 0), (1, 0, 0))
    print(f"\n直线判定: {line.is_straight_line}, 中点: {line.point_at(0.5)}")
