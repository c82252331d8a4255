"""
geometry - 三维向量基础操作

曲线与路径代码只依赖这里的几个能力：点转换、线性插值、欧氏距离、定长步进。
宿主环境的向量类型只要能被 numpy 转换 (tuple / list / 实现 __array__ 的对象)，
即可直接作为输入。
"""

import numpy as np

from ..exceptions import DegenerateInputError

EPSILON = 1e-16


def as_point(point) -> np.ndarray:
    """
    将任意三维向量转换为 (3,) float64 数组。

    Raises:
        DegenerateInputError: 形状不是 (3,) 或含有非有限值
    """
    p = np.asarray(point, dtype=np.float64)
    if p.shape != (3,):
        raise DegenerateInputError(f"expected a 3-component point, got shape {p.shape}")
    if not np.all(np.isfinite(p)):
        raise DegenerateInputError(f"point has non-finite components: {p}")
    return p


def as_points(points) -> np.ndarray:
    """
    将点序列转换为 (N, 3) float64 数组。

    Raises:
        DegenerateInputError: 形状不是 (N, 3) 或含有非有限值
    """
    p = np.asarray(points, dtype=np.float64)
    if p.ndim != 2 or p.shape[1] != 3:
        raise DegenerateInputError(f"expected (N, 3) points, got shape {p.shape}")
    if not np.all(np.isfinite(p)):
        raise DegenerateInputError("points have non-finite components")
    return p


def lerp(a: np.ndarray, b: np.ndarray, t: float | np.ndarray) -> np.ndarray:
    """
    线性插值 a + (b - a) * t。

    t 不做截断；t 为 (M, 1) 数组时广播得到 (M, 3)。
    """
    return a + (b - a) * t


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """两点欧氏距离。"""
    return float(np.linalg.norm(np.asarray(b) - np.asarray(a)))


def move_towards(current: np.ndarray, target: np.ndarray, max_delta: float) -> np.ndarray:
    """
    从 current 朝 target 移动至多 max_delta 的距离，不越过 target。

    Args:
        current: (3,) 起点
        target: (3,) 目标点
        max_delta: 最大移动距离

    Returns:
        (3,) 新位置
    """
    offset = target - current
    gap = np.linalg.norm(offset)
    if gap <= max_delta or gap < EPSILON:
        return np.array(target, dtype=np.float64)
    return current + offset / gap * max_delta


if __name__ == "__main__":
    print("=== 向量操作测试 ===")

    a = as_point((0.0, 0.0, 0.0))
    b = as_point([10.0, 0.0, 0.0])
    print(f"lerp(a, b, 0.25) = {lerp(a, b, 0.25)}")
    print(f"distance(a, b) = {distance(a, b)}")
    print(f"move_towards(a, b, 3) = {move_towards(a, b, 3.0)}")
    print(f"move_towards(a, b, 30) = {move_towards(a, b, 30.0)}")
