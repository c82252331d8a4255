"""
integrals - 数值积分工具函数

提供固定阶 Gauss-Legendre 求积，用于计算三次 Bézier 曲线的弧长。

弧长:
    L(a, b) = ∫_a^b ||B'(t)|| dt
"""

from typing import Callable

import numpy as np

GAUSS_ORDER = 24

# [-1, 1] 上的 24 点 Legendre-Gauss 节点与权重
_GAUSS_NODES, _GAUSS_WEIGHTS = np.polynomial.legendre.leggauss(GAUSS_ORDER)


def gauss_nodes(order: int = GAUSS_ORDER) -> tuple[np.ndarray, np.ndarray]:
    """
    获取 [-1, 1] 上的 Gauss-Legendre 节点与权重。

    Args:
        order: 求积点数

    Returns:
        nodes: (order,) 节点 x_i
        weights: (order,) 权重 w_i
    """
    if order == GAUSS_ORDER:
        return _GAUSS_NODES, _GAUSS_WEIGHTS
    return np.polynomial.legendre.leggauss(order)


def gauss_legendre(
    f: Callable[[np.ndarray], np.ndarray],
    a: float,
    b: float,
    order: int = GAUSS_ORDER,
) -> float:
    """
    Gauss-Legendre 求积计算定积分。

    节点由 [-1, 1] 映射到 [a, b]:
        t_i = (b - a)/2 * x_i + (a + b)/2
        ∫_a^b f(t) dt ≈ (b - a)/2 * Σ w_i f(t_i)

    Args:
        f: 被积函数，需支持数组输入并逐元素返回
        a: 积分下限
        b: 积分上限
        order: 求积点数

    Returns:
        积分近似值
    """
    nodes, weights = gauss_nodes(order)
    half = (b - a) / 2
    mid = (a + b) / 2
    values = np.asarray(f(half * nodes + mid), dtype=np.float64)
    return float(half * np.sum(weights * values))


def arc_length_integral(
    derivative_func: Callable[[np.ndarray], np.ndarray],
    a: float,
    b: float,
    order: int = GAUSS_ORDER,
) -> float:
    """
    计算参数曲线的弧长积分。

        l(b) - l(a) = ∫_a^b ||P'(u)|| du

    Args:
        derivative_func: 曲线的导数函数，输入 (M,) 参数，返回 (M, n) 导数向量
        a: 参数下限
        b: 参数上限
        order: 求积点数

    Returns:
        弧长值
    """

    def integrand(u: np.ndarray) -> np.ndarray:
        return np.linalg.norm(derivative_func(u), axis=-1)

    return gauss_legendre(integrand, a, b, order)


if __name__ == "__main__":
    print("=== Gauss-Legendre 积分测试 ===")

    result = gauss_legendre(np.exp, 0, 1)
    exact = np.e - 1
    print("∫e^x dx from 0 to 1:")
    print(f"  计算值: {result:.15f}")
    print(f"  精确值: {exact:.15f}")
    print(f"  误差: {abs(result - exact):.2e}")

    def circle_derivative(t):
        # x = cos(πt/2), y = sin(πt/2)
        return np.column_stack([-np.pi / 2 * np.sin(np.pi * t / 2), np.pi / 2 * np.cos(np.pi * t / 2)])

    arc_len = arc_length_integral(circle_derivative, 0, 1)
    print("\n四分之一圆弧长:")
    print(f"  计算值: {arc_len:.15f}")
    print(f"  精确值: {np.pi / 2:.15f}")
    print(f"  误差: {abs(arc_len - np.pi / 2):.2e}")
