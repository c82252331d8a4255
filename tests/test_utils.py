"""
utils 模块单元测试
"""

import numpy as np
import pytest

from bezier_path.exceptions import DegenerateInputError
from bezier_path.utils.geometry import (
    as_point,
    as_points,
    distance,
    lerp,
    move_towards,
)
from bezier_path.utils.integrals import (
    GAUSS_ORDER,
    arc_length_integral,
    gauss_legendre,
    gauss_nodes,
)


class TestGeometry:
    """向量工具函数测试"""

    def test_as_point_accepts_sequences(self):
        """测试 tuple / list 转换为 (3,) 数组"""
        p = as_point((1, 2, 3))
        assert p.shape == (3,)
        assert p.dtype == np.float64
        np.testing.assert_array_equal(as_point([1.0, 2.0, 3.0]), p)

    def test_as_point_rejects_bad_shape(self):
        """测试非三维点报错"""
        with pytest.raises(DegenerateInputError):
            as_point((1.0, 2.0))

    def test_as_point_rejects_non_finite(self):
        """测试 NaN / inf 报错"""
        with pytest.raises(DegenerateInputError):
            as_point((0.0, np.nan, 0.0))
        with pytest.raises(DegenerateInputError):
            as_point((np.inf, 0.0, 0.0))

    def test_as_points_shape(self):
        """测试点序列转换与形状检查"""
        points = as_points([(0, 0, 0), (1, 1, 1)])
        assert points.shape == (2, 3)
        with pytest.raises(DegenerateInputError):
            as_points([1.0, 2.0, 3.0])

    def test_lerp(self):
        """测试线性插值"""
        a = np.array([0.0, 0.0, 0.0])
        b = np.array([10.0, -4.0, 2.0])
        np.testing.assert_allclose(lerp(a, b, 0.0), a)
        np.testing.assert_allclose(lerp(a, b, 1.0), b)
        np.testing.assert_allclose(lerp(a, b, 0.25), [2.5, -1.0, 0.5])

    def test_lerp_broadcasts(self):
        """测试 (M, 1) 参数广播为 (M, 3)"""
        a = np.zeros(3)
        b = np.array([1.0, 2.0, 3.0])
        t = np.array([0.0, 0.5, 1.0])[:, np.newaxis]
        result = lerp(a, b, t)
        assert result.shape == (3, 3)
        np.testing.assert_allclose(result[1], [0.5, 1.0, 1.5])

    def test_distance(self):
        """测试欧氏距离"""
        assert distance(np.array([0.0, 0.0, 0.0]), np.array([3.0, 4.0, 0.0])) == pytest.approx(5.0)

    def test_move_towards_partial_step(self):
        """测试定长步进"""
        result = move_towards(np.zeros(3), np.array([10.0, 0.0, 0.0]), 3.0)
        np.testing.assert_allclose(result, [3.0, 0.0, 0.0])

    def test_move_towards_does_not_overshoot(self):
        """测试步长大于间距时停在目标点"""
        target = np.array([1.0, 1.0, 0.0])
        result = move_towards(np.zeros(3), target, 10.0)
        np.testing.assert_allclose(result, target)

    def test_move_towards_same_point(self):
        """测试起点与目标重合"""
        p = np.array([1.0, 2.0, 3.0])
        result = move_towards(p, p.copy(), 0.5)
        np.testing.assert_allclose(result, p)
        assert not np.any(np.isnan(result))


class TestIntegrals:
    """数值积分测试"""

    def test_gauss_nodes(self):
        """测试 24 点节点与权重"""
        nodes, weights = gauss_nodes()
        assert len(nodes) == GAUSS_ORDER == 24
        assert np.isclose(np.sum(weights), 2.0)
        # 节点关于 0 对称
        np.testing.assert_allclose(np.sort(nodes), -np.sort(nodes)[::-1], atol=1e-14)
        assert np.min(np.abs(nodes)) == pytest.approx(0.0640568928626056, abs=1e-13)

    def test_gauss_nodes_other_order(self):
        """测试其他阶数"""
        nodes, weights = gauss_nodes(5)
        assert len(nodes) == 5
        assert np.isclose(np.sum(weights), 2.0)

    def test_gauss_exp(self):
        """测试 e^x 积分"""
        result = gauss_legendre(np.exp, 0, 1)
        assert np.isclose(result, np.e - 1, rtol=1e-12)

    def test_gauss_polynomial(self):
        """测试多项式积分"""
        # ∫x^2 dx from 0 to 1 = 1/3

        def f(x):
            return x**2

        assert np.isclose(gauss_legendre(f, 0, 1), 1 / 3, rtol=1e-12)

    def test_gauss_shifted_interval(self):
        """测试非 [0, 1] 区间"""
        # ∫_1^3 x dx = 4
        assert np.isclose(gauss_legendre(lambda x: x, 1, 3), 4.0, rtol=1e-12)

    def test_arc_length_circle(self):
        """测试圆弧长度"""

        def circle_derivative(t):
            # 四分之一圆: x = cos(πt/2), y = sin(πt/2)
            return np.column_stack(
                [-np.pi / 2 * np.sin(np.pi * t / 2), np.pi / 2 * np.cos(np.pi * t / 2)]
            )

        arc_len = arc_length_integral(circle_derivative, 0, 1)
        assert np.isclose(arc_len, np.pi / 2, rtol=1e-10)

    def test_arc_length_line(self):
        """测试直线长度"""

        def line_derivative(t):
            # 从 (0,0,0) 到 (1,1,1) 的直线
            return np.tile([1.0, 1.0, 1.0], (len(t), 1))

        arc_len = arc_length_integral(line_derivative, 0, 1)
        assert np.isclose(arc_len, np.sqrt(3), rtol=1e-12)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
