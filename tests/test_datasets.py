"""
datasets 模块单元测试
"""

import numpy as np
import pytest

from bezier_path.datasets import RouteSettings, colinear_route, helix_route, zigzag_route


class TestColinear:
    """共线路线测试"""

    def test_values(self):
        """测试航点数值"""
        waypoints, _ = colinear_route()
        np.testing.assert_array_equal(waypoints, [[0, 0, 0], [10, 0, 0], [20, 0, 0]])

    def test_returns_copy(self):
        """测试每次返回独立副本"""
        waypoints, _ = colinear_route()
        waypoints[0, 0] = 5.0
        fresh, _ = colinear_route()
        assert fresh[0, 0] == 0.0

    def test_settings(self):
        """测试构建参数"""
        _, settings = colinear_route()
        assert isinstance(settings, RouteSettings)
        assert settings.smoothness == 0.5


class TestZigzag:
    """锯齿路线测试"""

    def test_shape(self):
        """测试形状与平面性"""
        waypoints, _ = zigzag_route(num_points=9)
        assert waypoints.shape == (9, 3)
        np.testing.assert_array_equal(waypoints[:, 2], 0.0)

    def test_alternating(self):
        """测试 y 坐标交替"""
        waypoints, _ = zigzag_route(amplitude=3.0)
        assert waypoints[0, 1] == 0.0
        signs = np.sign(waypoints[1:, 1])
        assert np.all(signs[:-1] == -signs[1:])
        np.testing.assert_allclose(np.abs(waypoints[1:, 1]), 3.0)

    def test_step(self):
        """测试 x 方向等距"""
        waypoints, _ = zigzag_route(step=2.5)
        np.testing.assert_allclose(np.diff(waypoints[:, 0]), 2.5)


class TestHelix:
    """螺旋路线测试"""

    def test_radius(self):
        """测试航点位于圆柱面上"""
        waypoints, _ = helix_route(radius=4.0)
        np.testing.assert_allclose(np.linalg.norm(waypoints[:, :2], axis=1), 4.0)

    def test_rises_monotonically(self):
        """测试 z 单调上升，总高度为 pitch * turns"""
        waypoints, _ = helix_route(pitch=3.0, turns=2.0)
        assert np.all(np.diff(waypoints[:, 2]) > 0)
        assert waypoints[-1, 2] == pytest.approx(6.0)

    def test_settings_valid(self):
        """测试构建参数范围"""
        for route in (colinear_route, zigzag_route, helix_route):
            _, settings = route()
            assert 0.0 <= settings.smoothness <= 1.0
            assert settings.segment_size > 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
