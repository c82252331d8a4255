"""
routes - 参考航点路线

数据说明:
每条路线以 (N, 3) 航点数组给出，并附带推荐的路径构建参数。
- colinear: 三点共线，路径应退化为直线，总长 20
- zigzag: 平面折线，检验拐角平滑
- helix: 空间螺旋线，检验三维曲率
"""

from dataclasses import dataclass

import numpy as np


@dataclass
class RouteSettings:
    """路径构建参数"""

    smoothness: float = 0.5  # 平滑系数 [0, 1]
    segment_size: float = 0.25  # 等距采样间距


# 格式: [x, y, z]
_COLINEAR = np.array(
    [
        [0.0, 0.0, 0.0],
        [10.0, 0.0, 0.0],
        [20.0, 0.0, 0.0],
    ],
    dtype=np.float64,
)


def colinear_route() -> tuple[np.ndarray, RouteSettings]:
    """
    三个共线航点 (0,0,0), (10,0,0), (20,0,0)。

    Returns:
        waypoints: (3, 3) 航点
        settings: 路径构建参数
    """
    return _COLINEAR.copy(), RouteSettings(smoothness=0.5, segment_size=0.5)


def zigzag_route(
    num_points: int = 7,
    step: float = 10.0,
    amplitude: float = 5.0,
) -> tuple[np.ndarray, RouteSettings]:
    """
    xy 平面内的锯齿形路线，x 方向等距前进，y 交替为 ±amplitude。

    Args:
        num_points: 航点数
        step: x 方向间距
        amplitude: y 方向摆幅

    Returns:
        waypoints: (N, 3) 航点
        settings: 路径构建参数
    """
    x = step * np.arange(num_points)
    y = amplitude * np.where(np.arange(num_points) % 2 == 0, 1.0, -1.0)
    y[0] = 0.0
    waypoints = np.column_stack([x, y, np.zeros(num_points)])
    return waypoints, RouteSettings(smoothness=0.6, segment_size=0.25)


def helix_route(
    num_points: int = 25,
    radius: float = 5.0,
    pitch: float = 4.0,
    turns: float = 2.0,
) -> tuple[np.ndarray, RouteSettings]:
    """
    绕 z 轴的螺旋线航点。

    Args:
        num_points: 航点数
        radius: 螺旋半径
        pitch: 每圈上升高度
        turns: 圈数

    Returns:
        waypoints: (N, 3) 航点
        settings: 路径构建参数
    """
    theta = np.linspace(0, 2 * np.pi * turns, num_points)
    waypoints = np.column_stack(
        [
            radius * np.cos(theta),
            radius * np.sin(theta),
            pitch * theta / (2 * np.pi),
        ]
    )
    return waypoints, RouteSettings(smoothness=0.8, segment_size=0.1)


if __name__ == "__main__":
    for name, route in [("colinear", colinear_route), ("zigzag", zigzag_route), ("helix", helix_route)]:
        waypoints, settings = route()
        polyline_length = np.sum(np.linalg.norm(np.diff(waypoints, axis=0), axis=1))
        print(f"=== {name} ===")
        print(f"航点数: {len(waypoints)}")
        print(f"折线总长: {polyline_length:.4f}")
        print(f"参数: {settings}")
