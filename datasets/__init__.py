"""
datasets - 参考航点路线

包含:
- routes: 共线、锯齿、螺旋三条参考路线
"""

from .routes import RouteSettings, colinear_route, helix_route, zigzag_route

__all__ = [
    "RouteSettings",
    "colinear_route",
    "zigzag_route",
    "helix_route",
]
