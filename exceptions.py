"""
exceptions - 路径构建与查询的错误类型
"""


class BezierPathError(Exception):
    pass


class DegenerateInputError(BezierPathError, ValueError):
    pass


class DegenerateCurveError(DegenerateInputError):
    pass


class OutOfRangeQueryError(BezierPathError, ValueError):
    pass
