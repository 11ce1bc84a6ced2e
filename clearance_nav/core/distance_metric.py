#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
距离度量模块

提供三种整数距离：欧氏（向上取整）、切比雪夫、曼哈顿。
欧氏距离通过平方根查找表计算，避免热路径上的浮点运算。
"""

import math
from enum import Enum
from typing import List

import numpy as np

from clearance_nav.common.constants import SQRT_TABLE_SPAN


class DistanceMetric(str, Enum):
    """距离度量类型"""
    EUCLIDEAN = "euclidean"
    CHEBYSHEV = "chebyshev"
    MANHATTAN = "manhattan"

    def next(self) -> "DistanceMetric":
        """按 欧氏 -> 切比雪夫 -> 曼哈顿 顺序循环切换"""
        members = list(DistanceMetric)
        return members[(members.index(self) + 1) % len(members)]


def ceil_sqrt(n: int) -> int:
    """精确的整数 ceil(sqrt(n))"""
    if n <= 0:
        return 0
    r = math.isqrt(n)
    return r if r * r == n else r + 1


def _build_sqrt_table(span: int) -> List[int]:
    size = 2 * span * span + 1
    return [ceil_sqrt(i) for i in range(size)]


# 下标为 dx*dx + dy*dy
_SQRT_TABLE: List[int] = _build_sqrt_table(SQRT_TABLE_SPAN)


def euclidean_distance(dx: int, dy: int) -> int:
    """ceil(sqrt(dx^2 + dy^2))，表外偏移退化为精确整数计算"""
    sq = dx * dx + dy * dy
    if sq < len(_SQRT_TABLE):
        return _SQRT_TABLE[sq]
    return ceil_sqrt(sq)


def chebyshev_distance(dx: int, dy: int) -> int:
    return max(abs(dx), abs(dy))


def manhattan_distance(dx: int, dy: int) -> int:
    return abs(dx) + abs(dy)


_METRIC_FUNCS = {
    DistanceMetric.EUCLIDEAN: euclidean_distance,
    DistanceMetric.CHEBYSHEV: chebyshev_distance,
    DistanceMetric.MANHATTAN: manhattan_distance,
}


def metric_distance(dx: int, dy: int, metric: DistanceMetric = DistanceMetric.EUCLIDEAN) -> int:
    """
    计算偏移 (dx, dy) 在指定度量下的整数距离

    Args:
        dx: x 方向偏移
        dy: y 方向偏移
        metric: 距离度量

    Returns:
        非负整数距离
    """
    return _METRIC_FUNCS[DistanceMetric(metric)](dx, dy)


def distance_kernel(radius: int, metric: DistanceMetric = DistanceMetric.EUCLIDEAN) -> np.ndarray:
    """
    构建 (2R+1)x(2R+1) 的距离核，kernel[R + dy, R + dx] = metric(dx, dy)

    Args:
        radius: 核半径 R
        metric: 距离度量

    Returns:
        int32 距离核
    """
    if radius < 0:
        raise ValueError(f"核半径不能为负数: {radius}")

    func = _METRIC_FUNCS[DistanceMetric(metric)]
    size = 2 * radius + 1
    kernel = np.zeros((size, size), dtype=np.int32)
    for j in range(size):
        for i in range(size):
            kernel[j, i] = func(i - radius, j - radius)
    return kernel
