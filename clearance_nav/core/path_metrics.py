#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径度量模块

- 路径长度（相邻点欧氏距离之和）
- 按已行走距离在路径上插值位置，供外部动画驱动
- 沿路径重新累加边代价，用于核对搜索得到的 score
"""

import math
from typing import List, Optional, Sequence, Tuple

from clearance_nav.common.constants import SCORE_START
from clearance_nav.core.distance_metric import euclidean_distance
from clearance_nav.core.grid_map import Grid, GridCoord
from clearance_nav.core.jump_search import edge_cost

Point = Tuple[float, float]


def path_length(path: Sequence[GridCoord]) -> float:
    """路径总长度（浮点）"""
    length = 0.0
    for i in range(1, len(path)):
        dx = path[i][0] - path[i - 1][0]
        dy = path[i][1] - path[i - 1][1]
        length += math.sqrt(dx * dx + dy * dy)
    return length


def position_at_distance(
    path: Sequence[GridCoord],
    distance: float,
    center_offset: float = 0.0,
) -> Optional[Point]:
    """
    找到包含已行走距离的路径段并线性插值

    Args:
        path: 路径坐标列表
        distance: 沿路径已行走的距离
        center_offset: 加到结果坐标上的偏移（0.5 即格子中心）

    Returns:
        插值位置 (x, y)；距离超过路径总长或路径不足两点时返回 None
    """
    if distance < 0:
        raise ValueError(f"行走距离不能为负数: {distance}")

    walked = 0.0
    for i in range(1, len(path)):
        x1, y1 = path[i - 1]
        dx = path[i][0] - x1
        dy = path[i][1] - y1
        d = math.sqrt(dx * dx + dy * dy)
        if walked + d >= distance:
            t = (distance - walked) / d if d > 0 else 0.0
            return (x1 + dx * t + center_offset, y1 + dy * t + center_offset)
        walked += d
    return None


class PathWalker:
    """
    沿路径匀速行走的累加器

    走完整条路径后累加器归零，下一次 advance 从起点重新开始。
    """

    def __init__(self, speed: float, center_offset: float = 0.5):
        if speed < 0:
            raise ValueError(f"速度不能为负数: {speed}")
        self.speed = speed
        self.center_offset = center_offset
        self.walked_distance = 0.0

    def advance(self, path: Sequence[GridCoord], dt: float) -> Optional[Point]:
        if not path:
            return None
        self.walked_distance += dt * self.speed
        pos = position_at_distance(path, self.walked_distance, self.center_offset)
        if pos is None:
            self.walked_distance = 0.0
        return pos

    def reset(self) -> None:
        self.walked_distance = 0.0


def path_edge_costs(path: Sequence[GridCoord], grid: Grid, wall_factor: int) -> List[int]:
    """按搜索的代价公式逐段计算路径边代价"""
    costs = []
    for i in range(1, len(path)):
        (x0, y0), (x1, y1) = path[i - 1], path[i]
        step = euclidean_distance(x1 - x0, y1 - y0)
        costs.append(edge_cost(
            step,
            int(grid.clearance[y0, x0]),
            int(grid.clearance[y1, x1]),
            wall_factor,
            grid.max_radius,
        ))
    return costs


def path_score(path: Sequence[GridCoord], grid: Grid, wall_factor: int) -> int:
    """路径的累计 score（与搜索中起点 score=1 的约定一致），空路径返回 0"""
    if not path:
        return 0
    return SCORE_START + sum(path_edge_costs(path, grid, wall_factor))
