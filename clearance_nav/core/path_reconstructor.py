#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径重建：从终点沿前驱回溯到起点，输出 起点 -> 终点 的有序路径
"""

from typing import List

from loguru import logger

from clearance_nav.core.grid_map import GridCoord
from clearance_nav.core.search_context import SearchContext


def reconstruct_path(context: SearchContext, start: GridCoord, goal: GridCoord) -> List[GridCoord]:
    """
    根据搜索上下文重建路径

    Args:
        context: 已完成的搜索上下文
        start: 起点 (x, y)
        goal: 终点 (x, y)

    Returns:
        路径坐标列表（含起终点），终点未访问时返回空列表
    """
    start = (int(start[0]), int(start[1]))
    gx, gy = int(goal[0]), int(goal[1])
    if not context.is_visited(gx, gy):
        return []

    # 前驱链异常（成环）时的保护上限
    limit = context.cell_count
    path: List[GridCoord] = []
    x, y = gx, gy
    while (x, y) != start and len(path) < limit:
        if not (0 <= x < context.width and 0 <= y < context.height) or not context.is_visited(x, y):
            logger.warning(f"[PathReconstructor] 前驱链在 ({x}, {y}) 中断，未能回溯到起点 {start}")
            break
        path.append((x, y))
        node = context.node(x, y)
        if not node.has_predecessor:
            logger.warning(f"[PathReconstructor] ({x}, {y}) 没有前驱，未能回溯到起点 {start}")
            break
        x, y = node.from_x, node.from_y

    if len(path) >= limit:
        logger.warning(f"[PathReconstructor] 回溯达到上限 {limit}，前驱链可能存在环")

    path.append(start)
    path.reverse()
    return path
