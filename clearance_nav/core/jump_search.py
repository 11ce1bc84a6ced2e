#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
加权跳跃搜索模块

在栅格上做一致代价（Dijkstra）搜索，边为可变长度的跳跃：
- 单步最大跳跃距离 = max(1, 当前格间隙 - unit_size)
- 落点间隙小于 unit_size 时拒绝该跳跃（只检查端点，不检查跳跃途经的格子）
- 边代价 = 步长 + 梯形积分的间隙 * wall_factor / 6
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from loguru import logger

from clearance_nav.common.constants import (
    NO_PREDECESSOR,
    SCORE_START,
    SCORE_UNVISITED,
    WALL_FACTOR_DIVISOR,
)
from clearance_nav.common.exceptions import ClearanceNavError
from clearance_nav.core.grid_map import Grid, GridCoord
from clearance_nav.core.neighbor_offsets import NeighborTable
from clearance_nav.core.open_set import create_open_set
from clearance_nav.core.path_reconstructor import reconstruct_path
from clearance_nav.core.search_context import SearchContext


@dataclass
class SearchConfig:
    """单次搜索参数"""
    start: GridCoord
    goal: GridCoord
    unit_size: int = 1
    wall_factor: int = 0
    jumping_enabled: bool = True
    stop_at_goal: bool = False

    def __post_init__(self) -> None:
        if len(self.start) != 2 or len(self.goal) != 2:
            raise ValueError(f"start/goal必须是 (x, y) 二元组: start={self.start}, goal={self.goal}")
        self.start = (int(self.start[0]), int(self.start[1]))
        self.goal = (int(self.goal[0]), int(self.goal[1]))
        if int(self.unit_size) < 1:
            raise ValueError(f"unit_size必须为正整数: {self.unit_size}")
        self.unit_size = int(self.unit_size)
        self.wall_factor = int(self.wall_factor)


@dataclass
class SearchOutcome:
    """搜索结果：找不到路径与开放集溢出都以数据形式返回"""
    found: bool
    goal_score: int
    context: SearchContext = field(repr=False)
    expanded: int = 0
    stale_skipped: int = 0
    pushes: int = 0
    overflow_count: int = 0

    @property
    def overflowed(self) -> bool:
        return self.overflow_count > 0


def edge_cost(
    step_distance: int,
    cell_clearance: int,
    target_clearance: int,
    wall_factor: int,
    max_radius: int,
) -> int:
    """
    计算一次跳跃的代价

    假设间隙沿跳跃线性变化，用梯形公式估计积分；(step + 1) 使长跳略占便宜。
    wall_factor > 0 时间隙越大代价越高，路径贴墙（老鼠）；wall_factor < 0 时对积分取镜像
    R*(step+1) - integrated 并按 |wall_factor| 加权，间隙越小代价越高，路径远离墙体。
    两种情况下代价始终 >= step >= 1。

    Args:
        step_distance: 跳跃距离
        cell_clearance: 起跳格间隙
        target_clearance: 落点格间隙
        wall_factor: 有符号的墙体偏好因子
        max_radius: 间隙上限 R

    Returns:
        整数边代价（>= 1）
    """
    integrated = (target_clearance + cell_clearance) * (step_distance + 1) // 2
    if wall_factor >= 0:
        return step_distance + integrated * wall_factor // WALL_FACTOR_DIVISOR

    mirrored = max(0, max_radius * (step_distance + 1) - integrated)
    return step_distance + mirrored * (-wall_factor) // WALL_FACTOR_DIVISOR


class WeightedJumpSearch:
    """
    间隙感知的跳跃搜索器

    示例:
        ```python
        search = WeightedJumpSearch(NeighborTable.build(10))
        outcome = search.run(grid, SearchConfig(start=(5, 25), goal=(75, 25), unit_size=2))
        path = reconstruct_path(outcome.context, (5, 25), (75, 25))
        ```
    """

    def __init__(self, neighbor_table: NeighborTable, open_set_kind: str = "linear"):
        # 提前校验开放集类型
        create_open_set(open_set_kind, 1)
        self.neighbor_table = neighbor_table
        self.open_set_kind = open_set_kind

    def run(
        self,
        grid: Grid,
        config: SearchConfig,
        context: Optional[SearchContext] = None,
    ) -> SearchOutcome:
        """
        执行一次搜索

        Args:
            grid: 已重建间隙场的栅格
            config: 搜索参数
            context: 可复用的搜索上下文（会被重置），None 时新建

        Returns:
            SearchOutcome

        Raises:
            InvalidCoordinateError: 起点或终点超出栅格范围
            ClearanceNavError: 间隙场已过期或上下文尺寸不匹配
        """
        grid.check_bounds(*config.start)
        grid.check_bounds(*config.goal)
        if grid.clearance_stale:
            raise ClearanceNavError("间隙场已过期：障碍修改后必须先重建间隙场再搜索")

        if context is None:
            context = SearchContext(grid.width, grid.height)
        elif (context.width, context.height) != grid.size:
            raise ClearanceNavError(
                f"搜索上下文尺寸不匹配: context=({context.width}, {context.height}), grid={grid.size}"
            )
        else:
            context.reset()

        open_set = create_open_set(self.open_set_kind, grid.cell_count)
        clearance = grid.clearance
        width, height = grid.width, grid.height
        max_radius = grid.max_radius
        unit_size = config.unit_size
        wall_factor = config.wall_factor
        sx, sy = config.start
        gx, gy = config.goal

        outcome = SearchOutcome(found=False, goal_score=SCORE_UNVISITED, context=context)

        logger.debug(
            f"[JumpSearch] 开始搜索: grid_size=({width}, {height}), start={config.start}, "
            f"goal={config.goal}, unit_size={unit_size}, wall_factor={wall_factor}, "
            f"jumping={config.jumping_enabled}"
        )

        open_set.push(context.visit(sx, sy, NO_PREDECESSOR[0], NO_PREDECESSOR[1], SCORE_START))
        outcome.pushes = 1

        while open_set:
            node = open_set.pop()

            # 已被更优路径覆盖的旧条目
            if node.score > context.score[node.y, node.x]:
                outcome.stale_skipped += 1
                continue
            outcome.expanded += 1

            if config.stop_at_goal and node.x == gx and node.y == gy:
                break

            cell_clearance = int(clearance[node.y, node.x])
            max_jump = max(1, cell_clearance - unit_size)
            if not config.jumping_enabled:
                max_jump = 1

            for offset in self.neighbor_table.within(max_jump):
                tx = node.x + offset.dx
                ty = node.y + offset.dy
                if tx < 0 or tx >= width or ty < 0 or ty >= height:
                    continue

                target_clearance = int(clearance[ty, tx])
                if target_clearance < unit_size:
                    continue

                score = node.score + edge_cost(
                    offset.distance, cell_clearance, target_clearance, wall_factor, max_radius
                )
                current = context.score[ty, tx]
                if current == SCORE_UNVISITED or score < current:
                    new_node = context.visit(tx, ty, node.x, node.y, score)
                    outcome.pushes += 1
                    if not open_set.push(new_node):
                        if outcome.overflow_count == 0:
                            logger.error(
                                f"[JumpSearch] 开放集溢出: capacity={open_set.capacity}，丢弃新入队节点"
                            )
                        outcome.overflow_count += 1

        outcome.goal_score = int(context.score[gy, gx])
        outcome.found = outcome.goal_score > SCORE_UNVISITED

        if outcome.found:
            logger.debug(
                f"[JumpSearch] 搜索完成: goal_score={outcome.goal_score}, expanded={outcome.expanded}, "
                f"stale={outcome.stale_skipped}, pushes={outcome.pushes}"
            )
        else:
            logger.debug(
                f"[JumpSearch] 无法找到从起点到终点的路径: start={config.start}, goal={config.goal}, "
                f"expanded={outcome.expanded}, max_score={context.max_score}"
            )
        if outcome.overflowed:
            logger.warning(f"[JumpSearch] 本次搜索共丢弃 {outcome.overflow_count} 个入队节点")

        return outcome

    def find_path(self, grid: Grid, config: SearchConfig) -> Tuple[SearchOutcome, List[GridCoord]]:
        """搜索并重建路径的便捷方法"""
        outcome = self.run(grid, config)
        return outcome, reconstruct_path(outcome.context, config.start, config.goal)
