#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PathPlanningService

中间层：
- 持有 Grid、当前度量、跳跃开关和各单位的参数
- 接收障碍编辑（绘制、清空、随机生成）
- replan(): 重建间隙场并为所有单位重新搜索，作为一个不可分割的单元
- 输出：每个单位的 AgentPlan，以及状态文字，供渲染层只读使用
"""

from typing import Dict, List, Optional

import numpy as np
from loguru import logger

from clearance_nav.common.constants import WALL_FACTOR_CYCLE
from clearance_nav.config.models import AgentConfig, PlannerConfig
from clearance_nav.core.distance_metric import DistanceMetric
from clearance_nav.core.grid_map import Grid
from clearance_nav.core.jump_search import SearchConfig
from clearance_nav.path_planner.map_model import AgentPlan
from clearance_nav.path_planner.path_planner_core import PathPlanningCore


class PathPlanningService:
    """
    路径规划服务（中间层）

    生命周期大致是：

    1. 创建实例：pps = PathPlanningService(cfg)
    2. 编辑障碍：pps.toggle_cell(x, y) / pps.randomize() / pps.clear()
    3. 每帧调用：pps.replan_if_dirty()，拿到 pps.plans
    """

    def __init__(self, cfg: PlannerConfig) -> None:
        self.cfg = cfg
        width, height = cfg.grid.size
        self.grid = Grid(width, height, cfg.grid.max_radius)

        self.metric: DistanceMetric = cfg.clearance.metric
        self.jumping_enabled: bool = cfg.search.jumping_enabled
        self._agents: Dict[str, AgentConfig] = {a.name: a.model_copy() for a in cfg.agents}

        self._planner = PathPlanningCore(
            max_radius=cfg.grid.max_radius,
            open_set_kind=cfg.search.open_set,
        )
        self._rng = np.random.default_rng(cfg.obstacles.seed)

        self.plans: Dict[str, AgentPlan] = {}
        self._dirty = True

    # ------------------------------------------------------------------
    # 障碍编辑
    # ------------------------------------------------------------------
    def set_cell(self, x: int, y: int, blocked: bool) -> None:
        self.grid.set_blocked(x, y, blocked)
        self._dirty = True

    def toggle_cell(self, x: int, y: int) -> bool:
        value = self.grid.toggle_blocked(x, y)
        self._dirty = True
        return value

    def clear(self) -> None:
        self.grid.clear_obstacles()
        self._dirty = True

    def randomize(self, seed: Optional[int] = None) -> None:
        """按配置随机生成障碍；给定 seed 时使用新的随机数生成器"""
        if seed is not None:
            self._rng = np.random.default_rng(seed)
        obs = self.cfg.obstacles
        self.grid.randomize_obstacles(
            self._rng,
            count=obs.random_blocks,
            margin=obs.margin,
            min_half=obs.min_half_size,
            max_half=obs.max_half_size,
        )
        self._dirty = True

    # ------------------------------------------------------------------
    # 参数切换
    # ------------------------------------------------------------------
    def set_metric(self, metric: DistanceMetric) -> None:
        self.metric = DistanceMetric(metric)
        self._dirty = True

    def cycle_metric(self) -> DistanceMetric:
        self.set_metric(self.metric.next())
        logger.info(f"[PathPlanningService] 距离度量切换为 {self.metric.value}")
        return self.metric

    def set_jumping(self, enabled: bool) -> None:
        self.jumping_enabled = bool(enabled)
        self._dirty = True

    def toggle_jumping(self) -> bool:
        self.set_jumping(not self.jumping_enabled)
        return self.jumping_enabled

    def agent(self, name: str) -> AgentConfig:
        try:
            return self._agents[name]
        except KeyError:
            raise KeyError(f"未知单位: {name}") from None

    @property
    def agent_names(self) -> List[str]:
        return list(self._agents)

    def set_wall_factor(self, name: str, factor: int) -> None:
        self.agent(name).wall_factor = int(factor)
        self._dirty = True

    def cycle_wall_factor(self, name: str) -> int:
        """墙体偏好因子在 0..7 间循环"""
        agent = self.agent(name)
        self.set_wall_factor(name, (agent.wall_factor + 1) % WALL_FACTOR_CYCLE)
        return agent.wall_factor

    # ------------------------------------------------------------------
    # 规划
    # ------------------------------------------------------------------
    @property
    def dirty(self) -> bool:
        return self._dirty or self.grid.clearance_stale

    def replan(self) -> Dict[str, AgentPlan]:
        """重建间隙场并为所有单位重新规划"""
        self._planner.refresh_clearance(self.grid, self.metric, self.cfg.clearance.method)

        plans: Dict[str, AgentPlan] = {}
        for agent in self._agents.values():
            config = SearchConfig(
                start=agent.start,
                goal=agent.goal,
                unit_size=agent.unit_size,
                wall_factor=agent.wall_factor,
                jumping_enabled=self.jumping_enabled,
                stop_at_goal=self.cfg.search.stop_at_goal,
            )
            plans[agent.name] = self._planner.plan(self.grid, agent.name, config)

        self.plans = plans
        self._dirty = False
        return plans

    def replan_if_dirty(self) -> bool:
        """
        仅在输入变化后重新规划

        Returns:
            是否执行了重新规划
        """
        if not self.dirty:
            return False
        self.replan()
        return True

    def status_lines(self) -> List[str]:
        """状态文字：各单位路径长度、跳跃开关、度量、墙体偏好因子"""
        lengths = ", ".join(
            f"{name} path length: {plan.length:.2f}" for name, plan in self.plans.items()
        )
        lines = [
            lengths or "no plans yet",
            f"jumping enabled: {'yes' if self.jumping_enabled else 'no'}",
            f"clearance metric: {self.metric.value}",
        ]
        for agent in self._agents.values():
            lines.append(f"{agent.name} wall factor: {agent.wall_factor}, unit size: {agent.unit_size}")
        return lines
