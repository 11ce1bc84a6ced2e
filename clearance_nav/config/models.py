#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
寻路配置模型

使用Pydantic定义类型安全的配置模型，所有字段都有默认值，
默认值复现原演示：80x45 栅格，小老鼠与大猫从 (5, 25) 走到 (75, 25)。
"""

from typing import List, Optional, Tuple
from pydantic import BaseModel, Field, field_validator, model_validator

from clearance_nav.common.constants import (
    DEFAULT_CELL_SIZE,
    DEFAULT_GRID_SIZE,
    DEFAULT_MAX_RADIUS,
    RANDOM_BLOCK_COUNT,
    RANDOM_BLOCK_MARGIN,
    RANDOM_BLOCK_MAX_HALF,
    RANDOM_BLOCK_MIN_HALF,
)
from clearance_nav.core.clearance_field import CLEARANCE_METHODS
from clearance_nav.core.distance_metric import DistanceMetric
from clearance_nav.core.open_set import OPEN_SET_KINDS


class GridConfig(BaseModel):
    """栅格配置"""
    size: Tuple[int, int] = Field(DEFAULT_GRID_SIZE, description="栅格尺寸 (width, height)")
    max_radius: int = Field(DEFAULT_MAX_RADIUS, description="间隙场上限 R")

    @field_validator('size')
    @classmethod
    def validate_size(cls, v: Tuple[int, int]) -> Tuple[int, int]:
        """验证栅格尺寸"""
        width, height = v
        if width <= 0 or height <= 0:
            raise ValueError(f"栅格尺寸必须大于0: {v}")
        return v

    @field_validator('max_radius')
    @classmethod
    def validate_max_radius(cls, v: int) -> int:
        """验证间隙上限"""
        if v <= 0:
            raise ValueError(f"间隙上限必须大于0: {v}")
        return v


class ClearanceConfig(BaseModel):
    """间隙场配置"""
    metric: DistanceMetric = Field(DistanceMetric.EUCLIDEAN, description="距离度量: euclidean / chebyshev / manhattan")
    method: str = Field("splat", description="构建方法: 'splat' 或 'transform'")

    @field_validator('method')
    @classmethod
    def validate_method(cls, v: str) -> str:
        """验证构建方法"""
        if v not in CLEARANCE_METHODS:
            raise ValueError(f"构建方法必须是 {CLEARANCE_METHODS} 之一: {v}")
        return v


class SearchSettings(BaseModel):
    """搜索配置"""
    jumping_enabled: bool = Field(True, description="是否允许跳跃（关闭时只走四个正交方向的单步，对角步长向上取整为 2）")
    open_set: str = Field("linear", description="开放集实现: 'linear' 或 'heap'")
    stop_at_goal: bool = Field(False, description="终点出队后是否提前结束")

    @field_validator('open_set')
    @classmethod
    def validate_open_set(cls, v: str) -> str:
        """验证开放集实现"""
        if v not in OPEN_SET_KINDS:
            raise ValueError(f"开放集实现必须是 {tuple(OPEN_SET_KINDS)} 之一: {v}")
        return v


class AgentConfig(BaseModel):
    """寻路单位配置"""
    name: str = Field(..., description="单位名称")
    start: Tuple[int, int] = Field(..., description="起点 (x, y)")
    goal: Tuple[int, int] = Field(..., description="终点 (x, y)")
    unit_size: int = Field(1, description="单位尺寸（通行所需的最小间隙）")
    wall_factor: int = Field(0, description="墙体偏好因子（有符号）：正值贴墙，负值偏好开阔区域，0 为纯最短路")
    speed: float = Field(3.0, description="动画行走速度（格/秒）")

    @field_validator('unit_size')
    @classmethod
    def validate_unit_size(cls, v: int) -> int:
        """验证单位尺寸"""
        if v < 1:
            raise ValueError(f"单位尺寸必须为正整数: {v}")
        return v

    @field_validator('speed')
    @classmethod
    def validate_speed(cls, v: float) -> float:
        """验证行走速度"""
        if v < 0:
            raise ValueError(f"行走速度不能为负数: {v}")
        return v


class ObstacleConfig(BaseModel):
    """随机障碍配置"""
    random_blocks: int = Field(RANDOM_BLOCK_COUNT, description="随机块数量")
    margin: int = Field(RANDOM_BLOCK_MARGIN, description="块中心距边界的最小距离")
    min_half_size: int = Field(RANDOM_BLOCK_MIN_HALF, description="最小半边长")
    max_half_size: int = Field(RANDOM_BLOCK_MAX_HALF, description="最大半边长")
    seed: Optional[int] = Field(None, description="随机种子（None 为不固定）")

    @field_validator('random_blocks', 'margin', 'min_half_size', 'max_half_size')
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """验证非负整数"""
        if v < 0:
            raise ValueError(f"值不能为负数: {v}")
        return v

    @model_validator(mode='after')
    def validate_half_sizes(self) -> "ObstacleConfig":
        if self.min_half_size > self.max_half_size:
            raise ValueError(
                f"min_half_size不能大于max_half_size: {self.min_half_size} > {self.max_half_size}"
            )
        return self


class RenderConfig(BaseModel):
    """渲染配置"""
    cell_size: int = Field(DEFAULT_CELL_SIZE, description="单元格像素尺寸")

    @field_validator('cell_size')
    @classmethod
    def validate_cell_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"单元格像素尺寸必须大于0: {v}")
        return v


class LoggingConfig(BaseModel):
    """日志配置"""
    level: str = Field("INFO", description="日志级别")
    log_dir: Optional[str] = Field(None, description="日志目录（None 为只输出到控制台）")
    retention: str = Field("7 days", description="日志文件保留时长（loguru retention 格式）")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"未知的日志级别: {v}")
        return level


def _default_agents() -> List[AgentConfig]:
    return [
        AgentConfig(name="rat", start=(5, 25), goal=(75, 25), unit_size=1, wall_factor=2),
        AgentConfig(name="cat", start=(5, 25), goal=(75, 25), unit_size=2, wall_factor=0),
    ]


class PlannerConfig(BaseModel):
    """寻路主配置"""
    grid: GridConfig = Field(default_factory=GridConfig, description="栅格配置")
    clearance: ClearanceConfig = Field(default_factory=ClearanceConfig, description="间隙场配置")
    search: SearchSettings = Field(default_factory=SearchSettings, description="搜索配置")
    agents: List[AgentConfig] = Field(default_factory=_default_agents, description="寻路单位列表")
    obstacles: ObstacleConfig = Field(default_factory=ObstacleConfig, description="随机障碍配置")
    render: RenderConfig = Field(default_factory=RenderConfig, description="渲染配置")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="日志配置")

    @model_validator(mode='after')
    def validate_agents(self) -> "PlannerConfig":
        """验证单位起终点在栅格内且名称唯一"""
        width, height = self.grid.size
        names = set()
        for agent in self.agents:
            if agent.name in names:
                raise ValueError(f"单位名称重复: {agent.name}")
            names.add(agent.name)
            for label, (x, y) in (("start", agent.start), ("goal", agent.goal)):
                if not (0 <= x < width and 0 <= y < height):
                    raise ValueError(
                        f"单位 {agent.name} 的 {label}={(x, y)} 超出栅格范围 ({width}, {height})"
                    )
        return self
