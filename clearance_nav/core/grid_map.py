#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
栅格地图模块

Grid 持有两张并行的单元格数组：
- blocked: 障碍标记（bool），由外部修改
- clearance: 到最近障碍的整数距离，上限为 max_radius

数组形状为 (H, W)，按 [y, x] 访问；扁平下标约定为 y * W + x。
"""

from typing import Optional, Tuple

import numpy as np
from loguru import logger

from clearance_nav.common.constants import (
    DEFAULT_MAX_RADIUS,
    RANDOM_BLOCK_COUNT,
    RANDOM_BLOCK_MARGIN,
    RANDOM_BLOCK_MIN_HALF,
    RANDOM_BLOCK_MAX_HALF,
)
from clearance_nav.common.exceptions import InvalidCoordinateError

GridCoord = Tuple[int, int]  # (x, y)


class Grid:
    """
    固定尺寸的栅格地图

    障碍发生变化后 clearance_stale 置为 True，直到间隙场被重建。

    示例:
        ```python
        grid = Grid(80, 45)
        grid.set_blocked(10, 10, True)
        rebuild_clearance(grid, DistanceMetric.EUCLIDEAN)
        ```
    """

    def __init__(self, width: int, height: int, max_radius: int = DEFAULT_MAX_RADIUS):
        if width <= 0 or height <= 0:
            raise ValueError(f"栅格尺寸必须大于0: ({width}, {height})")
        if max_radius <= 0:
            raise ValueError(f"max_radius必须大于0: {max_radius}")

        self.width = int(width)
        self.height = int(height)
        self.max_radius = int(max_radius)

        self.blocked = np.zeros((self.height, self.width), dtype=bool)
        self.clearance = np.full((self.height, self.width), self.max_radius, dtype=np.int32)

        # 每次障碍修改自增，供调用方判断是否需要重新规划
        self.revision = 0
        # 空地图的间隙场恰好是全 R，无需重建
        self.clearance_stale = False

    @classmethod
    def from_blocked(cls, blocked: np.ndarray, max_radius: int = DEFAULT_MAX_RADIUS) -> "Grid":
        """从 (H, W) 的 0/1 或 bool 数组构建栅格（间隙场需另行重建）"""
        arr = np.asarray(blocked)
        if arr.ndim != 2:
            raise ValueError(f"障碍数组必须是二维的: shape={arr.shape}")
        grid = cls(arr.shape[1], arr.shape[0], max_radius)
        grid.blocked[:, :] = arr != 0
        grid._mark_dirty()
        return grid

    # ------------------------------------------------------------------
    # 尺寸与下标
    # ------------------------------------------------------------------
    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def check_bounds(self, x: int, y: int) -> None:
        """越界时抛出 InvalidCoordinateError"""
        if not self.in_bounds(x, y):
            raise InvalidCoordinateError(
                f"坐标超出栅格范围: ({x}, {y}), grid_size=({self.width}, {self.height})"
            )

    def index(self, x: int, y: int) -> int:
        """扁平下标 y * W + x"""
        self.check_bounds(x, y)
        return y * self.width + x

    def coord(self, index: int) -> GridCoord:
        """扁平下标 -> (x, y)"""
        if not 0 <= index < self.cell_count:
            raise InvalidCoordinateError(f"下标超出范围: {index}, cell_count={self.cell_count}")
        return (index % self.width, index // self.width)

    # ------------------------------------------------------------------
    # 单元格读写
    # ------------------------------------------------------------------
    def is_blocked(self, x: int, y: int) -> bool:
        self.check_bounds(x, y)
        return bool(self.blocked[y, x])

    def get_clearance(self, x: int, y: int) -> int:
        self.check_bounds(x, y)
        return int(self.clearance[y, x])

    def set_blocked(self, x: int, y: int, value: bool = True) -> None:
        self.check_bounds(x, y)
        if bool(self.blocked[y, x]) == bool(value):
            return
        self.blocked[y, x] = bool(value)
        self._mark_dirty()

    def toggle_blocked(self, x: int, y: int) -> bool:
        """
        翻转单元格的障碍状态

        Returns:
            翻转后的状态（True=障碍）
        """
        self.check_bounds(x, y)
        new_value = not bool(self.blocked[y, x])
        self.blocked[y, x] = new_value
        self._mark_dirty()
        return new_value

    def fill_rect(self, cx: int, cy: int, half_size: int, value: bool = True) -> None:
        """以 (cx, cy) 为中心填充边长 2*half_size+1 的正方形，超出边界部分被裁剪"""
        x0 = max(0, cx - half_size)
        y0 = max(0, cy - half_size)
        x1 = min(self.width, cx + half_size + 1)
        y1 = min(self.height, cy + half_size + 1)
        if x0 >= x1 or y0 >= y1:
            return
        self.blocked[y0:y1, x0:x1] = bool(value)
        self._mark_dirty()

    def clear_obstacles(self) -> None:
        self.blocked[:, :] = False
        self._mark_dirty()

    def randomize_obstacles(
        self,
        rng: Optional[np.random.Generator] = None,
        count: int = RANDOM_BLOCK_COUNT,
        margin: int = RANDOM_BLOCK_MARGIN,
        min_half: int = RANDOM_BLOCK_MIN_HALF,
        max_half: int = RANDOM_BLOCK_MAX_HALF,
    ) -> None:
        """
        清空地图并随机放置若干正方形块

        每个块随机为障碍或空地，后放置的块会覆盖先放置的块。

        Args:
            rng: 随机数生成器，None 时新建一个
            count: 块数量
            margin: 块中心距离边界的最小距离（小地图上自动收缩）
            min_half: 最小半边长
            max_half: 最大半边长
        """
        if min_half > max_half:
            raise ValueError(f"min_half不能大于max_half: {min_half} > {max_half}")
        if rng is None:
            rng = np.random.default_rng()

        self.blocked[:, :] = False
        mx = min(margin, (self.width - 1) // 2)
        my = min(margin, (self.height - 1) // 2)

        for _ in range(count):
            x = min(int(rng.integers(mx, self.width - mx, endpoint=True)), self.width - 1)
            y = min(int(rng.integers(my, self.height - my, endpoint=True)), self.height - 1)
            s = int(rng.integers(min_half, max_half, endpoint=True))
            v = bool(rng.integers(0, 1, endpoint=True))
            x0, y0 = max(0, x - s), max(0, y - s)
            self.blocked[y0:y + s + 1, x0:x + s + 1] = v

        self._mark_dirty()
        logger.debug(
            f"[Grid] 随机障碍生成完成: count={count}, blocked_cells={int(self.blocked.sum())}"
        )

    def _mark_dirty(self) -> None:
        self.revision += 1
        self.clearance_stale = True

    def __repr__(self) -> str:
        return (
            f"Grid(width={self.width}, height={self.height}, max_radius={self.max_radius}, "
            f"blocked={int(self.blocked.sum())})"
        )
