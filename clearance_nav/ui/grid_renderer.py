#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
栅格渲染：把障碍、间隙场、搜索 score 图和路径画成 BGR 图像或 ASCII 文本
"""

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import cv2
import numpy as np

from clearance_nav.common.constants import DEFAULT_CELL_SIZE
from clearance_nav.core.grid_map import Grid, GridCoord
from clearance_nav.core.search_context import SearchContext

Color = Tuple[int, int, int]  # BGR

BACKGROUND_COLOR: Color = (150, 200, 170)
SHADE_COLOR: Color = (32, 32, 32)
GRID_LINE_COLOR: Color = (200, 200, 200)
AGENT_COLORS: List[Color] = [(0, 0, 230), (230, 120, 0), (0, 160, 0), (160, 0, 160)]


def clearance_shade(clearance: np.ndarray) -> np.ndarray:
    """间隙越大越亮：alpha = 230 - clearance * 20"""
    return np.clip(230 - np.asarray(clearance, dtype=np.int32) * 20, 0, 255).astype(np.uint8)


def score_shade(score: np.ndarray) -> np.ndarray:
    """已访问格子的亮度 score % 64 * 4，未访问为 0"""
    score = np.asarray(score, dtype=np.int64)
    return np.where(score > 0, score % 64 * 4, 0).astype(np.uint8)


def _upscale(cells: np.ndarray, cell_size: int) -> np.ndarray:
    return np.repeat(np.repeat(cells, cell_size, axis=0), cell_size, axis=1)


def _blend(image: np.ndarray, color, alpha: np.ndarray) -> None:
    a = alpha.astype(np.float32)[..., None] / 255.0
    overlay = np.broadcast_to(np.asarray(color, dtype=np.float32), image.shape)
    image[:, :, :] = (image.astype(np.float32) * (1.0 - a) + overlay * a).astype(np.uint8)


class GridRenderer:
    """栅格渲染器"""

    def __init__(self, cell_size: int = DEFAULT_CELL_SIZE, draw_grid_lines: bool = True):
        if cell_size <= 0:
            raise ValueError(f"单元格像素尺寸必须大于0: {cell_size}")
        self.cell_size = cell_size
        self.draw_grid_lines = draw_grid_lines

    def render(
        self,
        grid: Grid,
        paths: Optional[Mapping[str, Sequence[GridCoord]]] = None,
        score_context: Optional[SearchContext] = None,
        agent_positions: Optional[Mapping[str, Tuple[float, float]]] = None,
    ) -> np.ndarray:
        """
        渲染一帧

        Args:
            grid: 栅格
            paths: 单位名 -> 路径
            score_context: 需要可视化 score 图的搜索上下文
            agent_positions: 单位名 -> 当前插值位置（栅格坐标，可为小数）

        Returns:
            BGR 图像，尺寸 (H*cell_size, W*cell_size, 3)
        """
        cs = self.cell_size
        image = np.empty((grid.height * cs, grid.width * cs, 3), dtype=np.uint8)
        image[:, :] = BACKGROUND_COLOR

        image[_upscale(grid.blocked, cs)] = (0, 0, 0)
        _blend(image, SHADE_COLOR, _upscale(clearance_shade(grid.clearance), cs))

        if score_context is not None:
            shade = score_shade(score_context.score)
            visited = _upscale(score_context.score > 0, cs)
            color_layer = np.zeros_like(image)
            color_layer[:, :, 1] = _upscale(shade, cs)
            color_layer[:, :, 2] = _upscale(shade, cs)
            image[visited] = (image[visited].astype(np.uint16) // 2 + color_layer[visited] // 2).astype(np.uint8)

        if self.draw_grid_lines:
            image[::cs, :] = GRID_LINE_COLOR
            image[:, ::cs] = GRID_LINE_COLOR

        colors = self._agent_colors(list(paths or {}) + list(agent_positions or {}))
        for name, path in (paths or {}).items():
            self._draw_path(image, path, colors[name])
        for name, pos in (agent_positions or {}).items():
            center = (int(pos[0] * cs), int(pos[1] * cs))
            cv2.circle(image, center, max(2, cs // 2 + 2), colors[name], -1)

        return image

    def _draw_path(self, image: np.ndarray, path: Sequence[GridCoord], color: Color) -> None:
        cs = self.cell_size
        half = cs // 2
        for x, y in path:
            cv2.rectangle(image, (x * cs + 1, y * cs + 1), (x * cs + cs - 2, y * cs + cs - 2), color, -1)
        for (x0, y0), (x1, y1) in zip(path, path[1:]):
            cv2.line(image, (x0 * cs + half, y0 * cs + half), (x1 * cs + half, y1 * cs + half), color, 1)

    @staticmethod
    def _agent_colors(names: List[str]) -> Dict[str, Color]:
        colors: Dict[str, Color] = {}
        for name in names:
            if name not in colors:
                colors[name] = AGENT_COLORS[len(colors) % len(AGENT_COLORS)]
        return colors


def render_ascii(
    grid: Grid,
    path: Sequence[GridCoord] = (),
    start: Optional[GridCoord] = None,
    goal: Optional[GridCoord] = None,
) -> str:
    """
    ASCII 地图：'#' = 障碍, '.' = 空地, '*' = 路径, 'S' = 起点, 'G' = 终点
    """
    vis = np.full((grid.height, grid.width), '.', dtype='<U1')
    vis[grid.blocked] = '#'
    for x, y in path:
        vis[y, x] = '*'
    if path:
        start = start or path[0]
        goal = goal or path[-1]
    if start is not None:
        vis[start[1], start[0]] = 'S'
    if goal is not None:
        vis[goal[1], goal[0]] = 'G'
    return "\n".join("".join(row) for row in vis)
