#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
间隙场构建模块

对每个单元格计算到最近障碍的整数距离，上限为 max_radius：
- splat: 对每个障碍格在 [x-R, x+R] x [y-R, y+R] 窗口内取最小值（暴力法）
- transform: 使用 OpenCV 距离变换，再向上取整并截断到 R

两种方法对外契约一致：clearance = min(R, min over blocked of metric)。
"""

import time

import cv2
import numpy as np
from loguru import logger

from clearance_nav.core.distance_metric import DistanceMetric, distance_kernel
from clearance_nav.core.grid_map import Grid

CLEARANCE_METHODS = ("splat", "transform")

_CV_DIST_TYPES = {
    DistanceMetric.EUCLIDEAN: (cv2.DIST_L2, cv2.DIST_MASK_PRECISE),
    DistanceMetric.CHEBYSHEV: (cv2.DIST_C, 3),
    DistanceMetric.MANHATTAN: (cv2.DIST_L1, 3),
}


def _splat(blocked: np.ndarray, metric: DistanceMetric, max_radius: int) -> np.ndarray:
    h, w = blocked.shape
    r = max_radius
    clearance = np.full((h, w), r, dtype=np.int32)

    # 只有 d < R 的位置参与更新
    kernel = distance_kernel(r, metric)
    kernel = np.where(kernel < r, kernel, r).astype(np.int32)

    for y, x in np.argwhere(blocked):
        x0, x1 = max(0, x - r), min(w - 1, x + r)
        y0, y1 = max(0, y - r), min(h - 1, y + r)
        window = clearance[y0:y1 + 1, x0:x1 + 1]
        sub = kernel[y0 - y + r:y1 - y + r + 1, x0 - x + r:x1 - x + r + 1]
        np.minimum(window, sub, out=window)

    clearance[blocked] = 0
    return clearance


def _transform(blocked: np.ndarray, metric: DistanceMetric, max_radius: int) -> np.ndarray:
    h, w = blocked.shape
    if not blocked.any():
        return np.full((h, w), max_radius, dtype=np.int32)

    dist_type, mask_size = _CV_DIST_TYPES[metric]
    free = (~blocked).astype(np.uint8)
    dist = cv2.distanceTransform(free, dist_type, mask_size)

    # 浮点误差远小于相邻整数平方根的间隔，减去一个小量再取整
    clearance = np.ceil(dist - 1e-3).astype(np.int32)
    np.clip(clearance, 0, max_radius, out=clearance)
    clearance[blocked] = 0
    return clearance


def build_clearance_field(
    blocked: np.ndarray,
    metric: DistanceMetric = DistanceMetric.EUCLIDEAN,
    max_radius: int = 10,
    method: str = "splat",
) -> np.ndarray:
    """
    根据障碍图构建间隙场

    Args:
        blocked: (H, W) 障碍图，非零即障碍
        metric: 距离度量
        max_radius: 间隙上限 R
        method: 'splat' 或 'transform'

    Returns:
        (H, W) int32 间隙场，取值范围 [0, R]

    Raises:
        ValueError: 输入参数无效
    """
    blocked = np.asarray(blocked) != 0
    if blocked.ndim != 2:
        raise ValueError(f"障碍图必须是二维的: shape={blocked.shape}")
    if max_radius <= 0:
        raise ValueError(f"max_radius必须大于0: {max_radius}")
    metric = DistanceMetric(metric)

    if method == "splat":
        return _splat(blocked, metric, max_radius)
    if method == "transform":
        return _transform(blocked, metric, max_radius)
    raise ValueError(f"间隙场构建方法必须是 {CLEARANCE_METHODS} 之一: {method}")


def rebuild_clearance(
    grid: Grid,
    metric: DistanceMetric = DistanceMetric.EUCLIDEAN,
    method: str = "splat",
) -> np.ndarray:
    """重建 grid 的间隙场（原地写入），并清除过期标记"""
    t0 = time.perf_counter()
    grid.clearance[:, :] = build_clearance_field(grid.blocked, metric, grid.max_radius, method)
    grid.clearance_stale = False

    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    logger.debug(
        f"[ClearanceField] 间隙场重建完成: metric={DistanceMetric(metric).value}, method={method}, "
        f"blocked={int(grid.blocked.sum())}, 耗时={elapsed_ms:.2f}ms"
    )
    return grid.clearance
