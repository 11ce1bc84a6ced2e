#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
常量定义：集中管理所有魔法数字和配置常量
"""

# =============================
# 栅格与间隙场相关常量
# =============================

# 间隙场最大半径（超过该距离的格子统一记为该值）
DEFAULT_MAX_RADIUS: int = 10

# 平方根查表覆盖的偏移范围 |dx|,|dy| <= 15
SQRT_TABLE_SPAN: int = 15

# 默认栅格尺寸 (width, height)
DEFAULT_GRID_SIZE: tuple[int, int] = (80, 45)

# =============================
# 搜索相关常量
# =============================

# score == 0 表示本次搜索未访问
SCORE_UNVISITED: int = 0

# 起点的初始 score
SCORE_START: int = 1

# 无前驱的哨兵坐标
NO_PREDECESSOR: tuple[int, int] = (-1, -1)

# 墙体偏好项的除数
WALL_FACTOR_DIVISOR: int = 6

# 墙体偏好因子循环上限（原演示中按 Q 键在 0..7 间循环）
WALL_FACTOR_CYCLE: int = 8

# =============================
# 随机障碍生成常量
# =============================

RANDOM_BLOCK_COUNT: int = 40
RANDOM_BLOCK_MARGIN: int = 15
RANDOM_BLOCK_MIN_HALF: int = 1
RANDOM_BLOCK_MAX_HALF: int = 2

# =============================
# 渲染相关常量
# =============================

DEFAULT_CELL_SIZE: int = 10
