#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
搜索上下文：每次搜索独立持有的 score 图与前驱图

score == 0 表示本次未访问；score >= 1 表示已访问且累计代价为 score。
"""

from dataclasses import dataclass

import numpy as np

from clearance_nav.common.constants import NO_PREDECESSOR, SCORE_UNVISITED


@dataclass(frozen=True)
class SearchNode:
    x: int
    y: int
    from_x: int
    from_y: int
    score: int

    @property
    def has_predecessor(self) -> bool:
        return (self.from_x, self.from_y) != NO_PREDECESSOR


class SearchContext:
    """
    一次搜索的全图状态

    由搜索在入口处创建（或 reset），搜索结束后供路径重建和可视化只读使用。
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.score = np.zeros((height, width), dtype=np.int64)
        self.from_x = np.full((height, width), NO_PREDECESSOR[0], dtype=np.int32)
        self.from_y = np.full((height, width), NO_PREDECESSOR[1], dtype=np.int32)

    def reset(self) -> None:
        self.score.fill(SCORE_UNVISITED)
        self.from_x.fill(NO_PREDECESSOR[0])
        self.from_y.fill(NO_PREDECESSOR[1])

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def visit(self, x: int, y: int, from_x: int, from_y: int, score: int) -> SearchNode:
        self.score[y, x] = score
        self.from_x[y, x] = from_x
        self.from_y[y, x] = from_y
        return SearchNode(x, y, from_x, from_y, score)

    def node(self, x: int, y: int) -> SearchNode:
        return SearchNode(x, y, int(self.from_x[y, x]), int(self.from_y[y, x]), int(self.score[y, x]))

    def score_at(self, x: int, y: int) -> int:
        return int(self.score[y, x])

    def is_visited(self, x: int, y: int) -> bool:
        return self.score[y, x] != SCORE_UNVISITED

    @property
    def max_score(self) -> int:
        return int(self.score.max()) if self.score.size else 0

    @property
    def visited_count(self) -> int:
        return int(np.count_nonzero(self.score))
