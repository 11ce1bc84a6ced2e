#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
邻居偏移表

搜索时候选的跳跃方向：所有满足 1 <= ceil(sqrt(dx^2+dy^2)) <= R 的 (dx, dy)。
跳跃形状始终是欧氏的，与间隙场所用的度量无关。
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

from clearance_nav.common.constants import DEFAULT_MAX_RADIUS
from clearance_nav.core.distance_metric import euclidean_distance


@dataclass(frozen=True)
class NeighborOffset:
    dx: int
    dy: int
    distance: int


class NeighborTable:
    """不可变的邻居偏移表，按距离升序排列"""

    def __init__(self, offsets: Tuple[NeighborOffset, ...], max_radius: int):
        self._offsets = tuple(sorted(offsets, key=lambda o: o.distance))
        self.max_radius = max_radius

    @classmethod
    def build(cls, max_radius: int = DEFAULT_MAX_RADIUS) -> "NeighborTable":
        if max_radius <= 0:
            raise ValueError(f"max_radius必须大于0: {max_radius}")

        offsets = []
        for dx in range(-max_radius, max_radius + 1):
            for dy in range(-max_radius, max_radius + 1):
                d = euclidean_distance(dx, dy)
                if 1 <= d <= max_radius:
                    offsets.append(NeighborOffset(dx, dy, d))

        return cls(tuple(offsets), max_radius)

    @property
    def offsets(self) -> Tuple[NeighborOffset, ...]:
        return self._offsets

    @property
    def max_distance(self) -> int:
        return self._offsets[-1].distance if self._offsets else 0

    def within(self, max_jump: int) -> Iterator[NeighborOffset]:
        """遍历距离不超过 max_jump 的偏移"""
        for offset in self._offsets:
            if offset.distance > max_jump:
                break
            yield offset

    def __iter__(self) -> Iterator[NeighborOffset]:
        return iter(self._offsets)

    def __len__(self) -> int:
        return len(self._offsets)

    def __repr__(self) -> str:
        return f"NeighborTable(max_radius={self.max_radius}, count={len(self._offsets)})"
