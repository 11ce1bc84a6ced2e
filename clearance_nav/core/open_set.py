#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
开放集（优先队列）抽象

- LinearScanOpenSet: 线性扫描取最小值，同分时取最早入队者
- HeapOpenSet: 二叉堆，同分时按入队顺序

两者都有容量上限，超过上限时 push 返回 False 并计入 dropped。
"""

import heapq
from abc import ABC, abstractmethod
from typing import List, Tuple

from clearance_nav.core.search_context import SearchNode


class OpenSet(ABC):
    """开放集接口"""

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"开放集容量必须大于0: {capacity}")
        self.capacity = capacity
        self.dropped = 0

    def push(self, node: SearchNode) -> bool:
        """
        入队

        Returns:
            是否入队成功，容量已满时返回 False
        """
        if len(self) >= self.capacity:
            self.dropped += 1
            return False
        self._push(node)
        return True

    @abstractmethod
    def _push(self, node: SearchNode) -> None:
        pass

    @abstractmethod
    def pop(self) -> SearchNode:
        """弹出 score 最小的节点，队列为空时抛出 IndexError"""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def __bool__(self) -> bool:
        return len(self) > 0


class LinearScanOpenSet(OpenSet):

    def __init__(self, capacity: int):
        super().__init__(capacity)
        self._items: List[SearchNode] = []

    def _push(self, node: SearchNode) -> None:
        self._items.append(node)

    def pop(self) -> SearchNode:
        if not self._items:
            raise IndexError("pop from empty open set")
        lowest = 0
        for i in range(1, len(self._items)):
            if self._items[i].score < self._items[lowest].score:
                lowest = i
        return self._items.pop(lowest)

    def __len__(self) -> int:
        return len(self._items)


class HeapOpenSet(OpenSet):

    def __init__(self, capacity: int):
        super().__init__(capacity)
        self._heap: List[Tuple[int, int, SearchNode]] = []
        self._counter = 0

    def _push(self, node: SearchNode) -> None:
        heapq.heappush(self._heap, (node.score, self._counter, node))
        self._counter += 1

    def pop(self) -> SearchNode:
        if not self._heap:
            raise IndexError("pop from empty open set")
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)


OPEN_SET_KINDS = {
    "linear": LinearScanOpenSet,
    "heap": HeapOpenSet,
}


def create_open_set(kind: str, capacity: int) -> OpenSet:
    try:
        cls = OPEN_SET_KINDS[kind]
    except KeyError:
        raise ValueError(f"开放集类型必须是 {tuple(OPEN_SET_KINDS)} 之一: {kind}") from None
    return cls(capacity)
