#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
间隙感知栅格寻路模块

提供间隙场（clearance field）构建与带跳跃步长的加权搜索。
"""

from .common.exceptions import ClearanceNavError, InvalidCoordinateError, ConfigurationError
from .core.distance_metric import DistanceMetric
from .core.grid_map import Grid
from .core.clearance_field import build_clearance_field, rebuild_clearance
from .core.neighbor_offsets import NeighborOffset, NeighborTable
from .core.jump_search import SearchConfig, SearchOutcome, WeightedJumpSearch
from .core.path_reconstructor import reconstruct_path
from .core.path_metrics import path_length, position_at_distance, PathWalker

__all__ = [
    'ClearanceNavError',
    'InvalidCoordinateError',
    'ConfigurationError',
    'DistanceMetric',
    'Grid',
    'build_clearance_field',
    'rebuild_clearance',
    'NeighborOffset',
    'NeighborTable',
    'SearchConfig',
    'SearchOutcome',
    'WeightedJumpSearch',
    'reconstruct_path',
    'path_length',
    'position_at_distance',
    'PathWalker',
]
