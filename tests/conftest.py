import numpy as np
import pytest

from clearance_nav.core.clearance_field import rebuild_clearance
from clearance_nav.core.distance_metric import DistanceMetric
from clearance_nav.core.grid_map import Grid
from clearance_nav.core.jump_search import WeightedJumpSearch
from clearance_nav.core.neighbor_offsets import NeighborTable


def make_wall_blocked():
    # 30x20, wall at x=15 with a 1-cell gap at y=4 and a 5-cell gap at y=12..16
    blocked = np.zeros((20, 30), dtype=bool)
    blocked[:, 15] = True
    blocked[4, 15] = False
    blocked[12:17, 15] = False
    return blocked


def make_corridor_blocked():
    # 10x3, rows 0 and 2 blocked, row 1 is a 1-cell corridor
    blocked = np.zeros((3, 10), dtype=bool)
    blocked[0, :] = True
    blocked[2, :] = True
    return blocked


def prepared_grid(blocked, metric=DistanceMetric.EUCLIDEAN, max_radius=10):
    grid = Grid.from_blocked(blocked, max_radius)
    rebuild_clearance(grid, metric)
    return grid


@pytest.fixture
def table():
    return NeighborTable.build(10)


@pytest.fixture
def search(table):
    return WeightedJumpSearch(table)


@pytest.fixture
def open_grid():
    return prepared_grid(np.zeros((10, 10), dtype=bool))


@pytest.fixture
def wall_grid():
    return prepared_grid(make_wall_blocked())


@pytest.fixture
def corridor_grid():
    return prepared_grid(make_corridor_blocked())
