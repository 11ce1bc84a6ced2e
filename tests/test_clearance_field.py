import numpy as np
import pytest

from clearance_nav.core.clearance_field import build_clearance_field, rebuild_clearance
from clearance_nav.core.distance_metric import DistanceMetric, metric_distance
from clearance_nav.core.grid_map import Grid

ALL_METRICS = list(DistanceMetric)


def brute_force_clearance(blocked, metric, max_radius):
    h, w = blocked.shape
    expected = np.full((h, w), max_radius, dtype=np.int32)
    cells = np.argwhere(blocked)
    for y in range(h):
        for x in range(w):
            for by, bx in cells:
                d = metric_distance(int(bx) - x, int(by) - y, metric)
                expected[y, x] = min(expected[y, x], d, max_radius)
    return expected


def random_blocked(seed, shape=(14, 18), density=0.08):
    rng = np.random.default_rng(seed)
    return rng.random(shape) < density


def test_empty_grid_is_saturated():
    blocked = np.zeros((6, 9), dtype=bool)
    for method in ("splat", "transform"):
        clearance = build_clearance_field(blocked, DistanceMetric.EUCLIDEAN, 10, method)
        assert (clearance == 10).all()


def test_single_obstacle_euclidean():
    blocked = np.zeros((20, 20), dtype=bool)
    blocked[5, 5] = True
    clearance = build_clearance_field(blocked, DistanceMetric.EUCLIDEAN, 10)
    assert clearance[5, 5] == 0
    assert clearance[5, 6] == 1
    assert clearance[6, 6] == 2
    assert clearance[6, 7] == 3
    # exactly R away is not below the cap
    assert clearance[5, 15] == 10
    assert clearance[19, 19] == 10


def test_single_obstacle_other_metrics():
    blocked = np.zeros((12, 12), dtype=bool)
    blocked[5, 5] = True
    chebyshev = build_clearance_field(blocked, DistanceMetric.CHEBYSHEV, 10)
    manhattan = build_clearance_field(blocked, DistanceMetric.MANHATTAN, 10)
    assert chebyshev[8, 8] == 3
    assert manhattan[6, 7] == 3
    assert manhattan[0, 0] == 10


@pytest.mark.parametrize("metric", ALL_METRICS)
@pytest.mark.parametrize("seed", [1, 2, 3])
def test_splat_matches_brute_force(metric, seed):
    blocked = random_blocked(seed)
    clearance = build_clearance_field(blocked, metric, 6, "splat")
    assert np.array_equal(clearance, brute_force_clearance(blocked, metric, 6))


@pytest.mark.parametrize("metric", ALL_METRICS)
@pytest.mark.parametrize("seed", [4, 5])
def test_transform_matches_splat(metric, seed):
    blocked = random_blocked(seed, shape=(30, 40), density=0.03)
    splat = build_clearance_field(blocked, metric, 10, "splat")
    transform = build_clearance_field(blocked, metric, 10, "transform")
    assert np.array_equal(splat, transform)


def test_adding_obstacle_never_increases_clearance():
    blocked = random_blocked(11, shape=(20, 25), density=0.05)
    before = build_clearance_field(blocked, DistanceMetric.EUCLIDEAN, 10)
    rng = np.random.default_rng(12)
    for _ in range(5):
        y, x = int(rng.integers(0, 20)), int(rng.integers(0, 25))
        blocked[y, x] = True
        after = build_clearance_field(blocked, DistanceMetric.EUCLIDEAN, 10)
        assert (after <= before).all()
        before = after


def test_values_are_bounded():
    blocked = random_blocked(9)
    clearance = build_clearance_field(blocked, DistanceMetric.MANHATTAN, 4)
    assert clearance.min() >= 0
    assert clearance.max() <= 4
    assert (clearance[blocked] == 0).all()


def test_invalid_arguments():
    with pytest.raises(ValueError):
        build_clearance_field(np.zeros((3, 3)), DistanceMetric.EUCLIDEAN, 10, "exact")
    with pytest.raises(ValueError):
        build_clearance_field(np.zeros(3), DistanceMetric.EUCLIDEAN, 10)
    with pytest.raises(ValueError):
        build_clearance_field(np.zeros((3, 3)), DistanceMetric.EUCLIDEAN, 0)


def test_rebuild_clearance_updates_grid():
    grid = Grid(10, 10)
    grid.set_blocked(0, 0, True)
    assert grid.clearance_stale

    rebuild_clearance(grid, DistanceMetric.CHEBYSHEV)
    assert not grid.clearance_stale
    assert grid.get_clearance(0, 0) == 0
    assert grid.get_clearance(3, 2) == 3
