import math

import pytest

from clearance_nav.core.distance_metric import (
    DistanceMetric,
    ceil_sqrt,
    distance_kernel,
    euclidean_distance,
    metric_distance,
)


def test_ceil_sqrt_matches_float_definition():
    for n in range(0, 500):
        assert ceil_sqrt(n) == math.ceil(math.sqrt(n))


def test_euclidean_uses_ceil():
    assert euclidean_distance(3, 4) == 5
    assert euclidean_distance(1, 1) == 2
    assert euclidean_distance(0, 0) == 0
    assert euclidean_distance(-15, 15) == 22


def test_euclidean_outside_lookup_table():
    assert euclidean_distance(20, 0) == 20
    assert euclidean_distance(16, 16) == math.ceil(math.sqrt(512))


def test_chebyshev_and_manhattan():
    assert metric_distance(-3, 2, DistanceMetric.CHEBYSHEV) == 3
    assert metric_distance(-3, 2, DistanceMetric.MANHATTAN) == 5
    assert metric_distance(-3, 2, "euclidean") == 4


def test_metric_cycle_order():
    assert DistanceMetric.EUCLIDEAN.next() is DistanceMetric.CHEBYSHEV
    assert DistanceMetric.CHEBYSHEV.next() is DistanceMetric.MANHATTAN
    assert DistanceMetric.MANHATTAN.next() is DistanceMetric.EUCLIDEAN


def test_distance_kernel():
    kernel = distance_kernel(2, DistanceMetric.EUCLIDEAN)
    assert kernel.shape == (5, 5)
    assert kernel[2, 2] == 0
    assert kernel[0, 0] == 3
    assert kernel[2, 4] == 2

    manhattan = distance_kernel(2, DistanceMetric.MANHATTAN)
    assert manhattan[0, 0] == 4

    with pytest.raises(ValueError):
        distance_kernel(-1)
