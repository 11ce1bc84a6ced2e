import numpy as np
import pytest

from clearance_nav.common.exceptions import InvalidCoordinateError
from clearance_nav.core.grid_map import Grid


def test_new_grid_is_open_with_saturated_clearance():
    grid = Grid(8, 5, max_radius=10)
    assert grid.size == (8, 5)
    assert grid.cell_count == 40
    assert not grid.blocked.any()
    assert (grid.clearance == 10).all()
    assert grid.clearance_stale is False


def test_index_and_coord():
    grid = Grid(8, 5)
    assert grid.index(3, 2) == 2 * 8 + 3
    assert grid.coord(19) == (3, 2)
    with pytest.raises(InvalidCoordinateError):
        grid.index(8, 0)
    with pytest.raises(InvalidCoordinateError):
        grid.coord(40)


def test_out_of_range_access_is_a_value_error():
    grid = Grid(4, 4)
    with pytest.raises(ValueError):
        grid.is_blocked(-1, 0)
    with pytest.raises(InvalidCoordinateError):
        grid.get_clearance(0, 4)


def test_mutations_mark_clearance_stale():
    grid = Grid(6, 6)
    revision = grid.revision

    grid.set_blocked(2, 3, True)
    assert grid.is_blocked(2, 3)
    assert grid.clearance_stale
    assert grid.revision == revision + 1

    # setting the same value is not a change
    grid.set_blocked(2, 3, True)
    assert grid.revision == revision + 1

    assert grid.toggle_blocked(2, 3) is False
    assert not grid.is_blocked(2, 3)


def test_fill_rect_is_clipped():
    grid = Grid(6, 6)
    grid.fill_rect(0, 0, 1, True)
    assert grid.blocked[:2, :2].all()
    assert int(grid.blocked.sum()) == 4

    grid.clear_obstacles()
    assert not grid.blocked.any()


def test_randomize_is_reproducible():
    a = Grid(80, 45)
    b = Grid(80, 45)
    a.randomize_obstacles(np.random.default_rng(7))
    b.randomize_obstacles(np.random.default_rng(7))
    assert np.array_equal(a.blocked, b.blocked)
    assert a.blocked.any()
    # margin keeps blocks away from the border
    assert not a.blocked[:, :12].any()
    assert not a.blocked[:12, :].any()


def test_randomize_small_grid_stays_in_bounds():
    grid = Grid(5, 4)
    grid.randomize_obstacles(np.random.default_rng(0), count=20)
    assert grid.blocked.shape == (4, 5)


def test_from_blocked_requires_2d():
    with pytest.raises(ValueError):
        Grid.from_blocked(np.zeros(5))
    with pytest.raises(ValueError):
        Grid(0, 5)
