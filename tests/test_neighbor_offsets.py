import pytest

from clearance_nav.core.distance_metric import euclidean_distance
from clearance_nav.core.neighbor_offsets import NeighborOffset, NeighborTable


def test_table_is_exhaustive():
    table = NeighborTable.build(10)
    expected = {
        (dx, dy)
        for dx in range(-10, 11)
        for dy in range(-10, 11)
        if 1 <= euclidean_distance(dx, dy) <= 10
    }
    assert {(o.dx, o.dy) for o in table} == expected
    assert len(table) == len(expected) == 316


def test_offsets_carry_euclidean_distance():
    table = NeighborTable.build(10)
    for offset in table:
        assert offset.distance == euclidean_distance(offset.dx, offset.dy)
        assert 1 <= offset.distance <= 10
    assert NeighborOffset(10, 0, 10) in table.offsets
    assert all((o.dx, o.dy) != (8, 7) for o in table)
    assert table.max_distance == 10


def test_within_limits_jump_length():
    table = NeighborTable.build(10)
    unit_steps = list(table.within(1))
    # diagonals round up to 2
    assert sorted((o.dx, o.dy) for o in unit_steps) == [(-1, 0), (0, -1), (0, 1), (1, 0)]
    assert all(o.distance <= 3 for o in table.within(3))
    assert len(list(table.within(10))) == len(table)


def test_invalid_radius():
    with pytest.raises(ValueError):
        NeighborTable.build(0)
