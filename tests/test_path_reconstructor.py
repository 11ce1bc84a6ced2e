from clearance_nav.core.path_reconstructor import reconstruct_path
from clearance_nav.core.search_context import SearchContext


def test_unvisited_goal_gives_empty_path():
    context = SearchContext(4, 4)
    context.visit(0, 0, -1, -1, 1)
    assert reconstruct_path(context, (0, 0), (3, 3)) == []


def test_walks_predecessors_from_goal_to_start():
    context = SearchContext(5, 1)
    context.visit(0, 0, -1, -1, 1)
    context.visit(2, 0, 0, 0, 3)
    context.visit(4, 0, 2, 0, 5)
    assert reconstruct_path(context, (0, 0), (4, 0)) == [(0, 0), (2, 0), (4, 0)]


def test_predecessor_cycle_is_bounded():
    context = SearchContext(3, 1)
    context.visit(0, 0, -1, -1, 1)
    context.visit(1, 0, 2, 0, 5)
    context.visit(2, 0, 1, 0, 6)
    path = reconstruct_path(context, (0, 0), (2, 0))
    assert len(path) <= context.cell_count + 1
    assert path[0] == (0, 0)
    assert path[-1] == (2, 0)


def test_broken_chain_stops_at_sentinel():
    context = SearchContext(3, 3)
    context.visit(0, 0, -1, -1, 1)
    context.visit(2, 2, -1, -1, 4)
    path = reconstruct_path(context, (0, 0), (2, 2))
    assert path == [(0, 0), (2, 2)]
