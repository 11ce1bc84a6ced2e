from clearance_nav.common.constants import NO_PREDECESSOR
from clearance_nav.core.jump_search import SearchConfig
from clearance_nav.core.search_context import SearchContext


def test_fresh_context_is_unvisited():
    context = SearchContext(4, 3)
    assert context.cell_count == 12
    assert context.visited_count == 0
    assert context.max_score == 0
    node = context.node(1, 1)
    assert node.score == 0
    assert not node.has_predecessor


def test_visit_records_score_and_predecessor():
    context = SearchContext(4, 3)
    start = context.visit(0, 0, *NO_PREDECESSOR, 1)
    step = context.visit(3, 2, 0, 0, 5)

    assert not start.has_predecessor
    assert step.has_predecessor
    assert context.node(3, 2) == step
    assert context.score_at(3, 2) == 5
    assert context.is_visited(3, 2)
    assert not context.is_visited(1, 1)
    assert context.visited_count == 2
    assert context.max_score == 5


def test_reset_clears_state():
    context = SearchContext(2, 2)
    context.visit(1, 1, 0, 0, 7)
    context.reset()
    assert context.visited_count == 0
    assert context.max_score == 0
    assert context.node(1, 1).from_x == NO_PREDECESSOR[0]


def test_search_scores_bounded_by_max_score(search, wall_grid):
    outcome = search.run(wall_grid, SearchConfig(start=(3, 10), goal=(26, 10)))
    assert outcome.found
    assert outcome.context.max_score >= outcome.goal_score
    assert outcome.context.max_score == int(outcome.context.score.max())
