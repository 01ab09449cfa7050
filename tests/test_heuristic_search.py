import pytest

from fppmapf.action import Action
from fppmapf.environment import Environment
from fppmapf.heuristic_search import HeuristicSearch
from fppmapf.open_list import SearchState


def make_env(rows):
    n_rows, n_cols = len(rows), len(rows[0])
    cells = "".join(rows)
    return Environment(
        rows=n_rows,
        cols=n_cols,
        obstacles=[c == "@" for c in cells],
        charges=[c == "C" for c in cells],
        task_points=[False] * len(cells),
    )


def unit_cost(loc, orient, action):
    return 1.0


def test_start_state_has_zero_cost():
    search = HeuristicSearch(make_env(["...", "..."]), unit_cost)
    search.search_for_all(0, 0)
    start = search.state_at(0, 0)
    assert start.g == 0.0
    assert start.prev is None


def test_every_free_state_reached_with_consistent_costs():
    env = make_env(["...", ".@.", "..."])
    search = HeuristicSearch(env, unit_cost)
    search.search_for_all(0, 1)
    for loc, blocked in enumerate(env.obstacles):
        for orient in range(4):
            state = search.state_at(loc, orient)
            if blocked:
                assert state.pos == -1
                assert state.g == -1
                continue
            assert state.g >= 0
            if state.prev is not None:
                assert state.g == state.prev.g + 1.0


def test_obstacle_cells_unreached():
    env = make_env([".@."])
    search = HeuristicSearch(env, unit_cost)
    search.search_for_all(0, 0)
    assert all(search.state_at(2, o).g == -1 for o in range(4))
    assert all(search.state_at(0, o).g >= 0 for o in range(4))


def test_cannot_drive_through_charge_station():
    env = make_env([".C."])
    search = HeuristicSearch(env, unit_cost)
    search.search_for_all(0, 0)
    assert search.state_at(1, 0).g >= 0
    assert all(search.state_at(2, o).pos == -1 for o in range(4))


def test_can_leave_charge_station_when_starting_there():
    env = make_env([".C."])
    search = HeuristicSearch(env, unit_cost)
    search.search_for_all(1, 0)
    assert search.state_at(2, 0).g >= 0
    assert search.state_at(0, 2).g >= 0


def test_successors_from_open_cell():
    env = make_env(["..."])
    search = HeuristicSearch(env, unit_cost)
    curr = SearchState(0, 0, 0.0)
    successors = search.get_successors(curr, 0)
    assert {(s.pos, s.orient) for s in successors} == {(1, 0), (0, 1), (0, 3)}
    assert all(s.prev is curr for s in successors)
    assert all(s.g == 1.0 for s in successors)


def test_successors_use_action_costs():
    env = make_env(["..."])
    costs = {Action.FW: 5.0, Action.CR: 2.0, Action.CCR: 3.0}
    search = HeuristicSearch(env, lambda loc, orient, action: costs[action])
    successors = search.get_successors(SearchState(0, 0, 10.0), 0)
    by_state = {(s.pos, s.orient): s.g for s in successors}
    assert by_state[(1, 0)] == 10.0 + costs[Action.FW]
    assert by_state[(0, 1)] == 10.0 + costs[Action.CR]
    assert by_state[(0, 3)] == 10.0 + costs[Action.CCR]


def test_successors_at_edge_have_no_forward():
    env = make_env(["..."])
    search = HeuristicSearch(env, unit_cost)
    successors = search.get_successors(SearchState(2, 0, 0.0), 2)
    assert all(s.pos == 2 for s in successors)


def test_invalid_orientation_raises():
    search = HeuristicSearch(make_env(["..."]), unit_cost)
    with pytest.raises(ValueError):
        search.get_successors(SearchState(0, 7, 0.0), 0)


def test_add_state_twice_raises():
    search = HeuristicSearch(make_env(["..."]), unit_cost)
    search.add_state(1, 2, 0.0, None)
    with pytest.raises(ValueError):
        search.add_state(1, 2, 3.0, None)


def test_add_state_out_of_boundary_raises():
    search = HeuristicSearch(make_env(["..."]), unit_cost)
    with pytest.raises(IndexError):
        search.add_state(3, 0, 0.0, None)


def test_reset_forgets_previous_search():
    search = HeuristicSearch(make_env(["..."]), unit_cost)
    search.search_for_all(0, 0)
    assert search.n_states == search.max_states
    search.reset()
    assert search.n_states == 0
    assert search.state_at(0, 0).pos == -1