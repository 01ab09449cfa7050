import pytest

from fppmapf.cat import CAT, CATError, TSState
from fppmapf.state import State


def st(loc, t):
    return State(location=loc, timestep=t, orientation=0, energy=10.0)


def test_ts_state_equality_and_hash():
    assert TSState(1, 2) == TSState(1, 2)
    assert len({TSState(1, 2), TSState(1, 2), TSState(2, 1)}) == 2


def test_vertex_reservation_and_ignore():
    cat = CAT()
    cat.add_vertex(7, st(4, 3))
    assert cat.is_valid_vertex(st(4, 3), []) is False
    assert cat.is_valid_vertex(st(4, 3), [7]) is True
    assert cat.is_valid_vertex(st(4, 2), []) is True
    assert cat.get_agent_number(4) == 1


def test_vertex_conflict_raises():
    cat = CAT()
    cat.add_vertex(1, st(4, 3))
    with pytest.raises(CATError):
        cat.add_vertex(2, st(4, 3))
    assert cat.get_agent_number(4) == 1


def test_duplicate_edge_raises():
    cat = CAT()
    cat.add_edge(0, st(1, 0), st(2, 1))
    with pytest.raises(CATError):
        cat.add_edge(1, st(1, 0), st(2, 1))


def test_vertex_blocks_move():
    cat = CAT()
    cat.add_vertex(5, st(9, 2))
    assert cat.is_valid_move(st(8, 1), st(9, 2), []) is False
    assert cat.conflicting_agents(st(8, 1), st(9, 2)) == [5]


def test_delete_round_trip():
    cat = CAT()
    cat.add_vertex(3, st(6, 1))
    cat.add_edge(3, st(6, 1), st(5, 0))
    cat.delete_vertex(3, st(6, 1))
    cat.delete_edge(3, st(6, 1), st(5, 0))
    assert cat.is_valid_vertex(st(6, 1), []) is True
    assert cat.get_agent_number(6) == 0
    assert cat.conflicting_agents(st(6, 0), st(5, 1)) == []


def test_delete_missing_raises():
    cat = CAT()
    with pytest.raises(CATError):
        cat.delete_vertex(0, st(1, 1))
    with pytest.raises(CATError):
        cat.delete_edge(0, st(1, 1), st(2, 2))


def test_location_agents():
    cat = CAT()
    cat.add_vertex(1, st(4, 0))
    cat.add_vertex(2, st(4, 1))
    assert cat.location_agents(4) == {1, 2}
    assert cat.location_agents(5) == set()
    assert cat.get_agent_number(4) == 2


def test_time_steps_multiset():
    cat = CAT()
    assert cat.max_constrained_time_step() == -1
    cat.add_time_step(3)
    cat.add_time_step(5)
    cat.add_time_step(5)
    assert cat.max_constrained_time_step() == 5
    cat.delete_time_step(5)
    assert cat.max_constrained_time_step() == 5
    cat.delete_time_step(5)
    assert cat.max_constrained_time_step() == 3
    with pytest.raises(CATError):
        cat.delete_time_step(5)
    assert cat.max_constrained_time_step() == 3