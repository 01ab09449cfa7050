from fppmapf.action import Action
from fppmapf.path_plan import AgentStatus, PathPlan
from fppmapf.state import State


def make_plan():
    plan = PathPlan()
    plan.goals = [10, 20, 30]
    plan.break_points = [2, 5]
    plan.path = [State(location=i, timestep=i) for i in range(8)]
    plan.actions = [Action.FW] * 7
    return plan


def test_default_plan_is_empty():
    plan = PathPlan()
    assert plan.status is AgentStatus.OnTask
    assert plan.break_points == [-1, -1]
    assert plan.is_idle() is True
    assert plan.is_reach_final_state() is True
    assert plan.current_stage() == 2
    assert plan.cache_initial_heuristic == -1


def test_stages_follow_break_points():
    plan = make_plan()
    assert [plan.get_stage(i) for i in range(8)] == [0, 0, 0, 1, 1, 1, 2, 2]
    assert [plan.is_loaded_at(i) for i in range(8)] == [
        False, False, False, True, True, True, False, False,
    ]


def test_goal_tuple_per_stage():
    plan = make_plan()
    assert plan.goal_tuple() == (10, 20, 30)
    assert plan.current_is_loaded() is False
    plan.current_id = 3
    assert plan.goal_tuple() == (20, 30, -1)
    assert plan.current_is_loaded() is True
    plan.current_id = 6
    assert plan.goal_tuple() == (30, -1, -1)
    assert plan.is_passed_delivery() is True


def test_pickup_and_delivery_locations():
    plan = make_plan()
    assert plan.pickup_loc() == 10
    assert plan.delivery_loc() == 20
    assert plan.is_idle() is False


def test_reach_final_state():
    plan = make_plan()
    plan.current_id = 6
    assert plan.is_reach_final_state() is False
    plan.current_id = 7
    assert plan.is_reach_final_state() is True


def test_clear_resets_everything():
    plan = make_plan()
    plan.status = AgentStatus.ToCharge
    plan.main_cost = 4.0
    plan.is_fallback = True
    plan.current_id = 3
    plan.clear()
    assert plan == PathPlan()