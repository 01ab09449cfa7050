"""An agent's planned path through pickup, delivery and charging."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from fppmapf.action import Action
from fppmapf.state import State


class AgentStatus(IntEnum):
    """Whether an agent must recharge first or can work on its task."""

    ToCharge = 0
    OnTask = 1


@dataclass
class PathPlan:
    """A path with its actions, goals and cached costs.

    ``path[break_points[0]]`` is the pickup, ``path[break_points[1]]``
    the delivery.  Stage 0 heads for pickup, 1 for delivery, 2 for charging.
    """

    status: AgentStatus = AgentStatus.OnTask
    current_id: int = 0
    break_points: list[int] = field(default_factory=lambda: [-1, -1])
    charge_point_id: int = -1
    path: list[State] = field(default_factory=list)
    actions: list[Action] = field(default_factory=list)
    goals: list[int] = field(default_factory=list)
    main_cost: float = 0.0
    acc_main_heuristic: list[float] = field(default_factory=list)
    acc_energy_heuristic: list[float] = field(default_factory=list)
    cache_initial_heuristic: float = -1.0
    is_fallback: bool = False

    def clear(self) -> None:
        """Reset the plan to its empty state."""
        self.status = AgentStatus.OnTask
        self.current_id = 0
        self.break_points = [-1, -1]
        self.charge_point_id = -1
        self.path = []
        self.actions = []
        self.goals = []
        self.main_cost = 0.0
        self.acc_main_heuristic = []
        self.acc_energy_heuristic = []
        self.cache_initial_heuristic = -1.0
        self.is_fallback = False

    def get_stage(self, idx: int) -> int:
        if idx > self.break_points[1]:
            return 2
        if idx > self.break_points[0]:
            return 1
        return 0

    def current_stage(self) -> int:
        return self.get_stage(self.current_id)

    def is_loaded_at(self, idx: int) -> bool:
        return self.get_stage(idx) == 1

    def current_is_loaded(self) -> bool:
        return self.current_stage() == 1

    def is_idle(self) -> bool:
        return not self.goals

    def is_reach_final_state(self) -> bool:
        return self.current_id + 1 >= len(self.path)

    def is_passed_delivery(self) -> bool:
        return self.current_id > self.break_points[1]

    def delivery_loc(self) -> int:
        return self.goals[1]

    def pickup_loc(self) -> int:
        return self.goals[0]

    def goal_tuple(self) -> tuple[int, int, int]:
        """Remaining goals, padded with -1."""
        stage = self.current_stage()
        if stage == 2:
            return (self.goals[2], -1, -1)
        if stage == 1:
            return (self.goals[1], self.goals[2], -1)
        return (self.goals[0], self.goals[1], self.goals[2])