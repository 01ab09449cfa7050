"""Action costs, goal-sequence heuristics and charging station selection."""

from __future__ import annotations

import random
from enum import Enum
from typing import Callable, Sequence

from fppmapf.action import Action
from fppmapf.charge_distance_table import ChargeDistances, ChargeDistanceTable
from fppmapf.environment import Environment
from fppmapf.heuristic_table import MAX_HEURISTIC, HeuristicTable
from fppmapf.path_plan import PathPlan

_N_ORIENT = 4
_TIE_EPS = 1e-6

ActionCostFn = Callable[[bool, int, int, Action], float]
"""Cost of an action given load, location and orientation."""


class CostType(Enum):
    """Which cost a computation refers to."""

    Main = 0
    Energy = 1


class CostCalculator:
    """Combines per-action costs with heuristic tables for a goal sequence.

    A goal sequence is pickup, delivery, charging station.  Stage ``i``
    means the agent is heading for ``goals[i]``; it is loaded in stage 1.
    """

    def __init__(
        self,
        env: Environment,
        seed: int,
        *,
        main_cost: ActionCostFn,
        energy_cost: ActionCostFn,
        unloaded_main_table: HeuristicTable,
        loaded_main_table: HeuristicTable,
        unloaded_energy_table: HeuristicTable,
        loaded_energy_table: HeuristicTable,
        charge_distance_table: ChargeDistanceTable,
    ):
        self.env = env
        self.unloaded_main_table = unloaded_main_table
        self.loaded_main_table = loaded_main_table
        self.unloaded_energy_table = unloaded_energy_table
        self.loaded_energy_table = loaded_energy_table
        self.charge_distance_table = charge_distance_table
        self._rng = random.Random(seed)
        self._action_costs = {CostType.Main: main_cost, CostType.Energy: energy_cost}
        self._tables = {
            CostType.Main: (unloaded_main_table, loaded_main_table),
            CostType.Energy: (unloaded_energy_table, loaded_energy_table),
        }

    def _tables_for(self, cost_type: CostType) -> tuple[HeuristicTable, HeuristicTable]:
        try:
            return self._tables[cost_type]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"unsupported cost type: {cost_type!r}") from exc

    def get_action_cost(
        self,
        cost_type: CostType,
        is_loaded: bool,
        location: int,
        orientation: int,
        action: Action,
    ) -> float:
        """Cost of one action measured in ``cost_type``."""
        try:
            cost_fn = self._action_costs[cost_type]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"unsupported cost type: {cost_type!r}") from exc
        return cost_fn(is_loaded, location, orientation, action)

    def calculate_acc_heuristic(self, cost_type: CostType, goals: Sequence[int]) -> list[float]:
        """Cost-to-go from each goal and arrival orientation to the end of the sequence.

        Entry ``i * 4 + j`` is the cheapest cost from ``goals[i]`` facing ``j``;
        entries of the last goal are zero.
        """
        unloaded, loaded = self._tables_for(cost_type)
        n_goals = len(goals)
        acc = [0.0] * (n_goals * _N_ORIENT)
        for i in range(n_goals - 2, -1, -1):
            is_loaded = i == n_goals - 3
            table = loaded if is_loaded else unloaded
            switch_action = Action.P if is_loaded else Action.D
            for j in range(_N_ORIENT):
                switch_cost = self.get_action_cost(cost_type, is_loaded, goals[i], j, switch_action)
                acc[i * _N_ORIENT + j] = min(
                    [
                        MAX_HEURISTIC,
                        *(
                            acc[(i + 1) * _N_ORIENT + k]
                            + table.get_full(goals[i], j, goals[i + 1], k)
                            + switch_cost
                            for k in range(_N_ORIENT)
                        ),
                    ]
                )
        return acc

    def get_unloaded_main_heuristic(self, loc1: int, loc2: int) -> float:
        return self.unloaded_main_table.get(loc1, loc2)

    def _stage_heuristic(
        self,
        cost_type: CostType,
        stage: int,
        location: int,
        orientation: int,
        goals: Sequence[int],
        acc_heuristic: Sequence[float],
    ) -> float:
        if stage >= len(goals):
            return 0.0
        unloaded, loaded = self._tables_for(cost_type)
        table = loaded if stage == 1 else unloaded
        return min(
            [
                MAX_HEURISTIC,
                *(
                    acc_heuristic[stage * _N_ORIENT + goal_orient]
                    + table.get_full(location, orientation, goals[stage], goal_orient)
                    for goal_orient in range(_N_ORIENT)
                ),
            ]
        )

    def get_main_heuristic(
        self,
        stage: int,
        location: int,
        orientation: int,
        goals: Sequence[int],
        acc_main_heuristic: Sequence[float],
    ) -> float:
        """Estimated main cost from a state in ``stage`` to the end of the goals."""
        return self._stage_heuristic(
            CostType.Main, stage, location, orientation, goals, acc_main_heuristic
        )

    def get_minimum_energy_consumption(
        self,
        stage: int,
        location: int,
        orientation: int,
        goals: Sequence[int],
        acc_energy_heuristic: Sequence[float],
    ) -> float:
        """Least energy needed from a state in ``stage`` to finish the goals."""
        return self._stage_heuristic(
            CostType.Energy, stage, location, orientation, goals, acc_energy_heuristic
        )

    def get_remain_main_cost(self, plan: PathPlan) -> float:
        """Main cost of the actions not yet executed in ``plan``."""
        start = plan.current_id
        return sum(
            self.get_action_cost(
                CostType.Main, state.is_loaded, state.location, state.orientation, action
            )
            for state, action in zip(plan.path[start:], plan.actions[start:])
        )

    def _distances(self, loc: int, orient: int | None) -> ChargeDistances:
        return self.charge_distance_table.get(loc, orient)

    def get_all_min_cost_charge_ids(
        self,
        allocated_agent_ids: Sequence[int],
        current_agent_id: int,
        loc: int,
        orient: int | None = None,
    ) -> list[int]:
        """Free or own charging stations among the nearest group that has any."""
        distances = self._distances(loc, orient)
        result: list[int] = []
        for (cost, charge_id), following in zip(distances, [*distances[1:], None]):
            if allocated_agent_ids[charge_id] in (-1, current_agent_id):
                result.append(charge_id)
            if following is not None and cost + _TIE_EPS < following[0] and result:
                break
        return result

    def select_charge_id(
        self,
        allocated_agent_ids: Sequence[int],
        current_agent_id: int,
        loc: int,
        orient: int | None = None,
    ) -> int:
        """A random choice among the nearest available stations, or -1 if none."""
        candidates = self.get_all_min_cost_charge_ids(
            allocated_agent_ids, current_agent_id, loc, orient
        )
        if not candidates:
            return -1
        return candidates[self._rng.randrange(len(candidates))]