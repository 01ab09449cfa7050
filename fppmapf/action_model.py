"""Transition and energy model for agents on the grid."""

from __future__ import annotations

import logging
from typing import Sequence

from fppmapf.action import Action
from fppmapf.environment import Environment
from fppmapf.state import Agent, State

logger = logging.getLogger(__name__)

_IDLE_ACTIONS = (Action.W, Action.P, Action.D, Action.E)


class ChargeError(RuntimeError):
    """Raised when an agent charges away from a charging station."""


class ActionModel:
    """Computes successor states and energy use of actions."""

    normal_actions = (Action.FW, Action.CR, Action.CCR, Action.W)

    def __init__(
        self,
        env: Environment,
        idle_consumption: float,
        active_unloaded_consumption: float,
        active_loaded_consumption: float,
        charge_energy_per_timestep: float,
        full_energy: float,
    ):
        self.env = env
        self.idle_consumption = idle_consumption
        self.active_unloaded_consumption = active_unloaded_consumption
        self.active_loaded_consumption = active_loaded_consumption
        self.charge_energy_per_timestep = charge_energy_per_timestep
        self.full_energy = full_energy
        self.moves = (1, env.cols, -1, -env.cols)

    def result_state(self, prev: State, action: Action) -> State:
        """State after ``action``; an unset ``State()`` if the action is illegal."""
        location = prev.location
        orientation = prev.orientation
        if action is Action.FW:
            location += self.moves[prev.orientation]
            if not self.is_forward_in_boundary(prev) or self.env.obstacles[location]:
                return State()
        elif action is Action.CR:
            orientation = (prev.orientation + 1) % 4
        elif action is Action.CCR:
            orientation = (prev.orientation - 1) % 4
        energy = self.next_energy(prev, action)
        if energy < 1e-6:
            return State()
        if action is Action.P:
            if prev.is_loaded:
                return State()
            loaded = True
        elif action is Action.D:
            if not prev.is_loaded:
                return State()
            loaded = False
        else:
            loaded = prev.is_loaded
        return State(location, prev.timestep + 1, orientation, energy, loaded)

    def result_states(self, agents: Sequence[Agent], actions: Sequence[Action]) -> list[State]:
        return [self.result_state(agent.state, action) for agent, action in zip(agents, actions)]

    def is_forward_in_boundary(self, prev: State) -> bool:
        """Whether moving forward keeps the agent on the grid."""
        x, y = prev.location % self.env.cols, prev.location // self.env.cols
        if prev.orientation == 0:
            return x + 1 < self.env.cols
        if prev.orientation == 1:
            return y + 1 < self.env.rows
        if prev.orientation == 2:
            return x - 1 >= 0
        if prev.orientation == 3:
            return y - 1 >= 0
        return False

    def is_valid(self, agents: Sequence[Agent], actions: Sequence[Action]) -> bool:
        """Check a joint action for illegal moves, collisions and empty batteries."""
        if len(agents) != len(actions):
            logger.warning("incorrect vector size")
            return False
        cols = self.env.cols
        n_cells = len(self.env.obstacles)
        next_states = self.result_states(agents, actions)
        vertex_occupied: dict[int, int] = {}
        edge_occupied: dict[tuple[int, int], int] = {}
        for i, (agent, nxt) in enumerate(zip(agents, next_states)):
            prev_loc = agent.state.location
            loc = nxt.location
            if (
                loc < 0
                or loc >= n_cells
                or abs(loc // cols - prev_loc // cols) + abs(loc % cols - prev_loc % cols) > 1
            ):
                logger.warning("unallowed move %d %s", i, self.env.describe(loc, nxt.orientation))
                return False
            if self.env.obstacles[loc]:
                logger.warning("move to obstacle")
                return False
            if loc in vertex_occupied:
                logger.warning("vertex conflict: %d %d %d", i, vertex_occupied[loc], nxt.timestep)
                return False
            if (prev_loc, loc) in edge_occupied:
                logger.warning(
                    "edge conflict: %d %d %d", i, edge_occupied[(prev_loc, loc)], nxt.timestep
                )
                return False
            vertex_occupied[loc] = i
            edge_occupied[(loc, prev_loc)] = i
        for i, (agent, action) in enumerate(zip(agents, actions)):
            if self.next_energy(agent.state, action) <= 0:
                logger.warning("out-of-battery %d", i)
                return False
        return True

    def next_energy(self, state: State, action: Action) -> float:
        return self.next_energy_at(state.location, state.is_loaded, state.energy, action)

    def next_energy_at(
        self, loc: int, is_loaded: bool, original_energy: float, action: Action
    ) -> float:
        """Battery level after ``action``, never below zero."""
        energy = original_energy - self.pure_energy_consumption(is_loaded, action)
        if action is Action.E:
            if not self.env.charges[loc]:
                raise ChargeError("Charge at a non-charge vertex")
            energy = min(self.full_energy, energy + self.charge_energy_per_timestep)
        return max(energy, 0.0)

    def pure_energy_consumption(self, is_loaded: bool, action: Action) -> float:
        """Energy spent by an action, ignoring charging."""
        if action in _IDLE_ACTIONS:
            return self.idle_consumption
        if is_loaded:
            return self.active_loaded_consumption
        return self.active_unloaded_consumption

    def get_normal_action(self, prev: State, next_state: State) -> Action:
        """Movement action that leads from ``prev`` to ``next_state``."""
        if prev.location != next_state.location:
            return Action.FW
        if next_state.orientation == (prev.orientation + 3) % 4:
            return Action.CCR
        if next_state.orientation == (prev.orientation + 1) % 4:
            return Action.CR
        return Action.W