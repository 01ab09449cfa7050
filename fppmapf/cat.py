"""Conflict avoidance table: reserved vertices and edges in space-time."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Iterable

from fppmapf.state import State


class CATError(RuntimeError):
    """Raised when the table is updated inconsistently."""


@dataclass(frozen=True)
class TSState:
    """A location at a time step."""

    time: int
    location: int


class CAT:
    """Records which agent occupies each vertex and edge at each time step."""

    def __init__(self) -> None:
        self._time_steps: Counter[int] = Counter()
        self._loc_agents: defaultdict[int, list[int]] = defaultdict(list)
        self._vertex: dict[TSState, int] = {}
        self._edge: dict[tuple[TSState, TSState], int] = {}

    @staticmethod
    def _ts(state: State) -> TSState:
        return TSState(state.timestep, state.location)

    @staticmethod
    def _swap_key(prev: State, next_state: State) -> tuple[TSState, TSState]:
        return (
            TSState(prev.timestep, next_state.location),
            TSState(next_state.timestep, prev.location),
        )

    def add_vertex(self, agent_id: int, state: State) -> None:
        """Reserve the state's location at its time step for ``agent_id``."""
        key = self._ts(state)
        if key in self._vertex:
            raise CATError(
                f"vertex conflict occur {state.timestep} {state.location} "
                f"agents: {agent_id} {self._vertex[key]}"
            )
        self._loc_agents[state.location].append(agent_id)
        self._vertex[key] = agent_id

    def add_edge(self, agent_id: int, state1: State, state2: State) -> None:
        """Reserve the move from ``state1`` to ``state2`` for ``agent_id``."""
        key = (self._ts(state1), self._ts(state2))
        if key in self._edge:
            raise CATError("edge conflict occur")
        self._edge[key] = agent_id

    def delete_vertex(self, agent_id: int, state: State) -> None:
        """Release a vertex reservation made by :meth:`add_vertex`."""
        key = self._ts(state)
        if key not in self._vertex:
            raise CATError(f"delete vertex error: agent {agent_id} state {state}")
        del self._vertex[key]
        agents = self._loc_agents.get(state.location)
        if agents is None:
            raise CATError("delete vertex error: location has no agents")
        try:
            agents.remove(agent_id)
        except ValueError as exc:
            raise CATError(
                f"delete vertex error: agent {agent_id} not at location"
            ) from exc

    def delete_edge(self, agent_id: int, state1: State, state2: State) -> None:
        """Release an edge reservation made by :meth:`add_edge`."""
        key = (self._ts(state1), self._ts(state2))
        if key not in self._edge:
            raise CATError(f"delete edge error: agent {agent_id}")
        del self._edge[key]

    def is_valid_vertex(self, state: State, ignore_agent_ids: Iterable[int]) -> bool:
        """Whether the state is free or held by one of the ignored agents."""
        owner = self._vertex.get(self._ts(state))
        return owner is None or owner in set(ignore_agent_ids)

    def is_valid_move(
        self, prev: State, next_state: State, ignore_agent_ids: Iterable[int]
    ) -> bool:
        """Whether the move has neither a vertex nor a swap conflict."""
        ignored = set(ignore_agent_ids)
        if not self.is_valid_vertex(next_state, ignored):
            return False
        owner = self._edge.get(self._swap_key(prev, next_state))
        return owner is None or owner in ignored

    def get_agent_number(self, location: int) -> int:
        """Number of reservations at a location over all time steps."""
        return len(self._loc_agents.get(location, ()))

    def add_time_step(self, time_step: int) -> None:
        self._time_steps[time_step] += 1

    def delete_time_step(self, time_step: int) -> None:
        if self._time_steps[time_step] <= 0:
            del self._time_steps[time_step]
            raise CATError("delete time step error")
        self._time_steps[time_step] -= 1
        if self._time_steps[time_step] == 0:
            del self._time_steps[time_step]

    def max_constrained_time_step(self) -> int:
        """Largest recorded time step, or -1 when none is recorded."""
        return max(self._time_steps, default=-1)

    def conflicting_agents(self, prev: State, current: State) -> list[int]:
        """Agents that hold the target vertex or the opposite edge."""
        result = []
        owner = self._vertex.get(self._ts(current))
        if owner is not None:
            result.append(owner)
        owner = self._edge.get(self._swap_key(prev, current))
        if owner is not None:
            result.append(owner)
        return result

    def location_agents(self, location: int) -> set[int]:
        """Agents holding any reservation at ``location``."""
        return set(self._loc_agents.get(location, ()))