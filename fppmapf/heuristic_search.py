"""Single-source shortest paths over (position, orientation) states."""

from __future__ import annotations

from typing import Callable

from fppmapf.action import Action
from fppmapf.environment import Environment
from fppmapf.open_list import OpenList, SearchState

ActionCost = Callable[[int, int, Action], float]
"""Cost of performing an action at a location with an orientation."""


class HeuristicSearch:
    """Dijkstra search over every (position, orientation) state of a grid.

    Moves are forward, clockwise and counter-clockwise rotation.  An agent
    may not drive forward out of a charging station unless it started there.
    """

    def __init__(self, env: Environment, action_cost: ActionCost, n_orients: int = 4):
        self.env = env
        self.action_cost = action_cost
        self.n_orients = n_orients
        self.max_states = env.rows * env.cols * n_orients
        self.n_states = 0
        self._open = OpenList()
        self._states: list[SearchState] = []
        self.reset()

    def reset(self) -> None:
        """Forget all states found by a previous search."""
        self._open.clear()
        self._states = [SearchState() for _ in range(self.max_states)]
        self.n_states = 0

    def _forward_target(self, pos: int, orient: int) -> int | None:
        cols, rows = self.env.cols, self.env.rows
        x, y = pos % cols, pos // cols
        if orient == 0:
            target = pos + 1 if x + 1 < cols else None
        elif orient == 1:
            target = pos + cols if y + 1 < rows else None
        elif orient == 2:
            target = pos - 1 if x - 1 >= 0 else None
        elif orient == 3:
            target = pos - cols if y - 1 >= 0 else None
        else:
            raise ValueError(f"spatial search in heuristics: invalid orient: {orient}")
        if target is None or self.env.obstacles[target]:
            return None
        return target

    def get_successors(self, curr: SearchState, start_pos: int) -> list[SearchState]:
        """States reachable from ``curr`` in one action, with their costs."""
        pos, orient = curr.pos, curr.orient
        successors = []
        if not (pos != start_pos and self.env.charges[pos]):
            target = self._forward_target(pos, orient)
            if target is not None:
                cost = self.action_cost(pos, orient, Action.FW)
                successors.append(SearchState(target, orient, curr.g + cost, curr))
        elif not 0 <= orient < 4:
            raise ValueError(f"spatial search in heuristics: invalid orient: {orient}")

        n = self.n_orients
        cost = self.action_cost(pos, orient, Action.CR)
        successors.append(SearchState(pos, (orient + 1 + n) % n, curr.g + cost, curr))
        cost = self.action_cost(pos, orient, Action.CCR)
        successors.append(SearchState(pos, (orient - 1 + n) % n, curr.g + cost, curr))
        return successors

    def add_state(
        self, pos: int, orient: int, g: float, prev: SearchState | None
    ) -> SearchState:
        """Record a newly discovered state."""
        index = pos * self.n_orients + orient
        if not 0 <= index < self.max_states:
            raise IndexError("state is out-of-boundary")
        state = self._states[index]
        if state.pos != -1:
            raise ValueError(f"State {pos}, {orient} already exists!")
        state.pos = pos
        state.orient = orient
        state.g = g
        state.prev = prev
        self.n_states += 1
        return state

    def search_for_all(self, start_pos: int, start_orient: int) -> None:
        """Compute the cheapest cost from the start to every reachable state."""
        start = self.add_state(start_pos, start_orient, 0.0, None)
        self._open.push(start)
        while len(self._open):
            curr = self._open.pop()
            curr.closed = True
            for nxt in self.get_successors(curr, start_pos):
                old = self._states[nxt.pos * self.n_orients + nxt.orient]
                if old.pos == -1:
                    new_state = self.add_state(nxt.pos, nxt.orient, nxt.g, nxt.prev)
                    new_state.closed = False
                    self._open.push(new_state)
                elif nxt.g < old.g:
                    old.copy_from(nxt)
                    if old.closed:
                        old.closed = False
                        self._open.push(old)
                    else:
                        self._open.increase(old)

    def state_at(self, pos: int, orient: int) -> SearchState:
        """The search node of a state; ``pos`` is -1 if it was never reached."""
        return self._states[pos * self.n_orients + orient]