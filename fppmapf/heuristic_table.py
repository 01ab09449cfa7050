"""All-pairs cost tables between free grid cells, with and without orientation."""

from __future__ import annotations

import logging
import os
import struct
import zlib

from fppmapf.environment import Environment
from fppmapf.heuristic_search import ActionCost, HeuristicSearch

logger = logging.getLogger(__name__)

MAX_HEURISTIC = 1e100
_N_ORIENT = 4
_PROGRESS_STEP = 100


class HeuristicTableError(RuntimeError):
    """Raised on inconsistent costs or a table file that does not fit the map."""


class HeuristicTable:
    """Cheapest costs between every pair of free cells.

    Three views are kept: location to location, oriented location to
    location, and oriented location to oriented location.
    """

    def __init__(self, env: Environment, action_cost: ActionCost, energy_weight: float = 0.0):
        self.env = env
        self.action_cost = action_cost
        self.energy_weight = energy_weight
        self.empty_locs = [loc for loc, blocked in enumerate(env.obstacles) if not blocked]
        self.loc_idxs = [-1] * len(env.obstacles)
        for idx, loc in enumerate(self.empty_locs):
            self.loc_idxs[loc] = idx
        self.loc_size = len(self.empty_locs)
        self.state_size = self.loc_size * _N_ORIENT
        logger.info("number of empty locations: %d", self.loc_size)
        self.main_heuristics = [MAX_HEURISTIC] * (self.loc_size * self.loc_size)
        self.sub_heuristics = [0.0] * (self.state_size * self.loc_size)
        self.full_heuristics = [MAX_HEURISTIC] * (self.state_size * self.state_size)
        self.full_from = [-1] * (self.state_size * self.state_size)

    def _full_id(self, start_idx: int, start_orient: int, loc_idx: int, orient: int) -> int:
        return ((start_idx * self.loc_size + loc_idx) * _N_ORIENT + start_orient) * _N_ORIENT + orient

    def _pos_orient_from_full_id(self, full_id: int) -> tuple[int, int]:
        orient = full_id % _N_ORIENT
        loc_idx = (full_id // _N_ORIENT // _N_ORIENT) % self.loc_size
        return self.empty_locs[loc_idx], orient

    def compute(self) -> None:
        """Run a search from every free oriented cell and fill the tables."""
        planner = HeuristicSearch(self.env, self.action_cost, _N_ORIENT)
        for done, start_idx in enumerate(range(self.loc_size), start=1):
            self._compute_from(start_idx, planner)
            if done % _PROGRESS_STEP == 0:
                logger.info("%d/%d completed", done, self.loc_size)

    def _compute_from(self, start_idx: int, planner: HeuristicSearch) -> None:
        start_loc = self.empty_locs[start_idx]
        values = [MAX_HEURISTIC] * (_N_ORIENT * self.state_size)
        for start_orient in range(_N_ORIENT):
            planner.reset()
            planner.search_for_all(start_loc, start_orient)
            for loc_idx, loc in enumerate(self.empty_locs):
                for orient in range(_N_ORIENT):
                    state = planner.state_at(loc, orient)
                    cost = state.g
                    if cost < 0:
                        cost = MAX_HEURISTIC
                    if cost > MAX_HEURISTIC:
                        raise HeuristicTableError(f"cost: {cost} > {MAX_HEURISTIC}")
                    values[start_orient * self.state_size + loc_idx * _N_ORIENT + orient] = cost
                    main_idx = start_idx * self.loc_size + loc_idx
                    if cost < self.main_heuristics[main_idx]:
                        self.main_heuristics[main_idx] = cost
                    full_idx = self._full_id(start_idx, start_orient, loc_idx, orient)
                    self.full_heuristics[full_idx] = cost
                    if state.prev is not None:
                        self.full_from[full_idx] = self._full_id(
                            start_idx,
                            start_orient,
                            self.loc_idxs[state.prev.pos],
                            state.prev.orient,
                        )
                    else:
                        self.full_from[full_idx] = -1

        for start_orient in range(_N_ORIENT):
            for loc_idx in range(self.loc_size):
                base = start_orient * self.state_size + loc_idx * _N_ORIENT
                cost = min([MAX_HEURISTIC, *values[base:base + _N_ORIENT]])
                main_idx = start_idx * self.loc_size + loc_idx
                diff = cost - self.main_heuristics[main_idx]
                if diff < 0:
                    raise HeuristicTableError(f"diff: {diff} < 0")
                if diff > MAX_HEURISTIC:
                    raise HeuristicTableError(f"diff: {diff} > {MAX_HEURISTIC}")
                self.sub_heuristics[main_idx * _N_ORIENT + start_orient] = diff

    def _indices(self, loc1: int, loc2: int) -> tuple[int, int] | None:
        idx1, idx2 = self.loc_idxs[loc1], self.loc_idxs[loc2]
        if idx1 == -1 or idx2 == -1:
            return None
        return idx1, idx2

    def get(self, loc1: int, loc2: int) -> float:
        """Cheapest cost between two locations over all orientations."""
        indices = self._indices(loc1, loc2)
        if indices is None:
            return MAX_HEURISTIC
        return self.main_heuristics[indices[0] * self.loc_size + indices[1]]

    def get_oriented(self, loc1: int, orient1: int, loc2: int) -> float:
        """Cheapest cost from an oriented location to any orientation at ``loc2``."""
        indices = self._indices(loc1, loc2)
        if indices is None:
            return MAX_HEURISTIC
        main_idx = indices[0] * self.loc_size + indices[1]
        return self.main_heuristics[main_idx] + self.sub_heuristics[main_idx * _N_ORIENT + orient1]

    def get_full(self, loc1: int, orient1: int, loc2: int, orient2: int) -> float:
        """Cheapest cost between two oriented locations."""
        indices = self._indices(loc1, loc2)
        if indices is None:
            return MAX_HEURISTIC
        return self.full_heuristics[self._full_id(indices[0], orient1, indices[1], orient2)]

    def get_from(
        self, start_loc: int, start_orient: int, current_loc: int, current_orient: int
    ) -> tuple[int, int]:
        """Predecessor of a state on the cheapest path from the start, or (-1, -1)."""
        indices = self._indices(start_loc, current_loc)
        if indices is None:
            return -1, -1
        from_id = self.full_from[self._full_id(indices[0], start_orient, indices[1], current_orient)]
        if from_id < 0:
            return -1, -1
        return self._pos_orient_from_full_id(from_id)

    def preprocess(self, suffix: str = "") -> str:
        """Load the cached table for this map if present, else compute it.

        Returns the cache path that was looked up.
        """
        fname = self.env.map_name[:-4]
        folder = self.env.file_storage_path
        if folder and not folder.endswith(os.sep):
            folder += os.sep
        fpath = f"{folder}{fname}_weighted_heuristics_no_rotation_v4_{suffix}.gz"
        if os.path.exists(fpath):
            self.load(fpath)
        else:
            self.compute()
        return fpath

    def save(self, fpath: str) -> None:
        """Write the tables to a zlib-compressed binary file."""
        payload = b"".join(
            (
                struct.pack("<i", self.loc_size),
                struct.pack(f"<{self.loc_size}i", *self.empty_locs),
                struct.pack(f"<{len(self.main_heuristics)}d", *self.main_heuristics),
                struct.pack(f"<{len(self.sub_heuristics)}d", *self.sub_heuristics),
                struct.pack(f"<{len(self.full_heuristics)}d", *self.full_heuristics),
            )
        )
        with open(fpath, "wb") as handle:
            handle.write(zlib.compress(payload))

    def load(self, fpath: str) -> None:
        """Read tables written by :meth:`save`; the map must match."""
        logger.info("[start] load heuristics from %s.", fpath)
        try:
            with open(fpath, "rb") as handle:
                payload = zlib.decompress(handle.read())
        except (OSError, zlib.error) as exc:
            raise HeuristicTableError(f"cannot read heuristics from {fpath}: {exc}") from exc
        try:
            (loc_size,) = struct.unpack_from("<i", payload, 0)
            if loc_size != self.loc_size:
                raise HeuristicTableError("the sizes of empty locations don't match!")
            offset = 4
            empty_locs = list(struct.unpack_from(f"<{loc_size}i", payload, offset))
            if empty_locs != self.empty_locs:
                raise HeuristicTableError("the empty locations don't match!")
            offset += 4 * loc_size
            tables = []
            for count in (
                len(self.main_heuristics),
                len(self.sub_heuristics),
                len(self.full_heuristics),
            ):
                tables.append(list(struct.unpack_from(f"<{count}d", payload, offset)))
                offset += 8 * count
        except struct.error as exc:
            raise HeuristicTableError(f"truncated heuristics file {fpath}") from exc
        self.main_heuristics, self.sub_heuristics, self.full_heuristics = tables