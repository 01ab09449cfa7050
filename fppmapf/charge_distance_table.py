"""For each cell, the charging stations ordered by distance."""

from __future__ import annotations

from fppmapf.environment import Environment
from fppmapf.heuristic_table import HeuristicTable

_N_ORIENT = 4

ChargeDistances = tuple[tuple[float, int], ...]


class ChargeDistanceTable:
    """Charging stations sorted by heuristic cost from every (oriented) cell.

    Each entry is a sequence of ``(cost, charge_id)`` pairs in ascending
    order, ties broken by charge id.
    """

    def __init__(self, env: Environment):
        self.env = env
        self._by_loc: list[ChargeDistances] = []
        self._by_oriented_loc: list[ChargeDistances] = []

    def preprocess(self, unloaded_main_heuristic_table: HeuristicTable) -> None:
        """Fill the table from an unloaded main-cost heuristic table."""
        table = unloaded_main_heuristic_table
        n_cells = self.env.rows * self.env.cols
        charges = list(enumerate(self.env.charges_locs))
        self._by_loc = [
            tuple(sorted((table.get(loc, charge_loc), charge_id) for charge_id, charge_loc in charges))
            for loc in range(n_cells)
        ]
        self._by_oriented_loc = [
            tuple(
                sorted(
                    (table.get_oriented(loc, orient, charge_loc), charge_id)
                    for charge_id, charge_loc in charges
                )
            )
            for loc in range(n_cells)
            for orient in range(_N_ORIENT)
        ]

    def get(self, loc: int, orient: int | None = None) -> ChargeDistances:
        """Sorted ``(cost, charge_id)`` pairs from a cell, optionally with a heading."""
        if orient is None:
            return self._by_loc[loc]
        if not 0 <= orient < _N_ORIENT:
            raise ValueError(f"invalid orientation: {orient}")
        return self._by_oriented_loc[loc * _N_ORIENT + orient]