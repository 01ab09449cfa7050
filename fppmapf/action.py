"""Agent actions."""

from __future__ import annotations

from enum import Enum


class Action(Enum):
    """Forward, clockwise, counter-clockwise, wait, pickup, delivery, charge."""

    FW = 0
    CR = 1
    CCR = 2
    W = 3
    P = 4
    D = 5
    E = 6
    NA = 7

    def __str__(self) -> str:
        return _SYMBOLS.get(self, "W")


_SYMBOLS = {
    Action.FW: "F",
    Action.CR: "R",
    Action.CCR: "C",
    Action.E: "E",
    Action.P: "P",
    Action.D: "D",
}