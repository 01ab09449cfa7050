"""Readers for agent and task files and JSON parameters, plus small helpers."""

from __future__ import annotations

import re
from itertools import accumulate
from typing import Any, Iterator

from fppmapf.state import State, Task

_MISSING = object()
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class InputFormatError(ValueError):
    """Raised when an input file or parameter set is malformed."""


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _data_lines(fname: str) -> Iterator[str] | None:
    try:
        with open(fname, encoding="utf-8") as handle:
            lines = handle.read().splitlines()
    except OSError:
        return None
    return (line for line in lines if not line.startswith("#"))


def _next_tokens(lines: Iterator[str], what: str) -> list[str]:
    line = next(lines, None)
    if line is None:
        raise InputFormatError(f"Input file wrong. Missing {what}")
    tokens = [token for token in line.split(" ") if token]
    if not tokens:
        raise InputFormatError(f"Input file wrong. Empty line for {what}")
    return tokens


def read_start_states(fname: str, team_size: int) -> list[State]:
    """Read the start states of the first ``team_size`` agents.

    Returns an empty list when the file cannot be opened.
    """
    lines = _data_lines(fname)
    if lines is None:
        return []
    max_team_size = _atoi(_next_tokens(lines, "agent count")[0])
    if max_team_size < team_size:
        raise InputFormatError("Input file wrong, no enough agents in agent file")
    states = []
    for _ in range(team_size):
        tokens = _next_tokens(lines, "agent")
        if len(tokens) < 2:
            raise InputFormatError("Input file wrong. No initial orient")
        if len(tokens) < 3:
            raise InputFormatError("Input file wrong. No initial energy")
        loc, orient, energy = (_atoi(token) for token in tokens[:3])
        states.append(State(loc, 0, orient, float(energy), False))
    return states


def read_tasks(fname: str) -> list[Task]:
    """Read the task list; returns an empty list when the file cannot be opened."""
    lines = _data_lines(fname)
    if lines is None:
        return []
    count = _atoi(_next_tokens(lines, "task count")[0])
    tasks = []
    for task_id in range(count):
        tokens = _next_tokens(lines, "task")
        if len(tokens) < 2:
            raise InputFormatError("Input file wrong. No delivery")
        tasks.append(
            Task(
                task_id=task_id,
                pickup_loc=_atoi(tokens[0]),
                delivery_loc=_atoi(tokens[1]),
            )
        )
    return tasks


def _coerce(name: str, value: Any, expected: type) -> Any:
    if expected is bool:
        if not isinstance(value, bool):
            raise InputFormatError(f"Incorrect input JSON format for {name}")
        return value
    if expected is str:
        if not isinstance(value, str):
            raise InputFormatError(f"Incorrect input JSON format for {name}")
        return value
    if expected in (int, float):
        if not isinstance(value, (int, float)):
            raise InputFormatError(f"Incorrect input JSON format for {name}")
        return expected(value)
    return value


def read_param(data: dict, name: str, default: Any = _MISSING) -> Any:
    """Return ``data[name]``.

    Without a default a missing key is an error.  With a default, the value
    must be convertible to the default's type.
    """
    if name not in data:
        if default is _MISSING:
            raise InputFormatError(f"missing property {name} in the input JSON.")
        return default
    value = data[name]
    if default is _MISSING or default is None:
        return value
    return _coerce(name, value, type(default))


def roulette_wheel(weights, rng) -> int:
    """Pick an index with probability proportional to its weight."""
    weights = list(weights)
    if not weights:
        raise ValueError("roulette wheel needs at least one weight")
    target = rng.random() * sum(weights)
    for index, cumulative in enumerate(accumulate(weights)):
        if cumulative >= target:
            return index
    return len(weights) - 1


def format_five_decimals(value: float) -> str:
    """Format a number in fixed notation with five decimal places."""
    return f"{value:.5f}"