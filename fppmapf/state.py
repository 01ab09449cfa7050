"""Agent states, tasks and agents."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


@dataclass
class State:
    """Position, heading, time, battery level and load of one agent.

    Orientation: 0 east, 1 south, 2 west, 3 north.  A state with
    location -1 marks an invalid or unset state.
    """

    location: int = -1
    timestep: int = -1
    orientation: int = -1
    energy: float = -1.0
    is_loaded: bool = False

    def __str__(self) -> str:
        return (
            f"{self.location},{self.orientation},{self.timestep},"
            f"{self.energy:g},{int(self.is_loaded)}"
        )


class TaskStage(IntEnum):
    """Progress of an agent through its task."""

    Idle = 0
    ToPickup = 1
    ToDelivery = 2


@dataclass
class Task:
    """A pickup-and-delivery job."""

    task_id: int = -1
    start_time_step: int = -1
    pickup_loc: int = -1
    delivery_loc: int = -1
    assigned_agent_id: int = -1
    stage: TaskStage = TaskStage.Idle


@dataclass
class Agent:
    """An agent with its current state and task."""

    id: int
    state: State
    task: Task = field(default_factory=Task)