# fppmapf

Building blocks for energy-aware, lifelong multi-agent pickup-and-delivery
planning on 4-connected grid maps with oriented robots. The package has no
dependencies outside the standard library.

## Modules

- `fppmapf.environment` – `Environment` loads a grid map and records
  obstacles (`@`, `T`), charging stations (`C`) and task points (`E`, `S`).
  Two map formats are read: a benchmark format whose first line starts with
  `t`, followed by `height N`, `width N` and a `map` line, or a first line of
  the form `rows,cols`. Locations are `y * cols + x`; `get_xy`, `get_loc`,
  `is_out_of_boundary` and `describe` convert and format them. A missing or
  malformed map raises `MapFileError`.
- `fppmapf.state` – the dataclasses `State` (location, timestep,
  orientation, energy, is_loaded; orientation 0 east, 1 south, 2 west,
  3 north), `Task`, `Agent` and the `TaskStage` enum.
- `fppmapf.action` – the `Action` enum: `FW`, `CR`, `CCR`, `W`, `P`, `D`,
  `E` and `NA`.
- `fppmapf.action_model` – `ActionModel` applies actions to states
  (`result_state`, `result_states`), computes battery levels
  (`next_energy`, `next_energy_at`, `pure_energy_consumption`), finds the
  movement action between two states (`get_normal_action`) and checks a
  joint action for illegal moves, vertex and swap conflicts and empty
  batteries (`is_valid`). Charging away from a station raises `ChargeError`.
- `fppmapf.inputs` – `read_start_states` and `read_tasks` read agent files
  (a count, then `location orientation energy` per line) and task files
  (a count, then `pickup delivery` per line); lines starting with `#` are
  skipped and an unreadable file gives an empty list. `read_param` fetches a
  JSON parameter with an optional typed default. Malformed input raises
  `InputFormatError`. Also `roulette_wheel` and `format_five_decimals`.
- `fppmapf.time_limiter` – `TimeLimiter` measures elapsed time against a
  limit on a monotonic clock.
- `fppmapf.cat` – `CAT`, a conflict-avoidance table of vertex and edge
  reservations in space-time, with time-step bookkeeping. Inconsistent
  updates raise `CATError`.
- `fppmapf.guidance_map` – `GuidanceMap` holds five weights per location
  (east, south, west, north, stay). `load("")` keeps all weights at 1 and
  returns `"all_one"`; otherwise a JSON list of numbers, each at least 1, is
  read and the file's stem is returned. Bad files raise `GuidanceMapError`.
- `fppmapf.open_list` – `SearchState` and `OpenList`, an indexed binary
  min-heap on `g` with decrease-key.
- `fppmapf.heuristic_search` – `HeuristicSearch`, a Dijkstra search over
  every (position, orientation) state using a caller-supplied action cost.
  Forward moves out of a charging station are only allowed from the start.
- `fppmapf.heuristic_table` – `HeuristicTable` runs that search from every
  free oriented cell (`compute`) and answers `get`, `get_oriented`,
  `get_full` and `get_from`. `save` and `load` write and read a
  zlib-compressed binary file; `preprocess(suffix)` loads the cache file for
  the map from the environment's `file_storage_path` if it exists, otherwise
  computes the tables, and returns the path it looked for. Unreachable pairs
  have cost `MAX_HEURISTIC` (1e100).
- `fppmapf.charge_distance_table` – `ChargeDistanceTable` lists, for every
  cell and every oriented cell, the charging stations as sorted
  `(cost, charge_id)` pairs.
- `fppmapf.path_plan` – `PathPlan` and `AgentStatus`: an agent's path,
  actions, goals (pickup, delivery, charging station) and cached costs, with
  stage queries such as `current_stage`, `is_passed_delivery` and
  `goal_tuple`.
- `fppmapf.cost_calculator` – `CostCalculator` and `CostType` combine
  caller-supplied action cost functions with the heuristic tables:
  cost-to-go over a goal sequence (`calculate_acc_heuristic`,
  `get_main_heuristic`, `get_minimum_energy_consumption`), the remaining cost
  of a plan (`get_remain_main_cost`), and choice of a free charging station
  among the nearest ones (`get_all_min_cost_charge_ids`, `select_charge_id`,
  which picks at random with a seeded generator).

Diagnostics go through the standard `logging` module.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from pathlib import Path

from fppmapf.action import Action
from fppmapf.action_model import ActionModel
from fppmapf.charge_distance_table import ChargeDistanceTable
from fppmapf.environment import Environment
from fppmapf.guidance_map import GuidanceMap
from fppmapf.heuristic_table import HeuristicTable
from fppmapf.state import State

Path("tiny.map").write_text("3,4\n....\n.C@.\nE..S\n")

env = Environment()
env.load("tiny.map")

model = ActionModel(env, idle_consumption=0.1,
                    active_unloaded_consumption=1.0,
                    active_loaded_consumption=2.0,
                    charge_energy_per_timestep=5.0,
                    full_energy=100.0)

start = State(location=env.get_loc(0, 0), timestep=0, orientation=0,
              energy=50.0, is_loaded=False)
print(model.result_state(start, Action.FW))   # 1,0,1,49,0

guidance = GuidanceMap(env)
guidance.load("")                              # all weights 1

table = HeuristicTable(env, guidance.get_weight)
table.compute()
print(table.get(env.get_loc(0, 0), env.get_loc(3, 2)))

charges = ChargeDistanceTable(env)
charges.preprocess(table)
print(charges.get(env.get_loc(0, 0)))          # ((cost, charge_id), ...)
```

`HeuristicTable` and `HeuristicSearch` take a function
`(location, orientation, action) -> cost`; `CostCalculator` takes functions
`(is_loaded, location, orientation, action) -> cost` for the main and the
energy cost. How those costs are weighted is up to the caller.

## What it does not do

The package provides the environment, the action and energy model and the
search tables a planner builds on. It does not contain a planner that
assigns paths to all agents each time step, a single-agent search through
pickup, delivery and charging goals, a simulation loop, or a command-line
program; nothing writes simulation results.