import pytest

from fppmapf.environment import Environment, MapFileError

GRID = "4,5\n.C..E\n.@@..\nS...T\n..C..\n"


def _load(tmp_path, text, name="warehouse.map"):
    path = tmp_path / name
    path.write_text(text)
    env = Environment()
    env.load(str(path), "store")
    return env


def test_comma_format_dimensions_and_name(tmp_path):
    env = _load(tmp_path, GRID)
    assert (env.rows, env.cols) == (4, 5)
    assert env.map_name == "warehouse.map"
    assert env.file_storage_path == "store"
    assert len(env.obstacles) == env.rows * env.cols


def test_cells_are_classified(tmp_path):
    env = _load(tmp_path, GRID)
    obstacle_locs = [loc for loc, blocked in enumerate(env.obstacles) if blocked]
    assert obstacle_locs == [env.get_loc(1, 1), env.get_loc(2, 1), env.get_loc(4, 2)]
    assert env.charges_locs == [env.get_loc(1, 0), env.get_loc(2, 3)]
    assert env.task_locs == [env.get_loc(4, 0), env.get_loc(0, 2)]
    for charge_id, loc in enumerate(env.charges_locs):
        assert env.loc2charge_id[loc] == charge_id
        assert env.charges[loc]
    assert sum(1 for c in env.loc2charge_id if c >= 0) == len(env.charges_locs)
    assert all(env.task_points[loc] for loc in env.task_locs)


def test_benchmark_format(tmp_path):
    env = _load(tmp_path, "type octile\nheight 2\nwidth 3\nmap\n.@.\nC..\n", "bench.map")
    assert (env.rows, env.cols) == (2, 3)
    assert env.obstacles[env.get_loc(1, 0)]
    assert env.charges_locs == [env.get_loc(0, 1)]


def test_xy_round_trip(tmp_path):
    env = _load(tmp_path, GRID)
    for loc in range(env.rows * env.cols):
        x, y = env.get_xy(loc)
        assert env.get_loc(x, y) == loc
        assert not env.is_out_of_boundary(x, y)


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (5, 0), (0, 4)])
def test_out_of_boundary(tmp_path, x, y):
    env = _load(tmp_path, GRID)
    assert env.is_out_of_boundary(x, y)


def test_orientation_symbols():
    env = Environment()
    assert [env.str_orient(o) for o in range(4)] == [">", "v", "<", "^"]


def test_describe(tmp_path):
    env = _load(tmp_path, GRID)
    loc = env.get_loc(1, 2)
    assert env.describe(loc, 1) == "(1, 2, v)"
    assert env.describe(loc) == "(1, 2)"


def test_missing_file(tmp_path):
    with pytest.raises(MapFileError):
        Environment().load(str(tmp_path / "absent.map"), "")


def test_short_row(tmp_path):
    with pytest.raises(MapFileError):
        _load(tmp_path, "2,3\n...\n..\n")