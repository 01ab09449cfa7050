import json

import pytest

from fppmapf.action import Action
from fppmapf.environment import Environment
from fppmapf.guidance_map import GuidanceMap, GuidanceMapError


@pytest.fixture
def env():
    return Environment(rows=1, cols=2)


def write_weights(path, weights):
    path.write_text(json.dumps(weights), encoding="utf-8")
    return str(path)


def test_empty_path_gives_all_one(env):
    gmap = GuidanceMap(env)
    assert gmap.load("") == "all_one"
    for loc in range(2):
        for orient in range(4):
            assert gmap.get_weight(loc, orient, Action.FW) == 1.0
        assert gmap.get_weight(loc, 0, Action.W) == 1.0


def test_load_weights_and_lookup(env, tmp_path):
    weights = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
    path = write_weights(tmp_path / "guide.json", weights)
    gmap = GuidanceMap(env)
    assert gmap.load(path) == "guide"
    for loc in range(2):
        for orient in range(4):
            assert gmap.get_weight(loc, orient, Action.FW) == weights[loc * 5 + orient]
        for action in (Action.W, Action.CR, Action.CCR, Action.P, Action.D, Action.E):
            assert gmap.get_weight(loc, 2, action) == weights[loc * 5 + 4]


def test_size_mismatch_raises(env, tmp_path):
    path = write_weights(tmp_path / "bad.json", [1, 1, 1])
    with pytest.raises(GuidanceMapError):
        GuidanceMap(env).load(path)


def test_weight_below_one_raises(env, tmp_path):
    path = write_weights(tmp_path / "low.json", [1] * 9 + [0.5])
    with pytest.raises(GuidanceMapError):
        GuidanceMap(env).load(path)


def test_unparseable_file_raises(env, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[1, 2,", encoding="utf-8")
    with pytest.raises(GuidanceMapError):
        GuidanceMap(env).load(str(path))


def test_missing_file_raises(env, tmp_path):
    with pytest.raises(GuidanceMapError):
        GuidanceMap(env).load(str(tmp_path / "nope.json"))


def test_invalid_orientation_for_forward(env):
    gmap = GuidanceMap(env)
    gmap.load("")
    with pytest.raises(ValueError):
        gmap.get_weight(0, 4, Action.FW)