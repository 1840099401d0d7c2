import json
import math

import pytest

from hand_overlay.config import config_from_dict, get_default_config, load_config
from hand_overlay.errors import ConfigError
from hand_overlay.landmarks import Handedness


def write(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return str(path)


def test_defaults():
    cfg = get_default_config()
    assert cfg.pose.scale_factor == 0.05
    assert cfg.pose.rotation_offset == pytest.approx(-math.pi / 2)
    assert cfg.tracker.max_num_hands == 2
    assert cfg.render.fov == 75.0
    assert {m.handedness for m in cfg.models} == {Handedness.LEFT, Handedness.RIGHT}


def test_load_full_file(tmp_path):
    path = write(tmp_path, {
        "pose": {"scale_factor": 0.1, "rotation_offset": 0.0},
        "tracker": {"camera_index": 2, "mirror": False},
        "render": {"show_landmarks": False},
        "models": [{"asset": "builtin:cube", "handedness": "left",
                    "scale": [0.3, 0.3, 0.3], "color": [1, 0, 0]}],
    })
    cfg = load_config(path)
    assert cfg.pose.scale_factor == 0.1
    assert cfg.tracker.camera_index == 2
    assert cfg.tracker.mirror is False
    assert cfg.tracker.max_num_hands == 2
    assert cfg.render.show_landmarks is False
    assert len(cfg.models) == 1
    spec = cfg.models[0]
    assert spec.handedness is Handedness.LEFT
    assert spec.scale == (0.3, 0.3, 0.3)
    assert spec.color == (1.0, 0.0, 0.0)
    assert spec.position == (0.0, 0.0, 0.0)


def test_missing_sections_use_defaults(tmp_path):
    cfg = load_config(write(tmp_path, {}))
    assert cfg == get_default_config()


@pytest.mark.parametrize("data", [
    {"models": [{"asset": "builtin:cube", "handedness": "Both"}]},
    {"models": [{"asset": "builtin:cube"}]},
    {"models": [{"asset": "builtin:cube", "handedness": "Left", "scale": [1, 2]}]},
    {"models": [{"asset": "builtin:cube", "handedness": "Left", "position": "up"}]},
    {"models": [{"asset": "a", "handedness": "Left"}, {"asset": "b", "handedness": "LEFT"}]},
    {"pose": {"scale_factor": -1.0}},
    {"tracker": {"camera": 1}},
    {"render": 5},
    [],
    {"pose": {"scale_factor": "0.05"}},
    {"pose": {"scale_factor": None}},
    {"models": 5},
    {"models": [{"asset": "builtin:cube", "handedness": "Left", "name": 3}]},
    {"models": [{"asset": 7, "handedness": "Left"}]},
    {"tracker": {"camera_index": 1.5}},
    {"tracker": {"mirror": "yes"}},
    {"render": {"width": True}},
])
def test_invalid_config(data):
    with pytest.raises(ConfigError):
        config_from_dict(data)


def test_invalid_json(tmp_path):
    with pytest.raises(ConfigError):
        load_config(write(tmp_path, "{not json"))


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "absent.json"))


def test_example_config_loads():
    from pathlib import Path
    cfg = load_config(str(Path(__file__).resolve().parent.parent / "hands.example.json"))
    assert [m.name for m in cfg.models] == ["Arrow", "Cube"]
    assert cfg.models[1].handedness is Handedness.LEFT


def test_integer_accepted_for_float_fields():
    cfg = config_from_dict({"pose": {"scale_factor": 1, "rotation_offset": 0}, "render": {"fov": 60}})
    assert cfg.pose.scale_factor == 1
    assert cfg.render.fov == 60
