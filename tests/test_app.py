import pytest

from hand_overlay import app as app_mod
from hand_overlay.app import main, parse_args


class FakeApp:
    instances = []

    def __init__(self, config):
        self.config = config
        self.ran = False
        FakeApp.instances.append(self)

    def run(self):
        self.ran = True


class FailingApp(FakeApp):
    def run(self):
        raise RuntimeError("Cannot open camera 0")


@pytest.fixture(autouse=True)
def reset_instances():
    FakeApp.instances.clear()


def test_parse_args_defaults():
    args = parse_args([])
    assert args.config is None
    assert args.camera is None
    assert args.no_landmarks is False
    assert args.log_level == "INFO"


def test_parse_args_flags():
    args = parse_args(["--config", "hands.json", "--camera", "2", "--no-landmarks", "--log-level", "DEBUG"])
    assert args.config == "hands.json"
    assert args.camera == 2
    assert args.no_landmarks is True
    assert args.log_level == "DEBUG"


def test_main_applies_overrides(monkeypatch):
    monkeypatch.setattr(app_mod, "HandOverlayApp", FakeApp)
    assert main(["--camera", "3", "--no-landmarks"]) == 0
    app = FakeApp.instances[0]
    assert app.ran
    assert app.config.tracker.camera_index == 3
    assert app.config.render.show_landmarks is False


def test_main_without_flags_keeps_defaults(monkeypatch):
    monkeypatch.setattr(app_mod, "HandOverlayApp", FakeApp)
    assert main([]) == 0
    config = FakeApp.instances[0].config
    assert config.tracker.camera_index == 0
    assert config.render.show_landmarks is True


def test_main_bad_config_file(monkeypatch, tmp_path):
    monkeypatch.setattr(app_mod, "HandOverlayApp", FakeApp)
    path = tmp_path / "bad.json"
    path.write_text('{"pose": {"scale_factor": "big"}}')
    assert main(["--config", str(path)]) == 1
    assert FakeApp.instances == []


def test_main_camera_failure(monkeypatch):
    monkeypatch.setattr(app_mod, "HandOverlayApp", FailingApp)
    assert main([]) == 1
    assert len(FailingApp.instances) == 1
