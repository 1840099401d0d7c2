"""
Configuration for the hand overlay.
"""

import json
import math
from dataclasses import dataclass, field, fields
from typing import List, Optional, Tuple

from .errors import ConfigError
from .landmarks import Handedness
from .pose import DEFAULT_ROTATION_OFFSET, DEFAULT_SCALE_FACTOR


@dataclass
class PoseConfig:
    """Tuning constants for the landmark to transform mapping."""
    scale_factor: float = DEFAULT_SCALE_FACTOR
    rotation_offset: float = DEFAULT_ROTATION_OFFSET


@dataclass
class TrackerConfig:
    """Camera and hand tracking configuration."""
    camera_index: int = 0
    max_num_hands: int = 2
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    mirror: bool = True
    frame_width: int = 640
    frame_height: int = 480


@dataclass
class RenderConfig:
    """Window and camera configuration."""
    width: int = 800
    height: int = 600
    fov: float = 75.0
    near: float = 0.1
    far: float = 1000.0
    camera_distance: float = 2.0
    show_landmarks: bool = True


@dataclass
class ModelSpec:
    """One model to bind to a hand at startup."""
    asset: str
    handedness: Handedness
    scale: Tuple[float, float, float] = (0.1, 0.1, 0.1)
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    color: Tuple[float, float, float] = (0.7, 0.5, 0.3)
    name: Optional[str] = None


def default_models() -> List[ModelSpec]:
    return [
        ModelSpec("builtin:arrow", Handedness.RIGHT, color=(0.2, 0.6, 0.9), name="Arrow"),
        ModelSpec("builtin:pyramid", Handedness.LEFT, color=(0.9, 0.6, 0.4), name="Pyramid"),
    ]


@dataclass
class AppConfig:
    """Main application configuration."""
    pose: PoseConfig = field(default_factory=PoseConfig)
    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    models: List[ModelSpec] = field(default_factory=default_models)


def get_default_config() -> AppConfig:
    """Get default application configuration."""
    return AppConfig()


def _vec3(value, key):
    try:
        vec = tuple(float(v) for v in value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be a list of 3 numbers, got {value!r}") from None
    if len(vec) != 3 or not all(math.isfinite(v) for v in vec):
        raise ConfigError(f"{key} must be a list of 3 finite numbers, got {value!r}")
    return vec


def _check_type(value, expected, key):
    # JSON has no int/float split, but bool is never a number here
    if expected is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
    elif expected is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, expected)
    if not ok:
        raise ConfigError(f"{key} must be {expected.__name__}, got {value!r}")
    if expected is float and not math.isfinite(value):
        raise ConfigError(f"{key} must be finite, got {value!r}")


def _section(cls, data, name):
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ConfigError(f"[{name}] must be an object")
    known = {f.name: f.type for f in fields(cls)}
    unknown = set(data) - set(known)
    if unknown:
        raise ConfigError(f"Unknown keys in [{name}]: {', '.join(sorted(unknown))}")
    for key, value in data.items():
        _check_type(value, known[key], f"{name}.{key}")
    return cls(**data)


def _model_spec(data, i):
    key = f"models[{i}]"
    if not isinstance(data, dict) or "asset" not in data or "handedness" not in data:
        raise ConfigError(f"{key} needs at least 'asset' and 'handedness'")
    try:
        handedness = Handedness.parse(data["handedness"])
    except ValueError as exc:
        raise ConfigError(f"{key}: {exc}") from exc
    _check_type(data["asset"], str, f"{key}.asset")
    name = data.get("name")
    if name is not None:
        _check_type(name, str, f"{key}.name")
    spec = ModelSpec(asset=data["asset"], handedness=handedness, name=name)
    for attr in ("scale", "position", "rotation", "color"):
        if attr in data:
            setattr(spec, attr, _vec3(data[attr], f"{key}.{attr}"))
    return spec


def config_from_dict(data) -> AppConfig:
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be an object")
    cfg = AppConfig(
        pose=_section(PoseConfig, data.get("pose"), "pose"),
        tracker=_section(TrackerConfig, data.get("tracker"), "tracker"),
        render=_section(RenderConfig, data.get("render"), "render"),
    )
    if cfg.pose.scale_factor < 0:
        raise ConfigError("pose.scale_factor must be non-negative")
    if "models" in data:
        if not isinstance(data["models"], list):
            raise ConfigError("models must be a list")
        cfg.models = [_model_spec(m, i) for i, m in enumerate(data["models"])]
    seen = set()
    for spec in cfg.models:
        if spec.handedness in seen:
            raise ConfigError(f"More than one model bound to the {spec.handedness.value} hand")
        seen.add(spec.handedness)
    return cfg


def load_config(path) -> AppConfig:
    """Load an AppConfig from a JSON file; missing sections take defaults."""
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config {path} is not valid JSON: {exc}") from exc
    return config_from_dict(data)
