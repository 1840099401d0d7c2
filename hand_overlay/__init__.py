"""
Hand overlay - anchors 3D models to tracked hands on a live video feed.
"""

from .config import AppConfig, ModelSpec, get_default_config, load_config
from .errors import AssetError, ConfigError, HandOverlayError, InvalidLandmarkSet
from .landmarks import HandDetection, Handedness, Landmark
from .pose import PoseMapper, compute_transform
from .registry import ModelBinding, ModelRegistry, build_registry
from .session import DetectionBatch, FrameLoop, Session
from .transform import Transform
from .visibility import VisibilityController

__version__ = "0.1.0"
__all__ = [
    "AppConfig",
    "ModelSpec",
    "get_default_config",
    "load_config",
    "AssetError",
    "ConfigError",
    "HandOverlayError",
    "InvalidLandmarkSet",
    "HandDetection",
    "Handedness",
    "Landmark",
    "PoseMapper",
    "compute_transform",
    "ModelBinding",
    "ModelRegistry",
    "build_registry",
    "DetectionBatch",
    "FrameLoop",
    "Session",
    "Transform",
    "VisibilityController",
]
