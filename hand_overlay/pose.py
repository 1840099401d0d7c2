"""Mapping from hand landmarks to a model transform.

The palm (wrist) landmark places the model, the vector from the palm to
the midpoint between thumb tip and index fingertip orients it in the
image plane, and the length of that vector sizes it.
"""

import math

import numpy as np

from .errors import InvalidLandmarkSet
from .landmarks import INDEX_FINGER_TIP, MIN_LANDMARKS, THUMB_TIP, WRIST
from .transform import Transform

# Visual tuning: pinch length (normalized image units) to scene scale
DEFAULT_SCALE_FACTOR = 0.05
# Aligns the model's up axis with the palm-to-pinch vector
DEFAULT_ROTATION_OFFSET = -math.pi / 2


def _as_points(landmarks):
    try:
        pts = np.asarray(landmarks, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidLandmarkSet(f"Landmarks are not numeric points: {exc}") from exc
    count = len(pts) if pts.ndim else 0
    if count < MIN_LANDMARKS:
        raise InvalidLandmarkSet(f"Need at least {MIN_LANDMARKS} landmarks, got {count}", count=count)
    if pts.ndim != 2 or pts.shape[1] < 3:
        raise InvalidLandmarkSet(f"Expected a sequence of (x, y, z) points, got shape {pts.shape}")
    if not np.all(np.isfinite(pts[[WRIST, THUMB_TIP, INDEX_FINGER_TIP], :3])):
        raise InvalidLandmarkSet("Palm, thumb or index landmark is not finite")
    return pts


class PoseMapper:
    def __init__(self, scale_factor=DEFAULT_SCALE_FACTOR, rotation_offset=DEFAULT_ROTATION_OFFSET):
        if scale_factor < 0:
            raise ValueError(f"scale_factor must be non-negative, got {scale_factor}")
        self.scale_factor = scale_factor
        self.rotation_offset = rotation_offset

    @classmethod
    def from_config(cls, pose_cfg):
        return cls(scale_factor=pose_cfg.scale_factor, rotation_offset=pose_cfg.rotation_offset)

    def compute_transform(self, landmarks) -> Transform:
        """Return the transform for one hand's landmarks.

        Raises InvalidLandmarkSet when fewer than 9 points are given or the
        points used are not finite.
        """
        pts = _as_points(landmarks)
        palm = pts[WRIST]
        thumb = pts[THUMB_TIP]
        index = pts[INDEX_FINGER_TIP]

        # image [0,1] -> scene [-1,1], y and z flipped
        position = (
            float((palm[0] - 0.5) * 2),
            float(-(palm[1] - 0.5) * 2),
            float(-palm[2] * 2),
        )

        mid_x = (index[0] + thumb[0]) / 2
        mid_y = (index[1] + thumb[1]) / 2
        dx = float(mid_x - palm[0])
        dy = float(mid_y - palm[1])

        angle = -math.atan2(dy, dx) + self.rotation_offset
        scale = math.sqrt(dx * dx + dy * dy) * self.scale_factor

        return Transform(
            position=position,
            rotation=(0.0, 0.0, angle),
            scale=(scale, scale, scale),
        )


_default_mapper = PoseMapper()


def compute_transform(landmarks) -> Transform:
    return _default_mapper.compute_transform(landmarks)
