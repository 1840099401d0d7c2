"""Hand detection records and conversion from mediapipe results."""

import enum
import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Sequence

import numpy as np

logger = logging.getLogger(__name__)

NUM_LANDMARKS = 21

# Anatomical indices used by the pose mapping
WRIST = 0
THUMB_TIP = 4
INDEX_FINGER_TIP = 8

# Minimum number of points needed to address every index above
MIN_LANDMARKS = INDEX_FINGER_TIP + 1


class Landmark(NamedTuple):
    x: float
    y: float
    z: float


class Handedness(enum.Enum):
    LEFT = "Left"
    RIGHT = "Right"

    @classmethod
    def parse(cls, label):
        """Map a label such as "Left", "right" or a Handedness to the enum."""
        if isinstance(label, cls):
            return label
        if isinstance(label, str):
            for member in cls:
                if member.value.lower() == label.strip().lower():
                    return member
        raise ValueError(f"Unknown handedness label: {label!r}")

    def __str__(self):
        return self.value


@dataclass
class HandDetection:
    """One tracked hand in one frame."""
    handedness: Handedness
    landmarks: Sequence[Landmark]
    score: float = 1.0

    def as_array(self):
        return np.asarray(self.landmarks, dtype=np.float64)


def detections_from_results(results) -> List[HandDetection]:
    """Convert a mediapipe Hands result into HandDetection records.

    Hands without a handedness classification, or with a label outside
    Left/Right, are dropped. Absence of a hand is absence from the list.
    """
    hands = getattr(results, "multi_hand_landmarks", None)
    handedness = getattr(results, "multi_handedness", None)
    if not hands or not handedness:
        return []

    detections = []
    for hand_landmarks, classified in zip(hands, handedness):
        category = classified.classification[0]
        try:
            label = Handedness.parse(category.label)
        except ValueError:
            logger.debug("Dropping hand with label %r", category.label)
            continue
        points = [Landmark(lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark]
        detections.append(HandDetection(label, points, float(category.score)))
    return detections
