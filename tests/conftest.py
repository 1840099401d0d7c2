import numpy as np
import pytest

from hand_overlay.assets import Mesh
from hand_overlay.landmarks import HandDetection, Handedness, Landmark, NUM_LANDMARKS
from hand_overlay.model import Model
from hand_overlay.registry import ModelBinding, ModelRegistry


def make_landmarks(palm=(0.5, 0.5, 0.0), thumb=(0.6, 0.5, 0.0), index=(0.5, 0.4, 0.0), count=NUM_LANDMARKS):
    points = [Landmark(0.5, 0.5, 0.0) for _ in range(count)]
    if count > 0:
        points[0] = Landmark(*palm)
    if count > 4:
        points[4] = Landmark(*thumb)
    if count > 8:
        points[8] = Landmark(*index)
    return points


def make_detection(label, **kwargs):
    return HandDetection(Handedness.parse(label), make_landmarks(**kwargs))


def make_model(name):
    return Model(name, Mesh(name, np.zeros(0, dtype=np.float32)))


@pytest.fixture
def registry():
    return ModelRegistry([
        ModelBinding(Handedness.LEFT, make_model("left-model")),
        ModelBinding(Handedness.RIGHT, make_model("right-model")),
    ])
