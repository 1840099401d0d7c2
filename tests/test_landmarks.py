from types import SimpleNamespace

import pytest

from hand_overlay.landmarks import Handedness, Landmark, detections_from_results


def fake_hand(offset):
    points = [SimpleNamespace(x=0.1 * i + offset, y=0.5, z=-0.01 * i) for i in range(21)]
    return SimpleNamespace(landmark=points)


def fake_class(label, score):
    return SimpleNamespace(classification=[SimpleNamespace(label=label, score=score, index=0)])


@pytest.mark.parametrize("label,expected", [
    ("Left", Handedness.LEFT),
    ("right", Handedness.RIGHT),
    (" RIGHT ", Handedness.RIGHT),
    (Handedness.LEFT, Handedness.LEFT),
])
def test_parse_handedness(label, expected):
    assert Handedness.parse(label) is expected


@pytest.mark.parametrize("label", ["", "Both", None, 1])
def test_parse_rejects_unknown(label):
    with pytest.raises(ValueError):
        Handedness.parse(label)


def test_convert_results():
    results = SimpleNamespace(
        multi_hand_landmarks=[fake_hand(0.0), fake_hand(0.05)],
        multi_handedness=[fake_class("Left", 0.9), fake_class("Right", 0.8)],
    )
    dets = detections_from_results(results)
    assert [d.handedness for d in dets] == [Handedness.LEFT, Handedness.RIGHT]
    assert dets[1].score == pytest.approx(0.8)
    assert len(dets[0].landmarks) == 21
    assert dets[0].landmarks[2] == Landmark(pytest.approx(0.2), 0.5, pytest.approx(-0.02))
    assert dets[1].as_array().shape == (21, 3)


def test_no_hands():
    assert detections_from_results(SimpleNamespace(multi_hand_landmarks=None, multi_handedness=None)) == []
    assert detections_from_results(None) == []


def test_unknown_label_dropped():
    results = SimpleNamespace(
        multi_hand_landmarks=[fake_hand(0.0)],
        multi_handedness=[fake_class("Unknown", 0.4)],
    )
    assert detections_from_results(results) == []
