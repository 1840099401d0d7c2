import numpy as np
import pytest

from hand_overlay.transform import Transform

from conftest import make_model


def test_identity_matrix():
    np.testing.assert_allclose(np.asarray(Transform.identity().to_matrix()), np.eye(4))


def test_matrix_scales_then_translates():
    m = Transform(position=(1.0, 2.0, 3.0), scale=(2.0, 2.0, 2.0)).to_matrix()
    # pyrr matrices act on row vectors
    point = np.dot([1.0, 0.0, 0.0, 1.0], np.asarray(m))
    np.testing.assert_allclose(point, [3.0, 2.0, 3.0, 1.0])


def test_zero_scale_collapses_to_position():
    m = Transform(position=(0.5, -0.5, 0.0), rotation=(0.0, 0.0, 1.2), scale=(0.0, 0.0, 0.0)).to_matrix()
    point = np.dot([3.0, -4.0, 5.0, 1.0], np.asarray(m))
    np.testing.assert_allclose(point, [0.5, -0.5, 0.0, 1.0], atol=1e-12)


def test_model_setters_and_visibility():
    model = make_model("m")
    assert not model.visible
    model.set_position(1, 2, 3)
    model.set_rotation(0, 0, 0.5)
    model.set_scale(0.1, 0.1, 0.1)
    model.show()
    assert model.visible
    assert model.transform == Transform((1.0, 2.0, 3.0), (0.0, 0.0, 0.5), (0.1, 0.1, 0.1))
    model.hide()
    assert not model.visible


def test_model_apply():
    model = make_model("m")
    t = Transform((0.1, 0.2, 0.3), (0.0, 0.0, -0.7), (0.2, 0.2, 0.2))
    model.apply(t)
    assert model.transform == t
    assert model.model_matrix().shape == (4, 4)
    assert model.position == pytest.approx((0.1, 0.2, 0.3))
