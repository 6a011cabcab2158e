import math

import numpy as np
import pytest

from voxgrid.angle_axis import (
    AngleAxis,
    angle_axis_from_matrix,
    angle_axis_from_rotation_vector,
)

ROTATION_PARAMS = [
    (0.3, (0.0, 0.0, 1.0)),
    (1.2, tuple(np.array([1.0, 2.0, 2.0]) / 3.0)),
    (-2.5, (0.0, 0.6, -0.8)),
    (3.0, tuple(np.array([1.0, -1.0, 1.0]) / math.sqrt(3.0))),
]
VECTOR = np.array([0.4, -1.3, 2.2])


def test_default_is_identity():
    aa = AngleAxis()
    np.testing.assert_allclose(aa.vector(), [0.0, 1.0, 0.0, 0.0])
    np.testing.assert_allclose(aa.rotate(VECTOR), VECTOR)


def test_quarter_turn_about_z():
    aa = AngleAxis(math.pi / 2, (0.0, 0.0, 1.0))
    np.testing.assert_allclose(aa.rotate([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-12)


def test_non_unit_axis_rejected():
    with pytest.raises(ValueError):
        AngleAxis(0.5, (1.0, 1.0, 0.0))


def test_vector_layout():
    aa = AngleAxis(*ROTATION_PARAMS[1])
    vec = aa.vector()
    assert vec[0] == aa.angle
    np.testing.assert_array_equal(vec[1:], aa.axis)


@pytest.mark.parametrize("angle, axis", ROTATION_PARAMS)
def test_rotation_matrix_is_orthonormal(angle, axis):
    m = AngleAxis(angle, axis).rotation_matrix()
    np.testing.assert_allclose(m @ m.T, np.eye(3), atol=1e-12)
    assert np.linalg.det(m) == pytest.approx(1.0)


@pytest.mark.parametrize("angle, axis", ROTATION_PARAMS)
def test_rotate_matches_matrix(angle, axis):
    aa = AngleAxis(angle, axis)
    np.testing.assert_allclose(aa.rotate(VECTOR), aa.rotation_matrix() @ VECTOR)


@pytest.mark.parametrize("angle, axis", ROTATION_PARAMS)
def test_inverse_rotate_undoes_rotate(angle, axis):
    aa = AngleAxis(angle, axis)
    np.testing.assert_allclose(aa.inverse_rotate(aa.rotate(VECTOR)), VECTOR, atol=1e-12)


@pytest.mark.parametrize("angle, axis", ROTATION_PARAMS)
def test_rotate4_keeps_last_component(angle, axis):
    aa = AngleAxis(angle, axis)
    v4 = np.array([0.4, -1.3, 2.2, 7.5])
    out = aa.rotate4(v4)
    assert out[3] == v4[3]
    np.testing.assert_allclose(out[:3], aa.rotate(v4[:3]))
    back = aa.inverse_rotate4(out)
    np.testing.assert_allclose(back, v4, atol=1e-12)


def test_rotate4_rejects_wrong_shape():
    aa = AngleAxis(*ROTATION_PARAMS[0])
    with pytest.raises(ValueError):
        aa.rotate4([1.0, 2.0, 3.0])


def test_inverse_negates_angle():
    aa = AngleAxis(*ROTATION_PARAMS[2])
    inv = aa.inverse()
    assert inv.angle == -aa.angle
    np.testing.assert_array_equal(inv.axis, aa.axis)


@pytest.mark.parametrize("a_params", ROTATION_PARAMS)
@pytest.mark.parametrize("b_params", ROTATION_PARAMS)
def test_composition(a_params, b_params):
    a = AngleAxis(*a_params)
    b = AngleAxis(*b_params)
    np.testing.assert_allclose(
        (a * b).rotate(VECTOR), a.rotate(b.rotate(VECTOR)), atol=1e-10
    )


@pytest.mark.parametrize("angle, axis", ROTATION_PARAMS)
def test_compose_with_inverse_is_identity(angle, axis):
    aa = AngleAxis(angle, axis)
    np.testing.assert_allclose((aa * aa.inverse()).rotation_matrix(), np.eye(3), atol=1e-10)


@pytest.mark.parametrize("angle, axis", ROTATION_PARAMS)
def test_disparity_with_self_is_zero(angle, axis):
    aa = AngleAxis(angle, axis)
    assert aa.disparity_angle(AngleAxis(angle, axis)) == pytest.approx(0.0, abs=1e-7)


def test_disparity_between_rotations_about_same_axis():
    a = AngleAxis(0.2, (0.0, 1.0, 0.0))
    b = AngleAxis(0.9, (0.0, 1.0, 0.0))
    assert a.disparity_angle(b) == pytest.approx(0.9 - 0.2)


@pytest.mark.parametrize(
    "angle, axis", ROTATION_PARAMS + [(3 * math.pi + 0.4, (0.0, 1.0, 0.0))]
)
def test_unique_preserves_rotation(angle, axis):
    aa = AngleAxis(angle, axis)
    unique = aa.unique()
    assert 0.0 <= unique.angle <= math.pi
    np.testing.assert_allclose(unique.rotation_matrix(), aa.rotation_matrix(), atol=1e-10)


def test_unique_at_half_turn_picks_positive_axis():
    aa = AngleAxis(math.pi, (0.0, 0.0, -1.0))
    unique = aa.unique()
    assert unique.angle == pytest.approx(math.pi)
    assert unique.axis[2] > 0.0
    np.testing.assert_allclose(unique.rotation_matrix(), aa.rotation_matrix(), atol=1e-12)


def test_unique_of_full_turn_is_identity():
    unique = AngleAxis(2 * math.pi, (0.0, 1.0, 0.0)).unique()
    assert unique.angle == pytest.approx(0.0, abs=1e-12)


def test_normalized_has_unit_axis():
    aa = AngleAxis(0.7, (1.00001, 0.0, 0.0))
    assert np.linalg.norm(aa.normalized().axis) == pytest.approx(1.0, abs=1e-15)
    assert aa.normalized().angle == aa.angle


def test_from_rotation_vector():
    vector = np.array([0.3, -0.4, 1.2])
    aa = angle_axis_from_rotation_vector(vector)
    assert aa.angle == pytest.approx(np.linalg.norm(vector))
    np.testing.assert_allclose(aa.axis * aa.angle, vector)


def test_from_zero_rotation_vector_is_identity():
    aa = angle_axis_from_rotation_vector([0.0, 0.0, 0.0])
    np.testing.assert_allclose(aa.rotation_matrix(), np.eye(3))
    assert aa.angle == 0.0


@pytest.mark.parametrize("angle, axis", ROTATION_PARAMS)
def test_from_matrix_round_trip(angle, axis):
    aa = AngleAxis(angle, axis)
    recovered = angle_axis_from_matrix(aa.rotation_matrix())
    assert 0.0 <= recovered.angle <= math.pi + 1e-12
    np.testing.assert_allclose(recovered.rotation_matrix(), aa.rotation_matrix(), atol=1e-10)


def test_from_matrix_rejects_wrong_shape():
    with pytest.raises(ValueError):
        angle_axis_from_matrix(np.eye(2))