"""Rotations stored as an angle about a unit axis."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

_AXIS_TOLERANCE = 1e-4
_EPSILON = np.finfo(float).eps
_UNIT_X = (1.0, 0.0, 0.0)


def _check_unit(axis: np.ndarray) -> None:
    squared_norm = float(axis @ axis)
    if abs(squared_norm - 1.0) > _AXIS_TOLERANCE:
        raise ValueError(f"rotation axis must have unit length, got squared norm {squared_norm}")


def _vector3(values: Sequence[float]) -> np.ndarray:
    array = np.asarray(values, dtype=float).reshape(-1)
    if array.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {array.shape}")
    return array


def _quaternion_multiply(lhs: tuple[float, np.ndarray], rhs: tuple[float, np.ndarray]):
    w1, v1 = lhs
    w2, v2 = rhs
    return w1 * w2 - float(v1 @ v2), w1 * v2 + w2 * v1 + np.cross(v1, v2)


def _quaternion_from_matrix(m: np.ndarray) -> tuple[float, np.ndarray]:
    diagonal_sum = float(m[0, 0] + m[1, 1] + m[2, 2])
    if diagonal_sum > 0.0:
        t = math.sqrt(diagonal_sum + 1.0)
        w = 0.5 * t
        t = 0.5 / t
        vec = np.array(
            [(m[2, 1] - m[1, 2]) * t, (m[0, 2] - m[2, 0]) * t, (m[1, 0] - m[0, 1]) * t]
        )
        return w, vec
    i = 0
    if m[1, 1] > m[0, 0]:
        i = 1
    if m[2, 2] > m[i, i]:
        i = 2
    j = (i + 1) % 3
    k = (j + 1) % 3
    t = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
    vec = np.zeros(3)
    vec[i] = 0.5 * t
    t = 0.5 / t
    w = (m[k, j] - m[j, k]) * t
    vec[j] = (m[j, i] + m[i, j]) * t
    vec[k] = (m[k, i] + m[i, k]) * t
    return float(w), vec


class AngleAxis:
    """A rotation of ``angle`` radians about the unit vector ``axis``.

    The rotation takes vectors from frame B to frame A.
    """

    __slots__ = ("angle", "axis")

    def __init__(self, angle: float = 0.0, axis: Sequence[float] = _UNIT_X) -> None:
        axis_array = _vector3(axis)
        _check_unit(axis_array)
        self.angle = float(angle)
        self.axis = axis_array

    @classmethod
    def _from_quaternion(cls, w: float, vec: np.ndarray) -> "AngleAxis":
        n = float(np.linalg.norm(vec))
        if n < _EPSILON:
            return cls()
        angle = 2.0 * math.atan2(n, abs(w))
        if w < 0.0:
            n = -n
        return cls(angle, vec / n)

    def _quaternion(self) -> tuple[float, np.ndarray]:
        half = 0.5 * self.angle
        return math.cos(half), math.sin(half) * self.axis

    def vector(self) -> np.ndarray:
        """The angle followed by the three axis components."""
        return np.concatenate(([self.angle], self.axis))

    def unique(self) -> "AngleAxis":
        """Equivalent rotation with angle in [0, pi] and a canonical axis."""
        angle = math.fmod(self.angle + math.pi, 2.0 * math.pi) - math.pi
        axis = self.axis
        if angle > 0.0:
            return AngleAxis(angle, axis)
        if angle == 0.0:
            return AngleAxis()
        if angle != -math.pi:
            return AngleAxis(-angle, -axis)
        # At -pi the axis and its negation describe the same rotation:
        # pick the one whose first nonzero component is positive.
        for component in axis[:2]:
            if component < 0.0:
                return AngleAxis(-angle, -axis)
            if component > 0.0:
                return AngleAxis(-angle, axis)
        if axis[2] < 0.0:
            return AngleAxis(-angle, -axis)
        return AngleAxis(-angle, axis)

    def inverse(self) -> "AngleAxis":
        return AngleAxis(-self.angle, self.axis)

    def rotate(self, v: Sequence[float]) -> np.ndarray:
        return self.rotation_matrix() @ _vector3(v)

    def rotate4(self, v: Sequence[float]) -> np.ndarray:
        """Rotate the first three components and keep the fourth."""
        values = np.asarray(v, dtype=float).reshape(-1)
        if values.shape != (4,):
            raise ValueError(f"expected a 4-vector, got shape {values.shape}")
        return np.concatenate((self.rotate(values[:3]), values[3:]))

    def inverse_rotate(self, v: Sequence[float]) -> np.ndarray:
        return self.inverse().rotate(v)

    def inverse_rotate4(self, v: Sequence[float]) -> np.ndarray:
        return self.inverse().rotate4(v)

    def normalized(self) -> "AngleAxis":
        """Same angle with the axis rescaled to exactly unit length."""
        return AngleAxis(self.angle, self.axis / np.linalg.norm(self.axis))

    def __mul__(self, other: "AngleAxis") -> "AngleAxis":
        if not isinstance(other, AngleAxis):
            return NotImplemented
        w, vec = _quaternion_multiply(self._quaternion(), other._quaternion())
        return AngleAxis._from_quaternion(w, vec)

    def disparity_angle(self, other: "AngleAxis") -> float:
        """Angle in radians of the rotation between this and ``other``."""
        return (other * self.inverse()).unique().angle

    def rotation_matrix(self) -> np.ndarray:
        a = self.axis
        c = math.cos(self.angle)
        s = math.sin(self.angle)
        skew = np.array([[0.0, -a[2], a[1]], [a[2], 0.0, -a[0]], [-a[1], a[0], 0.0]])
        return c * np.eye(3) + (1.0 - c) * np.outer(a, a) + s * skew

    def __repr__(self) -> str:
        return f"AngleAxis(angle={self.angle!r}, axis={self.axis.tolist()!r})"

    def __str__(self) -> str:
        return " ".join(f"{value:g}" for value in self.vector())


def angle_axis_from_rotation_vector(rotation_vector: Sequence[float]) -> AngleAxis:
    """Rotation whose axis is the vector's direction and angle its length."""
    vector = _vector3(rotation_vector)
    angle = float(np.linalg.norm(vector))
    if angle < _EPSILON:
        return AngleAxis()
    return AngleAxis(angle, vector / angle)


def angle_axis_from_matrix(matrix) -> AngleAxis:
    """Angle-axis form of a 3x3 rotation matrix, with angle in [0, pi]."""
    m = np.asarray(matrix, dtype=float)
    if m.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {m.shape}")
    w, vec = _quaternion_from_matrix(m)
    return AngleAxis._from_quaternion(w, vec)