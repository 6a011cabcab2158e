"""Rigid transformations in the plane."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

_EPSILON = np.finfo(float).eps


def _rotation(angle: float) -> np.ndarray:
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([[c, -s], [s, c]])


def _vector2(values: Sequence[float]) -> np.ndarray:
    array = np.asarray(values, dtype=float).reshape(-1)
    if array.shape != (2,):
        raise ValueError(f"expected a 2-vector, got shape {array.shape}")
    return array


class Transformation2D:
    """Rotation by ``angle`` radians followed by translation by ``position``."""

    __slots__ = ("angle", "position")
    __hash__ = None

    def __init__(self, angle: float = 0.0, position: Sequence[float] = (0.0, 0.0)) -> None:
        self.angle = float(angle)
        self.position = _vector2(position)

    def rotation_matrix(self) -> np.ndarray:
        return _rotation(self.angle)

    def matrix(self) -> np.ndarray:
        """The 3x3 homogeneous transformation matrix."""
        result = np.eye(3)
        result[:2, :2] = self.rotation_matrix()
        result[:2, 2] = self.position
        return result

    def as_vector(self) -> np.ndarray:
        """The angle followed by the two position components."""
        return np.concatenate(([self.angle], self.position))

    def __mul__(self, other):
        if isinstance(other, Transformation2D):
            return Transformation2D(
                self.angle + other.angle,
                self.position + self.rotation_matrix() @ other.position,
            )
        return self.transform(other)

    def transform(self, point: Sequence[float]) -> np.ndarray:
        return self.rotation_matrix() @ _vector2(point) + self.position

    def transform_vectorized(self, points) -> np.ndarray:
        """Transform every column of a 2xN array."""
        array = np.asarray(points, dtype=float)
        if array.ndim != 2 or array.shape[0] != 2:
            raise ValueError(f"expected a 2xN array, got shape {array.shape}")
        return self.rotation_matrix() @ array + self.position[:, None]

    def inverse(self) -> "Transformation2D":
        inverse_angle = -self.angle
        return Transformation2D(inverse_angle, -(_rotation(inverse_angle) @ self.position))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transformation2D):
            return NotImplemented
        return self.angle == other.angle and bool(np.array_equal(self.position, other.position))

    def __repr__(self) -> str:
        return f"Transformation2D(angle={self.angle!r}, position={self.position.tolist()!r})"

    def __str__(self) -> str:
        x, y = self.position
        return f"[{self.angle:g}, [{x:g} {y:g}]]"


def transformation2d_from_matrix(matrix) -> Transformation2D:
    """Build a transformation from a 3x3 homogeneous matrix.

    The bottom-right entry must not exceed one and the rotation block must
    have unit determinant, both to machine precision.
    """
    m = np.asarray(matrix, dtype=float)
    if m.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {m.shape}")
    if m[2, 2] - 1.0 > _EPSILON:
        raise ValueError(f"bottom-right entry must be 1, got {m[2, 2]}")
    rotation = m[:2, :2]
    determinant = rotation[0, 0] * rotation[1, 1] - rotation[1, 0] * rotation[0, 1]
    if abs(determinant - 1.0) > _EPSILON:
        raise ValueError(f"rotation block must have determinant 1, got {determinant}")
    angle = math.atan2(rotation[1, 0], rotation[0, 0])
    return Transformation2D(angle, m[:2, 2])