"""Marching cubes helpers: corner sign configuration and edge interpolation."""

from __future__ import annotations

from typing import Sequence

import numpy as np

MIN_SDF_DIFFERENCE = 1e-6


def calculate_vertex_configuration(vertex_sdf: Sequence[float]) -> int:
    """Bit mask with bit ``i`` set when cube corner ``i`` is inside (sdf < 0)."""
    values = list(vertex_sdf)
    if len(values) != 8:
        raise ValueError(f"a cube has 8 corners, got {len(values)} values")
    return sum(1 << i for i, sdf in enumerate(values) if sdf < 0)


def interpolate_vertex(
    vertex1: Sequence[float], vertex2: Sequence[float], sdf1: float, sdf2: float
) -> np.ndarray:
    """Approximate the zero crossing on the edge between two cube corners.

    When the two distances are too close to tell apart, the edge midpoint
    is used instead.
    """
    v1 = np.asarray(vertex1, dtype=float)
    v2 = np.asarray(vertex2, dtype=float)
    sdf_diff = float(sdf1) - float(sdf2)
    if abs(sdf_diff) >= MIN_SDF_DIFFERENCE:
        t = float(sdf1) / sdf_diff
        return v1 + t * (v2 - v1)
    return 0.5 * (v1 + v2)