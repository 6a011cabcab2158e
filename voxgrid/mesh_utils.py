"""Merging of mesh blocks into one connected mesh."""

from __future__ import annotations

import math
from typing import Iterable, Union

import numpy as np

from voxgrid.mesh import Mesh

_EPSILON = 1e-6
_UP = (0.0, 0.0, 1.0)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _normalized(normal: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(normal))
    if length > _EPSILON:
        return normal / length
    return np.array(_UP)


def create_connected_mesh(
    meshes: Union[Mesh, Iterable[Mesh]],
    approximate_vertex_proximity_threshold: float = 1e-10,
) -> Mesh:
    """Merge meshes into one, joining vertices that fall in the same grid cell.

    Vertices are snapped to a grid of the given spacing; vertices sharing a
    cell become one, their normals are averaged, and triangles left with two
    or three identical corners are dropped.
    """
    if isinstance(meshes, Mesh):
        meshes = [meshes]

    connected = Mesh()
    uniques: dict[tuple[int, int, int], int] = {}
    threshold_inv = 1.0 / float(approximate_vertex_proximity_threshold)

    for mesh in meshes:
        if not mesh.vertices:
            continue
        num_vertices = len(mesh.vertices)
        if num_vertices != len(mesh.indices):
            raise ValueError("every vertex must belong to exactly one triangle corner")
        if num_vertices % 3:
            raise ValueError("vertex count must be a multiple of three")

        old_to_new: list[int] = []
        for old_index, vertex in enumerate(mesh.vertices):
            key = tuple(_round_half_away(float(c) * threshold_inv) for c in vertex)
            new_index = uniques.get(key)
            if new_index is None:
                new_index = len(connected.vertices)
                connected.vertices.append(np.array(vertex, dtype=float))
                if mesh.has_colors():
                    connected.colors.append(mesh.colors[old_index])
                if mesh.has_normals():
                    connected.normals.append(np.array(mesh.normals[old_index], dtype=float))
                uniques[key] = new_index
            elif mesh.has_normals():
                connected.normals[new_index] = (
                    connected.normals[new_index] + np.asarray(mesh.normals[old_index])
                )
            old_to_new.append(new_index)

        connected.normals = [_normalized(n) for n in connected.normals]

        corners = iter(mesh.indices)
        for triangle in zip(corners, corners, corners):
            for corner in triangle:
                if not 0 <= corner < num_vertices:
                    raise ValueError(f"triangle index {corner} out of range")
            v0, v1, v2 = (old_to_new[corner] for corner in triangle)
            if v0 != v1 and v1 != v2 and v0 != v2:
                connected.indices.extend((v0, v1, v2))

    if connected.has_colors() and len(connected.colors) != len(connected.vertices):
        raise ValueError("merged meshes disagree on having colours")
    if connected.has_normals() and len(connected.normals) != len(connected.vertices):
        raise ValueError("merged meshes disagree on having normals")
    return connected