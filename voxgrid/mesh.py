"""Triangle mesh with per-vertex normals and colours."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from voxgrid.voxels import Color

INVALID_BLOCK_SIZE = -1.0


def _resized(items: list, size: int, fill: Callable) -> list:
    return items[:size] + [fill() for _ in range(size - len(items))]


@dataclass(eq=False)
class Mesh:
    """Vertices, normals, colours and triangle indices of one mesh block."""

    block_size: float = INVALID_BLOCK_SIZE
    origin: np.ndarray = field(default_factory=lambda: np.zeros(3))
    vertices: list = field(default_factory=list)
    indices: list = field(default_factory=list)
    normals: list = field(default_factory=list)
    colors: list = field(default_factory=list)
    updated: bool = False

    INVALID_BLOCK_SIZE = INVALID_BLOCK_SIZE

    def __post_init__(self) -> None:
        if self.block_size != INVALID_BLOCK_SIZE and not self.block_size > 0.0:
            raise ValueError(f"block size must be positive, got {self.block_size}")
        self.origin = np.asarray(self.origin, dtype=float)
        self.vertices = [np.asarray(v, dtype=float) for v in self.vertices]
        self.normals = [np.asarray(n, dtype=float) for n in self.normals]
        self.indices = [int(i) for i in self.indices]
        self.colors = list(self.colors)

    def has_vertices(self) -> bool:
        return bool(self.vertices)

    def has_normals(self) -> bool:
        return bool(self.normals)

    def has_colors(self) -> bool:
        return bool(self.colors)

    def has_triangles(self) -> bool:
        return bool(self.indices)

    def __len__(self) -> int:
        return len(self.vertices)

    def clear(self) -> None:
        """Drop all vertices, normals, colours and indices."""
        self.vertices.clear()
        self.normals.clear()
        self.colors.clear()
        self.indices.clear()

    def clear_triangles(self) -> None:
        self.indices.clear()

    def clear_normals(self) -> None:
        self.normals.clear()

    def clear_colors(self) -> None:
        self.colors.clear()

    def resize(self, size, has_normals=True, has_colors=True, has_indices=True) -> None:
        """Truncate or pad the vertex list and, optionally, the other lists."""
        self.vertices = _resized(self.vertices, size, lambda: np.zeros(3))
        if has_normals:
            self.normals = _resized(self.normals, size, lambda: np.zeros(3))
        if has_colors:
            self.colors = _resized(self.colors, size, Color)
        if has_indices:
            self.indices = _resized(self.indices, size, int)

    def colorize(self, new_color: Color) -> None:
        """Give every vertex the same colour."""
        self.colors = [new_color] * len(self.vertices)

    def concatenate(self, other: "Mesh") -> None:
        """Append another mesh, offsetting its indices past this mesh's vertices."""
        if other.has_colors() != self.has_colors():
            raise ValueError("meshes disagree on having colours")
        if other.has_normals() != self.has_normals():
            raise ValueError("meshes disagree on having normals")
        if other.has_triangles() != self.has_triangles():
            raise ValueError("meshes disagree on having triangles")

        offset = len(self.vertices)
        self.vertices.extend(np.array(v, dtype=float) for v in other.vertices)
        self.colors.extend(other.colors)
        self.normals.extend(np.array(n, dtype=float) for n in other.normals)
        self.indices.extend(index + offset for index in other.indices)