"""A layer of mesh blocks addressed by integer block index."""

from __future__ import annotations

import math
from typing import Iterator, Optional, Sequence

import numpy as np

from voxgrid.mesh import Mesh
from voxgrid.mesh_utils import create_connected_mesh

BlockIndex = tuple[int, int, int]


def _as_index(index: Sequence[int]) -> BlockIndex:
    x, y, z = (int(c) for c in index)
    return (x, y, z)


class MeshLayer:
    """Holds one mesh per allocated block, all sharing the same block size."""

    def __init__(self, block_size: float) -> None:
        self.block_size = float(block_size)
        self.block_size_inv = 1.0 / self.block_size
        self._meshes: dict[BlockIndex, Mesh] = {}

    def get_mesh(self, index: Sequence[int]) -> Mesh:
        """Return the mesh at ``index``; raise KeyError if it is not allocated."""
        key = _as_index(index)
        try:
            return self._meshes[key]
        except KeyError:
            raise KeyError(f"accessed unallocated mesh at {key}") from None

    def find_mesh(self, index: Sequence[int]) -> Optional[Mesh]:
        """Return the mesh at ``index``, or None if it is not allocated."""
        return self._meshes.get(_as_index(index))

    def find_mesh_by_coordinates(self, coords: Sequence[float]) -> Optional[Mesh]:
        return self.find_mesh(self.block_index_from_coordinates(coords))

    def allocate_mesh(self, index: Sequence[int]) -> Mesh:
        """Return the mesh at ``index``, allocating it if needed."""
        mesh = self.find_mesh(index)
        if mesh is None:
            mesh = self.allocate_new_block(index)
        return mesh

    def allocate_mesh_by_coordinates(self, coords: Sequence[float]) -> Mesh:
        return self.allocate_mesh(self.block_index_from_coordinates(coords))

    def block_index_from_coordinates(self, coords: Sequence[float]) -> BlockIndex:
        """Index of the block that contains the given point."""
        x, y, z = (math.floor(float(c) * self.block_size_inv) for c in coords)
        return (x, y, z)

    def allocate_new_block(self, index: Sequence[int]) -> Mesh:
        """Create a fresh mesh at ``index``; raise KeyError if one exists."""
        key = _as_index(index)
        if key in self._meshes:
            raise KeyError(f"mesh already exists when allocating at {key}")
        mesh = Mesh(
            block_size=self.block_size,
            origin=np.array(key, dtype=float) * self.block_size,
        )
        self._meshes[key] = mesh
        return mesh

    def allocate_new_block_by_coordinates(self, coords: Sequence[float]) -> Mesh:
        return self.allocate_new_block(self.block_index_from_coordinates(coords))

    def remove_mesh(self, index: Sequence[int]) -> None:
        self._meshes.pop(_as_index(index), None)

    def remove_mesh_by_coordinates(self, coords: Sequence[float]) -> None:
        self._meshes.pop(self.block_index_from_coordinates(coords), None)

    def clear_distant_mesh(self, center: Sequence[float], max_distance: float) -> None:
        """Empty (but keep) every mesh whose origin lies beyond ``max_distance``.

        Cleared meshes are marked as updated so consumers also drop them.
        """
        center_arr = np.asarray(center, dtype=float)
        limit = float(max_distance) ** 2
        for mesh in self._meshes.values():
            offset = mesh.origin - center_arr
            if float(offset @ offset) > limit:
                mesh.clear()
                mesh.updated = True

    def allocated_indices(self) -> list[BlockIndex]:
        return list(self._meshes)

    def updated_indices(self) -> list[BlockIndex]:
        return [index for index, mesh in self._meshes.items() if mesh.updated]

    def combined_mesh(self) -> Mesh:
        """Concatenate all meshes into one; triangles stay unconnected."""
        meshes = list(self._meshes.values())
        first = next((mesh for mesh in meshes if mesh.vertices), None)
        layout = (
            (first.has_colors(), first.has_normals(), first.has_triangles())
            if first is not None
            else (False, False, False)
        )
        has_colors, has_normals, has_indices = layout

        combined = Mesh()
        for mesh in meshes:
            if not mesh.vertices:
                continue
            if (mesh.has_colors(), mesh.has_normals(), mesh.has_triangles()) != layout:
                raise ValueError("meshes disagree on colours, normals or triangles")
            count = len(mesh.vertices)
            if count % 3:
                raise ValueError("vertex count must be a multiple of three")
            offset = len(combined.vertices)
            combined.vertices.extend(np.array(v, dtype=float) for v in mesh.vertices)
            if has_colors:
                combined.colors.extend(mesh.colors[:count])
            if has_normals:
                combined.normals.extend(
                    np.array(n, dtype=float) for n in mesh.normals[:count]
                )
            if has_indices:
                combined.indices.extend(range(offset, offset + count))

        if combined.has_colors() and len(combined.colors) != len(combined.vertices):
            raise ValueError("combined mesh has a colour count mismatch")
        if combined.has_normals() and len(combined.normals) != len(combined.vertices):
            raise ValueError("combined mesh has a normal count mismatch")
        if len(combined.vertices) != len(combined.indices):
            raise ValueError("combined mesh has vertices without triangles")
        return combined

    def connected_mesh(self, approximate_vertex_proximity_threshold: float = 1e-10) -> Mesh:
        """Merge all meshes, joining vertices closer than the threshold."""
        return create_connected_mesh(
            list(self._meshes.values()), approximate_vertex_proximity_threshold
        )

    def __len__(self) -> int:
        return len(self._meshes)

    def __iter__(self) -> Iterator[BlockIndex]:
        return iter(self._meshes)

    def clear(self) -> None:
        """Delete every mesh in the layer."""
        self._meshes.clear()