import numpy as np
import pytest

from voxgrid.mesh import INVALID_BLOCK_SIZE, Mesh
from voxgrid.voxels import Color


def _triangle(offset=0.0, with_colors=True, with_normals=True):
    vertices = [(offset, 0, 0), (offset + 1, 0, 0), (offset, 1, 0)]
    return Mesh(
        block_size=1.0,
        vertices=vertices,
        indices=[0, 1, 2],
        normals=[(0, 0, 1)] * 3 if with_normals else [],
        colors=[Color(10, 20, 30, 255)] * 3 if with_colors else [],
    )


def test_default_mesh_is_empty_with_invalid_block_size():
    mesh = Mesh()
    assert mesh.block_size == INVALID_BLOCK_SIZE
    assert np.array_equal(mesh.origin, np.zeros(3))
    assert not mesh.has_vertices()
    assert not mesh.has_normals()
    assert not mesh.has_colors()
    assert not mesh.has_triangles()
    assert len(mesh) == 0
    assert mesh.updated is False


def test_non_positive_block_size_raises():
    with pytest.raises(ValueError):
        Mesh(block_size=0.0)


def test_concatenate_offsets_indices():
    mesh = _triangle()
    mesh.concatenate(_triangle(offset=5.0))
    assert len(mesh) == 6
    assert mesh.indices == [0, 1, 2, 3, 4, 5]
    assert np.allclose(mesh.vertices[3], (5.0, 0.0, 0.0))
    assert len(mesh.colors) == 6
    assert len(mesh.normals) == 6


def test_concatenate_mismatched_attributes_raises():
    mesh = _triangle()
    with pytest.raises(ValueError):
        mesh.concatenate(_triangle(with_colors=False))
    with pytest.raises(ValueError):
        mesh.concatenate(_triangle(with_normals=False))


def test_colorize_sets_every_vertex():
    mesh = _triangle(with_colors=False)
    color = Color(1, 2, 3, 4)
    mesh.colorize(color)
    assert mesh.colors == [color] * len(mesh)


def test_resize_pads_and_truncates():
    mesh = _triangle()
    mesh.resize(5)
    assert len(mesh.vertices) == 5
    assert len(mesh.normals) == 5
    assert len(mesh.colors) == 5
    assert mesh.indices == [0, 1, 2, 0, 0]
    assert np.array_equal(mesh.vertices[4], np.zeros(3))
    mesh.resize(2, has_normals=False, has_colors=False, has_indices=False)
    assert len(mesh.vertices) == 2
    assert len(mesh.normals) == 5
    assert len(mesh.indices) == 5


def test_clear_variants():
    mesh = _triangle()
    mesh.clear_triangles()
    assert not mesh.has_triangles() and mesh.has_vertices()
    mesh.clear_normals()
    assert not mesh.has_normals()
    mesh.clear_colors()
    assert not mesh.has_colors()
    mesh.clear()
    assert len(mesh) == 0