# voxgrid

Building blocks for volumetric mapping with signed distance fields. The only
runtime dependency is numpy.

## What is in the package

### Voxels and block packing — `voxgrid.voxels`

- `Color(r, g, b, a)`: frozen RGBA colour; each channel must be in 0–255,
  otherwise `ValueError`. All channels default to 0.
- `TsdfVoxel(distance, weight, color)`, `OccupancyVoxel(probability_log, observed)`,
  `EsdfVoxel(distance, observed, hallucinated, in_queue, fixed, parent)` and
  `IntensityVoxel(intensity, weight)`: plain dataclasses.
- `serialize_block(voxels)` packs voxels into a flat list of 32-bit words
  (three words per TSDF voxel, two for the other types; floats are stored as
  their IEEE single-precision bits).
- `deserialize_block(voxel_type, data, num_voxels)` unpacks them again; a
  word count that does not match `num_voxels` raises `ValueError`, and an
  unknown voxel type raises `TypeError`.
- `serialize_direction(parent)` / `deserialize_direction(data)` pack an ESDF
  parent direction into the upper three bytes of a word, clamping each
  component to the int8 range.

### Meshes — `voxgrid.mesh`, `voxgrid.mesh_utils`, `voxgrid.mesh_layer`

- `Mesh` holds `vertices`, `normals`, `colors`, `indices`, `block_size`,
  `origin` and an `updated` flag. It offers `has_vertices()`, `has_normals()`,
  `has_colors()`, `has_triangles()`, `len()`, `clear()`, `clear_triangles()`,
  `clear_normals()`, `clear_colors()`, `resize(...)`, `colorize(color)` and
  `concatenate(other)` (which offsets the other mesh's indices and raises
  `ValueError` if the two meshes disagree on having colours, normals or
  triangles).
- `create_connected_mesh(meshes, approximate_vertex_proximity_threshold=1e-10)`
  takes one `Mesh` or an iterable of them and returns a new mesh in which
  vertices falling in the same grid cell are joined, their normals averaged
  and renormalised, and triangles with repeated corners dropped.
- `MeshLayer(block_size)` keeps one `Mesh` per integer block index:
  `get_mesh` (raises `KeyError` if missing), `find_mesh` (returns `None`),
  `allocate_mesh`, `allocate_new_block` (raises `KeyError` if it exists),
  the `..._by_coordinates` variants, `block_index_from_coordinates`,
  `remove_mesh`, `clear_distant_mesh(center, max_distance)` (empties distant
  meshes and marks them updated), `allocated_indices()`, `updated_indices()`,
  `combined_mesh()` (concatenation without joining vertices),
  `connected_mesh(threshold)`, `len()`, iteration over indices and `clear()`.

### Marching-cubes helpers — `voxgrid.marching_cubes`

- `calculate_vertex_configuration(vertex_sdf)`: 8-bit mask of the cube
  corners with negative distance.
- `interpolate_vertex(vertex1, vertex2, sdf1, sdf2)`: zero crossing on an
  edge, or the midpoint when the two distances differ by less than `1e-6`.

### Rotations and transforms — `voxgrid.angle_axis`, `voxgrid.transform2d`

- `AngleAxis(angle, axis)` with a unit axis (else `ValueError`): `vector()`,
  `unique()`, `inverse()`, `rotate()`, `rotate4()`, `inverse_rotate()`,
  `inverse_rotate4()`, `normalized()`, composition with `*`,
  `disparity_angle(other)` and `rotation_matrix()`. Build one from a rotation
  vector with `angle_axis_from_rotation_vector` or from a 3x3 matrix with
  `angle_axis_from_matrix`.
- `Transformation2D(angle, position)`: `rotation_matrix()`, `matrix()`,
  `as_vector()`, `transform(point)`, `transform_vectorized(points_2xN)`,
  `inverse()`, composition and point transformation with `*`, and exact
  equality with `==`. `transformation2d_from_matrix` builds one from a
  homogeneous 3x3 matrix and checks it.

### Settings — `voxgrid.tsdf_config`, `voxgrid.map_config`

- `TsdfIntegratorType` (`SIMPLE`, `MERGED`, `FAST`) and
  `integrator_type_from_name("simple" | "merged" | "fast")`.
- `TsdfIntegratorConfig` with the integrator defaults and
  `is_point_valid(point, freespace_point=False)`, which returns
  `(valid, is_clearing)` according to the minimum and maximum ray lengths.
- `TsdfMapConfig` and `EsdfMapConfig` (voxel size and voxels per side;
  `EsdfMapConfig.block_size()`), and `MeshIntegratorConfig`, which replaces a
  thread count of 0 by 1 with a logged warning. `describe()` on
  `TsdfMapConfig` and `MeshIntegratorConfig` returns a text summary.

## Example

```python
from voxgrid.voxels import TsdfVoxel, serialize_block, deserialize_block
from voxgrid.mesh_layer import MeshLayer

voxels = [TsdfVoxel(distance=0.05, weight=1.0) for _ in range(8)]
data = serialize_block(voxels)
restored = deserialize_block(TsdfVoxel, data, len(voxels))

layer = MeshLayer(block_size=0.8)
mesh = layer.allocate_mesh((0, 0, 0))
combined = layer.combined_mesh()
```

## What the package does not do

- It holds no voxel layers or maps: there is no integration of point clouds
  into a TSDF, no ESDF computation and no interpolation of distances. The
  integrator and map classes are present only as their settings.
- It does not extract meshes from a voxel grid; only the per-cube helpers
  above are provided.
- It reads and writes no files: no layer files, no PLY output. Block packing
  stops at lists of integers.
- It has no command-line program.

## Installation

```
pip install .
```

## Running the tests

```
pip install .[test]
pytest
```