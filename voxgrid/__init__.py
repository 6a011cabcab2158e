"""Voxel types and block packing, triangle mesh blocks, marching-cubes helpers,
angle-axis and planar transforms, and settings for TSDF, ESDF and mesh work."""

__version__ = "0.1.0"

__all__ = [
    "angle_axis",
    "map_config",
    "marching_cubes",
    "mesh",
    "mesh_layer",
    "mesh_utils",
    "transform2d",
    "tsdf_config",
    "voxels",
]