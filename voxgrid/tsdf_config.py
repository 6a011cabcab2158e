"""Settings for TSDF integration and for the TSDF map."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

FLOAT32_MAX = 3.4028234663852886e38

_RULE = "==============================================================\n"


class TsdfIntegratorType(Enum):
    """Available TSDF integration strategies."""

    SIMPLE = 1
    MERGED = 2
    FAST = 3

    @property
    def type_name(self) -> str:
        return self.name.lower()


def integrator_type_from_name(name: str) -> TsdfIntegratorType:
    """Look up an integrator type by its name: "simple", "merged" or "fast"."""
    for integrator_type in TsdfIntegratorType:
        if integrator_type.type_name == name:
            return integrator_type
    known = ", ".join(t.type_name for t in TsdfIntegratorType)
    raise ValueError(f"unknown TSDF integrator type {name!r}; expected one of: {known}")


def _default_thread_count() -> int:
    return os.cpu_count() or 1


@dataclass
class TsdfIntegratorConfig:
    """Parameters shared by the simple, merged and fast TSDF integrators."""

    default_truncation_distance: float = 0.1
    max_weight: float = 10000.0
    voxel_carving_enabled: bool = True
    min_ray_length_m: float = 0.1
    max_ray_length_m: float = 5.0
    use_const_weight: bool = False
    allow_clear: bool = True
    use_weight_dropoff: bool = True
    use_sparsity_compensation_factor: bool = False
    sparsity_compensation_factor: float = 1.0
    integrator_threads: int = field(default_factory=_default_thread_count)
    # Order in which rays are integrated: "mixed" or "sorted".
    integration_order_mode: str = "mixed"
    # Merged integrator only.
    enable_anti_grazing: bool = False
    # Fast integrator only.
    start_voxel_subsampling_factor: float = 2.0
    max_consecutive_ray_collisions: int = 2
    clear_checks_every_n_frames: int = 1
    max_integration_time_s: float = FLOAT32_MAX

    def is_point_valid(self, point: Sequence[float], freespace_point: bool = False) -> tuple[bool, bool]:
        """Decide whether a sensor-frame point is integrated, and how.

        Returns ``(valid, is_clearing)``.  Points nearer than the minimum ray
        length are rejected.  Points beyond the maximum ray length are kept
        only as clearing rays, when clearing is allowed or the point is a
        free-space point.  Other points clear only if they are free-space
        points.  ``is_clearing`` is False whenever the point is rejected.
        """
        ray_distance = math.hypot(*(float(c) for c in point))
        if ray_distance < self.min_ray_length_m:
            return False, False
        if ray_distance > self.max_ray_length_m:
            if self.allow_clear or freespace_point:
                return True, True
            return False, False
        return True, bool(freespace_point)


@dataclass
class TsdfMapConfig:
    """Voxel size and block resolution of a TSDF map."""

    tsdf_voxel_size: float = 0.2
    tsdf_voxels_per_side: int = 16

    def describe(self) -> str:
        """A human-readable summary of the settings."""
        return (
            "====================== TSDF Map Config ========================\n"
            f" - tsdf_voxel_size:               {self.tsdf_voxel_size:g}\n"
            f" - tsdf_voxels_per_side:          {self.tsdf_voxels_per_side}\n"
            + _RULE
        )