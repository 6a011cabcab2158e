"""Settings for the ESDF map and for mesh extraction."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_RULE = "==============================================================\n"


@dataclass
class EsdfMapConfig:
    """Voxel size and block resolution of an ESDF map."""

    esdf_voxel_size: float = 0.2
    esdf_voxels_per_side: int = 16

    def block_size(self) -> float:
        """Edge length of one block of voxels."""
        return self.esdf_voxel_size * self.esdf_voxels_per_side


def _default_thread_count() -> int:
    return os.cpu_count() or 0


@dataclass
class MeshIntegratorConfig:
    """Parameters of the marching-cubes mesh integrator."""

    use_color: bool = True
    min_weight: float = 1e-4
    integrator_threads: int = field(default_factory=_default_thread_count)

    def __post_init__(self) -> None:
        if self.integrator_threads == 0:
            logger.warning("Automatic core count failed, defaulting to 1 threads")
            self.integrator_threads = 1

    def describe(self) -> str:
        """A human-readable summary of the settings."""
        return (
            "================== Mesh Integrator Config ====================\n"
            f" - use_color:                 {int(bool(self.use_color))}\n"
            f" - min_weight:                {self.min_weight:g}\n"
            f" - integrator_threads:        {self.integrator_threads}\n"
            + _RULE
        )