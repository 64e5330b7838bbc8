from __future__ import annotations

"""Utility subpackage exports.

This module re-exports the geometry kernels and scene helpers so callers can do:
    from blindtrack.utils import compute_blindspot_edge, build_scene_meshes
"""

from .geometry import (  # noqa: F401
    SENTINEL_DISTANCE,
    SHADOW_HEIGHT,
    blindspot_edge_distance,
    compute_blindspot_edge,
    shadow_visible,
    blindspot_vertices,
    blindspot_vertices_batch,
)
from .scene import build_scene_meshes  # noqa: F401

__all__ = [
    "SENTINEL_DISTANCE",
    "SHADOW_HEIGHT",
    "blindspot_edge_distance",
    "compute_blindspot_edge",
    "shadow_visible",
    "blindspot_vertices",
    "blindspot_vertices_batch",
    "build_scene_meshes",
]
