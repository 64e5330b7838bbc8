from __future__ import annotations
from typing import List, Tuple
import math
import numpy as np

from .helpers import box_mesh, merge_meshes, quad_mesh, rotate_y

MeshTuple = Tuple[str, np.ndarray, np.ndarray]

ROAD_WIDTH = 4.0
ROAD_LENGTH = 2000.0
CAR_SIZE = (1.5, 2.0, 4.0)  # W x H x L
CAR_HEIGHT_OFFSET = 1.05
BLINDER_SCALE = 2.195
BLINDER_HEIGHT = 2.0


def road_mesh(angle_deg: float = 0.0, width: float = ROAD_WIDTH,
              length: float = ROAD_LENGTH) -> Tuple[np.ndarray, np.ndarray]:
    """Flat road strip centred on the intersection, rotated about +Y."""
    hw, hl = 0.5 * width, 0.5 * length
    corners = np.array([
        (-hw, 0.0, -hl),
        (-hw, 0.0, hl),
        (hw, 0.0, hl),
        (hw, 0.0, -hl),
    ])
    if angle_deg:
        corners = rotate_y(corners, angle_deg)
    return quad_mesh(*corners)


def blinder_meshes(leading_angle_deg: float, trailing_angle_deg: float,
                   car_position: float, scale: float = BLINDER_SCALE,
                   height: float = BLINDER_HEIGHT) -> Tuple[np.ndarray, np.ndarray]:
    """Pillar panels on both sides of the driver bounded by the cone edges."""
    lead = math.radians(leading_angle_deg)
    trail = math.radians(trailing_angle_deg)
    lead_x, lead_z = math.sin(lead) * scale, -math.cos(lead) * scale + car_position
    trail_x, trail_z = math.sin(trail) * scale, -math.cos(trail) * scale + car_position

    parts = []
    for side in (1.0, -1.0):
        parts.append(quad_mesh(
            (side * lead_x, 0.0, lead_z),
            (side * trail_x, 0.0, trail_z),
            (side * trail_x, height, trail_z),
            (side * lead_x, height, lead_z),
        ))
    return merge_meshes(parts)


def triangle_mesh(vertices) -> Tuple[np.ndarray, np.ndarray]:
    V = np.asarray(vertices, dtype=np.float32).reshape(3, 3)
    F = np.array([[0, 1, 2]], dtype=np.int32)
    return V, F


def build_scene_meshes(angle_of_intersection: float, car_position: float,
                       leading_angle_deg: float, trailing_angle_deg: float,
                       shadow=None) -> List[MeshTuple]:
    """Return ``[(name, V, F), ...]`` for one frame of the intersection scene.

    ``shadow`` is a ``(3,3)`` vertex block (origin, leading, trailing) or
    ``None`` when no shadow should be drawn.
    """
    meshes: List[MeshTuple] = []

    V, F = road_mesh(0.0)
    meshes.append(("car_road", V, F))
    V, F = road_mesh(angle_of_intersection)
    meshes.append(("cross_road", V, F))

    V, F = box_mesh(CAR_SIZE, (0.0, CAR_HEIGHT_OFFSET, car_position))
    meshes.append(("car", V, F))
    V, F = blinder_meshes(leading_angle_deg, trailing_angle_deg, car_position)
    meshes.append(("blinders", V, F))

    if shadow is not None:
        V, F = triangle_mesh(shadow)
        meshes.append(("blindspot", V, F))
    return meshes


__all__ = [
    "ROAD_WIDTH",
    "ROAD_LENGTH",
    "CAR_SIZE",
    "BLINDER_SCALE",
    "road_mesh",
    "blinder_meshes",
    "triangle_mesh",
    "build_scene_meshes",
]
