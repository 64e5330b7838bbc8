from __future__ import annotations
from typing import Tuple
import numpy as np


def rotate_y(points: np.ndarray, angle_deg: float) -> np.ndarray:
    """Rotate ``(N,3)`` points about +Y by ``angle_deg`` (right-handed, Y up)."""
    a = np.deg2rad(angle_deg)
    c, s = np.cos(a), np.sin(a)
    rot = np.array([
        [c, 0.0, s],
        [0.0, 1.0, 0.0],
        [-s, 0.0, c],
    ])
    return np.asarray(points, dtype=np.float64) @ rot.T


def quad_mesh(p0, p1, p2, p3) -> Tuple[np.ndarray, np.ndarray]:
    """Return V(4,3), F(2,3) for the quad ``p0 p1 p2 p3`` (in order)."""
    V = np.asarray([p0, p1, p2, p3], dtype=np.float32)
    F = np.asarray([[0, 1, 2], [0, 2, 3]], dtype=np.int32)
    return V, F


def box_mesh(size: Tuple[float, float, float],
             center: Tuple[float, float, float]) -> Tuple[np.ndarray, np.ndarray]:
    """Axis aligned box as V(8,3), F(12,3) with outward winding."""
    hx, hy, hz = (0.5 * float(s) for s in size)
    cx, cy, cz = (float(c) for c in center)
    V = np.array([
        (cx - hx, cy - hy, cz - hz),
        (cx + hx, cy - hy, cz - hz),
        (cx + hx, cy + hy, cz - hz),
        (cx - hx, cy + hy, cz - hz),
        (cx - hx, cy - hy, cz + hz),
        (cx + hx, cy - hy, cz + hz),
        (cx + hx, cy + hy, cz + hz),
        (cx - hx, cy + hy, cz + hz),
    ], dtype=np.float32)
    F = np.array([
        [0, 2, 1], [0, 3, 2],  # -Z
        [4, 5, 6], [4, 6, 7],  # +Z
        [0, 1, 5], [0, 5, 4],  # -Y
        [3, 7, 6], [3, 6, 2],  # +Y
        [0, 4, 7], [0, 7, 3],  # -X
        [1, 2, 6], [1, 6, 5],  # +X
    ], dtype=np.int32)
    return V, F


def merge_meshes(parts) -> Tuple[np.ndarray, np.ndarray]:
    """Concatenate ``(V, F)`` pairs into one mesh, offsetting face indices."""
    Vs, Fs = [], []
    offset = 0
    for V, F in parts:
        Vs.append(np.asarray(V, dtype=np.float32))
        Fs.append(np.asarray(F, dtype=np.int32) + offset)
        offset += len(V)
    if not Vs:
        return np.empty((0, 3), np.float32), np.empty((0, 3), np.int32)
    return np.concatenate(Vs), np.concatenate(Fs)


__all__ = [
    "rotate_y",
    "quad_mesh",
    "box_mesh",
    "merge_meshes",
]
