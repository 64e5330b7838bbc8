from __future__ import annotations
import math
import numpy as np
import numba as nb

SENTINEL_DISTANCE = 100000.0  # edge length used when the cone misses the cross road
SHADOW_HEIGHT = 0.1  # above the road surface
DENOMINATOR_EPS = 1e-12


@nb.njit(inline="always", cache=True)
def _deg_to_rad(deg: float) -> float:
    return deg * math.pi / 180.0


@nb.njit(cache=True)
def blindspot_edge_distance(car_distance: float, cone_angle_deg: float,
                            intersection_angle_deg: float,
                            trailing: bool = False) -> float:
    """Distance from the car, along one cone edge, to the crossing road.

    Law of sines on the triangle (car, intersection, edge hit point). A zero
    numerator means the car sits on the intersection and the edge collapses.
    A vanishing denominator has no finite hit point and yields
    ``SENTINEL_DISTANCE``. The trailing edge additionally switches to the
    sentinel whenever ``180 - intersection < cone``.
    """
    theta = _deg_to_rad(cone_angle_deg)
    alpha = _deg_to_rad(intersection_angle_deg)

    numerator = car_distance * math.sin(alpha)
    denominator = math.sin(math.pi - (theta + alpha))
    if numerator == 0.0:
        dist = 0.0
    elif abs(denominator) < DENOMINATOR_EPS:
        dist = SENTINEL_DISTANCE
    else:
        dist = numerator / denominator

    # Leading edge is never overridden here; see shadow_visible instead
    if trailing and (180.0 - intersection_angle_deg) < cone_angle_deg:
        dist = SENTINEL_DISTANCE
    return dist


@nb.njit(cache=True)
def compute_blindspot_edge(car_distance: float, cone_angle_deg: float,
                           intersection_angle_deg: float,
                           trailing: bool = False):
    """Return ``(lateral_offset, longitudinal_offset)`` of one shadow vertex.

    The longitudinal offset already includes ``car_distance`` so it is the
    vertex position along the car's road.
    """
    dist = blindspot_edge_distance(car_distance, cone_angle_deg,
                                   intersection_angle_deg, trailing)
    theta = _deg_to_rad(cone_angle_deg)
    lateral = dist * math.sin(theta)
    longitudinal = -dist * math.cos(theta) + car_distance
    return lateral, longitudinal


def shadow_visible(car_distance: float, leading_angle_deg: float,
                   intersection_angle_deg: float) -> bool:
    """False once the car has passed the intersection or the leading edge
    never meets the crossing road."""
    if car_distance < 0.0:
        return False
    return (180.0 - intersection_angle_deg) >= leading_angle_deg


def blindspot_vertices(car_distance: float, leading_angle_deg: float,
                       trailing_angle_deg: float,
                       intersection_angle_deg: float) -> np.ndarray:
    """Return float64[3,3] rows ``origin, leading, trailing`` (x, y, z)."""
    lead_x, lead_z = compute_blindspot_edge(
        float(car_distance), float(leading_angle_deg),
        float(intersection_angle_deg), False)
    trail_x, trail_z = compute_blindspot_edge(
        float(car_distance), float(trailing_angle_deg),
        float(intersection_angle_deg), True)
    return np.array([
        (0.0, SHADOW_HEIGHT, float(car_distance)),
        (lead_x, SHADOW_HEIGHT, lead_z),
        (trail_x, SHADOW_HEIGHT, trail_z),
    ], dtype=np.float64)


def blindspot_vertices_batch(car_distances, leading_angle_deg: float,
                             trailing_angle_deg: float,
                             intersection_angle_deg: float) -> np.ndarray:
    """Vectorised :func:`blindspot_vertices` over many car positions.

    Returns float64[N,3,3]. Uses the same guards as the scalar kernel.
    """
    d = np.asarray(car_distances, dtype=np.float64).reshape(-1)
    lead = np.deg2rad(leading_angle_deg)
    trail = np.deg2rad(trailing_angle_deg)
    alpha = np.deg2rad(intersection_angle_deg)

    numerator = d * np.sin(alpha)

    def edge(theta: float) -> np.ndarray:
        denom = np.sin(np.pi - (theta + alpha))
        if abs(denom) < DENOMINATOR_EPS:
            out = np.full_like(d, SENTINEL_DISTANCE)
        else:
            out = numerator / denom
        out[numerator == 0.0] = 0.0
        return out

    dist_lead = edge(lead)
    dist_trail = edge(trail)
    if (180.0 - intersection_angle_deg) < trailing_angle_deg:
        dist_trail[:] = SENTINEL_DISTANCE

    out = np.empty((d.size, 3, 3), dtype=np.float64)
    out[:, :, 1] = SHADOW_HEIGHT
    out[:, 0, 0] = 0.0
    out[:, 0, 2] = d
    out[:, 1, 0] = dist_lead * np.sin(lead)
    out[:, 1, 2] = -dist_lead * np.cos(lead) + d
    out[:, 2, 0] = dist_trail * np.sin(trail)
    out[:, 2, 2] = -dist_trail * np.cos(trail) + d
    return out


__all__ = [
    "SENTINEL_DISTANCE",
    "SHADOW_HEIGHT",
    "DENOMINATOR_EPS",
    "blindspot_edge_distance",
    "compute_blindspot_edge",
    "shadow_visible",
    "blindspot_vertices",
    "blindspot_vertices_batch",
]
