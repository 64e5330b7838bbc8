from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Tuple


# Slider ranges of the parameter panel (inclusive).
PARAM_RANGES: Dict[str, Tuple[float, float]] = {
    "angle_of_intersection": (0.0, 180.0),
    "blindspot_leading_angle": (0.0, 45.0),
    "blindspot_trailing_angle": (0.0, 45.0),
    "car_start_distance": (0.0, 1000.0),
    "car_speed": (0.0, 100.0),
    "fov": (0.1, 179.9),
    "bike_start_distance": (0.0, 1000.0),
    "bike_speed": (0.0, 100.0),
}

GEOMETRY_FIELDS = frozenset({
    "angle_of_intersection",
    "blindspot_leading_angle",
    "blindspot_trailing_angle",
    "car_start_distance",
})


def _out_of_range(obj) -> List[str]:
    bad = []
    for f in fields(obj):
        lim = PARAM_RANGES.get(f.name)
        if lim is None:
            continue
        val = float(getattr(obj, f.name))
        if not (lim[0] <= val <= lim[1]):
            bad.append(f.name)
    return bad


@dataclass
class BlindspotParams:
    """Inputs of the blind-spot geometry and the car motion.

    Parameters
    ----------
    angle_of_intersection : float
        Angle between the car's road and the crossing road in degrees.
    blindspot_leading_angle : float
        Forward edge of the blind-spot cone, degrees from the car's axis.
    blindspot_trailing_angle : float
        Rearward edge of the blind-spot cone, degrees from the car's axis.
    car_start_distance : float
        Distance of the car from the intersection when a replay starts.
    car_speed : float
        Distance units per second while running.

    Values are stored as given. Use :meth:`out_of_range` to find fields
    outside the panel ranges; nothing is clamped.
    """
    angle_of_intersection: float = 69.0
    blindspot_leading_angle: float = 19.4
    blindspot_trailing_angle: float = 27.1
    car_start_distance: float = 100.0
    car_speed: float = 18.0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def out_of_range(self) -> List[str]:
        return _out_of_range(self)


@dataclass
class PanelParams:
    """Panel options consumed by the renderer, not by the geometry.

    Parameters
    ----------
    exterior_view : bool
        Orbit camera when True, driver's seat otherwise.
    fov : float
        Vertical field of view in degrees.
    bike_start_distance, bike_speed : float
        Cyclist settings carried for the panel.
    """
    exterior_view: bool = True
    fov: float = 75.0
    bike_start_distance: float = 39.0
    bike_speed: float = 7.0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def out_of_range(self) -> List[str]:
        return _out_of_range(self)


__all__ = ["PARAM_RANGES", "GEOMETRY_FIELDS", "BlindspotParams", "PanelParams"]
