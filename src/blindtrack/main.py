from __future__ import annotations
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Tuple
import numpy as np

from .params import BlindspotParams, GEOMETRY_FIELDS
from .utils.geometry import blindspot_vertices, shadow_visible

Point3 = Tuple[float, float, float]

PAUSED = "paused"
RUNNING = "running"


def _log(msg: str) -> None:
    print(msg)


@dataclass(frozen=True)
class BlindspotTriangle:
    """Shadow triangle of one frame. Immutable; every recompute makes a new one."""
    origin: Point3
    leading: Point3
    trailing: Point3
    visible: bool = True

    @classmethod
    def from_array(cls, V: np.ndarray, visible: bool = True) -> "BlindspotTriangle":
        rows = [tuple(float(c) for c in V[i]) for i in range(3)]
        return cls(rows[0], rows[1], rows[2], bool(visible))

    def as_array(self) -> np.ndarray:
        return np.array([self.origin, self.leading, self.trailing], dtype=np.float64)


class BlindspotModel:
    """Owns the geometry parameters, the car position and the current shadow.

    ``running`` is driven by :class:`SimulationClock`; while it is set the car
    cannot be repositioned by hand.
    """

    def __init__(self, params: Optional[BlindspotParams] = None,
                 position: Optional[float] = None) -> None:
        self.params = replace(params) if params is not None else BlindspotParams()
        self.running = False
        self._position = float(self.params.car_start_distance if position is None else position)
        self._triangle = self.recompute()

    @property
    def position(self) -> float:
        return self._position

    def set_parameters(self, update: Optional[Dict[str, float]] = None, **fields) -> None:
        """Merge ``update`` and keyword fields into the parameters.

        Unknown names raise ``KeyError``. Values are not clamped.
        """
        changes = dict(update or {})
        changes.update(fields)
        known = self.params.as_dict()
        for name in changes:
            if name not in known:
                raise KeyError(f"Unknown parameter {name!r}")
        if not changes:
            return
        self.params = replace(self.params, **changes)

        if "car_start_distance" in changes and not self.running:
            self._position = float(self.params.car_start_distance)
        if GEOMETRY_FIELDS.intersection(changes):
            self.recompute()

    def set_car_position(self, distance: float) -> bool:
        """Move the car; ignored (returns False) while the simulation runs."""
        if self.running:
            return False
        self._position = float(distance)
        self.recompute()
        return True

    def drive(self, distance: float) -> BlindspotTriangle:
        """Move the car ``distance`` toward the intersection and recompute.

        The car stops at 0. A car already at or past the intersection
        (position <= 0) stays where it is.
        """
        if self._position > 0.0:
            self._position = max(0.0, self._position - float(distance))
        return self.recompute()

    def recompute(self) -> BlindspotTriangle:
        p = self.params
        V = blindspot_vertices(
            self._position,
            p.blindspot_leading_angle,
            p.blindspot_trailing_angle,
            p.angle_of_intersection,
        )
        visible = shadow_visible(self._position, p.blindspot_leading_angle,
                                 p.angle_of_intersection)
        self._triangle = BlindspotTriangle.from_array(V, visible)
        return self._triangle

    def current_triangle(self) -> BlindspotTriangle:
        return self._triangle

    def restore_defaults(self) -> None:
        self.params = BlindspotParams()
        self.recompute()

    def rewind(self) -> None:
        self._position = float(self.params.car_start_distance)
        self.recompute()


class SimulationClock:
    """Run/pause clock that drives the car toward the intersection.

    Pausing keeps both the car position and ``elapsed``; resuming continues
    from there. The car stops at 0 but the clock keeps running.

    Parameters
    ----------
    model : BlindspotModel
        Model whose car position is advanced.
    time_source : callable, optional
        Monotonic seconds, ``time.perf_counter`` by default. Only used by
        :meth:`tick`.
    """

    def __init__(self, model: BlindspotModel,
                 time_source: Callable[[], float] = time.perf_counter) -> None:
        self.model = model
        self._now = time_source
        self._last: Optional[float] = None
        self.elapsed = 0.0  # simulated seconds applied to the car

    @property
    def running(self) -> bool:
        return self.model.running

    @property
    def state(self) -> str:
        return RUNNING if self.model.running else PAUSED

    def start(self) -> None:
        if self.model.running:
            return
        self.model.running = True
        self._last = self._now()

    def stop(self) -> None:
        self.model.running = False
        self._last = None

    def toggle_run(self) -> str:
        if self.model.running:
            self.stop()
        else:
            self.start()
        return self.state

    def tick(self) -> float:
        """Apply the wall-clock time since the previous tick. Returns it."""
        if not self.model.running:
            return 0.0
        now = self._now()
        dt = now - self._last if self._last is not None else 0.0
        self._last = now
        self._apply(dt)
        return dt

    def advance(self, elapsed_seconds: float) -> float:
        """Apply a host-measured frame delta. Ignored while paused."""
        dt = float(elapsed_seconds)
        if dt < 0.0:
            raise ValueError(f"elapsed_seconds must be >= 0 (got {elapsed_seconds!r})")
        if not self.model.running:
            return 0.0
        self._apply(dt)
        return dt

    def _apply(self, dt: float) -> None:
        self.elapsed += dt
        self.model.drive(dt * float(self.model.params.car_speed))

    def rewind(self) -> None:
        self.stop()
        self.elapsed = 0.0


__all__ = [
    "PAUSED",
    "RUNNING",
    "BlindspotTriangle",
    "BlindspotModel",
    "SimulationClock",
]
