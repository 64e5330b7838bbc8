from __future__ import annotations
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional

import numpy as np

from .main import BlindspotModel, BlindspotTriangle, SimulationClock, _log
from .io import save_scene_json
from .params import BlindspotParams, PanelParams
from .utils.geometry import blindspot_vertices_batch, shadow_visible
from .utils.scene import build_scene_meshes


@dataclass(frozen=True)
class Frame:
    """What the renderer needs for one display refresh."""
    time: float
    car_position: float
    triangle: BlindspotTriangle


class Simulation:
    """One car, one intersection, one clock.

    Hosts call :meth:`frame` once per display refresh, either with the
    elapsed seconds they measured or with ``None`` to let the clock read its
    own time source. Panel callbacks map onto :meth:`set_parameters`,
    :meth:`set_panel`, :meth:`toggle_run`, :meth:`reset` and :meth:`replay`.
    """

    def __init__(self, params: Optional[BlindspotParams] = None,
                 panel: Optional[PanelParams] = None,
                 time_source: Callable[[], float] = time.perf_counter) -> None:
        self.model = BlindspotModel(params)
        self.clock = SimulationClock(self.model, time_source=time_source)
        self.panel = replace(panel) if panel is not None else PanelParams()

    @property
    def params(self) -> BlindspotParams:
        return self.model.params

    def set_parameters(self, update: Optional[Dict[str, float]] = None, **fields) -> None:
        self.model.set_parameters(update, **fields)

    def set_panel(self, **fields) -> None:
        known = self.panel.as_dict()
        for name in fields:
            if name not in known:
                raise KeyError(f"Unknown panel option {name!r}")
        self.panel = replace(self.panel, **fields)

    def set_car_position(self, distance: float) -> bool:
        return self.model.set_car_position(distance)

    def toggle_run(self) -> str:
        return self.clock.toggle_run()

    def replay(self) -> None:
        """Put the car back at its start distance and pause."""
        self.clock.rewind()
        self.model.rewind()

    def reset(self) -> None:
        """Restore every parameter to its default, then replay."""
        self.model.restore_defaults()
        self.panel = PanelParams()
        self.replay()

    def frame(self, dt: Optional[float] = None) -> Frame:
        if dt is None:
            self.clock.tick()
        else:
            self.clock.advance(dt)
        return Frame(self.clock.elapsed, self.model.position,
                     self.model.current_triangle())

    def run(self, frames: int, fps: float = 60.0,
            on_frame: Optional[Callable[[Frame], None]] = None,
            sleep: Callable[[float], None] = time.sleep) -> Frame:
        """Fixed-rate frame loop for hosts without their own scheduler.

        Steps ``frames`` times with ``dt = 1 / fps`` and hands every frame to
        ``on_frame``. Returns the last frame.
        """
        if fps <= 0:
            raise ValueError(f"fps must be > 0 (got {fps!r})")
        if frames < 1:
            raise ValueError(f"frames must be >= 1 (got {frames!r})")
        dt = 1.0 / float(fps)
        t0 = time.time()
        last = None
        for _ in range(int(frames)):
            last = self.frame(dt)
            if on_frame is not None:
                on_frame(last)
            sleep(dt)
        _log(
            f"{frames} frames @ {fps:g} fps, car at {last.car_position:0.3f} -> "
            f"{time.time() - t0:0.3f}s  (state={self.clock.state})"
        )
        return last

    def scene_meshes(self):
        p = self.model.params
        tri = self.model.current_triangle()
        shadow = tri.as_array() if tri.visible else None
        return build_scene_meshes(
            p.angle_of_intersection,
            self.model.position,
            p.blindspot_leading_angle,
            p.blindspot_trailing_angle,
            shadow=shadow,
        )

    def save_scene(self, save_path: str) -> str:
        """Write the current frame with ``io.save_scene_json``."""
        return save_scene_json(
            self.scene_meshes(),
            save_path,
            params=self.model.params,
            car_position=self.model.position,
            triangle=self.model.current_triangle(),
        )


def simulate_playback(
    params: Optional[BlindspotParams] = None,
    *,
    duration: Optional[float] = None,
    fps: float = 30.0,
) -> Dict[str, np.ndarray]:
    """Play the approach offline and return the shadow for every frame.

    Parameters
    ----------
    params : BlindspotParams, optional
        Defaults when omitted.
    duration : float, optional
        Seconds to simulate. Defaults to the time the car needs to reach the
        intersection (at least one frame).
    fps : float
        Frames per second.

    Returns
    -------
    dict
        ``times`` float64[N], ``positions`` float64[N], ``vertices``
        float64[N,3,3] (origin, leading, trailing) and ``visible`` bool[N].
    """
    p = params if params is not None else BlindspotParams()
    if fps <= 0:
        raise ValueError(f"fps must be > 0 (got {fps!r})")
    start = float(p.car_start_distance)
    speed = float(p.car_speed)
    if duration is None:
        duration = max(start, 0.0) / speed if speed > 0.0 else 0.0
    if duration < 0:
        raise ValueError(f"duration must be >= 0 (got {duration!r})")

    t0 = time.time()
    n = int(np.floor(duration * fps + 1e-9)) + 1
    times = np.arange(n, dtype=np.float64) / float(fps)
    if start > 0.0:
        positions = np.maximum(0.0, start - times * speed)
    else:
        positions = np.full(n, start)
    vertices = blindspot_vertices_batch(
        positions,
        p.blindspot_leading_angle,
        p.blindspot_trailing_angle,
        p.angle_of_intersection,
    )
    visible = np.array([
        shadow_visible(float(d), p.blindspot_leading_angle, p.angle_of_intersection)
        for d in positions
    ], dtype=bool)

    _log(f"playback {n} frames, {duration:0.3f}s simulated -> {time.time() - t0:0.3f}s")
    return {
        "times": times,
        "positions": positions,
        "vertices": vertices,
        "visible": visible,
    }


__all__ = ["Frame", "Simulation", "simulate_playback"]
