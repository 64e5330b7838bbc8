from .main import (
    BlindspotTriangle,
    BlindspotModel,
    SimulationClock,
)
from .api import Frame, Simulation, simulate_playback
from .params import BlindspotParams, PanelParams
from .utils.geometry import compute_blindspot_edge
from .io import (
    save_scene_json,
    load_scene_json,
    save_playback_json,
    load_playback_json,
)

__all__ = [
    "BlindspotTriangle",
    "BlindspotModel",
    "SimulationClock",
    "Frame",
    "Simulation",
    "simulate_playback",
    "BlindspotParams",
    "PanelParams",
    "compute_blindspot_edge",
    "save_scene_json",
    "load_scene_json",
    "save_playback_json",
    "load_playback_json",
]
