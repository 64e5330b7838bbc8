from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple
import numpy as np

from .main import BlindspotTriangle
from .params import BlindspotParams


MeshTuple = Tuple[str, np.ndarray, np.ndarray]
Meshes = List[MeshTuple]
Playback = Dict[str, np.ndarray]

_PLAYBACK_KEYS = ("times", "positions", "vertices", "visible")


def _prepare_path(save_path: str) -> Path:
    path = Path(save_path)
    if path.suffix.lower() == "":
        path = path.with_suffix(".json")
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _write_json(payload: Dict[str, Any], save_path: str) -> str:
    path = _prepare_path(save_path)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, ensure_ascii=False, indent=2)
    return str(path.resolve())


def _read_json(load_path: str) -> Dict[str, Any]:
    path = Path(load_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {load_path}")
    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise TypeError(f"{load_path}: expected a JSON object at top level")
    return data


def _block(value, shape: Sequence[Optional[int]], dtype, where: str) -> np.ndarray:
    """Coerce ``value`` to an array of ``shape`` (``None`` = any length)."""
    try:
        arr = np.asarray(value, dtype=dtype)
    except (TypeError, ValueError):
        raise TypeError(f"{where}: not a numeric array")
    if arr.ndim != len(shape) or any(
        want is not None and got != want for got, want in zip(arr.shape, shape)
    ):
        want_txt = ",".join("N" if s is None else str(s) for s in shape)
        raise ValueError(f"{where}: expected shape ({want_txt}), got {arr.shape}")
    return arr


def _number(value, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{where}: expected a number, got {value!r}")
    return float(value)


def _mesh_entry(name: str, V, F, where: str) -> Tuple[np.ndarray, np.ndarray]:
    if not isinstance(name, str) or name.strip() == "":
        raise TypeError(f"{where}: mesh name must be a non-empty string")
    V = _block(V, (None, 3), np.float32, f"{where} '{name}' vertices")
    F = _block(F, (None, 3), np.int32, f"{where} '{name}' faces")
    if F.size and (F.min() < 0 or F.max() >= len(V)):
        raise ValueError(f"{where} '{name}': face index outside 0..{len(V) - 1}")
    return V, F


# ---------------------------------------------------------------
# Scene JSON IO
# ---------------------------------------------------------------

def save_scene_json(meshes: Meshes, save_path: str, *,
                    params: BlindspotParams,
                    car_position: float,
                    triangle: BlindspotTriangle) -> str:
    """Save one frame of the intersection scene.

    The JSON structure is:
        {"params": {angle_of_intersection, ..., car_speed},
         "car_position": float,
         "shadow": {"visible": bool, "vertices": [[x,y,z] x 3]},
         "meshes": {name: {"vertices": [[x,y,z], ...],
                           "faces": [[i,j,k], ...]}, ...}}

    ``shadow`` is always written, also when the renderer hides it, so the
    file keeps the geometry of degenerate configurations.
    """
    if not isinstance(meshes, list):
        raise TypeError("meshes must be a list of (name, V, F) tuples")

    mesh_out: Dict[str, Dict[str, list]] = {}
    for item in meshes:
        if not (isinstance(item, tuple) and len(item) == 3):
            raise TypeError("Each mesh must be a (name, V, F) tuple")
        name, V, F = item
        V, F = _mesh_entry(name, V, F, "mesh")
        if name in mesh_out:
            raise ValueError(f"Duplicate mesh name '{name}'")
        mesh_out[name] = {"vertices": V.tolist(), "faces": F.tolist()}

    shadow = _block(triangle.as_array(), (3, 3), np.float64, "shadow vertices")
    payload = {
        "params": params.as_dict(),
        "car_position": _number(car_position, "car_position"),
        "shadow": {"visible": bool(triangle.visible), "vertices": shadow.tolist()},
        "meshes": mesh_out,
    }
    return _write_json(payload, save_path)


def load_scene_json(load_path: str) -> Dict[str, Any]:
    """Load a file written by :func:`save_scene_json`.

    Returns a dict with ``params`` (BlindspotParams), ``car_position``
    (float), ``triangle`` (BlindspotTriangle) and ``meshes`` (list of
    ``(name, V float32[N,3], F int32[M,3])`` in file order).
    """
    data = _read_json(load_path)
    for key in ("params", "car_position", "shadow", "meshes"):
        if key not in data:
            raise TypeError(f"Invalid scene JSON: missing '{key}'")

    raw_params = data["params"]
    if not isinstance(raw_params, dict):
        raise TypeError("'params' must be an object")
    known = BlindspotParams().as_dict()
    unknown = sorted(set(raw_params) - set(known))
    if unknown:
        raise ValueError(f"Unknown parameters in scene: {', '.join(unknown)}")
    params = BlindspotParams(**{k: _number(v, f"params.{k}") for k, v in raw_params.items()})

    shadow = data["shadow"]
    if not isinstance(shadow, dict) or not isinstance(shadow.get("visible"), bool):
        raise TypeError("'shadow' must be an object with a boolean 'visible'")
    S = _block(shadow.get("vertices"), (3, 3), np.float64, "shadow vertices")

    raw_meshes = data["meshes"]
    if not isinstance(raw_meshes, dict):
        raise TypeError("'meshes' must be an object keyed by mesh name")
    meshes: Meshes = []
    for name, entry in raw_meshes.items():
        if not isinstance(entry, dict):
            raise TypeError(f"Mesh '{name}' must be an object")
        V, F = _mesh_entry(name, entry.get("vertices"), entry.get("faces"), "mesh")
        meshes.append((name, V, F))

    return {
        "params": params,
        "car_position": _number(data["car_position"], "car_position"),
        "triangle": BlindspotTriangle.from_array(S, shadow["visible"]),
        "meshes": meshes,
    }


# ---------------------------------------------------------------
# Playback JSON IO
# ---------------------------------------------------------------

def save_playback_json(playback: Playback, save_path: str) -> str:
    """Save the result of ``simulate_playback`` to JSON.

    Frames are stored as a list of objects so the file reads top to bottom:
        {"frames": [{"time": t, "position": d, "visible": b,
                     "vertices": [[x,y,z], [x,y,z], [x,y,z]]}, ...]}
    """
    if not isinstance(playback, dict):
        raise TypeError("playback must be a dict")
    missing = [k for k in _PLAYBACK_KEYS if k not in playback]
    if missing:
        raise KeyError(f"playback is missing {', '.join(missing)}")

    times = _block(playback["times"], (None,), np.float64, "times")
    n = times.shape[0]
    positions = _block(playback["positions"], (n,), np.float64, "positions")
    visible = _block(playback["visible"], (n,), bool, "visible")
    vertices = _block(playback["vertices"], (n, 3, 3), np.float64, "vertices")

    frames = [
        {
            "time": float(times[i]),
            "position": float(positions[i]),
            "visible": bool(visible[i]),
            "vertices": vertices[i].tolist(),
        }
        for i in range(n)
    ]
    return _write_json({"frames": frames}, save_path)


def load_playback_json(load_path: str) -> Playback:
    """Load a playback JSON file back into the ``simulate_playback`` layout."""
    data = _read_json(load_path)
    if not isinstance(data.get("frames"), list):
        raise TypeError("Invalid playback JSON: expected an object with 'frames' list")

    times, positions, visible, vertices = [], [], [], []
    for i, fr in enumerate(data["frames"]):
        if not isinstance(fr, dict):
            raise TypeError(f"Frame {i} must be an object")
        for key in ("time", "position", "visible"):
            if key not in fr:
                raise TypeError(f"Frame {i}: '{key}' is required")
        if not isinstance(fr["visible"], bool):
            raise TypeError(f"Frame {i}: 'visible' must be a boolean")
        times.append(_number(fr["time"], f"frame {i} time"))
        positions.append(_number(fr["position"], f"frame {i} position"))
        visible.append(fr["visible"])
        vertices.append(_block(fr.get("vertices"), (3, 3), np.float64, f"frame {i} vertices"))

    return {
        "times": np.asarray(times, dtype=np.float64),
        "positions": np.asarray(positions, dtype=np.float64),
        "vertices": np.asarray(vertices, dtype=np.float64).reshape(-1, 3, 3),
        "visible": np.asarray(visible, dtype=bool),
    }


__all__ = [
    "save_scene_json",
    "load_scene_json",
    "save_playback_json",
    "load_playback_json",
]
