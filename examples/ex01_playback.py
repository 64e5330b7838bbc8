#!/usr/bin/env python3
"""
ex01_playback

Plays the car's approach offline at 30 fps and saves every frame of the
blind-spot shadow to playback.json in this folder.
"""
import sys
from pathlib import Path


def ensure_repo_on_path():
    here = Path(__file__).resolve().parent
    src = here.parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


def main():
    ensure_repo_on_path()
    from blindtrack import BlindspotParams, simulate_playback
    from blindtrack.io import save_playback_json

    params = BlindspotParams(
        angle_of_intersection=69.0,
        blindspot_leading_angle=19.4,
        blindspot_trailing_angle=27.1,
        car_start_distance=100.0,
        car_speed=18.0,
    )
    pb = simulate_playback(params, fps=30.0)

    here = Path(__file__).resolve().parent
    save_path = save_playback_json(pb, str(here / "playback.json"))
    print(f"Saved playback to: {save_path}")
    lead_z = pb["vertices"][:, 1, 2]
    print(f"Leading vertex along the road: {lead_z[0]:.2f} -> {lead_z[-1]:.2f}")


if __name__ == "__main__":
    main()
