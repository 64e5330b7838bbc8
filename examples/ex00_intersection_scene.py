#!/usr/bin/env python3
"""
ex00_intersection_scene

Builds one frame of the intersection with the default panel values:
- the car's road along Z and the crossing road rotated by the intersection angle,
- the car 100 m before the intersection with its blinders,
- the blind-spot shadow triangle.

Saves the frame (parameters, shadow and meshes) to "intersection_scene.json"
in this folder. Edit the values in `main` to look at other configurations.
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
    from blindtrack import Simulation

    sim = Simulation()
    sim.set_parameters(angle_of_intersection=69.0, blindspot_leading_angle=19.4,
                       blindspot_trailing_angle=27.1)
    tri = sim.model.current_triangle()
    print(f"origin   {tri.origin}")
    print(f"leading  {tri.leading}")
    print(f"trailing {tri.trailing}")

    here = Path(__file__).resolve().parent
    meshes = sim.scene_meshes()
    save_path = sim.save_scene(str(here / "intersection_scene.json"))
    print(f"Saved intersection scene to: {save_path}")
    print(f"Meshes: {[name for name, _, _ in meshes]}")


if __name__ == "__main__":
    main()
