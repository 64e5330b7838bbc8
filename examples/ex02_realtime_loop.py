#!/usr/bin/env python3
"""
ex02_realtime_loop

Drives a Simulation with its fixed-rate loop the way a renderer would:
start, run two seconds, pause, resume, run until the car reaches the
intersection. Prints the car position and the leading shadow vertex.
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

    fps = 30

    def show(frame):
        if int(round(frame.time * fps)) % fps == 0:
            x, _, z = frame.triangle.leading
            print(f"t={frame.time:5.2f}s  car={frame.car_position:7.2f}  lead=({x:7.2f}, {z:7.2f})")

    sim = Simulation()
    sim.toggle_run()
    sim.run(2 * fps, fps=fps, on_frame=show)
    sim.toggle_run()
    sim.frame(1.0)  # paused: nothing moves
    sim.toggle_run()
    sim.run(4 * fps, fps=fps, on_frame=show)


if __name__ == "__main__":
    main()
