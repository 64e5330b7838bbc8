import pytest
from blindtrack.main import BlindspotModel, SimulationClock, PAUSED, RUNNING
from blindtrack.utils.geometry import SHADOW_HEIGHT, blindspot_vertices


class FakeTime:
    """Manually advanced time source."""

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def _clock(**params):
    model = BlindspotModel()
    if params:
        model.set_parameters(**params)
    t = FakeTime()
    return model, SimulationClock(model, time_source=t), t


def test_toggle_states():
    model, clock, _ = _clock()
    assert clock.state == PAUSED
    assert clock.toggle_run() == RUNNING
    assert model.running
    assert clock.toggle_run() == PAUSED
    assert not model.running


def test_pause_resume_does_not_reset():
    model, clock, t = _clock()
    clock.toggle_run()
    t.now = 2.0
    assert clock.tick() == 2.0
    assert model.position == 64.0

    clock.toggle_run()  # pause
    t.now = 5.0
    assert clock.tick() == 0.0
    assert model.position == 64.0

    clock.toggle_run()  # resume
    t.now = 6.0
    clock.tick()
    assert model.position == 46.0
    assert clock.elapsed == 3.0


def test_advance_with_host_delta():
    model, clock, _ = _clock()
    assert clock.advance(1.0) == 0.0  # paused
    assert model.position == 100.0
    clock.start()
    clock.advance(2.0)
    assert model.position == 64.0
    clock.stop()
    clock.start()
    clock.advance(1.0)
    assert model.position == 46.0


def test_clamped_at_intersection_and_keeps_running():
    model, clock, t = _clock()
    clock.start()
    t.now = 10.0
    clock.tick()
    assert model.position == 0.0
    t.now = 11.0
    clock.tick()
    assert model.position == 0.0
    assert clock.state == RUNNING
    assert clock.elapsed == 11.0


def test_negative_delta_rejected():
    _, clock, _ = _clock()
    clock.start()
    with pytest.raises(ValueError):
        clock.advance(-0.1)


def test_speed_change_applies_next_frame():
    model, clock, _ = _clock()
    clock.start()
    clock.advance(1.0)
    assert model.position == 82.0
    model.set_parameters(car_speed=2.0)
    clock.advance(1.0)
    assert model.position == 80.0


def test_start_twice_keeps_reference_time():
    model, clock, t = _clock()
    clock.start()
    t.now = 1.0
    clock.start()
    t.now = 2.0
    clock.tick()
    assert model.position == 64.0


def test_rewind_clears_elapsed():
    model, clock, _ = _clock()
    clock.start()
    clock.advance(1.5)
    clock.rewind()
    assert clock.elapsed == 0.0
    assert clock.state == PAUSED
    # position is owned by the model
    assert model.position == 73.0


def test_triangle_follows_clock():
    model, clock, t = _clock()
    clock.start()
    clock.advance(2.0)
    tri = model.current_triangle()
    assert tri.origin == (0.0, SHADOW_HEIGHT, 64.0)
    assert tri.as_array().tolist() == blindspot_vertices(64.0, 19.4, 27.1, 69.0).tolist()

    t.now = 1.0
    clock.tick()
    assert model.current_triangle().origin[2] == 46.0


def test_car_past_intersection_does_not_reverse():
    model, clock, _ = _clock()
    assert model.set_car_position(-5.0)
    clock.start()
    clock.advance(0.01)
    assert model.position == -5.0
    clock.advance(10.0)
    assert model.position == -5.0
    assert not model.current_triangle().visible


def test_drive_stops_at_intersection():
    model, _, _ = _clock()
    model.drive(30.0)
    assert model.position == 70.0
    assert model.current_triangle().origin[2] == 70.0
    model.drive(500.0)
    assert model.position == 0.0
    model.drive(1.0)
    assert model.position == 0.0
