import pytest
from blindtrack.main import BlindspotModel, BlindspotTriangle
from blindtrack.params import BlindspotParams
from blindtrack.utils.geometry import SHADOW_HEIGHT, blindspot_vertices


def test_defaults():
    p = BlindspotParams()
    assert p.as_dict() == {
        "angle_of_intersection": 69.0,
        "blindspot_leading_angle": 19.4,
        "blindspot_trailing_angle": 27.1,
        "car_start_distance": 100.0,
        "car_speed": 18.0,
    }
    model = BlindspotModel()
    assert model.position == 100.0
    assert not model.running


def test_recompute_is_idempotent():
    model = BlindspotModel()
    a = model.recompute()
    b = model.recompute()
    assert a == b
    assert a.as_array().tobytes() == b.as_array().tobytes()
    assert model.current_triangle() is b


def test_triangle_matches_geometry_kernel():
    model = BlindspotModel()
    tri = model.current_triangle()
    V = blindspot_vertices(100.0, 19.4, 27.1, 69.0)
    assert tri.as_array().tolist() == V.tolist()
    assert tri.origin == (0.0, SHADOW_HEIGHT, 100.0)
    assert tri.visible


def test_parameter_change_recomputes():
    model = BlindspotModel()
    before = model.current_triangle()
    model.set_parameters(angle_of_intersection=90.0)
    after = model.current_triangle()
    assert after != before
    assert after.as_array().tolist() == blindspot_vertices(100.0, 19.4, 27.1, 90.0).tolist()

    model.set_parameters({"blindspot_leading_angle": 5.0, "blindspot_trailing_angle": 40.0})
    assert model.params.blindspot_leading_angle == 5.0
    assert model.params.blindspot_trailing_angle == 40.0


def test_speed_change_keeps_triangle():
    model = BlindspotModel()
    before = model.current_triangle()
    model.set_parameters(car_speed=50.0)
    assert model.current_triangle() is before
    assert model.params.car_speed == 50.0


def test_unknown_parameter_raises():
    model = BlindspotModel()
    with pytest.raises(KeyError):
        model.set_parameters(fov=60.0)


def test_out_of_range_values_are_kept():
    model = BlindspotModel()
    model.set_parameters(angle_of_intersection=200.0, blindspot_leading_angle=-5.0)
    assert model.params.angle_of_intersection == 200.0
    assert model.params.blindspot_leading_angle == -5.0
    assert sorted(model.params.out_of_range()) == [
        "angle_of_intersection",
        "blindspot_leading_angle",
    ]


def test_params_are_copied():
    p = BlindspotParams(car_start_distance=50.0)
    model = BlindspotModel(p)
    model.set_parameters(car_speed=1.0)
    assert p.car_speed == 18.0
    assert model.position == 50.0


def test_start_distance_moves_parked_car():
    model = BlindspotModel()
    model.set_parameters(car_start_distance=250.0)
    assert model.position == 250.0
    assert model.current_triangle().origin[2] == 250.0


def test_start_distance_ignored_for_moving_car():
    model = BlindspotModel()
    model.running = True
    model.set_parameters(car_start_distance=250.0)
    assert model.params.car_start_distance == 250.0
    assert model.position == 100.0


def test_set_car_position_only_when_paused():
    model = BlindspotModel()
    assert model.set_car_position(40.0)
    assert model.position == 40.0
    assert model.current_triangle().origin == (0.0, SHADOW_HEIGHT, 40.0)

    model.running = True
    assert not model.set_car_position(10.0)
    assert model.position == 40.0


def test_restore_defaults_and_rewind():
    model = BlindspotModel()
    model.set_parameters(angle_of_intersection=120.0, car_start_distance=300.0)
    model.set_car_position(12.0)
    model.rewind()
    assert model.position == 300.0
    model.restore_defaults()
    assert model.params == BlindspotParams()


def test_shadow_hidden_when_leading_edge_misses():
    model = BlindspotModel(BlindspotParams(angle_of_intersection=170.0,
                                           blindspot_leading_angle=20.0))
    tri = model.current_triangle()
    assert isinstance(tri, BlindspotTriangle)
    assert not tri.visible
