import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from gyrofusion.cannon import Cannon, Rotator, layers_to_ignore, make_rot_from_x
from gyrofusion.vector import Vec


def test_make_rot_from_x_forward_is_identity():
    assert make_rot_from_x(Vec(1.0, 0.0, 0.0)) == Rotator(0.0, 0.0, 0.0)


def test_make_rot_from_x_sideways_and_up():
    side = make_rot_from_x(Vec(0.0, 3.0, 0.0))
    assert side.yaw == pytest.approx(90.0)
    assert side.pitch == pytest.approx(0.0)
    up = make_rot_from_x(Vec(0.0, 0.0, 2.0))
    assert up.pitch == pytest.approx(90.0)


def test_layers_to_ignore_spares_target_layer():
    layers = ["near", "mid", "far"]
    assert layers_to_ignore(layers, 1, "cannon") == ["near", "far", "cannon"]
    assert layers == ["near", "mid", "far"]


def test_layers_to_ignore_past_end_ignores_all_layers():
    layers = ["near", "mid"]
    assert layers_to_ignore(layers, 2, "cannon") == ["near", "mid", "cannon"]


@pytest.mark.parametrize("layer", [-1, 4])
def test_layers_to_ignore_rejects_out_of_range(layer):
    with pytest.raises(IndexError):
        layers_to_ignore(["a", "b", "c"], layer, "cannon")


@given(
    st.floats(-100, 100),
    st.floats(-100, 100),
    st.floats(-100, 100),
    st.floats(1, 5000),
)
def test_straight_velocity_has_bullet_speed(x, y, z, speed):
    direction = Vec(x, y, z)
    if direction.length() < 1e-3:
        direction = Vec(1.0, 0.0, 0.0)
    cannon = Cannon(speed, 1.0)
    velocity = cannon.straight_velocity(Vec(), direction)
    assert velocity.length() == pytest.approx(speed, rel=1e-6)
    assert velocity.cross(direction).length() == pytest.approx(0.0, abs=1e-6 * speed * 100)
    assert velocity.dot(direction) > 0


def test_straight_velocity_same_point_is_zero():
    cannon = Cannon(500.0, 1.0)
    assert cannon.straight_velocity(Vec(1.0, 2.0, 3.0), Vec(1.0, 2.0, 3.0)) == Vec()


def test_arc_velocity_uses_solver_result():
    calls = []

    def solver(source, target, speed):
        calls.append((source, target, speed))
        return Vec(7.0, 8.0, 9.0)

    cannon = Cannon(300.0, 1.0, solver)
    result = cannon.arc_velocity(Vec(0.0, 0.0, 0.0), Vec(10.0, 0.0, 0.0))
    assert result == Vec(7.0, 8.0, 9.0)
    assert calls == [(Vec(0.0, 0.0, 0.0), Vec(10.0, 0.0, 0.0), 300.0)]


def test_arc_velocity_falls_back_to_straight():
    cannon = Cannon(300.0, 1.0, lambda s, t, v: None)
    source, target = Vec(0.0, 0.0, 0.0), Vec(0.0, 10.0, 0.0)
    assert cannon.arc_velocity(source, target) == cannon.straight_velocity(source, target)


def test_arc_velocity_without_solver_is_straight():
    cannon = Cannon(300.0, 1.0)
    source, target = Vec(1.0, 1.0, 1.0), Vec(4.0, 5.0, 1.0)
    assert cannon.arc_velocity(source, target) == cannon.straight_velocity(source, target)


def test_fire_respects_cooldown():
    cannon = Cannon(100.0, 2.0)
    first = cannon.fire(Vec(), Vec(10.0, 0.0, 0.0), True)
    assert first == cannon.straight_velocity(Vec(), Vec(10.0, 0.0, 0.0))
    assert cannon.fire(Vec(), Vec(10.0, 0.0, 0.0), True) is None
    cannon.tick(1.0, Vec(10.0, 0.0, 0.0), Vec())
    assert cannon.fire(Vec(), Vec(10.0, 0.0, 0.0), True) is None
    cannon.tick(1.0, Vec(10.0, 0.0, 0.0), Vec())
    assert cannon.fire(Vec(), Vec(10.0, 0.0, 0.0), True) == first


def test_fire_when_not_in_progress_keeps_cooldown_free():
    cannon = Cannon(100.0, 2.0)
    assert cannon.fire(Vec(), Vec(5.0, 0.0, 0.0), False) is None
    assert cannon.attack_cooldown_timer == 0.0
    assert cannon.fire(Vec(), Vec(5.0, 0.0, 0.0), True) is not None


def test_fire_without_crosshair_hit_still_starts_cooldown():
    cannon = Cannon(100.0, 2.0)
    assert cannon.fire(Vec(), None, True) is None
    assert cannon.attack_cooldown_timer == 2.0
    assert cannon.fire(Vec(), Vec(5.0, 0.0, 0.0), True) is None


def test_tick_points_cannon_at_crosshair():
    cannon = Cannon(100.0, 1.0)
    crosshair = Vec(3.0, 4.0, 5.0)
    actor = Vec(1.0, 1.0, 1.0)
    rotation = cannon.tick(0.1, crosshair, actor)
    assert rotation == make_rot_from_x(crosshair - actor)
    assert cannon.cannon_target_rotation == rotation
    assert cannon.barrel_rotation == rotation
    assert cannon.base_rotation == Rotator(0.0, rotation.yaw, 0.0)


def test_tick_without_crosshair_aims_at_origin():
    cannon = Cannon(100.0, 1.0)
    actor = Vec(2.0, -3.0, 1.0)
    rotation = cannon.tick(0.1, None, actor)
    assert rotation == make_rot_from_x(Vec() - actor)


def test_set_cannon_rotation_base_only_yaws():
    cannon = Cannon(100.0, 1.0)
    rotation = Rotator(30.0, 45.0, 10.0)
    cannon.set_cannon_rotation(rotation)
    assert cannon.cannon_rotation == rotation
    assert cannon.barrel_rotation == rotation
    assert cannon.base_rotation.pitch == 0.0
    assert cannon.base_rotation.roll == 0.0
    assert math.isclose(cannon.base_rotation.yaw, rotation.yaw)