import math

import pytest

from gyrofusion.motion import Motion
from gyrofusion.settings import MotionSettings
from gyrofusion.vector import Quat, Vec

DT = 0.01


def _unit(q: Quat) -> float:
    return math.sqrt(sum(c * c for c in q))


def test_new_motion_is_at_rest():
    motion = Motion(MotionSettings())
    assert motion.quaternion == Quat()
    assert motion.raw_quaternion == Quat()
    assert motion.grav == Vec()
    assert motion.shakiness == 0.0


def test_update_without_settings_is_ignored():
    motion = Motion(None)
    motion.update(Vec(0.0, 90.0, 0.0), Vec(0.0, 1.0, 0.0), 1.0, DT)
    assert motion.quaternion == Quat()
    assert motion.grav == Vec()


def test_gyro_integration_without_accel():
    motion = Motion(MotionSettings())
    for _ in range(100):
        motion.update(Vec(0.0, 90.0, 0.0), Vec(), 1.0, DT)
    q = motion.raw_quaternion
    assert _unit(q) == pytest.approx(1.0)
    assert 2.0 * math.acos(q.w) == pytest.approx(math.pi / 2, abs=1e-6)
    assert q.x == pytest.approx(0.0, abs=1e-9)
    assert q.z == pytest.approx(0.0, abs=1e-9)
    assert tuple(motion.quaternion) == pytest.approx(tuple(q))
    assert motion.accel == motion.grav


def test_gravity_converges_to_measured_accel():
    motion = Motion(MotionSettings())
    accel = Vec(0.0, 1.0, 0.0)
    for _ in range(3000):
        motion.update(Vec(), accel, 1.0, DT)
    assert tuple(motion.grav) == pytest.approx(tuple(-accel), abs=1e-3)
    assert motion.accel.length() == pytest.approx(0.0, abs=1e-3)
    assert tuple(motion.quaternion) == pytest.approx(tuple(Quat()), abs=1e-6)


def test_shakiness_jumps_then_decays():
    motion = Motion(MotionSettings())
    accel = Vec(0.0, 1.0, 0.0)
    motion.update(Vec(), accel, 1.0, DT)
    first = motion.shakiness
    for _ in range(500):
        motion.update(Vec(), accel, 1.0, DT)
    assert first == pytest.approx(accel.length())
    assert motion.shakiness < first


@pytest.mark.parametrize(
    "gyro,accel",
    [
        (Vec(30.0, -45.0, 10.0), Vec(0.2, 0.9, 0.1)),
        (Vec(200.0, 0.0, 0.0), Vec(0.0, 1.0, 0.0)),
        (Vec(-5.0, 5.0, 120.0), Vec(0.5, 0.5, 0.5)),
    ],
)
def test_quaternions_stay_normalized(gyro, accel):
    motion = Motion(MotionSettings())
    for _ in range(200):
        motion.update(gyro, accel, accel.length(), DT)
    assert _unit(motion.quaternion) == pytest.approx(1.0)
    assert _unit(motion.raw_quaternion) == pytest.approx(1.0)


def test_reset_restores_identity():
    motion = Motion(MotionSettings())
    for _ in range(50):
        motion.update(Vec(10.0, 20.0, 30.0), Vec(0.0, 1.0, 0.0), 1.0, DT)
    motion.reset()
    assert motion.quaternion == Quat()
    assert motion.raw_quaternion == Quat()
    assert motion.accel == Vec()
    assert motion.smooth_accel == Vec()
    assert motion.shakiness == 0.0