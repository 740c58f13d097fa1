"""Orientation and gravity tracking from calibrated gyro and accelerometer samples."""

from __future__ import annotations

import math

from gyrofusion.settings import MotionSettings
from gyrofusion.vector import Quat, Vec, angle_axis

_DOWN = Vec(0.0, -1.0, 0.0)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


class Motion:
    """Integrates gyro rotation and corrects it towards measured gravity."""

    SHORT_STEADINESS_HALF_TIME = 0.25
    LONG_STEADINESS_HALF_TIME = 1.0

    def __init__(self, settings: MotionSettings | None = None) -> None:
        self.settings = settings
        self.reset()

    def reset(self) -> None:
        self.raw_quaternion = Quat()
        self.quaternion = Quat()
        self.accel = Vec()
        self.grav = Vec()
        self.smooth_accel = Vec()
        self.shakiness = 0.0

    def update(self, gyro: Vec, accel: Vec, gravity_length: float, delta_time: float) -> None:
        """Advance by one sample: gyro in degrees per second, acceleration in g."""
        settings = self.settings
        if settings is None:
            return

        angle_speed = math.radians(gyro.length())
        angle = angle_speed * delta_time
        rotation = angle_axis(angle, gyro.x, gyro.y, gyro.z)
        inverse_rotation = rotation.inverse()

        # Local rotation, applied on the right.
        self.quaternion = self.quaternion * rotation
        self.raw_quaternion = self.raw_quaternion * rotation

        accel_magnitude = accel.length()
        if accel_magnitude > 0.0:
            accel_norm = accel / accel_magnitude
            self.smooth_accel = self.smooth_accel.rotated(inverse_rotation)
            half_time = self.SHORT_STEADINESS_HALF_TIME
            smooth_factor = 0.0 if half_time <= 0.0 else 2.0 ** (-delta_time / half_time)
            self.shakiness = max(self.shakiness * smooth_factor, (accel - self.smooth_accel).length())
            self.smooth_accel = accel.lerp(self.smooth_accel, smooth_factor)

            self.grav = self.grav.rotated(inverse_rotation)
            target = accel_norm * -gravity_length
            grav_to_accel = target - self.grav
            grav_to_accel_dir = grav_to_accel.normalized()

            shaky_min = settings.gravity_correction_shakiness_min_threshold
            shaky_max = settings.gravity_correction_shakiness_max_threshold
            still_speed = settings.gravity_correction_still_speed
            shaky_speed = settings.gravity_correction_shaky_speed
            if shaky_min < shaky_max:
                blend = _clamp((self.shakiness - shaky_min) / (shaky_max - shaky_min), 0.0, 1.0)
                correction_speed = still_speed + (shaky_speed - still_speed) * blend
            else:
                correction_speed = still_speed if self.shakiness < shaky_max else shaky_speed

            gyro_limit = max(
                angle_speed * settings.gravity_correction_gyro_factor,
                settings.gravity_correction_minimum_speed,
            )
            if correction_speed > gyro_limit:
                gyro_min = settings.gravity_correction_gyro_min_threshold
                gyro_max = settings.gravity_correction_gyro_max_threshold
                gap = grav_to_accel.length()
                if gyro_min < gyro_max:
                    close_enough = _clamp((gap - gyro_min) / (gyro_max - gyro_min), 0.0, 1.0)
                else:
                    close_enough = 0.0 if gap < gyro_max else 1.0
                correction_speed = gyro_limit + (correction_speed - gyro_limit) * close_enough

            step = grav_to_accel_dir * (correction_speed * delta_time)
            if step.length_squared() < grav_to_accel.length_squared():
                self.grav = self.grav + step
            else:
                self.grav = target

            gravity_direction = self.grav.normalized().rotated(self.quaternion.inverse())
            error_angle = math.acos(_clamp(_DOWN.dot(gravity_direction), -1.0, 1.0))
            flattened = _DOWN.cross(gravity_direction)
            correction = angle_axis(error_angle, flattened.x, flattened.y, flattened.z)
            self.quaternion = self.quaternion * correction

            self.accel = accel + self.grav
        else:
            self.grav = self.grav.rotated(inverse_rotation)
            self.accel = self.grav

        self.quaternion = self.quaternion.normalized()
        self.raw_quaternion = self.raw_quaternion.normalized()