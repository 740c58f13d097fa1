"""High-level gamepad motion processing: calibration, orientation and gyro spaces."""

from __future__ import annotations

import math

from gyrofusion.calibration import AutoCalibration, GyroCalibration
from gyrofusion.motion import Motion
from gyrofusion.settings import CalibrationMode, MotionSettings
from gyrofusion.vector import Quat, Vec


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def calculate_player_space_gyro(
    gyro_x: float,
    gyro_y: float,
    gyro_z: float,
    grav_x: float,
    grav_y: float,
    grav_z: float,
    yaw_relax_factor: float = 1.41,
) -> tuple[float, float]:
    """Return (pitch, yaw) gyro in player space, using gravity without taking on its error."""
    world_yaw = -(grav_y * gyro_y + grav_z * gyro_z)
    world_yaw_sign = -1.0 if world_yaw < 0.0 else 1.0
    yaw = world_yaw_sign * min(
        abs(world_yaw) * yaw_relax_factor, math.sqrt(gyro_y * gyro_y + gyro_z * gyro_z)
    )
    return gyro_x, yaw


def calculate_world_space_gyro(
    gyro_x: float,
    gyro_y: float,
    gyro_z: float,
    grav_x: float,
    grav_y: float,
    grav_z: float,
    side_reduction_threshold: float = 0.125,
) -> tuple[float, float]:
    """Return (pitch, yaw) gyro using gravity as the yaw axis and a derived pitch axis."""
    world_yaw = -grav_x * gyro_x - grav_y * gyro_y - grav_z * gyro_z
    # Project the local pitch axis (X) onto the plane perpendicular to gravity.
    grav_dot_pitch_axis = grav_x
    pitch_axis = Vec(
        1.0 - grav_x * grav_dot_pitch_axis,
        -grav_y * grav_dot_pitch_axis,
        -grav_z * grav_dot_pitch_axis,
    )
    length_squared = pitch_axis.length_squared()
    if length_squared > 0.0:
        pitch_axis = pitch_axis * (1.0 / math.sqrt(length_squared))
        flatness = abs(grav_y)
        upness = abs(grav_z)
        if side_reduction_threshold <= 0.0:
            side_reduction = 1.0
        else:
            side_reduction = _clamp(
                (max(flatness, upness) - side_reduction_threshold) / side_reduction_threshold,
                0.0,
                1.0,
            )
        pitch = side_reduction * pitch_axis.dot(Vec(gyro_x, gyro_y, gyro_z))
    else:
        pitch = 0.0
    return pitch, world_yaw


class GamepadMotion:
    """Processes raw gyro (degrees/s) and accelerometer (g) samples from a gamepad."""

    def __init__(self) -> None:
        self._is_calibrating = False
        self._calibration_mode = CalibrationMode.MANUAL
        self.settings = MotionSettings()
        self._gyro_calibration = GyroCalibration()
        self._auto_calibration = AutoCalibration(self.settings, self._gyro_calibration)
        self._motion = Motion(self.settings)
        self._gyro = Vec()
        self._raw_accel = Vec()

    def reset(self) -> None:
        """Clear calibration, the last sample and motion state, and restore default settings."""
        self._gyro_calibration = GyroCalibration()
        self._auto_calibration.calibration_data = self._gyro_calibration
        self._gyro = Vec()
        self._raw_accel = Vec()
        self.settings = MotionSettings()
        self._auto_calibration.settings = self.settings
        self._motion.settings = self.settings
        self._motion.reset()

    def process_motion(
        self,
        gyro_x: float,
        gyro_y: float,
        gyro_z: float,
        accel_x: float,
        accel_y: float,
        accel_z: float,
        delta_time: float,
    ) -> None:
        """Feed one raw sample; an all-zero sample is ignored as invalid."""
        if (
            gyro_x == 0.0 and gyro_y == 0.0 and gyro_z == 0.0
            and accel_x == 0.0 and accel_y == 0.0 and accel_z == 0.0
        ):
            return

        gyro = Vec(gyro_x, gyro_y, gyro_z)
        accel = Vec(accel_x, accel_y, accel_z)
        accel_magnitude = accel.length()
        auto = self._auto_calibration
        mode = self._calibration_mode

        if self._is_calibrating:
            self._push_sensor_samples(gyro, accel_magnitude)
            auto.no_sample_sensor_fusion()
            auto.no_sample_stillness()
        elif mode & CalibrationMode.STILLNESS:
            auto.add_sample_stillness(
                gyro, accel, delta_time, bool(mode & CalibrationMode.SENSOR_FUSION)
            )
            auto.no_sample_sensor_fusion()
        else:
            auto.no_sample_stillness()
            if mode & CalibrationMode.SENSOR_FUSION:
                auto.add_sample_sensor_fusion(gyro, accel, delta_time)
            else:
                auto.no_sample_sensor_fusion()

        offset, gravity_length = self._calibrated_sensor()
        gyro = gyro - offset

        self._motion.update(gyro, accel, gravity_length, delta_time)
        self._gyro = gyro
        self._raw_accel = accel

    def calibrated_gyro(self) -> Vec:
        """The last gyro sample with the calibration offset removed."""
        return self._gyro

    def gravity(self) -> Vec:
        return self._motion.grav

    def processed_acceleration(self) -> Vec:
        """The last acceleration with gravity removed."""
        return self._motion.accel

    def orientation(self) -> Quat:
        return self._motion.quaternion

    def raw_orientation(self) -> Quat:
        """Orientation integrated from the gyro without gravity correction."""
        return self._motion.raw_quaternion

    def player_space_gyro(self, yaw_relax_factor: float = 1.41) -> tuple[float, float]:
        grav = self._motion.grav
        return calculate_player_space_gyro(*self._gyro, *grav, yaw_relax_factor)

    def world_space_gyro(self, side_reduction_threshold: float = 0.125) -> tuple[float, float]:
        grav = self._motion.grav
        return calculate_world_space_gyro(*self._gyro, *grav, side_reduction_threshold)

    def start_continuous_calibration(self) -> None:
        self._is_calibrating = True

    def pause_continuous_calibration(self) -> None:
        self._is_calibrating = False

    def reset_continuous_calibration(self) -> None:
        self._gyro_calibration = GyroCalibration()
        self._auto_calibration.calibration_data = self._gyro_calibration
        self._auto_calibration.reset()

    def calibration_offset(self) -> Vec:
        """The gyro offset currently subtracted from every sample."""
        offset, _ = self._calibrated_sensor()
        return offset

    def set_calibration_offset(
        self, x_offset: float, y_offset: float, z_offset: float, weight: int
    ) -> None:
        """Set the gyro offset as though it had been averaged from ``weight`` samples."""
        data = self._gyro_calibration
        if data.num_samples > 1:
            data.accel_magnitude *= float(weight) / data.num_samples
        else:
            data.accel_magnitude = float(weight)
        data.num_samples = weight
        data.x = x_offset * weight
        data.y = y_offset * weight
        data.z = z_offset * weight

    @property
    def auto_calibration_confidence(self) -> float:
        return self._auto_calibration.confidence

    @auto_calibration_confidence.setter
    def auto_calibration_confidence(self, value: float) -> None:
        self._auto_calibration.confidence = value

    @property
    def auto_calibration_is_steady(self) -> bool:
        return self._auto_calibration.is_steady()

    @property
    def calibration_mode(self) -> CalibrationMode:
        return self._calibration_mode

    @calibration_mode.setter
    def calibration_mode(self, mode: CalibrationMode) -> None:
        self._calibration_mode = CalibrationMode(mode)

    def reset_motion(self) -> None:
        self._motion.reset()

    def _push_sensor_samples(self, gyro: Vec, accel_magnitude: float) -> None:
        data = self._gyro_calibration
        data.num_samples += 1
        data.x += gyro.x
        data.y += gyro.y
        data.z += gyro.z
        data.accel_magnitude += accel_magnitude

    def _calibrated_sensor(self) -> tuple[Vec, float]:
        data = self._gyro_calibration
        if data.num_samples <= 0:
            return Vec(), 1.0
        inverse = 1.0 / data.num_samples
        return (
            Vec(data.x * inverse, data.y * inverse, data.z * inverse),
            data.accel_magnitude * inverse,
        )