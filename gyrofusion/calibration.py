"""Gyro bias calibration: accumulated offsets and automatic recalibration."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from gyrofusion.settings import MotionSettings
from gyrofusion.vector import Vec


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def _is_zero(vec: Vec) -> bool:
    return vec.x == 0.0 and vec.y == 0.0 and vec.z == 0.0


def _angular_velocity_between(this_normal: Vec, previous_normal: Vec, elapsed: float) -> Vec:
    """Angular velocity in degrees per second that turns ``previous_normal`` into ``this_normal``."""
    angular_velocity = this_normal.cross(previous_normal)
    cross_length = angular_velocity.length()
    if cross_length > 0.0:
        this_dot_prev = _clamp(this_normal.dot(previous_normal), -1.0, 1.0)
        angle_change = math.degrees(math.acos(this_dot_prev))
        angle_per_second = angle_change / elapsed
        angular_velocity = angular_velocity * (angle_per_second / cross_length)
    return angular_velocity


@dataclass
class GyroCalibration:
    """Accumulated gyro offsets; the bias is the sums divided by ``num_samples``."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    accel_magnitude: float = 0.0
    num_samples: int = 0

    def average_bias(self) -> Vec:
        """The gyro bias these accumulated samples stand for."""
        return Vec(self.x, self.y, self.z) / max(float(self.num_samples), 1.0)


@dataclass
class SensorMinMaxWindow:
    """Running minimum, maximum and mean of gyro and accelerometer samples."""

    min_gyro: Vec = field(default_factory=Vec)
    max_gyro: Vec = field(default_factory=Vec)
    mean_gyro: Vec = field(default_factory=Vec)
    min_accel: Vec = field(default_factory=Vec)
    max_accel: Vec = field(default_factory=Vec)
    mean_accel: Vec = field(default_factory=Vec)
    start_accel: Vec = field(default_factory=Vec)
    num_samples: int = 0
    time_sampled: float = 0.0

    def reset(self, remainder: float) -> None:
        """Forget all samples, starting the sampled time at ``remainder``."""
        self.num_samples = 0
        self.time_sampled = remainder

    def add_sample(self, gyro: Vec, accel: Vec, delta_time: float) -> None:
        if self.num_samples == 0:
            self.max_gyro = self.min_gyro = self.mean_gyro = gyro
            self.max_accel = self.min_accel = self.mean_accel = accel
            self.start_accel = accel
            self.num_samples = 1
            self.time_sampled += delta_time
            return

        self.max_gyro = self.max_gyro.max(gyro)
        self.min_gyro = self.min_gyro.min(gyro)
        self.max_accel = self.max_accel.max(accel)
        self.min_accel = self.min_accel.min(accel)

        self.num_samples += 1
        self.time_sampled += delta_time

        weight = 1.0 / self.num_samples
        self.mean_gyro = self.mean_gyro + (gyro - self.mean_gyro) * weight
        self.mean_accel = self.mean_accel + (accel - self.mean_accel) * weight

    def mid_gyro(self) -> Vec:
        """The representative gyro value of the window (its mean)."""
        return self.mean_gyro


class AutoCalibration:
    """Continuously estimates gyro bias from stillness or sensor fusion."""

    def __init__(
        self,
        settings: MotionSettings | None = None,
        calibration_data: GyroCalibration | None = None,
    ) -> None:
        self.settings = settings
        self.calibration_data = calibration_data
        self.min_max_window = SensorMinMaxWindow()
        self.smoothed_angular_velocity_gyro = Vec()
        self.smoothed_angular_velocity_accel = Vec()
        self.smoothed_previous_accel = Vec()
        self.previous_accel = Vec()
        self.confidence = 0.0
        self.reset()

    def reset(self) -> None:
        self.min_max_window.reset(0.0)
        self.confidence = 0.0
        self._is_steady = False
        self._min_delta_gyro = Vec.splat(1.0)
        self._min_delta_accel = Vec.splat(0.25)
        self._recalibrate_threshold = 1.0
        self._sensor_fusion_skipped_time = 0.0
        self._time_steady_sensor_fusion = 0.0
        self._time_steady_stillness = 0.0

    def is_steady(self) -> bool:
        """Whether the last processed sample was judged steady."""
        return self._is_steady

    def _climb_threshold(self, delta_time: float) -> None:
        settings = self.settings
        self._recalibrate_threshold = min(
            self._recalibrate_threshold + settings.stillness_error_climb_rate * delta_time,
            settings.max_stillness_error,
        )

    def add_sample_stillness(
        self, gyro: Vec, accel: Vec, delta_time: float, do_sensor_fusion: bool
    ) -> bool:
        """Feed a sample to stillness detection; return True if calibration was updated."""
        if _is_zero(gyro) and _is_zero(accel):
            return False
        settings = self.settings
        data = self.calibration_data
        if settings is None or data is None:
            return False

        half_time = settings.stillness_calibration_half_time * self.confidence
        ease_in_time = settings.stillness_calibration_ease_in_time

        window = self.min_max_window
        window.add_sample(gyro, accel, delta_time)
        gyro_delta = window.max_gyro - window.min_gyro
        accel_delta = window.max_accel - window.min_accel

        climb = Vec.splat(settings.stillness_sample_deterioration_rate * delta_time)
        if settings.stillness_gyro_delta < 0.0:
            if self.confidence < 1.0:
                self._min_delta_gyro = self._min_delta_gyro + climb
        else:
            self._min_delta_gyro = Vec.splat(settings.stillness_gyro_delta)
        if settings.stillness_accel_delta < 0.0:
            if self.confidence < 1.0:
                self._min_delta_accel = self._min_delta_accel + climb
        else:
            self._min_delta_accel = Vec.splat(settings.stillness_accel_delta)

        enough_samples = window.num_samples >= settings.min_stillness_samples
        if enough_samples and window.time_sampled >= settings.min_stillness_collection_time:
            self._min_delta_gyro = self._min_delta_gyro.min(gyro_delta)
            self._min_delta_accel = self._min_delta_accel.min(accel_delta)
        else:
            self._climb_threshold(delta_time)
            return False

        threshold = self._recalibrate_threshold
        is_still = all(
            delta <= limit * threshold
            for delta, limit in zip(gyro_delta, self._min_delta_gyro)
        ) and all(
            delta <= limit * threshold
            for delta, limit in zip(accel_delta, self._min_delta_accel)
        )

        calibrated = False
        steady = False
        if is_still:
            if enough_samples and window.time_sampled >= settings.min_stillness_correction_time:
                self._time_steady_stillness = min(
                    self._time_steady_stillness + delta_time, ease_in_time
                )
                ease_in = 1.0 if ease_in_time <= 0.0 else self._time_steady_stillness / ease_in_time

                calibrated_gyro = window.mid_gyro()
                old_bias = data.average_bias()
                lerp_factor = (
                    0.0 if half_time <= 0.0 else 2.0 ** (-ease_in * delta_time / half_time)
                )
                new_bias = calibrated_gyro.lerp(old_bias, lerp_factor)
                self.confidence = min(
                    self.confidence + delta_time * settings.stillness_confidence_rate, 1.0
                )
                steady = True

                if do_sensor_fusion:
                    previous_normal = window.start_accel.normalized()
                    this_normal = accel.normalized()
                    angular_velocity = _angular_velocity_between(
                        this_normal, previous_normal, window.time_sampled
                    )
                    strength = this_normal.abs()
                    fusion_bias = (calibrated_gyro - angular_velocity).lerp(old_bias, lerp_factor)
                    new_bias = Vec(
                        fusion_bias.x if strength.x <= 0.7 else new_bias.x,
                        fusion_bias.y if strength.y <= 0.7 else new_bias.y,
                        fusion_bias.z if strength.z <= 0.7 else new_bias.z,
                    )

                data.x, data.y, data.z = new_bias
                data.accel_magnitude = window.mean_accel.length()
                data.num_samples = 1
                calibrated = True
            else:
                self._climb_threshold(delta_time)
        elif self._time_steady_stillness > 0.0:
            self._recalibrate_threshold = max(
                self._recalibrate_threshold - settings.stillness_error_drop_on_recalibrate, 1.0
            )
            self._time_steady_stillness = 0.0
            window.reset(0.0)
        else:
            self._climb_threshold(delta_time)
            window.reset(0.0)

        self._is_steady = steady
        return calibrated

    def no_sample_stillness(self) -> None:
        self.min_max_window.reset(0.0)

    def _restart_sensor_fusion(self, accel: Vec) -> None:
        self._time_steady_sensor_fusion = 0.0
        self._sensor_fusion_skipped_time = 0.0
        self.previous_accel = accel
        self.smoothed_previous_accel = accel
        self.smoothed_angular_velocity_gyro = Vec()
        self.smoothed_angular_velocity_accel = Vec()

    def add_sample_sensor_fusion(self, gyro: Vec, accel: Vec, delta_time: float) -> bool:
        """Compare gyro with the rotation seen by the accelerometer; True if calibration was updated."""
        if delta_time <= 0.0:
            return False
        if (_is_zero(gyro) and _is_zero(accel)) or _is_zero(self.previous_accel):
            self._restart_sensor_fusion(accel)
            return False
        if accel == self.previous_accel:
            # The controller state has not changed since the last sample.
            self._sensor_fusion_skipped_time += delta_time
            return False
        settings = self.settings
        if settings is None:
            return False

        half_time = settings.sensor_fusion_calibration_half_time * self.confidence
        ease_in_time = settings.sensor_fusion_calibration_ease_in_time

        delta_time += self._sensor_fusion_skipped_time
        self._sensor_fusion_skipped_time = 0.0
        calibrated = False
        steady = False

        smoothing = 2.0 ** (-settings.sensor_fusion_calibration_smoothing_strength * delta_time)
        previous_gyro = self.smoothed_angular_velocity_gyro
        self.smoothed_angular_velocity_gyro = gyro.lerp(previous_gyro, smoothing)
        gyro_acceleration = (
            (self.smoothed_angular_velocity_gyro - previous_gyro).length() / delta_time
        )

        previous_normal = self.smoothed_previous_accel.normalized()
        this_accel = accel.lerp(self.smoothed_previous_accel, smoothing)
        this_normal = this_accel.normalized()
        self.smoothed_angular_velocity_accel = _angular_velocity_between(
            this_normal, previous_normal, delta_time
        )

        data = self.calibration_data
        if gyro_acceleration > settings.sensor_fusion_angular_acceleration_threshold or data is None:
            self._time_steady_sensor_fusion = 0.0
        else:
            self._time_steady_sensor_fusion = min(
                self._time_steady_sensor_fusion + delta_time, ease_in_time
            )
            ease_in = (
                1.0 if ease_in_time <= 0.0 else self._time_steady_sensor_fusion / ease_in_time
            )
            old_bias = data.average_bias()
            lerp_factor = 0.0 if half_time <= 0.0 else 2.0 ** (-ease_in * delta_time / half_time)
            new_bias = (
                self.smoothed_angular_velocity_gyro - self.smoothed_angular_velocity_accel
            ).lerp(old_bias, lerp_factor)
            self.confidence = min(
                self.confidence + delta_time * settings.sensor_fusion_confidence_rate, 1.0
            )
            steady = True
            # Axes aligned with gravity cannot be observed by the accelerometer.
            strength = Vec(*(1.0 if c > 0.7 else c for c in this_normal.abs()))
            new_bias = new_bias.lerp(old_bias, strength.min(Vec.splat(1.0)))

            data.x, data.y, data.z = new_bias
            data.accel_magnitude = this_accel.length()
            data.num_samples = 1
            calibrated = True

        self.smoothed_previous_accel = this_accel
        self.previous_accel = accel
        self._is_steady = steady
        return calibrated

    def no_sample_sensor_fusion(self) -> None:
        self._restart_sensor_fusion(Vec())