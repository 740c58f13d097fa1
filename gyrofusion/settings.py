"""Tuning parameters and calibration modes for gamepad motion processing."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class CalibrationMode(enum.IntFlag):
    """Automatic gyro calibration strategies; may be combined."""

    MANUAL = 0
    STILLNESS = 1
    SENSOR_FUSION = 2


@dataclass
class MotionSettings:
    """Tuning values for auto-calibration and gravity correction."""

    min_stillness_samples: int = 10
    min_stillness_collection_time: float = 0.5
    min_stillness_correction_time: float = 2.0
    max_stillness_error: float = 2.0
    stillness_sample_deterioration_rate: float = 0.2
    stillness_error_climb_rate: float = 0.1
    stillness_error_drop_on_recalibrate: float = 0.1
    stillness_calibration_ease_in_time: float = 3.0
    stillness_calibration_half_time: float = 0.1
    stillness_confidence_rate: float = 1.0

    # Negative values mean the thresholds are learned automatically.
    stillness_gyro_delta: float = -1.0
    stillness_accel_delta: float = -1.0

    sensor_fusion_calibration_smoothing_strength: float = 2.0
    sensor_fusion_angular_acceleration_threshold: float = 20.0
    sensor_fusion_calibration_ease_in_time: float = 3.0
    sensor_fusion_calibration_half_time: float = 0.1
    sensor_fusion_confidence_rate: float = 1.0

    gravity_correction_shakiness_max_threshold: float = 0.4
    gravity_correction_shakiness_min_threshold: float = 0.01

    gravity_correction_still_speed: float = 1.0
    gravity_correction_shaky_speed: float = 0.1

    gravity_correction_gyro_factor: float = 0.1
    gravity_correction_gyro_min_threshold: float = 0.05
    gravity_correction_gyro_max_threshold: float = 0.25

    gravity_correction_minimum_speed: float = 0.01