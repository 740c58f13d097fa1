"""Flex controller sensor readings, calibration values and display buffers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from gyrofusion.vector import Vec

# Number of samples the sensor display tool keeps per channel by default.
DEFAULT_MAX_VALUES_STORED = 250

# Bluetooth service and characteristic identifiers a flex controller advertises.
SERVICE_UUIDS = ("0000FE84-0000-1000-8000-00805F9B34FB",)
CHARACTERISTIC_UUIDS = ("0000FE84-0000-0001-8000-00805F9B34FB",)


class FlexColor(enum.IntEnum):
    """Controller LED colour, written as RGB bits spelled out in base ten."""

    NONE = 0
    BLUE = 1
    GREEN = 10
    CYAN = 11
    RED = 100
    MAGENTA = 101
    YELLOW = 110
    WHITE = 111

    def rgb(self) -> tuple[bool, bool, bool]:
        """Return which of the red, green and blue components are lit."""
        value = int(self.value)
        return (value // 100 % 10 == 1, value // 10 % 10 == 1, value % 10 == 1)


# Colours handed to devices in order of connection; the first one is reserved
# for players without an assigned device.
DEVICE_COLORS = (
    FlexColor.WHITE,
    FlexColor.RED,
    FlexColor.CYAN,
    FlexColor.GREEN,
    FlexColor.YELLOW,
)


@dataclass
class SensorData:
    """One decoded packet from a flex controller."""

    emg_reading: int = 0
    angular_velocity: Vec = field(default_factory=Vec)
    proper_acceleration: Vec = field(default_factory=Vec)
    version: int = 0
    brd_version: int = 0
    scale: int = 1
    charge: int = 0
    battery: int = 0
    color: FlexColor = FlexColor.WHITE
    delta_time: float = 0.0


@dataclass
class CalibrationData:
    """Flex thresholds and IMU biases measured during calibration."""

    max_flex_threshold: int = 0
    rest_threshold: int = 0
    accelerometer_bias: Vec = field(default_factory=Vec)
    gyroscope_bias: Vec = field(default_factory=Vec)


_CHANNELS = (
    "emg_readings",
    "angular_velocity_x",
    "angular_velocity_y",
    "angular_velocity_z",
    "proper_acceleration_x",
    "proper_acceleration_y",
    "proper_acceleration_z",
    "coordinate_acceleration_x",
    "coordinate_acceleration_y",
    "coordinate_acceleration_z",
)


@dataclass
class SensorDisplayData:
    """Recent sensor values per channel, kept for plotting."""

    emg_readings: list[float] = field(default_factory=list)
    angular_velocity_x: list[float] = field(default_factory=list)
    angular_velocity_y: list[float] = field(default_factory=list)
    angular_velocity_z: list[float] = field(default_factory=list)
    proper_acceleration_x: list[float] = field(default_factory=list)
    proper_acceleration_y: list[float] = field(default_factory=list)
    proper_acceleration_z: list[float] = field(default_factory=list)
    coordinate_acceleration_x: list[float] = field(default_factory=list)
    coordinate_acceleration_y: list[float] = field(default_factory=list)
    coordinate_acceleration_z: list[float] = field(default_factory=list)

    @classmethod
    def with_size(cls, initial_size: int) -> SensorDisplayData:
        """Create display data with every channel holding ``initial_size`` zeros."""
        if initial_size < 0:
            raise ValueError("initial_size must not be negative")
        return cls(**{name: [0.0] * initial_size for name in _CHANNELS})