"""Gamepad motion sensor fusion, gyro calibration, and flex-controller and minigame helpers."""

__version__ = "0.1.0"

__all__ = [
    "vector",
    "settings",
    "calibration",
    "motion",
    "gamepad",
    "sensor",
    "minigame",
    "player",
    "cannon",
]