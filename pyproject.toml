[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gyrofusion"
version = "0.1.0"
description = "Gyro and accelerometer sensor fusion, automatic gyro calibration and flex-controller game helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["gyro", "accelerometer", "sensor fusion", "calibration", "gamepad", "motion controls"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Human Machine Interfaces",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["gyrofusion"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
