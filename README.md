# gyrofusion

gyrofusion turns raw gamepad motion samples into stable, usable motion input.
It needs Python 3.10 or newer and depends only on the standard library.

The input is gyro readings in degrees per second and accelerometer readings in g.
The output is:

- a calibrated gyro reading,
- an orientation quaternion corrected towards measured gravity,
- a raw orientation with no gravity correction,
- a gravity vector,
- acceleration with gravity removed,
- player-space and world-space aiming input.

Gyro calibration can be done in three ways:

- manual, by averaging samples while the controller is held still,
- automatic, through stillness detection,
- automatic, through sensor fusion.

The two automatic modes can be used together.

The package also has small game-side helpers:

- flex controller sensor data and LED colours,
- minigame standings, sessions and spawn points,
- player board data,
- a cannon that works out launch velocities and aiming rotations.

## Installation

```
pip install gyrofusion
```

## Motion processing

```python
from gyrofusion.gamepad import GamepadMotion
from gyrofusion.settings import CalibrationMode

motion = GamepadMotion()
motion.calibration_mode = CalibrationMode.STILLNESS | CalibrationMode.SENSOR_FUSION

# call once per sensor sample
motion.process_motion(0.3, -0.1, 0.05, 0.0, -1.0, 0.0, 1 / 250)

w, x, y, z = motion.orientation()
gx, gy, gz = motion.gravity()
pitch, yaw = motion.player_space_gyro(1.41)
```

The coordinate system is Y-up.

`process_motion` ignores a sample in which every value is zero, because such a sample is taken to be invalid.

### Reading the state

| Method | Returns |
| --- | --- |
| `calibrated_gyro()` | The last gyro sample with the calibration offset removed. |
| `gravity()` | The gravity vector. |
| `processed_acceleration()` | Acceleration with gravity removed. |
| `orientation()` | The gravity-corrected orientation. |
| `raw_orientation()` | The orientation without gravity correction. |
| `player_space_gyro(yaw_relax_factor)` | A `(pitch, yaw)` pair in player space. |
| `world_space_gyro(side_reduction_threshold)` | A `(pitch, yaw)` pair in world space. |

`orientation()` and `raw_orientation()` each return a `Quat`.

The properties `auto_calibration_confidence` and `auto_calibration_is_steady` report the state of automatic calibration.

### Manual calibration

1. Call `start_continuous_calibration()` while the controller is held still. Each sample is then added to an average.
2. Call `pause_continuous_calibration()` to stop adding samples.

`calibration_offset()` returns the offset that is subtracted from every sample.

`set_calibration_offset(x, y, z, weight)` restores a saved offset. The offset counts as though it had been averaged from `weight` samples.

`reset_continuous_calibration()` clears the offset and the automatic-calibration state.

The other reset methods:

- `reset_motion()` clears only the orientation and gravity state.
- `reset()` clears everything and restores the default settings.

### Tuning

All thresholds and rates are fields of `MotionSettings` in `gyrofusion.settings`. A `GamepadMotion` holds its copy in the `settings` attribute.

The lower-level pieces can be used on their own:

- `AutoCalibration`, `GyroCalibration` and `SensorMinMaxWindow`, in `gyrofusion.calibration`,
- `Motion`, in `gyrofusion.motion`.

### Stateless helpers

`calculate_player_space_gyro` and `calculate_world_space_gyro` are in `gyrofusion.gamepad`.

Each one takes a gyro reading and a gravity vector and returns a `(pitch, yaw)` pair. Neither needs a `GamepadMotion` object.

## Vector maths

`gyrofusion.vector` provides:

- the immutable `Vec` and `Quat` types,
- `angle_axis(angle, x, y, z)`, which builds a rotation from an angle in radians and an axis.

## Game helpers

### `gyrofusion.sensor`

- `FlexColor`: the LED colour. `rgb()` returns which of the red, green and blue components are lit.
- `SensorData`: a decoded packet.
- `CalibrationData`: flex thresholds and IMU biases.
- `SensorDisplayData`: per-channel sample buffers. `SensorDisplayData.with_size(n)` creates them filled with zeros.
- `DEVICE_COLORS`, `SERVICE_UUIDS` and `CHARACTERISTIC_UUIDS`: constants.

### `gyrofusion.minigame`

- `MinigameType` and `SplitBy`: enumerations.
- `MinigameStanding` and `MinigameSession`: minigame results and the values carried across levels.
- `PlayerSpawn`: a spawn point. It raises `ValueError` when its team, position or player count is out of range.
- `MinigameCapture` and `ControlDisplay`: a splitscreen camera and an instruction entry.

### `gyrofusion.player`

- `PlayerData` and `PlayerMeshData`: board progress and appearance.
- `LimbitlessLocalPlayer`: holds the assigned flex controller. It calls each callback registered with `subscribe` whenever `set_flex_controller` is called.

### `gyrofusion.cannon`

`Cannon` does four things:

- counts down its attack cooldown in `tick`,
- turns towards the crosshair through `make_rot_from_x`,
- returns a launch velocity from `fire`,
- falls back to `straight_velocity` when no arc is available.

`layers_to_ignore` lists the actors that a crosshair trace should skip.

## What this package does not do

gyrofusion does not connect to devices and does not read controllers. You pass it samples that you have already read.

It has:

- no Bluetooth scanning or connection,
- no packet decoding from device bytes,
- no rendering or user interface,
- no command-line program.

The cannon does not include a ballistic solver. Pass your own function as `trajectory_solver`; it takes a source, a target and a launch speed, and returns a velocity or `None`.

## Running the tests

```
pip install "gyrofusion[test]"
pytest
```