"""Aiming and firing logic for a crosshair-driven projectile cannon."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TypeVar

from gyrofusion.vector import Vec

T = TypeVar("T")

# Solves for a launch velocity from (source, target, launch_speed); None when
# no ballistic trajectory reaches the target.
TrajectorySolver = Callable[[Vec, Vec, float], Optional[Vec]]


@dataclass(frozen=True)
class Rotator:
    """A rotation as pitch, yaw and roll in degrees."""

    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0


def make_rot_from_x(direction: Vec) -> Rotator:
    """Return the rotation whose forward (X) axis points along ``direction``."""
    horizontal = math.hypot(direction.x, direction.y)
    pitch = math.degrees(math.atan2(direction.z, horizontal))
    yaw = math.degrees(math.atan2(direction.y, direction.x))
    return Rotator(pitch, yaw, 0.0)


def layers_to_ignore(layers: Sequence[T], layer: int, owner: T) -> list[T]:
    """Return the actors a crosshair trace should skip when aiming at ``layer``.

    Every depth layer except the targeted one is ignored, along with ``owner``.
    ``layer`` may equal ``len(layers)``, in which case no layer is spared.
    """
    if layer < 0 or layer > len(layers):
        raise IndexError(f"layer {layer} is out of range for {len(layers)} layers")
    ignored = [actor for index, actor in enumerate(layers) if index != layer]
    ignored.append(owner)
    return ignored


class Cannon:
    """Fires projectiles at the crosshair, with a cooldown between shots."""

    def __init__(
        self,
        bullet_speed: float,
        attack_cooldown: float,
        trajectory_solver: Optional[TrajectorySolver] = None,
    ) -> None:
        self.bullet_speed = bullet_speed
        self.attack_cooldown = attack_cooldown
        self.trajectory_solver = trajectory_solver
        self.attack_cooldown_timer = 0.0
        self.cannon_rotation = Rotator()
        self.barrel_rotation = Rotator()
        self.base_rotation = Rotator()

    @property
    def cannon_target_rotation(self) -> Rotator:
        return self.cannon_rotation

    def tick(
        self, delta_time: float, crosshair_position: Optional[Vec], actor_location: Vec
    ) -> Rotator:
        """Advance the cooldown and turn the cannon towards the crosshair.

        A missing crosshair position is treated as the origin. Returns the new rotation.
        """
        self.attack_cooldown_timer -= delta_time
        target = crosshair_position if crosshair_position is not None else Vec()
        rotation = make_rot_from_x(target - actor_location)
        self.set_cannon_rotation(rotation)
        return rotation

    def fire(
        self, bullet_spawn: Vec, crosshair_position: Optional[Vec], in_progress: bool
    ) -> Optional[Vec]:
        """Return the launch velocity of a new shot, or None if no shot is fired.

        No shot is fired while cooling down or when the game is not in progress.
        A shot with no crosshair hit still starts the cooldown.
        """
        if self.attack_cooldown_timer > 0 or not in_progress:
            return None
        self.attack_cooldown_timer = self.attack_cooldown
        if crosshair_position is None:
            return None
        return self.arc_velocity(bullet_spawn, crosshair_position)

    def straight_velocity(self, source: Vec, target: Vec) -> Vec:
        """Velocity that sends a projectile in a straight line at the target."""
        return (target - source).normalized() * self.bullet_speed

    def arc_velocity(self, source: Vec, target: Vec) -> Vec:
        """Velocity for a gravity arc to the target, or a straight shot if none exists."""
        if self.trajectory_solver is not None:
            velocity = self.trajectory_solver(source, target, self.bullet_speed)
            if velocity is not None:
                return velocity
        return self.straight_velocity(source, target)

    def set_cannon_rotation(self, rotation: Rotator) -> None:
        """Point the barrel along ``rotation``; the base turns only in yaw."""
        self.cannon_rotation = rotation
        self.barrel_rotation = rotation
        self.base_rotation = Rotator(0.0, rotation.yaw, 0.0)