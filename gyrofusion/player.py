"""Per-player board state, appearance and flex controller assignment."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass
class AutogeneratedMeshData:
    """Asset paths of the swappable body parts of a player model."""

    torso: str | None = None
    top: str | None = None
    leg_left: str | None = None
    leg_right: str | None = None
    hair: str | None = None
    shoes: str | None = None
    arm_left: str | None = None
    arm_right: str | None = None


@dataclass
class PlayerMeshData:
    """A player's base mesh, its parts and the merged result."""

    merged_mesh: str | None = None
    base: str | None = None
    components: AutogeneratedMeshData = field(default_factory=AutogeneratedMeshData)


@dataclass
class PlayerData:
    """A player's progress on the board."""

    player_num: int = -1
    player_order: int = 0
    tile_pos: int = 0
    coins: int = 0
    mobius: int = 0
    player_mesh_data: PlayerMeshData = field(default_factory=PlayerMeshData)


class LimbitlessLocalPlayer:
    """A local player that can be given a flex controller and tells listeners."""

    def __init__(self) -> None:
        self._flex_controller: Any = None
        self._listeners: list[Callable[[Any], None]] = []

    @property
    def flex_controller(self) -> Any:
        """The controller currently assigned, or None."""
        return self._flex_controller

    def subscribe(self, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Call ``callback`` with each newly assigned controller; return an unsubscriber."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def set_flex_controller(self, controller: Any) -> None:
        """Assign ``controller`` and notify every subscriber."""
        self._flex_controller = controller
        for listener in list(self._listeners):
            listener(controller)