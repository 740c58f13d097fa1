"""Minigame arrangement, results and scene placeholders."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class MinigameType(enum.Enum):
    """Team arrangement of a minigame; the value is its display name."""

    FFA = "Free for All"
    THREE_VS_ONE = "3v1"
    TWO_VS_TWO = "2v2"


class SplitBy(enum.Enum):
    """Whether splitscreen views belong to players or to teams."""

    PLAYERS = "Players"
    TEAMS = "Teams"


@dataclass(frozen=True)
class MinigameStanding:
    """A player's place in the results; several players may share a place."""

    player: int = 0
    place: int = 0


@dataclass
class MinigameSession:
    """Values handed into and out of a minigame across level changes."""

    player_count: int = 0
    results: list[MinigameStanding] = field(default_factory=list)
    return_level: str | None = None


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass
class PlayerSpawn:
    """A spawn point for a team position at a given player count."""

    team: int = 0
    position: int = 0
    num_players_required: int = 1
    use_on_any_player_count: bool = False

    def __post_init__(self) -> None:
        _check_range("team", self.team, 0, 1)
        _check_range("position", self.position, 0, 3)
        _check_range("num_players_required", self.num_players_required, 1, 4)


@dataclass
class MinigameCapture:
    """A splitscreen camera identified by its capture number."""

    capture_number: int = 0
    shake_intensity: float = 0.0


@dataclass
class ControlDisplay:
    """An instruction entry: an input image and what that input does."""

    image: str | None = None
    text: str = ""