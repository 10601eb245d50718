"""Dataclasses describing every Bio Commander game entity.

All records are frozen.  Rule functions never mutate a state they receive;
they build a new one with :func:`dataclasses.replace`, so any snapshot handed
out by the engine stays valid for as long as the caller keeps it (undo/redo,
concurrent readers, replays).

Snapshots convert to and from plain JSON-compatible records through
:data:`GAME_STATE_ADAPTER`.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import PlainSerializer, TypeAdapter

from .enums import Faction, GamePhase, Owner, SpecialAbility, UnitType, ZoneType

RESOURCE_FIELDS: tuple[str, ...] = ("energy", "antibodies", "stem_cells", "nutrients")


# --- Resources ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Resources:
    """Four-resource vector used for pools, costs and generation."""

    energy: int = 0
    antibodies: int = 0
    stem_cells: int = 0
    nutrients: int = 0

    def __add__(self, other: Resources) -> Resources:
        return Resources(*(a + b for a, b in zip(self.as_tuple(), other.as_tuple(), strict=True)))

    def __sub__(self, other: Resources) -> Resources:
        return Resources(*(a - b for a, b in zip(self.as_tuple(), other.as_tuple(), strict=True)))

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.energy, self.antibodies, self.stem_cells, self.nutrients)

    def as_dict(self) -> dict[str, int]:
        return dict(zip(RESOURCE_FIELDS, self.as_tuple(), strict=True))

    def scaled(self, factor: float) -> Resources:
        """Multiply every component by ``factor`` and floor the result."""

        return Resources(*(math.floor(value * factor) for value in self.as_tuple()))

    def covers(self, cost: Resources) -> bool:
        """Return ``True`` when every component is at least the matching cost."""

        return self.shortfall(cost) is None

    def shortfall(self, cost: Resources) -> str | None:
        """Name of the first resource (field order) this pool cannot pay, if any."""

        for name, have, need in zip(RESOURCE_FIELDS, self.as_tuple(), cost.as_tuple(), strict=True):
            if have < need:
                return name
        return None

    def clamped(self, limits: Resources) -> Resources:
        return Resources(
            *(min(value, cap) for value, cap in zip(self.as_tuple(), limits.as_tuple(), strict=True))
        )


# --- Unit catalog records -------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UnitStats:
    """Base combat statistics of a unit type."""

    health: int
    attack: int
    defense: int
    movement_range: int
    energy_cost: int


@dataclass(frozen=True, slots=True)
class UnitInfo:
    """Catalog entry describing a unit type."""

    unit_type: UnitType
    name: str
    description: str
    stats: UnitStats
    abilities: tuple[SpecialAbility, ...]
    faction: Faction
    cost: Resources


# --- Board ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UnitInstance:
    """A unit occupying one grid cell."""

    unit_type: UnitType
    health: int
    owner: Owner

    def __post_init__(self) -> None:
        if self.owner is Owner.NEUTRAL:
            raise ValueError("units must belong to player 1 or player 2")


Cell = UnitInstance | None
Grid = tuple[tuple[Cell, ...], ...]


@dataclass(frozen=True, slots=True)
class Zone:
    """A square grid of cells plus zone-level economy and connectivity."""

    zone_id: int
    zone_type: ZoneType
    name: str
    x: int
    y: int
    grid: Grid
    connections: tuple[int | None, ...] = (None, None, None, None)  # north, east, south, west
    owner: Owner = Owner.NEUTRAL
    resources: Resources = field(default_factory=Resources)
    is_border_zone: bool = False
    is_controlled: bool = False
    defense_multiplier: float = 1.0
    antibody_multiplier: float = 1.0

    @property
    def connected_ids(self) -> tuple[int, ...]:
        return tuple(zone_id for zone_id in self.connections if zone_id is not None)

    def cell(self, row: int, col: int) -> Cell:
        return self.grid[row][col]

    def occupied_cells(self) -> list[tuple[int, int, UnitInstance]]:
        return [
            (row, col, unit)
            for row, line in enumerate(self.grid)
            for col, unit in enumerate(line)
            if unit is not None
        ]


# --- Aggregate root -------------------------------------------------------------

# Read-only per-player pools; dumped as a plain dict.
PlayerPools = Annotated[
    Mapping[Owner, Resources],
    PlainSerializer(dict, return_type=dict[Owner, Resources]),
]


@dataclass(frozen=True, slots=True)
class GameState:
    """Root aggregate handed to and returned by every engine operation."""

    zones: tuple[Zone, ...]
    player_resources: PlayerPools
    current_player: Owner = Owner.PLAYER_1
    turn: int = 1
    phase: GamePhase = GamePhase.DEPLOY
    selected_zone: int | None = None
    deployed: tuple[Owner, ...] = ()  # players that have ever had a unit on the board
    winner: Owner | None = None
    victory_reason: str | None = None
    infection_level: int = 20
    immune_response_level: int = 30

    def __post_init__(self) -> None:
        if not isinstance(self.player_resources, MappingProxyType):
            object.__setattr__(self, "player_resources", MappingProxyType(dict(self.player_resources)))

    def __hash__(self) -> int:
        return hash(
            (self.zones, tuple(sorted(self.player_resources.items())), self.current_player, self.turn)
        )

    def resources_of(self, player: Owner) -> Resources:
        return self.player_resources.get(player, Resources())

    @property
    def zone_ids(self) -> tuple[int, ...]:
        return tuple(zone.zone_id for zone in self.zones)

    @property
    def is_over(self) -> bool:
        return self.phase is GamePhase.VICTORY


# --- Outcomes -------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of a legality check; ``reason`` names the first failed rule."""

    allowed: bool
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class VictoryResult:
    """Empty when the game goes on; otherwise the winner and why."""

    winner: Owner | None = None
    reason: str | None = None

    @property
    def decided(self) -> bool:
        return self.winner is not None


@dataclass(frozen=True, slots=True)
class ActionOutcome:
    """Return value of every state transition.

    Rejected actions carry the input state unchanged plus a human-readable
    ``reason``; they are never raised.
    """

    state: GameState
    accepted: bool = True
    reason: str | None = None
    victory: VictoryResult = field(default_factory=VictoryResult)
    events: tuple[dict[str, Any], ...] = ()


def rejected(state: GameState, reason: str) -> ActionOutcome:
    return ActionOutcome(state=state, accepted=False, reason=reason)


# --- Serialization --------------------------------------------------------------

GAME_STATE_ADAPTER: TypeAdapter[GameState] = TypeAdapter(GameState)


def snapshot_to_dict(state: GameState) -> dict[str, Any]:
    """Return a JSON-compatible record for transport or storage."""

    return GAME_STATE_ADAPTER.dump_python(state, mode="json")


def snapshot_from_dict(data: dict[str, Any]) -> GameState:
    """Rebuild a state from :func:`snapshot_to_dict` output."""

    return GAME_STATE_ADAPTER.validate_python(data)
