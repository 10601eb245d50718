"""Zone model helpers: grids, control, lookup and connectivity."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import replace

from biocommander.utils.grid_math import GridCoord, slot_between, step

from .enums import PLAYERS, Direction, Owner
from .models import Cell, GameState, Grid, UnitInstance, Zone
from .rules_config import DEFAULT_RULES, RulesConfig


class UnknownZoneError(LookupError):
    """Raised when an operation references a zone id that does not exist."""

    def __init__(self, zone_id: int) -> None:
        super().__init__(f"zone {zone_id} not found")
        self.zone_id = zone_id


def empty_grid(size: int = DEFAULT_RULES.grid.grid_size) -> Grid:
    return tuple(tuple(None for _ in range(size)) for _ in range(size))


def with_cell(zone: Zone, row: int, col: int, cell: Cell) -> Zone:
    """Return a copy of ``zone`` with one cell replaced and control refreshed."""

    line = zone.grid[row]
    new_line = line[:col] + (cell,) + line[col + 1 :]
    grid = zone.grid[:row] + (new_line,) + zone.grid[row + 1 :]
    return refresh_control(replace(zone, grid=grid))


def in_grid(row: int, col: int, rules: RulesConfig = DEFAULT_RULES) -> bool:
    size = rules.grid.grid_size
    return 0 <= row < size and 0 <= col < size


# ---------------------------------------------------------------------------
# Control


def count_cells(units: Iterable[UnitInstance]) -> Counter[Owner]:
    return Counter(unit.owner for unit in units)


def dominant_owner(zone: Zone) -> Owner:
    """Player holding a strict majority of the zone's occupied cells.

    Ties and empty zones are neutral.  The result only depends on how many
    cells each player owns, never on where they are.
    """

    counts = count_cells(unit for _, _, unit in zone.occupied_cells())
    first, second = (counts.get(player, 0) for player in PLAYERS)
    if first > second:
        return Owner.PLAYER_1
    if second > first:
        return Owner.PLAYER_2
    return Owner.NEUTRAL


def refresh_control(zone: Zone) -> Zone:
    controlled = dominant_owner(zone) is not Owner.NEUTRAL
    if controlled == zone.is_controlled:
        return zone
    return replace(zone, is_controlled=controlled)


def units_owned(state: GameState, player: Owner) -> int:
    return sum(
        1 for zone in state.zones for _, _, unit in zone.occupied_cells() if unit.owner is player
    )


# ---------------------------------------------------------------------------
# Lookup


def get_zone(state: GameState, zone_id: int) -> Zone:
    for zone in state.zones:
        if zone.zone_id == zone_id:
            return zone
    raise UnknownZoneError(zone_id)


def replace_zone(state: GameState, zone: Zone) -> GameState:
    """Swap in a new version of an existing zone, keeping collection order."""

    zones = list(state.zones)
    for index, current in enumerate(zones):
        if current.zone_id == zone.zone_id:
            zones[index] = zone
            return replace(state, zones=tuple(zones))
    raise UnknownZoneError(zone.zone_id)


def find_zone_at(state: GameState, x: int, y: int) -> Zone | None:
    for zone in state.zones:
        if zone.x == x and zone.y == y:
            return zone
    return None


def next_zone_id(state: GameState) -> int:
    return max(state.zone_ids, default=-1) + 1


def map_position(zone: Zone) -> GridCoord:
    return GridCoord(row=zone.y, col=zone.x)


# ---------------------------------------------------------------------------
# Connectivity


def are_adjacent(state: GameState, first_id: int, second_id: int) -> bool:
    """True when the two zones are linked through a connection slot."""

    first = get_zone(state, first_id)
    get_zone(state, second_id)
    return first_id != second_id and second_id in first.connected_ids


def adjacent_zones(state: GameState, zone_id: int) -> list[Zone]:
    return [get_zone(state, other) for other in get_zone(state, zone_id).connected_ids]


def free_directions(zone: Zone) -> list[Direction]:
    return [direction for direction in Direction if zone.connections[direction.slot] is None]


def connect_zones(first: Zone, second: Zone, direction: Direction) -> tuple[Zone, Zone]:
    """Link ``second`` to ``first`` through ``direction`` and back.

    Both slots must be free.  Returns the updated pair.
    """

    back = direction.opposite
    if first.connections[direction.slot] is not None:
        raise ValueError(f"zone {first.zone_id} already has a {direction} connection")
    if second.connections[back.slot] is not None:
        raise ValueError(f"zone {second.zone_id} already has a {back} connection")

    first_links = list(first.connections)
    first_links[direction.slot] = second.zone_id
    second_links = list(second.connections)
    second_links[back.slot] = first.zone_id
    return (
        replace(first, connections=tuple(first_links)),
        replace(second, connections=tuple(second_links)),
    )


def validate_connections(zones: Iterable[Zone], rules: RulesConfig = DEFAULT_RULES) -> None:
    """Raise ``ValueError`` unless every link is well formed and symmetric.

    Checks slot count, unique ids, self links, dangling ids, and that each
    ``A -> B`` link through a direction is matched by ``B -> A`` through the
    opposite direction.
    """

    by_id: dict[int, Zone] = {}
    for zone in zones:
        if zone.zone_id in by_id:
            raise ValueError(f"duplicate zone id {zone.zone_id}")
        by_id[zone.zone_id] = zone

    slots = rules.grid.connection_slots
    for zone in by_id.values():
        if len(zone.connections) != slots:
            raise ValueError(f"zone {zone.zone_id} must have {slots} connection slots")
        for direction in Direction:
            other_id = zone.connections[direction.slot]
            if other_id is None:
                continue
            if other_id == zone.zone_id:
                raise ValueError(f"zone {zone.zone_id} links to itself")
            other = by_id.get(other_id)
            if other is None:
                raise ValueError(f"zone {zone.zone_id} links to missing zone {other_id}")
            if other.connections[direction.opposite.slot] != zone.zone_id:
                raise ValueError(f"link {zone.zone_id} -> {other_id} is not symmetric")


def link_direction(first: Zone, second: Zone) -> Direction | None:
    """Map direction from ``first`` to a zone sitting next to it, if any."""

    slot = slot_between(map_position(first), map_position(second))
    return None if slot is None else Direction.from_slot(slot)


def position_towards(zone: Zone, direction: Direction) -> tuple[int, int]:
    """Zone-map ``(x, y)`` one step away from ``zone`` in ``direction``."""

    target = step(map_position(zone), direction.slot)
    return target.col, target.row
