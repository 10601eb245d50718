"""Opening position for a new Bio Commander game.

Three zones in a row on the zone map: the Lymph Node held by the immune
system, the contested Bloodstream in the middle and the Infected Tissue held
by the pathogen.  The Bloodstream starts tied (one unit per side) so neither
player owns a majority of zones before the first turn ends.
"""

from __future__ import annotations

from .catalog import stats_of
from .enums import PLAYERS, GamePhase, Owner, UnitType, ZoneType
from .models import GameState, Resources, UnitInstance, Zone
from .rules_config import DEFAULT_RULES, RulesConfig
from .zones import connect_zones, empty_grid, link_direction, validate_connections, with_cell

BLOODSTREAM_ID = 0
LYMPH_NODE_ID = 1
INFECTED_TISSUE_ID = 2

STARTING_RESOURCES: dict[Owner, Resources] = {
    Owner.PLAYER_1: Resources(energy=50, antibodies=10, stem_cells=5, nutrients=30),
    Owner.PLAYER_2: Resources(energy=40, antibodies=5, stem_cells=3, nutrients=20),
}

# zone id -> (row, col, unit type, owner)
SEED_UNITS: dict[int, tuple[tuple[int, int, UnitType, Owner], ...]] = {
    BLOODSTREAM_ID: (
        (4, 4, UnitType.MACROPHAGE, Owner.PLAYER_1),
        (11, 11, UnitType.VIRUS, Owner.PLAYER_2),
    ),
    LYMPH_NODE_ID: ((8, 8, UnitType.T_CELL, Owner.PLAYER_1),),
    INFECTED_TISSUE_ID: (
        (7, 7, UnitType.BACTERIA, Owner.PLAYER_2),
        (9, 9, UnitType.VIRUS, Owner.PLAYER_2),
    ),
}


def seed_zone_resources(zone_type: ZoneType) -> Resources:
    """Starting pool of a seed zone; each type is richer in one resource."""

    return Resources(
        energy=20 if zone_type is ZoneType.CIRCULATORY else 10,
        antibodies=15 if zone_type is ZoneType.LYMPHATIC else 5,
        stem_cells=0,
        nutrients=25 if zone_type is ZoneType.TISSUE else 10,
    )


def _seed_zone(
    zone_id: int,
    zone_type: ZoneType,
    name: str,
    x: int,
    *,
    owner: Owner = Owner.NEUTRAL,
    border: bool = False,
    rules: RulesConfig,
) -> Zone:
    zone = Zone(
        zone_id=zone_id,
        zone_type=zone_type,
        name=name,
        x=x,
        y=0,
        grid=empty_grid(rules.grid.grid_size),
        owner=owner,
        resources=seed_zone_resources(zone_type),
        is_border_zone=border,
    )
    for row, col, unit_type, unit_owner in SEED_UNITS.get(zone_id, ()):
        unit = UnitInstance(unit_type=unit_type, health=stats_of(unit_type).stats.health, owner=unit_owner)
        zone = with_cell(zone, row, col, unit)
    return zone


def _link(first: Zone, second: Zone) -> tuple[Zone, Zone]:
    direction = link_direction(first, second)
    if direction is None:
        raise ValueError(f"zones {first.zone_id} and {second.zone_id} are not neighbours")
    return connect_zones(first, second, direction)


def create_initial_state(rules: RulesConfig = DEFAULT_RULES) -> GameState:
    """Build the opening :class:`GameState`."""

    lymph = _seed_zone(
        LYMPH_NODE_ID, ZoneType.LYMPHATIC, "Lymph Node", 0, owner=Owner.PLAYER_1, border=True, rules=rules
    )
    blood = _seed_zone(BLOODSTREAM_ID, ZoneType.CIRCULATORY, "Bloodstream", 1, rules=rules)
    tissue = _seed_zone(
        INFECTED_TISSUE_ID,
        ZoneType.TISSUE,
        "Infected Tissue",
        2,
        owner=Owner.PLAYER_2,
        border=True,
        rules=rules,
    )

    blood, lymph = _link(blood, lymph)
    blood, tissue = _link(blood, tissue)
    zones = (blood, lymph, tissue)
    validate_connections(zones, rules)

    return GameState(
        zones=zones,
        player_resources=dict(STARTING_RESOURCES),
        current_player=Owner.PLAYER_1,
        turn=1,
        phase=GamePhase.DEPLOY,
        selected_zone=BLOODSTREAM_ID,
        deployed=PLAYERS,
    )
