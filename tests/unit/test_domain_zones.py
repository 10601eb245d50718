"""Unit tests for zone grids, control and connectivity."""

from __future__ import annotations

from dataclasses import replace

import pytest

from biocommander.domain.enums import Direction, Owner, UnitType, ZoneType
from biocommander.domain.models import GameState, Resources, UnitInstance, Zone
from biocommander.domain.zones import (
    UnknownZoneError,
    adjacent_zones,
    are_adjacent,
    connect_zones,
    dominant_owner,
    empty_grid,
    find_zone_at,
    free_directions,
    get_zone,
    link_direction,
    next_zone_id,
    position_towards,
    replace_zone,
    validate_connections,
    with_cell,
)


def _unit(owner: Owner) -> UnitInstance:
    unit_type = UnitType.T_CELL if owner is Owner.PLAYER_1 else UnitType.VIRUS
    return UnitInstance(unit_type=unit_type, health=10, owner=owner)


def _zone(zone_id: int = 0, *, x: int = 0, y: int = 0) -> Zone:
    return Zone(
        zone_id=zone_id,
        zone_type=ZoneType.TISSUE,
        name=f"Zone {zone_id}",
        x=x,
        y=y,
        grid=empty_grid(),
    )


def _state(*zones: Zone) -> GameState:
    return GameState(
        zones=zones,
        player_resources={Owner.PLAYER_1: Resources(), Owner.PLAYER_2: Resources()},
    )


def test_empty_grid_shape():
    grid = empty_grid()
    assert len(grid) == 16
    assert all(len(line) == 16 for line in grid)
    assert all(cell is None for line in grid for cell in line)


def test_with_cell_is_non_destructive():
    zone = _zone()
    updated = with_cell(zone, 2, 3, _unit(Owner.PLAYER_1))

    assert zone.cell(2, 3) is None
    assert updated.cell(2, 3) == _unit(Owner.PLAYER_1)
    assert updated.occupied_cells() == [(2, 3, _unit(Owner.PLAYER_1))]


def test_dominant_owner_strict_majority():
    zone = _zone()
    assert dominant_owner(zone) is Owner.NEUTRAL

    zone = with_cell(zone, 0, 0, _unit(Owner.PLAYER_1))
    assert dominant_owner(zone) is Owner.PLAYER_1
    assert zone.is_controlled

    zone = with_cell(zone, 0, 1, _unit(Owner.PLAYER_2))
    assert dominant_owner(zone) is Owner.NEUTRAL
    assert not zone.is_controlled

    zone = with_cell(zone, 5, 5, _unit(Owner.PLAYER_2))
    assert dominant_owner(zone) is Owner.PLAYER_2
    assert zone.is_controlled


def test_get_zone_and_replace_zone():
    state = _state(_zone(0), _zone(1, x=1))
    assert get_zone(state, 1).zone_id == 1

    renamed = replace(get_zone(state, 1), name="Renamed")
    updated = replace_zone(state, renamed)
    assert [z.name for z in updated.zones] == ["Zone 0", "Renamed"]
    assert state.zones[1].name == "Zone 1"


def test_unknown_zone_raises_lookup_error():
    state = _state(_zone(0))
    with pytest.raises(UnknownZoneError) as excinfo:
        get_zone(state, 7)
    assert isinstance(excinfo.value, LookupError)
    assert excinfo.value.zone_id == 7
    with pytest.raises(UnknownZoneError):
        replace_zone(state, _zone(9))


def test_connect_zones_writes_both_sides():
    west, east = connect_zones(_zone(0), _zone(1, x=1), Direction.EAST)
    assert west.connections == (None, 1, None, None)
    assert east.connections == (None, None, None, 0)
    validate_connections([west, east])


def test_connect_zones_rejects_taken_slot():
    first, second = connect_zones(_zone(0), _zone(1, x=1), Direction.EAST)
    with pytest.raises(ValueError, match="already has a east connection"):
        connect_zones(first, _zone(2, x=1), Direction.EAST)


def test_are_adjacent_uses_connections():
    first, second = connect_zones(_zone(0), _zone(1, x=1), Direction.EAST)
    lonely = _zone(2, x=5)
    state = _state(first, second, lonely)

    assert are_adjacent(state, 0, 1)
    assert are_adjacent(state, 1, 0)
    assert not are_adjacent(state, 0, 2)
    assert not are_adjacent(state, 0, 0)
    assert adjacent_zones(state, 0) == [second]
    assert adjacent_zones(state, 2) == []
    with pytest.raises(UnknownZoneError):
        are_adjacent(state, 0, 42)


def test_validate_connections_rejects_asymmetric_link():
    one_way = replace(_zone(0), connections=(None, 1, None, None))
    with pytest.raises(ValueError, match="not symmetric"):
        validate_connections([one_way, _zone(1, x=1)])


def test_validate_connections_rejects_dangling_and_self_links():
    with pytest.raises(ValueError, match="missing zone"):
        validate_connections([replace(_zone(0), connections=(5, None, None, None))])
    with pytest.raises(ValueError, match="itself"):
        validate_connections([replace(_zone(0), connections=(0, None, None, None))])


def test_validate_connections_rejects_bad_slot_count_and_duplicates():
    with pytest.raises(ValueError, match="connection slots"):
        validate_connections([replace(_zone(0), connections=(None, None))])
    with pytest.raises(ValueError, match="duplicate"):
        validate_connections([_zone(0), _zone(0)])


def test_map_helpers():
    origin = _zone(0, x=3, y=3)
    assert position_towards(origin, Direction.NORTH) == (3, 2)
    assert position_towards(origin, Direction.EAST) == (4, 3)
    assert link_direction(origin, _zone(1, x=3, y=4)) is Direction.SOUTH
    assert link_direction(origin, _zone(1, x=5, y=5)) is None
    assert free_directions(origin) == list(Direction)

    state = _state(origin, _zone(4, x=0, y=0))
    assert find_zone_at(state, 3, 3) is origin
    assert find_zone_at(state, 9, 9) is None
    assert next_zone_id(state) == 5


def test_direction_slots():
    assert [d.slot for d in Direction] == [0, 1, 2, 3]
    assert Direction.NORTH.opposite is Direction.SOUTH
    assert Direction.WEST.opposite is Direction.EAST
    assert Direction.from_slot(2) is Direction.SOUTH
    with pytest.raises(ValueError):
        Direction.from_slot(4)
