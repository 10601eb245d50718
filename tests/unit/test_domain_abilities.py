"""Unit tests for special ability resolution."""

from __future__ import annotations

from dataclasses import replace

import pytest

from biocommander.domain.abilities import is_active, use_special_ability
from biocommander.domain.catalog import stats_of
from biocommander.domain.enums import Owner, SpecialAbility, UnitType, ZoneType
from biocommander.domain.models import GameState, Resources, UnitInstance, Zone
from biocommander.domain.zones import UnknownZoneError, empty_grid, with_cell

START = Resources(energy=100, antibodies=10, stem_cells=5, nutrients=40)


def _zone(units=(), resources: Resources = Resources()) -> Zone:
    zone = Zone(
        zone_id=3,
        zone_type=ZoneType.ORGAN,
        name="Liver",
        x=0,
        y=0,
        grid=empty_grid(),
        resources=resources,
    )
    for row, col, unit_type, owner, health in units:
        zone = with_cell(zone, row, col, UnitInstance(unit_type, health, owner))
    return zone


def _state(zone: Zone, player: Owner = Owner.PLAYER_1) -> GameState:
    return GameState(
        zones=(zone,),
        player_resources={Owner.PLAYER_1: START, Owner.PLAYER_2: START},
        current_player=player,
    )


def test_antibody_production():
    state = _state(_zone([(2, 2, UnitType.B_CELL, Owner.PLAYER_1, 60)]))

    outcome = use_special_ability(state, 3, 2, 2, 0)

    assert outcome.accepted
    assert outcome.state.resources_of(Owner.PLAYER_1) == replace(START, antibodies=60)
    assert outcome.events[0] == {
        "type": "ability_used",
        "zone_id": 3,
        "row": 2,
        "col": 2,
        "ability": "AntibodyProduction",
    }


def test_phagocytosis_heals_and_feeds():
    state = _state(_zone([(2, 2, UnitType.MACROPHAGE, Owner.PLAYER_1, 90)]))

    outcome = use_special_ability(state, 3, 2, 2, 0)

    assert outcome.state.zones[0].cell(2, 2).health == 110
    assert outcome.state.resources_of(Owner.PLAYER_1) == START + Resources(energy=10, nutrients=5)


def test_phagocytosis_caps_at_max_health():
    state = _state(_zone([(2, 2, UnitType.MACROPHAGE, Owner.PLAYER_1, 115)]))
    outcome = use_special_ability(state, 3, 2, 2, 0)
    assert outcome.state.zones[0].cell(2, 2).health == stats_of(UnitType.MACROPHAGE).stats.health


def test_replication_fills_first_free_neighbour():
    state = _state(_zone([(5, 5, UnitType.VIRUS, Owner.PLAYER_2, 12)]), Owner.PLAYER_2)

    outcome = use_special_ability(state, 3, 5, 5, 0)

    zone = outcome.state.zones[0]
    assert zone.cell(4, 5) == UnitInstance(UnitType.VIRUS, 40, Owner.PLAYER_2)
    assert zone.cell(5, 5).health == 12
    assert outcome.events[1]["type"] == "unit_replicated"


def test_replication_skips_blocked_and_off_grid_cells():
    units = [
        (0, 0, UnitType.BACTERIA, Owner.PLAYER_2, 60),
        (0, 1, UnitType.T_CELL, Owner.PLAYER_1, 80),
    ]
    state = _state(_zone(units), Owner.PLAYER_2)

    outcome = use_special_ability(state, 3, 0, 0, 0)

    assert outcome.state.zones[0].cell(1, 0).unit_type is UnitType.BACTERIA


def test_replication_without_room():
    units = [
        (0, 0, UnitType.VIRUS, Owner.PLAYER_2, 40),
        (0, 1, UnitType.VIRUS, Owner.PLAYER_2, 40),
        (1, 0, UnitType.VIRUS, Owner.PLAYER_2, 40),
    ]
    state = _state(_zone(units), Owner.PLAYER_2)

    outcome = use_special_ability(state, 3, 0, 0, 0)

    assert not outcome.accepted
    assert outcome.reason == "no room to replicate"
    assert outcome.state is state


def test_zone_healing_caps_pool():
    zone = _zone(
        [(1, 1, UnitType.NATURAL_KILLER_CELL, Owner.PLAYER_1, 90)],
        resources=Resources(energy=980, antibodies=5, stem_cells=0, nutrients=100),
    )

    outcome = use_special_ability(_state(zone), 3, 1, 1, 1)

    assert outcome.state.zones[0].resources == Resources(1000, 5, 0, 130)
    assert outcome.state.resources_of(Owner.PLAYER_1) == START


@pytest.mark.parametrize(
    ("unit_type", "index", "reason"),
    [
        (UnitType.T_CELL, 0, "ability is passive"),
        (UnitType.PARASITE, 1, "ability is passive"),
        (UnitType.T_CELL, 2, "no such ability"),
        (UnitType.T_CELL, -1, "no such ability"),
    ],
)
def test_rejected_abilities(unit_type, index, reason):
    owner = Owner.PLAYER_1 if unit_type is UnitType.T_CELL else Owner.PLAYER_2
    state = _state(_zone([(4, 4, unit_type, owner, 10)]), owner)

    outcome = use_special_ability(state, 3, 4, 4, index)

    assert not outcome.accepted
    assert outcome.reason == reason


def test_requires_own_unit():
    state = _state(_zone([(4, 4, UnitType.VIRUS, Owner.PLAYER_2, 40)]))
    assert use_special_ability(state, 3, 4, 4, 0).reason == "not your unit"
    assert use_special_ability(state, 3, 6, 6, 0).reason == "no unit"
    assert use_special_ability(state, 3, 16, 6, 0).reason == "out of bounds"


def test_unknown_zone_raises():
    with pytest.raises(UnknownZoneError):
        use_special_ability(_state(_zone()), 0, 0, 0, 0)


def test_active_abilities():
    assert is_active(SpecialAbility.REPLICATION)
    assert not is_active(SpecialAbility.METASTASIS)
