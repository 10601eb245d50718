"""Property-based tests for the game rules.

Tests cover:
- Determinism of action application
- Conservation of player resources on placement
- Zone control depending only on cell counts
- Turn alternation
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from biocommander.domain.actions import EndTurn, SpawnUnit, apply_action
from biocommander.domain.catalog import stats_of
from biocommander.domain.enums import PLAYERS, Owner, UnitType, ZoneType
from biocommander.domain.models import UnitInstance, Zone
from biocommander.domain.seed_data import LYMPH_NODE_ID, create_initial_state
from biocommander.domain.turns import switch_player
from biocommander.domain.zones import dominant_owner, empty_grid, get_zone, with_cell

coords = st.integers(min_value=-2, max_value=17)
unit_types = st.sampled_from(list(UnitType))


def _zone_with(owners: list[Owner], cells: list[tuple[int, int]]) -> Zone:
    zone = Zone(zone_id=0, zone_type=ZoneType.TISSUE, name="Prop", x=0, y=0, grid=empty_grid())
    for owner, (row, col) in zip(owners, cells, strict=False):
        zone = with_cell(zone, row, col, UnitInstance(UnitType.T_CELL, 80, owner))
    return zone


@given(row=coords, col=coords, unit_type=unit_types)
def test_apply_action_is_deterministic(row, col, unit_type):
    state = create_initial_state()
    action = SpawnUnit(LYMPH_NODE_ID, row, col, unit_type)
    assert apply_action(state, action) == apply_action(state, action)


@given(row=coords, col=coords, unit_type=unit_types)
def test_spawn_conserves_resources(row, col, unit_type):
    state = create_initial_state()
    player = state.current_player

    outcome = apply_action(state, SpawnUnit(LYMPH_NODE_ID, row, col, unit_type))

    if outcome.accepted:
        spent = state.resources_of(player) - outcome.state.resources_of(player)
        assert spent == stats_of(unit_type).cost
        assert get_zone(outcome.state, LYMPH_NODE_ID).cell(row, col).owner is player
        assert min(outcome.state.resources_of(player).as_tuple()) >= 0
    else:
        assert outcome.state is state
    assert outcome.state.resources_of(player.opponent) == state.resources_of(player.opponent)


@settings(max_examples=50)
@given(
    owners=st.lists(st.sampled_from(PLAYERS), max_size=20),
    cells=st.lists(
        st.tuples(st.integers(0, 15), st.integers(0, 15)), min_size=20, max_size=20, unique=True
    ),
    data=st.data(),
)
def test_control_ignores_unit_positions(owners, cells, data):
    shuffled = data.draw(st.permutations(cells))
    assert dominant_owner(_zone_with(owners, cells)) is dominant_owner(_zone_with(owners, shuffled))


@given(rounds=st.integers(min_value=0, max_value=20))
def test_turn_advances_once_per_round(rounds):
    state = create_initial_state()
    for _ in range(rounds):
        state = switch_player(switch_player(state))
    assert state.turn == 1 + rounds
    assert state.current_player is Owner.PLAYER_1


@given(rounds=st.integers(min_value=1, max_value=6))
@settings(max_examples=10, deadline=None)
def test_end_turn_never_drives_pools_negative(rounds):
    state = create_initial_state()
    for _ in range(rounds * 2):
        state = apply_action(state, EndTurn()).state
    for player in PLAYERS:
        assert min(state.resources_of(player).as_tuple()) >= 0
    for zone in state.zones:
        assert min(zone.resources.as_tuple()) >= 0

