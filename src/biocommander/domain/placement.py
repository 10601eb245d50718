"""Placement, movement and attack rules for units inside a zone grid."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import cast

from biocommander.utils.grid_math import GridCoord, manhattan_distance

from .catalog import ZONE_DEFENSE_BONUS, faction_of_player, stats_of
from .enums import Owner, UnitType
from .models import (
    ActionOutcome,
    GameState,
    Resources,
    UnitInstance,
    ValidationResult,
    Zone,
    rejected,
)
from .resources import insufficient_reason, spend
from .rules_config import DEFAULT_RULES, RulesConfig
from .zones import get_zone, in_grid, replace_zone, with_cell

_OK = ValidationResult(allowed=True)


def _deny(reason: str) -> ValidationResult:
    return ValidationResult(allowed=False, reason=reason)


def mark_deployed(state: GameState, player: Owner) -> GameState:
    if player in state.deployed:
        return state
    return replace(state, deployed=tuple(sorted((*state.deployed, player))))


# ---------------------------------------------------------------------------
# Placement


def can_place_unit(
    zone: Zone,
    row: int,
    col: int,
    unit_type: UnitType,
    acting_player: Owner,
    resources: Resources,
    rules: RulesConfig = DEFAULT_RULES,
) -> ValidationResult:
    """Check whether ``acting_player`` may spawn ``unit_type`` at (row, col).

    Checks run in a fixed order and the first failure is reported:
    bounds, occupancy, faction, then affordability over all four resources.
    """

    if not in_grid(row, col, rules):
        return _deny("out of bounds")
    if zone.cell(row, col) is not None:
        return _deny("cell occupied")
    info = stats_of(unit_type)
    if info.faction is not faction_of_player(acting_player):
        return _deny("wrong faction")
    shortfall = insufficient_reason(resources, info.cost)
    if shortfall is not None:
        return _deny(shortfall)
    return _OK


def place_unit(
    state: GameState,
    zone_id: int,
    row: int,
    col: int,
    unit_type: UnitType,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionOutcome:
    """Spawn a full-health unit for the current player and charge its cost."""

    zone = get_zone(state, zone_id)
    player = state.current_player
    check = can_place_unit(zone, row, col, unit_type, player, state.resources_of(player), rules)
    if not check.allowed:
        return rejected(state, check.reason or "placement rejected")

    info = stats_of(unit_type)
    unit = UnitInstance(unit_type=unit_type, health=info.stats.health, owner=player)
    new_state = replace_zone(state, with_cell(zone, row, col, unit))
    new_state = spend(new_state, player, info.cost)
    new_state = mark_deployed(new_state, player)
    event = {
        "type": "unit_placed",
        "zone_id": zone_id,
        "row": row,
        "col": col,
        "unit_type": unit_type.value,
        "owner": player.value,
    }
    return ActionOutcome(state=new_state, events=(event,))


# ---------------------------------------------------------------------------
# Movement


def _own_unit_at(
    zone: Zone, row: int, col: int, acting_player: Owner, rules: RulesConfig
) -> tuple[UnitInstance | None, ValidationResult]:
    if not in_grid(row, col, rules):
        return None, _deny("out of bounds")
    unit = zone.cell(row, col)
    if unit is None:
        return None, _deny("no unit")
    if unit.owner is not acting_player:
        return None, _deny("not your unit")
    return unit, _OK


def can_move_unit(
    zone: Zone,
    from_row: int,
    from_col: int,
    to_row: int,
    to_col: int,
    acting_player: Owner,
    rules: RulesConfig = DEFAULT_RULES,
) -> ValidationResult:
    unit, check = _own_unit_at(zone, from_row, from_col, acting_player, rules)
    if unit is None:
        return check
    if not in_grid(to_row, to_col, rules):
        return _deny("out of bounds")
    if zone.cell(to_row, to_col) is not None:
        return _deny("cell occupied")
    distance = manhattan_distance(GridCoord(from_row, from_col), GridCoord(to_row, to_col))
    if distance > stats_of(unit.unit_type).stats.movement_range:
        return _deny("out of range")
    return _OK


def move_unit(
    state: GameState,
    zone_id: int,
    from_row: int,
    from_col: int,
    to_row: int,
    to_col: int,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionOutcome:
    """Move one of the current player's units within its zone."""

    zone = get_zone(state, zone_id)
    check = can_move_unit(zone, from_row, from_col, to_row, to_col, state.current_player, rules)
    if not check.allowed:
        return rejected(state, check.reason or "move rejected")

    unit = zone.cell(from_row, from_col)
    moved = with_cell(with_cell(zone, from_row, from_col, None), to_row, to_col, unit)
    event = {
        "type": "unit_moved",
        "zone_id": zone_id,
        "from": [from_row, from_col],
        "to": [to_row, to_col],
    }
    return ActionOutcome(state=replace_zone(state, moved), events=(event,))


# ---------------------------------------------------------------------------
# Combat


def effective_defense_bonus(zone: Zone) -> int:
    """Zone-type defense bonus scaled by the zone's defense multiplier."""

    return math.floor(ZONE_DEFENSE_BONUS[zone.zone_type] * zone.defense_multiplier)


def attack_damage(attacker: UnitInstance, zone: Zone) -> int:
    return max(0, stats_of(attacker.unit_type).stats.attack - effective_defense_bonus(zone))


def can_attack(
    zone: Zone,
    row: int,
    col: int,
    target_row: int,
    target_col: int,
    acting_player: Owner,
    rules: RulesConfig = DEFAULT_RULES,
) -> ValidationResult:
    unit, check = _own_unit_at(zone, row, col, acting_player, rules)
    if unit is None:
        return check
    if not in_grid(target_row, target_col, rules):
        return _deny("out of bounds")
    target = zone.cell(target_row, target_col)
    if target is None:
        return _deny("no target")
    if target.owner is acting_player:
        return _deny("friendly target")
    distance = manhattan_distance(GridCoord(row, col), GridCoord(target_row, target_col))
    if distance > stats_of(unit.unit_type).stats.movement_range:
        return _deny("out of range")
    return _OK


def attack_position(
    state: GameState,
    zone_id: int,
    row: int,
    col: int,
    target_row: int,
    target_col: int,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionOutcome:
    """Strike an enemy unit; a unit reduced to 0 health leaves the grid."""

    zone = get_zone(state, zone_id)
    check = can_attack(zone, row, col, target_row, target_col, state.current_player, rules)
    if not check.allowed:
        return rejected(state, check.reason or "attack rejected")

    attacker = cast(UnitInstance, zone.cell(row, col))
    target = cast(UnitInstance, zone.cell(target_row, target_col))
    damage = attack_damage(attacker, zone)
    remaining = max(0, target.health - damage)
    survivor = replace(target, health=remaining) if remaining > 0 else None
    event: dict[str, object] = {
        "type": "unit_attacked",
        "zone_id": zone_id,
        "attacker": [row, col],
        "target": [target_row, target_col],
        "damage": damage,
        "remaining_health": remaining,
        "destroyed": survivor is None,
    }
    updated = with_cell(zone, target_row, target_col, survivor)
    return ActionOutcome(state=replace_zone(state, updated), events=(event,))
