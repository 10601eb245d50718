"""Special ability resolution."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace

from biocommander.utils.grid_math import GridCoord, orthogonal_neighbors

from .catalog import stats_of
from .enums import SpecialAbility
from .models import ActionOutcome, GameState, Resources, UnitInstance, Zone, rejected
from .resources import grant, zone_pool_limits
from .rules_config import DEFAULT_RULES, RulesConfig
from .zones import get_zone, in_grid, replace_zone, with_cell


@dataclass(slots=True)
class AbilityContext:
    """Everything an ability handler needs to resolve one activation."""

    state: GameState
    zone: Zone
    row: int
    col: int
    unit: UnitInstance
    rules: RulesConfig = DEFAULT_RULES


AbilityHandler = Callable[[AbilityContext], ActionOutcome]


def use_special_ability(
    state: GameState,
    zone_id: int,
    row: int,
    col: int,
    ability_index: int,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionOutcome:
    """Trigger the ``ability_index``-th ability of the unit at (row, col).

    Only active abilities resolve; passive ones (cytokine release, evasion,
    metastasis and the like) are rejected with ``"ability is passive"``.
    """

    zone = get_zone(state, zone_id)
    if not in_grid(row, col, rules):
        return rejected(state, "out of bounds")
    unit = zone.cell(row, col)
    if unit is None:
        return rejected(state, "no unit")
    if unit.owner is not state.current_player:
        return rejected(state, "not your unit")

    abilities = stats_of(unit.unit_type).abilities
    if not 0 <= ability_index < len(abilities):
        return rejected(state, "no such ability")
    ability = abilities[ability_index]
    if not is_active(ability):
        return rejected(state, "ability is passive")

    context = AbilityContext(state=state, zone=zone, row=row, col=col, unit=unit, rules=rules)
    outcome = _ABILITY_HANDLERS[ability](context)
    if not outcome.accepted:
        return outcome
    event = {"type": "ability_used", "zone_id": zone_id, "row": row, "col": col, "ability": ability.value}
    return replace(outcome, events=(event, *outcome.events))


# ---------------------------------------------------------------------------
# Registered ability handlers


def _antibody_production(context: AbilityContext) -> ActionOutcome:
    gained = Resources(antibodies=context.rules.abilities.antibody_production_yield)
    return ActionOutcome(state=grant(context.state, context.unit.owner, gained))


def _phagocytosis(context: AbilityContext) -> ActionOutcome:
    abilities = context.rules.abilities
    max_health = stats_of(context.unit.unit_type).stats.health
    healed = replace(context.unit, health=min(context.unit.health + abilities.phagocytosis_heal, max_health))
    state = replace_zone(context.state, with_cell(context.zone, context.row, context.col, healed))
    gained = Resources(energy=abilities.phagocytosis_energy, nutrients=abilities.phagocytosis_nutrients)
    return ActionOutcome(state=grant(state, context.unit.owner, gained))


def _replication(context: AbilityContext) -> ActionOutcome:
    size = context.rules.grid.grid_size
    for cell in orthogonal_neighbors(GridCoord(context.row, context.col), size):
        if context.zone.cell(cell.row, cell.col) is None:
            break
    else:
        return rejected(context.state, "no room to replicate")

    clone = UnitInstance(
        unit_type=context.unit.unit_type,
        health=stats_of(context.unit.unit_type).stats.health,
        owner=context.unit.owner,
    )
    state = replace_zone(context.state, with_cell(context.zone, cell.row, cell.col, clone))
    event = {"type": "unit_replicated", "zone_id": context.zone.zone_id, "row": cell.row, "col": cell.col}
    return ActionOutcome(state=state, events=(event,))


def _zone_healing(context: AbilityContext) -> ActionOutcome:
    abilities = context.rules.abilities
    restored = Resources(energy=abilities.zone_healing_energy, nutrients=abilities.zone_healing_nutrients)
    pool = (context.zone.resources + restored).clamped(zone_pool_limits(context.rules))
    return ActionOutcome(state=replace_zone(context.state, replace(context.zone, resources=pool)))


_ABILITY_HANDLERS: dict[SpecialAbility, AbilityHandler] = {
    SpecialAbility.ANTIBODY_PRODUCTION: _antibody_production,
    SpecialAbility.PHAGOCYTOSIS: _phagocytosis,
    SpecialAbility.REPLICATION: _replication,
    SpecialAbility.ZONE_HEALING: _zone_healing,
}


def is_active(ability: SpecialAbility) -> bool:
    return ability in _ABILITY_HANDLERS
