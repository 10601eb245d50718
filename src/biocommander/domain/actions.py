"""Action requests and the dispatcher that applies them to a game state."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import cast

from .abilities import use_special_ability
from .catalog import unit_type_from_index
from .enums import UnitType
from .expansion import ExpansionRequest, expand_zone
from .models import ActionOutcome, GameState, rejected
from .placement import attack_position, move_unit, place_unit
from .rules_config import DEFAULT_RULES, RulesConfig
from .turns import end_turn
from .zones import get_zone

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SpawnUnit:
    """Place a new unit; ``unit_type`` may be a catalog index."""

    zone_id: int
    row: int
    col: int
    unit_type: UnitType | int


@dataclass(frozen=True, slots=True)
class MoveUnit:
    zone_id: int
    from_row: int
    from_col: int
    to_row: int
    to_col: int


@dataclass(frozen=True, slots=True)
class AttackPosition:
    zone_id: int
    row: int
    col: int
    target_row: int
    target_col: int


@dataclass(frozen=True, slots=True)
class UseSpecialAbility:
    zone_id: int
    row: int
    col: int
    ability_index: int


@dataclass(frozen=True, slots=True)
class EndTurn:
    pass


@dataclass(frozen=True, slots=True)
class ExpandZone(ExpansionRequest):
    pass


@dataclass(frozen=True, slots=True)
class SelectZone:
    """Point the presentation layer at a zone; no gameplay effect."""

    zone_id: int


Action = SpawnUnit | MoveUnit | AttackPosition | UseSpecialAbility | EndTurn | ExpandZone | SelectZone

ActionHandler = Callable[[GameState, Action, RulesConfig], ActionOutcome]


def apply_action(
    state: GameState, action: Action, rules: RulesConfig = DEFAULT_RULES
) -> ActionOutcome:
    """Validate and apply ``action`` on behalf of the current player.

    Rejections return the input state untouched with a reason.  Unknown zone
    ids and out-of-range indexes raise, since they indicate a caller bug.
    """

    handler = _ACTION_HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"unsupported action: {type(action).__name__}")
    if state.is_over:
        return rejected(state, "game is over")

    outcome = handler(state, action, rules)
    if not outcome.accepted:
        logger.debug(
            "Rejected %s for player %s: %s",
            type(action).__name__,
            state.current_player,
            outcome.reason,
        )
    elif outcome.victory.decided:
        logger.info(
            "Player %s wins on turn %d: %s",
            outcome.victory.winner,
            outcome.state.turn,
            outcome.victory.reason,
        )
    return outcome


# ---------------------------------------------------------------------------
# Registered action handlers


def _handle_spawn(state: GameState, action: Action, rules: RulesConfig) -> ActionOutcome:
    spawn = cast(SpawnUnit, action)
    unit_type = spawn.unit_type
    if not isinstance(unit_type, UnitType):
        unit_type = unit_type_from_index(unit_type)
    return place_unit(state, spawn.zone_id, spawn.row, spawn.col, unit_type, rules)


def _handle_move(state: GameState, action: Action, rules: RulesConfig) -> ActionOutcome:
    move = cast(MoveUnit, action)
    return move_unit(state, move.zone_id, move.from_row, move.from_col, move.to_row, move.to_col, rules)


def _handle_attack(state: GameState, action: Action, rules: RulesConfig) -> ActionOutcome:
    attack = cast(AttackPosition, action)
    return attack_position(
        state, attack.zone_id, attack.row, attack.col, attack.target_row, attack.target_col, rules
    )


def _handle_ability(state: GameState, action: Action, rules: RulesConfig) -> ActionOutcome:
    use = cast(UseSpecialAbility, action)
    return use_special_ability(state, use.zone_id, use.row, use.col, use.ability_index, rules)


def _handle_end_turn(state: GameState, action: Action, rules: RulesConfig) -> ActionOutcome:
    return end_turn(state, rules)


def _handle_expand(state: GameState, action: Action, rules: RulesConfig) -> ActionOutcome:
    return expand_zone(state, cast(ExpandZone, action), rules)


def _handle_select(state: GameState, action: Action, rules: RulesConfig) -> ActionOutcome:
    zone = get_zone(state, cast(SelectZone, action).zone_id)
    event = {"type": "zone_selected", "zone_id": zone.zone_id}
    return ActionOutcome(state=replace(state, selected_zone=zone.zone_id), events=(event,))


_ACTION_HANDLERS: dict[type, ActionHandler] = {
    SpawnUnit: _handle_spawn,
    MoveUnit: _handle_move,
    AttackPosition: _handle_attack,
    UseSpecialAbility: _handle_ability,
    EndTurn: _handle_end_turn,
    ExpandZone: _handle_expand,
    SelectZone: _handle_select,
}
