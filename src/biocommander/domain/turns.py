"""Turn and phase state machine."""

from __future__ import annotations

from dataclasses import replace

from .enums import GamePhase, Owner
from .models import ActionOutcome, GameState, VictoryResult
from .resources import generate_resources
from .rules_config import DEFAULT_RULES, RulesConfig
from .victory import check_victory_conditions


def switch_player(state: GameState) -> GameState:
    """Hand control to the other player.

    The turn counter advances once per full round, when control passes from
    player 2 back to player 1.
    """

    following = state.current_player.opponent
    turn = state.turn + 1 if following is Owner.PLAYER_1 else state.turn
    return replace(state, current_player=following, turn=turn)


def declare_winner(state: GameState, victory: VictoryResult) -> GameState:
    return replace(
        state,
        phase=GamePhase.VICTORY,
        winner=victory.winner,
        victory_reason=victory.reason,
    )


def end_turn(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> ActionOutcome:
    """Generate resources, pass control, then check for a winner."""

    ending = state.current_player
    new_state = switch_player(generate_resources(state, rules))
    gained = {
        player.value: (new_state.resources_of(player) - state.resources_of(player)).as_dict()
        for player in new_state.player_resources
    }
    events: list[dict[str, object]] = [
        {"type": "resources_generated", "gains": gained},
        {
            "type": "turn_ended",
            "player": ending.value,
            "next_player": new_state.current_player.value,
            "turn": new_state.turn,
        },
    ]

    victory = check_victory_conditions(new_state)
    if victory.decided:
        new_state = declare_winner(new_state, victory)
        events.append({"type": "victory", "winner": victory.winner.value, "reason": victory.reason})
    return ActionOutcome(state=new_state, victory=victory, events=tuple(events))
