"""Victory evaluation."""

from __future__ import annotations

from collections import Counter

from .enums import PLAYERS, Owner
from .models import GameState, VictoryResult
from .zones import dominant_owner, units_owned

MAJORITY_REASONS: dict[Owner, str] = {
    Owner.PLAYER_1: "Immune system has secured the majority of zones!",
    Owner.PLAYER_2: "Pathogens have infected the majority of zones!",
}

ELIMINATION_REASONS: dict[Owner, str] = {
    Owner.PLAYER_1: "All immune cells have been eliminated!",
    Owner.PLAYER_2: "All pathogens have been eliminated!",
}

DEPLETION_REASONS: dict[Owner, str] = {
    Owner.PLAYER_1: "The immune system has run out of energy and nutrients!",
    Owner.PLAYER_2: "The pathogens have run out of energy and nutrients!",
}


def zone_control_counts(state: GameState) -> Counter[Owner]:
    return Counter(dominant_owner(zone) for zone in state.zones)


def check_victory_conditions(state: GameState) -> VictoryResult:
    """Return the first satisfied terminal condition, or an empty result.

    Conditions are checked in strict priority order:

    1. A player dominating strictly more than half of all zones wins.
    2. A deployed player with no units left anywhere loses.  Players that
       never had a unit on the board are skipped, so an empty opening board
       does not end the game.
    3. A player whose energy and nutrients are both exhausted loses.

    Player 1 is examined before player 2 within each condition.
    """

    total = len(state.zones)
    counts = zone_control_counts(state)
    for player in PLAYERS:
        if counts.get(player, 0) > total / 2:
            return VictoryResult(winner=player, reason=MAJORITY_REASONS[player])

    for player in PLAYERS:
        if player in state.deployed and units_owned(state, player) == 0:
            return VictoryResult(winner=player.opponent, reason=ELIMINATION_REASONS[player])

    for player in PLAYERS:
        pool = state.resources_of(player)
        if pool.energy <= 0 and pool.nutrients <= 0:
            return VictoryResult(winner=player.opponent, reason=DEPLETION_REASONS[player])

    return VictoryResult()
