"""Resource engine: per-turn accrual from zone control and cost handling."""

from __future__ import annotations

import math
from dataclasses import replace

from .catalog import ZONE_GENERATION
from .enums import Owner
from .models import GameState, Resources, Zone
from .rules_config import DEFAULT_RULES, RulesConfig
from .zones import dominant_owner


def zone_generation(zone: Zone) -> Resources:
    """Per-turn yield of ``zone`` including its antibody multiplier."""

    base = ZONE_GENERATION[zone.zone_type]
    if zone.antibody_multiplier == 1.0:
        return base
    return replace(base, antibodies=math.floor(base.antibodies * zone.antibody_multiplier))


def zone_pool_limits(rules: RulesConfig = DEFAULT_RULES) -> Resources:
    cap = rules.economy.zone_pool_cap
    return Resources(
        energy=cap,
        antibodies=cap,
        stem_cells=rules.economy.zone_stem_cell_cap,
        nutrients=cap,
    )


def grant(state: GameState, player: Owner, amount: Resources) -> GameState:
    pools = dict(state.player_resources)
    pools[player] = state.resources_of(player) + amount
    return replace(state, player_resources=pools)


def spend(state: GameState, player: Owner, cost: Resources) -> GameState:
    """Deduct ``cost`` from ``player``'s pool.

    Callers validate affordability first; a pool that cannot cover the cost
    is an invariant violation.
    """

    pool = state.resources_of(player)
    missing = pool.shortfall(cost)
    if missing is not None:
        raise ValueError(f"player {player} cannot pay {cost} (short on {missing})")
    pools = dict(state.player_resources)
    pools[player] = pool - cost
    return replace(state, player_resources=pools)


def insufficient_reason(pool: Resources, cost: Resources) -> str | None:
    missing = pool.shortfall(cost)
    return None if missing is None else f"insufficient {missing}"


def generate_resources(state: GameState, rules: RulesConfig = DEFAULT_RULES) -> GameState:
    """Award each zone's generation vector to the player dominating it.

    Contributions are summed per player over disjoint zones, so the result
    does not depend on zone order.  The dominated zone's own pool accrues
    the same vector, capped by the economy limits.
    """

    totals: dict[Owner, Resources] = {}
    limits = zone_pool_limits(rules)
    zones: list[Zone] = []
    for zone in state.zones:
        owner = dominant_owner(zone)
        if owner is Owner.NEUTRAL:
            zones.append(zone)
            continue
        produced = zone_generation(zone)
        totals[owner] = totals.get(owner, Resources()) + produced
        zones.append(replace(zone, resources=(zone.resources + produced).clamped(limits)))

    pools = dict(state.player_resources)
    for player, gained in totals.items():
        pools[player] = state.resources_of(player) + gained
    return replace(state, zones=tuple(zones), player_resources=pools)
