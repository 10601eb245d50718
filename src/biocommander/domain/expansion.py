"""Zone expansion rules: create, infect, reinforce and conquer zones.

Every expansion is paid for by the acting (current) player and gated by
faction, zone-graph adjacency and affordability over all four resources.
Failed checks come back as rejected outcomes; malformed requests (missing
target or zone type, unknown zone ids) raise.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, replace

from .catalog import (
    EXPANSION_COSTS,
    EXPANSION_FACTIONS,
    ZONE_CREATION_COST,
    faction_of_player,
)
from .enums import Direction, ExpansionType, Faction, Owner, ZoneType
from .models import ActionOutcome, GameState, Resources, Zone, rejected
from .resources import insufficient_reason, spend, zone_generation
from .rules_config import DEFAULT_RULES, RulesConfig
from .zones import (
    are_adjacent,
    connect_zones,
    empty_grid,
    find_zone_at,
    free_directions,
    get_zone,
    next_zone_id,
    position_towards,
    replace_zone,
)


@dataclass(frozen=True, slots=True)
class ExpansionRequest:
    """Parameters of one expansion attempt.

    ``target_zone_id`` is required for every type except zone creation, which
    instead needs ``zone_type`` and optionally a ``direction`` from the source.
    """

    expansion_type: ExpansionType
    source_zone_id: int
    target_zone_id: int | None = None
    zone_type: ZoneType | None = None
    direction: Direction | None = None


@dataclass(slots=True)
class ExpansionContext:
    state: GameState
    request: ExpansionRequest
    source: Zone
    player: Owner
    faction: Faction
    rules: RulesConfig = DEFAULT_RULES


ExpansionHandler = Callable[[ExpansionContext], ActionOutcome]


def creation_cost(zone_type: ZoneType, faction: Faction, rules: RulesConfig = DEFAULT_RULES) -> Resources:
    """Base creation vector for ``zone_type`` scaled by the faction multiplier."""

    if faction is Faction.PATHOGEN:
        multiplier = rules.expansion.pathogen_cost_multiplier
    else:
        multiplier = rules.expansion.immune_cost_multiplier
    return ZONE_CREATION_COST[zone_type].scaled(multiplier)


def expansion_cost(
    request: ExpansionRequest, faction: Faction, rules: RulesConfig = DEFAULT_RULES
) -> Resources:
    if request.expansion_type is ExpansionType.CREATE_NEW_ZONE:
        if request.zone_type is None:
            raise ValueError("zone creation requires a zone type")
        return creation_cost(request.zone_type, faction, rules)
    return EXPANSION_COSTS[request.expansion_type]


def expand_zone(
    state: GameState, request: ExpansionRequest, rules: RulesConfig = DEFAULT_RULES
) -> ActionOutcome:
    """Resolve ``request`` for the current player."""

    player = state.current_player
    faction = faction_of_player(player)
    source = get_zone(state, request.source_zone_id)
    if faction not in EXPANSION_FACTIONS[request.expansion_type]:
        return rejected(state, "wrong faction")

    context = ExpansionContext(
        state=state, request=request, source=source, player=player, faction=faction, rules=rules
    )
    outcome = _EXPANSION_HANDLERS[request.expansion_type](context)
    if not outcome.accepted:
        return outcome
    header = {
        "type": "zone_expanded",
        "expansion_type": request.expansion_type.value,
        "player": player.value,
        "source_zone_id": source.zone_id,
    }
    return replace(outcome, events=(header, *outcome.events))


# ---------------------------------------------------------------------------
# Registered expansion handlers


def _create_new_zone(context: ExpansionContext) -> ActionOutcome:
    state, request, source, rules = context.state, context.request, context.source, context.rules
    if request.zone_type is None:
        raise ValueError("zone creation requires a zone type")
    if not source.is_border_zone:
        return rejected(state, "not a border zone")
    if len(state.zones) >= rules.grid.max_zones:
        return rejected(state, "zone limit reached")

    placement = _pick_direction(state, source, request.direction)
    if isinstance(placement, str):
        return rejected(state, placement)
    direction, (x, y) = placement

    cost = expansion_cost(request, context.faction, rules)
    shortfall = insufficient_reason(state.resources_of(context.player), cost)
    if shortfall is not None:
        return rejected(state, shortfall)

    zone_id = next_zone_id(state)
    created = Zone(
        zone_id=zone_id,
        zone_type=request.zone_type,
        name=f"{request.zone_type.value} Zone {zone_id}",
        x=x,
        y=y,
        grid=empty_grid(rules.grid.grid_size),
        is_border_zone=True,
    )
    created = replace(
        created, resources=zone_generation(created).scaled(rules.economy.new_zone_pool_turns)
    )
    source, created = connect_zones(source, created, direction)

    new_state = replace_zone(state, source)
    new_state = replace(new_state, zones=(*new_state.zones, created))
    new_state = spend(new_state, context.player, cost)
    event = {
        "type": "zone_created",
        "zone_id": zone_id,
        "zone_type": request.zone_type.value,
        "x": x,
        "y": y,
        "direction": direction.value,
    }
    return ActionOutcome(state=new_state, events=(event,))


def _pick_direction(
    state: GameState, source: Zone, requested: Direction | None
) -> tuple[Direction, tuple[int, int]] | str:
    """Direction and map position for a new zone, or a rejection reason."""

    free = [direction for direction in free_directions(source) if requested in (None, direction)]
    if not free:
        return "no free connection"
    for direction in free:
        x, y = position_towards(source, direction)
        if find_zone_at(state, x, y) is None:
            return direction, (x, y)
    return "position occupied"


def _infection_spread(context: ExpansionContext) -> ActionOutcome:
    target, reason = _adjacent_target(context)
    if target is None:
        return rejected(context.state, reason)
    if target.owner is context.player:
        return rejected(context.state, "target already held")

    expansion = context.rules.expansion
    weakened = replace(
        target,
        owner=_claimed_owner(target, context.player),
        defense_multiplier=target.defense_multiplier * expansion.infection_defense_factor,
    )
    if target.owner is context.player.opponent:
        drained = replace(
            target.resources,
            energy=max(0, target.resources.energy - expansion.infection_energy_drain),
            nutrients=max(0, target.resources.nutrients - expansion.infection_nutrient_drain),
        )
        weakened = replace(weakened, resources=drained)
    state = _pay_and_apply(context, weakened)
    if isinstance(state, str):
        return rejected(context.state, state)
    state = _shift_gauge(state, Faction.PATHOGEN, expansion.spread_gauge_delta, context.rules)
    event = {
        "type": "zone_infected",
        "zone_id": target.zone_id,
        "owner": weakened.owner.value,
        "defense_multiplier": weakened.defense_multiplier,
    }
    return ActionOutcome(state=state, events=(event,))


def _immune_response(context: ExpansionContext) -> ActionOutcome:
    target, reason = _adjacent_target(context)
    if target is None:
        return rejected(context.state, reason)
    if target.owner is context.player:
        return rejected(context.state, "target already held")

    factor = context.rules.expansion.immune_response_antibody_factor
    staged = replace(
        target,
        owner=_claimed_owner(target, context.player),
        antibody_multiplier=target.antibody_multiplier * factor,
    )
    state = _pay_and_apply(context, staged)
    if isinstance(state, str):
        return rejected(context.state, state)
    state = _shift_gauge(
        state, Faction.IMMUNE_SYSTEM, context.rules.expansion.spread_gauge_delta, context.rules
    )
    event = {
        "type": "immune_response_established",
        "zone_id": target.zone_id,
        "owner": staged.owner.value,
        "antibody_multiplier": staged.antibody_multiplier,
    }
    return ActionOutcome(state=state, events=(event,))


def _conquer_zone(context: ExpansionContext) -> ActionOutcome:
    target, reason = _adjacent_target(context)
    if target is None:
        return rejected(context.state, reason)
    if target.owner is not context.player.opponent:
        return rejected(context.state, "target not enemy-held")

    retained = context.rules.expansion.conquest_pool_retained
    pool = replace(
        target.resources,
        energy=math.floor(target.resources.energy * retained),
        nutrients=math.floor(target.resources.nutrients * retained),
    )
    conquered = replace(target, owner=context.player, resources=pool)
    state = _pay_and_apply(context, conquered)
    if isinstance(state, str):
        return rejected(context.state, state)
    state = _shift_gauge(state, context.faction, context.rules.expansion.conquest_gauge_delta, context.rules)
    event = {
        "type": "zone_conquered",
        "zone_id": target.zone_id,
        "previous_owner": target.owner.value,
        "owner": context.player.value,
    }
    return ActionOutcome(state=state, events=(event,))


_EXPANSION_HANDLERS: dict[ExpansionType, ExpansionHandler] = {
    ExpansionType.CREATE_NEW_ZONE: _create_new_zone,
    ExpansionType.INFECTION_SPREAD: _infection_spread,
    ExpansionType.IMMUNE_RESPONSE: _immune_response,
    ExpansionType.CONQUER_ZONE: _conquer_zone,
}


# ---------------------------------------------------------------------------
# Helpers


def _adjacent_target(context: ExpansionContext) -> tuple[Zone | None, str]:
    """Resolve the target zone after the shared held/adjacent checks."""

    request = context.request
    if request.target_zone_id is None:
        raise ValueError(f"{request.expansion_type} requires a target zone")
    target = get_zone(context.state, request.target_zone_id)
    if context.source.owner is not context.player:
        return None, "source zone not held"
    if not are_adjacent(context.state, context.source.zone_id, target.zone_id):
        return None, "zones not adjacent"
    return target, ""


def _claimed_owner(target: Zone, player: Owner) -> Owner:
    """Unclaimed targets pass to the acting player; held ones keep their owner."""

    return player if target.owner is Owner.NEUTRAL else target.owner


def _pay_and_apply(context: ExpansionContext, target: Zone) -> GameState | str:
    cost = expansion_cost(context.request, context.faction, context.rules)
    shortfall = insufficient_reason(context.state.resources_of(context.player), cost)
    if shortfall is not None:
        return shortfall
    return spend(replace_zone(context.state, target), context.player, cost)


def _shift_gauge(state: GameState, faction: Faction, delta: int, rules: RulesConfig) -> GameState:
    low, high = rules.expansion.gauge_min, rules.expansion.gauge_max
    if faction is Faction.PATHOGEN:
        return replace(state, infection_level=max(low, min(high, state.infection_level + delta)))
    return replace(
        state, immune_response_level=max(low, min(high, state.immune_response_level + delta))
    )
