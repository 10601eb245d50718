"""Declarative rule configuration for the Bio Commander engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GridRules:
    """Zone grid and zone-map limits."""

    grid_size: int = 16
    connection_slots: int = 4
    max_zones: int = 64


@dataclass(frozen=True, slots=True)
class EconomyRules:
    """Zone pool caps and resource constants."""

    zone_pool_cap: int = 1000
    zone_stem_cell_cap: int = 100
    new_zone_pool_turns: int = 5  # new zones start with this many turns of generation


@dataclass(frozen=True, slots=True)
class ExpansionRules:
    """Multipliers and gauge deltas for zone expansion."""

    immune_cost_multiplier: float = 1.0
    pathogen_cost_multiplier: float = 1.2
    infection_defense_factor: float = 0.5
    immune_response_antibody_factor: float = 1.5
    infection_energy_drain: int = 50
    infection_nutrient_drain: int = 30
    conquest_pool_retained: float = 0.5
    spread_gauge_delta: int = 5
    conquest_gauge_delta: int = 3
    gauge_min: int = 0
    gauge_max: int = 100


@dataclass(frozen=True, slots=True)
class AbilityRules:
    """Effects of the active special abilities."""

    antibody_production_yield: int = 50
    phagocytosis_heal: int = 20
    phagocytosis_energy: int = 10
    phagocytosis_nutrients: int = 5
    zone_healing_energy: int = 50
    zone_healing_nutrients: int = 30


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    grid: GridRules = GridRules()
    economy: EconomyRules = EconomyRules()
    expansion: ExpansionRules = ExpansionRules()
    abilities: AbilityRules = AbilityRules()


DEFAULT_RULES = RulesConfig()
