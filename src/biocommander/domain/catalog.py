"""Static unit catalog and zone-type tables.

The catalog is built once at import time and exposed through read-only
mappings; nothing in the engine registers or mutates entries at runtime.
"""

from __future__ import annotations

from types import MappingProxyType

from .enums import ExpansionType, Faction, Owner, SpecialAbility, UnitType, ZoneType
from .models import Resources, UnitInfo, UnitStats


def _unit(
    unit_type: UnitType,
    name: str,
    description: str,
    faction: Faction,
    stats: tuple[int, int, int, int],
    cost: tuple[int, int, int, int],
    abilities: tuple[SpecialAbility, ...],
) -> UnitInfo:
    health, attack, defense, movement_range = stats
    price = Resources(*cost)
    return UnitInfo(
        unit_type=unit_type,
        name=name,
        description=description,
        stats=UnitStats(
            health=health,
            attack=attack,
            defense=defense,
            movement_range=movement_range,
            energy_cost=price.energy,
        ),
        abilities=abilities,
        faction=faction,
        cost=price,
    )


_IMMUNE = Faction.IMMUNE_SYSTEM
_PATHOGEN = Faction.PATHOGEN
_A = SpecialAbility

UNIT_CATALOG: MappingProxyType[UnitType, UnitInfo] = MappingProxyType(
    {
        info.unit_type: info
        for info in (
            # stats: health, attack, defense, movement range
            # cost: energy, antibodies, stem cells, nutrients
            _unit(
                UnitType.T_CELL,
                "T-Cell",
                "Cytotoxic lymphocyte that destroys infected cells",
                _IMMUNE,
                (80, 15, 10, 3),
                (20, 5, 1, 8),
                (_A.CYTOKINE_RELEASE, _A.MEMORY_RESPONSE),
            ),
            _unit(
                UnitType.B_CELL,
                "B-Cell",
                "Produces antibodies to neutralize threats",
                _IMMUNE,
                (60, 8, 8, 2),
                (25, 2, 2, 6),
                (_A.ANTIBODY_PRODUCTION, _A.MEMORY_RESPONSE),
            ),
            _unit(
                UnitType.MACROPHAGE,
                "Macrophage",
                "Large phagocyte that engulfs and destroys pathogens",
                _IMMUNE,
                (120, 20, 15, 2),
                (30, 8, 2, 12),
                (_A.PHAGOCYTOSIS, _A.CYTOKINE_RELEASE),
            ),
            _unit(
                UnitType.NEUTROPHIL_CELL,
                "Neutrophil",
                "Fast-response immune cell, first line of defense",
                _IMMUNE,
                (70, 18, 8, 4),
                (15, 3, 1, 5),
                (_A.PHAGOCYTOSIS, _A.INFILTRATION),
            ),
            _unit(
                UnitType.DENDRITIC_CELL,
                "Dendritic Cell",
                "Antigen-presenting cell that activates other immune cells",
                _IMMUNE,
                (50, 5, 12, 3),
                (35, 12, 3, 8),
                (_A.CYTOKINE_RELEASE, _A.INFILTRATION),
            ),
            _unit(
                UnitType.NATURAL_KILLER_CELL,
                "NK Cell",
                "Elite killer that destroys compromised cells",
                _IMMUNE,
                (90, 25, 10, 3),
                (40, 10, 3, 15),
                (_A.CYTOKINE_RELEASE, _A.ZONE_HEALING),
            ),
            _unit(
                UnitType.VIRUS,
                "Virus",
                "Infectious agent that hijacks cellular machinery",
                _PATHOGEN,
                (40, 12, 5, 4),
                (10, 0, 0, 4),
                (_A.REPLICATION, _A.IMMUNE_EVASION),
            ),
            _unit(
                UnitType.BACTERIA,
                "Bacteria",
                "Bacterial pathogen that multiplies rapidly",
                _PATHOGEN,
                (60, 15, 8, 2),
                (15, 0, 0, 6),
                (_A.REPLICATION, _A.TOXIN_RELEASE),
            ),
            _unit(
                UnitType.FUNGUS,
                "Fungus",
                "Fungal infection that spreads through spores",
                _PATHOGEN,
                (80, 10, 12, 1),
                (20, 0, 0, 8),
                (_A.REPLICATION, _A.RESOURCE_DRAIN),
            ),
            _unit(
                UnitType.PARASITE,
                "Parasite",
                "Parasitic organism that drains host resources",
                _PATHOGEN,
                (70, 18, 6, 3),
                (25, 0, 0, 10),
                (_A.IMMUNE_EVASION, _A.RESOURCE_DRAIN),
            ),
            _unit(
                UnitType.CANCER_CELL,
                "Cancer Cell",
                "Malignant cell that grows uncontrollably",
                _PATHOGEN,
                (100, 20, 10, 2),
                (30, 0, 0, 12),
                (_A.REPLICATION, _A.METASTASIS),
            ),
            _unit(
                UnitType.TOXIN,
                "Toxin",
                "Poisonous substance that damages tissue",
                _PATHOGEN,
                (30, 30, 2, 5),
                (5, 0, 0, 2),
                (_A.TOXIN_RELEASE, _A.RESOURCE_DRAIN),
            ),
        )
    }
)

_UNIT_ORDER: tuple[UnitType, ...] = tuple(UnitType)

PLAYER_FACTIONS: MappingProxyType[Owner, Faction] = MappingProxyType(
    {
        Owner.PLAYER_1: Faction.IMMUNE_SYSTEM,
        Owner.PLAYER_2: Faction.PATHOGEN,
    }
)


def stats_of(unit_type: UnitType) -> UnitInfo:
    return UNIT_CATALOG[unit_type]


def unit_type_from_index(index: int) -> UnitType:
    """Translate a numeric unit-type selector into a :class:`UnitType`."""

    if not 0 <= index < len(_UNIT_ORDER):
        raise ValueError(f"unit type index out of range: {index}")
    return _UNIT_ORDER[index]


def is_immune_unit(unit_type: UnitType) -> bool:
    return UNIT_CATALOG[unit_type].faction is Faction.IMMUNE_SYSTEM


def is_pathogen_unit(unit_type: UnitType) -> bool:
    return UNIT_CATALOG[unit_type].faction is Faction.PATHOGEN


def faction_of_player(owner: Owner) -> Faction:
    """Faction bound to ``owner``; neutral has no faction."""

    try:
        return PLAYER_FACTIONS[owner]
    except KeyError:
        raise ValueError(f"{owner!r} is not a player") from None


def units_of_faction(faction: Faction) -> tuple[UnitType, ...]:
    return tuple(unit_type for unit_type in _UNIT_ORDER if UNIT_CATALOG[unit_type].faction is faction)


# ---------------------------------------------------------------------------
# Zone-type tables

ZONE_GENERATION: MappingProxyType[ZoneType, Resources] = MappingProxyType(
    {
        ZoneType.CIRCULATORY: Resources(10, 5, 2, 8),
        ZoneType.TISSUE: Resources(5, 15, 1, 10),
        ZoneType.LYMPHATIC: Resources(8, 20, 5, 5),
        ZoneType.BARRIER: Resources(3, 25, 1, 3),
        ZoneType.ORGAN: Resources(15, 10, 3, 15),
    }
)

ZONE_CREATION_COST: MappingProxyType[ZoneType, Resources] = MappingProxyType(
    {
        ZoneType.CIRCULATORY: Resources(200, 100, 20, 150),
        ZoneType.TISSUE: Resources(150, 75, 15, 100),
        ZoneType.LYMPHATIC: Resources(300, 150, 30, 200),
        ZoneType.BARRIER: Resources(400, 200, 40, 300),
        ZoneType.ORGAN: Resources(500, 250, 50, 400),
    }
)

# Flat damage absorbed by units fighting inside a zone of this type
ZONE_DEFENSE_BONUS: MappingProxyType[ZoneType, int] = MappingProxyType(
    {
        ZoneType.CIRCULATORY: 0,
        ZoneType.TISSUE: 2,
        ZoneType.LYMPHATIC: 3,
        ZoneType.BARRIER: 5,
        ZoneType.ORGAN: 1,
    }
)

# Fixed costs; zone creation is priced per zone type instead
EXPANSION_COSTS: MappingProxyType[ExpansionType, Resources] = MappingProxyType(
    {
        ExpansionType.INFECTION_SPREAD: Resources(100, 0, 0, 50),
        ExpansionType.IMMUNE_RESPONSE: Resources(80, 40, 10, 30),
        ExpansionType.CONQUER_ZONE: Resources(300, 100, 15, 200),
    }
)

EXPANSION_FACTIONS: MappingProxyType[ExpansionType, frozenset[Faction]] = MappingProxyType(
    {
        ExpansionType.INFECTION_SPREAD: frozenset({Faction.PATHOGEN}),
        ExpansionType.IMMUNE_RESPONSE: frozenset({Faction.IMMUNE_SYSTEM}),
        ExpansionType.CREATE_NEW_ZONE: frozenset(Faction),
        ExpansionType.CONQUER_ZONE: frozenset(Faction),
    }
)
