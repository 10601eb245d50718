"""Enumerations used across the Bio Commander domain."""

from __future__ import annotations

from enum import StrEnum


class Faction(StrEnum):
    """The two opposing sides."""

    IMMUNE_SYSTEM = "ImmuneSystem"
    PATHOGEN = "Pathogen"


class Owner(StrEnum):
    """Ownership of a cell or zone.

    Player identifiers are fixed for the lifetime of a game: player ``"1"``
    plays the immune system and player ``"2"`` plays the pathogen.
    """

    PLAYER_1 = "1"
    PLAYER_2 = "2"
    NEUTRAL = "neutral"

    @property
    def opponent(self) -> Owner:
        if self is Owner.PLAYER_1:
            return Owner.PLAYER_2
        if self is Owner.PLAYER_2:
            return Owner.PLAYER_1
        return Owner.NEUTRAL


PLAYERS: tuple[Owner, Owner] = (Owner.PLAYER_1, Owner.PLAYER_2)


class UnitType(StrEnum):
    """Every unit that can appear on a zone grid.

    Declaration order is the numeric unit-type index used by index-based
    callers (immune cells 0-5, pathogens 6-11).
    """

    # Immune cells
    T_CELL = "TCell"
    B_CELL = "BCell"
    MACROPHAGE = "Macrophage"
    NEUTROPHIL_CELL = "NeutrophilCell"
    DENDRITIC_CELL = "DendriticCell"
    NATURAL_KILLER_CELL = "NaturalKillerCell"

    # Pathogens
    VIRUS = "Virus"
    BACTERIA = "Bacteria"
    FUNGUS = "Fungus"
    PARASITE = "Parasite"
    CANCER_CELL = "CancerCell"
    TOXIN = "Toxin"


class SpecialAbility(StrEnum):
    """Ability tags attached to unit types."""

    ANTIBODY_PRODUCTION = "AntibodyProduction"
    PHAGOCYTOSIS = "Phagocytosis"
    CYTOKINE_RELEASE = "CytokineRelease"
    MEMORY_RESPONSE = "MemoryResponse"
    INFILTRATION = "Infiltration"
    ZONE_HEALING = "ZoneHealing"

    REPLICATION = "Replication"
    MUTATION = "Mutation"
    TOXIN_RELEASE = "ToxinRelease"
    IMMUNE_EVASION = "ImmuneEvasion"
    METASTASIS = "Metastasis"
    RESOURCE_DRAIN = "ResourceDrain"


class ZoneType(StrEnum):
    """Biological region types; each has its own generation vector and modifier."""

    CIRCULATORY = "Circulatory"
    TISSUE = "Tissue"
    LYMPHATIC = "Lymphatic"
    BARRIER = "Barrier"
    ORGAN = "Organ"


class GamePhase(StrEnum):
    """Game phases. Only ``DEPLOY`` and terminal ``VICTORY`` are enforced."""

    SETUP = "setup"
    DEPLOY = "deploy"
    COMBAT = "combat"
    EXPANSION = "expansion"
    VICTORY = "victory"


class ExpansionType(StrEnum):
    """Zone expansion actions."""

    INFECTION_SPREAD = "infection_spread"
    IMMUNE_RESPONSE = "immune_response"
    CREATE_NEW_ZONE = "create_new_zone"
    CONQUER_ZONE = "conquer_zone"


class Direction(StrEnum):
    """Connection slots of a zone, in slot order."""

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @classmethod
    def from_slot(cls, slot: int) -> Direction:
        order = list(cls)
        if not 0 <= slot < len(order):
            raise ValueError(f"direction slot out of range: {slot}")
        return order[slot]

    @property
    def slot(self) -> int:
        return list(Direction).index(self)

    @property
    def opposite(self) -> Direction:
        order = list(Direction)
        return order[(order.index(self) + 2) % len(order)]
