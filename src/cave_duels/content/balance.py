"""Balance constants - the single source of truth for combat tuning."""

import math
from dataclasses import dataclass

from .enums import AbilityKey, CharacterClass

# General rules
BASE_CRIT_CHANCE = 0.10
CRIT_MULTIPLIER = 1.5
MAX_TURNS = 30
TIER_THRESHOLD = 15  # Cap points per tier ("palier")
MITIGATION_FACTOR = 0.5  # Share of DEF/RESC subtracted from a hit
AWAKENING_LEVEL = 100

# Cooldown interval per ability, in acting turns
COOLDOWNS: dict[AbilityKey, int] = {
    AbilityKey.WAR: 3,
    AbilityKey.ROG: 4,
    AbilityKey.PAL: 2,
    AbilityKey.HEAL: 4,
    AbilityKey.ARC: 3,
    AbilityKey.MAG: 3,
    AbilityKey.DEM: 1,
    AbilityKey.MASO: 4,
}

CLASS_ABILITIES: dict[CharacterClass, AbilityKey] = {
    CharacterClass.GUERRIER: AbilityKey.WAR,
    CharacterClass.VOLEUR: AbilityKey.ROG,
    CharacterClass.PALADIN: AbilityKey.PAL,
    CharacterClass.HEALER: AbilityKey.HEAL,
    CharacterClass.ARCHER: AbilityKey.ARC,
    CharacterClass.MAGE: AbilityKey.MAG,
    CharacterClass.DEMONISTE: AbilityKey.DEM,
    CharacterClass.MASOCHISTE: AbilityKey.MASO,
}


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, halves going away from zero."""
    magnitude = math.floor(abs(value) + 0.5)
    return int(magnitude) if value >= 0 else -int(magnitude)


@dataclass(frozen=True)
class WarriorConstants:
    auto_bonus: int = 3
    ignore_base: float = 0.12
    ignore_per_tier: float = 0.02


@dataclass(frozen=True)
class RogueConstants:
    spd_bonus: int = 5
    crit_per_tier: float = 0.05
    crit_multiplier: float = 2.0


@dataclass(frozen=True)
class PaladinConstants:
    reflect_base: float = 0.40
    reflect_per_tier: float = 0.05


@dataclass(frozen=True)
class HealerConstants:
    missing_hp_percent: float = 0.15
    cap_base: float = 0.25
    cap_per_tier: float = 0.05


@dataclass(frozen=True)
class ArcherConstants:
    min_hits: int = 2
    hits_base: int = 1
    hits_per_tier: int = 1
    hit2_auto_multiplier: float = 0.5
    hit2_cap_multiplier: float = 0.5


@dataclass(frozen=True)
class MageConstants:
    cap_base: float = 0.40
    cap_per_tier: float = 0.05


@dataclass(frozen=True)
class DemonisteConstants:
    cap_base: float = 0.20
    cap_per_tier: float = 0.04
    stack_per_auto: float = 0.01
    ignore_resist: float = 0.60


@dataclass(frozen=True)
class MasochisteConstants:
    return_base: float = 0.15
    return_per_tier: float = 0.03
    heal_percent: float = 0.10


GUERRIER = WarriorConstants()
VOLEUR = RogueConstants()
PALADIN = PaladinConstants()
HEALER = HealerConstants()
ARCHER = ArcherConstants()
MAGE = MageConstants()
DEMONISTE = DemonisteConstants()
MASOCHISTE = MasochisteConstants()


@dataclass(frozen=True)
class RaceConstants:
    elfe_crit_bonus: float = 0.20
    orc_low_hp_threshold: float = 0.50
    orc_damage_bonus: float = 1.20
    undead_revive_percent: float = 0.20
    lycan_bleed_per_hit: int = 1
    lycan_bleed_divisor: int = 3
    sylvari_regen_percent: float = 0.02


RACES = RaceConstants()
