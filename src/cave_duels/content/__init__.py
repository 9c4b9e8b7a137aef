"""Static game content - races, classes, weapons, passives and bosses."""

from .bosses import BOSSES, BossDefinition, get_boss, scaled_boss_stats
from .enums import (
    AbilityKey,
    BossId,
    CharacterClass,
    DamageKind,
    LegendaryEffect,
    PassiveId,
    Race,
    Rarity,
    StepPhase,
    WeaponFamily,
)
from .passives import MAX_PASSIVE_LEVEL, PASSIVES, PassiveDefinition, get_passive
from .races import AWAKENINGS, Awakening, class_bonus, get_awakening, race_bonus
from .stats import STAT_POINT_VALUES, Stats
from .weapons import WEAPONS, WeaponDefinition, get_weapon

__all__ = [
    "AbilityKey",
    "BossId",
    "CharacterClass",
    "DamageKind",
    "LegendaryEffect",
    "PassiveId",
    "Race",
    "Rarity",
    "StepPhase",
    "WeaponFamily",
    "Stats",
    "STAT_POINT_VALUES",
    "Awakening",
    "AWAKENINGS",
    "get_awakening",
    "race_bonus",
    "class_bonus",
    "WeaponDefinition",
    "WEAPONS",
    "get_weapon",
    "PassiveDefinition",
    "PASSIVES",
    "MAX_PASSIVE_LEVEL",
    "get_passive",
    "BossDefinition",
    "BOSSES",
    "get_boss",
    "scaled_boss_stats",
]
