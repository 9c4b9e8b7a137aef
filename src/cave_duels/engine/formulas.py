"""Damage formulas - mitigation, tiers and critical hits.

All formulas work on plain numbers and round only at the final integer
conversion, using round-half-away-from-zero.
"""

from typing import TYPE_CHECKING

from ..content import CharacterClass, LegendaryEffect, Race
from ..content.balance import (
    BASE_CRIT_CHANCE,
    CRIT_MULTIPLIER,
    MITIGATION_FACTOR,
    RACES,
    TIER_THRESHOLD,
    VOLEUR,
    round_half_away_from_zero,
)

if TYPE_CHECKING:
    from .types import CombatantState

__all__ = [
    "round_half_away_from_zero",
    "tier",
    "physical_damage",
    "magical_damage",
    "scale",
    "crit_chance",
    "crit_multiplier",
]


def tier(cap: int | float) -> int:
    """Number of full tiers ("paliers") in a casting stat."""
    return int(max(0, cap) // TIER_THRESHOLD)


def physical_damage(attack_power: float, defense: float) -> int:
    """Physical hit after defense. Never below 1."""
    return max(1, round_half_away_from_zero(attack_power - MITIGATION_FACTOR * defense))


def magical_damage(cap_power: float, resistance: float) -> int:
    """Magical hit after resistance. Never below 1."""
    return max(1, round_half_away_from_zero(cap_power - MITIGATION_FACTOR * resistance))


def scale(amount: int, factor: float) -> int:
    """Apply a multiplicative modifier to an integer amount."""
    if factor == 1:
        return amount
    return round_half_away_from_zero(amount * factor)


def crit_chance(attacker: "CombatantState", defender: "CombatantState") -> float:
    """Critical hit chance of an attacker against a defender, in [0, 1].

    Base 10%, plus 5% per tier for a Voleur, plus 20% for an Elfe that is
    faster than its defender, plus any awakening bonus.
    """
    chance = BASE_CRIT_CHANCE
    if attacker.character_class == CharacterClass.VOLEUR:
        chance += VOLEUR.crit_per_tier * tier(attacker.stats.cap)
    if attacker.race == Race.ELFE and attacker.stats.spd > defender.stats.spd:
        chance += RACES.elfe_crit_bonus
    if attacker.awakening is not None:
        chance += attacker.awakening.crit_chance_bonus
    return min(1.0, max(0.0, chance))


def crit_multiplier(attacker: "CombatantState") -> float:
    """Critical damage multiplier. Bonuses add to the class base."""
    multiplier = VOLEUR.crit_multiplier if attacker.character_class == CharacterClass.VOLEUR else CRIT_MULTIPLIER
    if attacker.awakening is not None:
        multiplier += attacker.awakening.crit_damage_bonus
    if attacker.weapon is not None and attacker.weapon.effect == LegendaryEffect.LAEVATEINN:
        multiplier += attacker.weapon.values["crit_damage_bonus"]
    return multiplier
