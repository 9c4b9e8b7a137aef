"""Mage tower passives - one equipped per combatant, levels 1 to 3."""

from dataclasses import dataclass
from typing import Any

from .enums import PassiveId

MAX_PASSIVE_LEVEL = 3


@dataclass(frozen=True)
class PassiveDefinition:
    """Static definition of a mage tower passive."""

    id: PassiveId
    name: str
    levels: dict[int, dict[str, Any]]

    def level_data(self, level: int) -> dict[str, Any]:
        """Get the tuning values for a level."""
        return self.levels[level]


PASSIVES: dict[PassiveId, PassiveDefinition] = {
    PassiveId.SPECTRAL_MARK: PassiveDefinition(
        id=PassiveId.SPECTRAL_MARK,
        name="Marque spectrale",
        levels={
            1: {"damage_taken_bonus": 0.06},
            2: {"damage_taken_bonus": 0.10},
            3: {"damage_taken_bonus": 0.15},
        },
    ),
    PassiveId.ARCANE_BARRIER: PassiveDefinition(
        id=PassiveId.ARCANE_BARRIER,
        name="Barrière arcanique",
        levels={
            1: {"shield_percent": 0.08},
            2: {"shield_percent": 0.15},
            3: {"shield_percent": 0.25},
        },
    ),
    PassiveId.MIND_BREACH: PassiveDefinition(
        id=PassiveId.MIND_BREACH,
        name="Brèche mentale",
        levels={
            1: {"def_reduction": 0.08},
            2: {"def_reduction": 0.12},
            3: {"def_reduction": 0.18},
        },
    ),
    PassiveId.ESSENCE_DRAIN: PassiveDefinition(
        id=PassiveId.ESSENCE_DRAIN,
        name="Vol d'essence",
        levels={
            1: {"heal_percent": 0.03},
            2: {"heal_percent": 0.05},
            3: {"heal_percent": 0.08},
        },
    ),
    PassiveId.ELEMENTAL_FURY: PassiveDefinition(
        id=PassiveId.ELEMENTAL_FURY,
        name="Furie élémentaire",
        levels={
            1: {"lightning_percent": 0.05},
            2: {"lightning_percent": 0.10},
            3: {"lightning_percent": 0.15},
        },
    ),
    PassiveId.UNICORN_PACT: PassiveDefinition(
        id=PassiveId.UNICORN_PACT,
        name="Pacte de la Licorne",
        levels={
            1: {"turn_a": {"outgoing": 0.10, "incoming": 0.05}, "turn_b": {"outgoing": -0.05, "incoming": -0.10}},
            2: {"turn_a": {"outgoing": 0.15, "incoming": 0.05}, "turn_b": {"outgoing": -0.05, "incoming": -0.15}},
            3: {"turn_a": {"outgoing": 0.20, "incoming": 0.05}, "turn_b": {"outgoing": -0.05, "incoming": -0.20}},
        },
    ),
    PassiveId.OBSIDIAN_SKIN: PassiveDefinition(
        id=PassiveId.OBSIDIAN_SKIN,
        name="Peau d'obsidienne",
        levels={
            1: {"crit_reduction": 0.04, "crit_threshold": 0.10},
            2: {"crit_reduction": 0.07, "crit_threshold": 0.15},
            3: {"crit_reduction": 0.12, "crit_threshold": 0.20},
        },
    ),
    PassiveId.AURA_OVERLOAD: PassiveDefinition(
        id=PassiveId.AURA_OVERLOAD,
        name="Surcharge d'aura",
        levels={
            1: {"damage_bonus": 0.05, "turns": 1},
            2: {"damage_bonus": 0.10, "turns": 1},
            3: {"damage_bonus": 0.15, "turns": 2},
        },
    ),
    PassiveId.RITUEL_FRACTURE: PassiveDefinition(
        id=PassiveId.RITUEL_FRACTURE,
        name="Rituel de fracture",
        levels={
            1: {"heal_reduction": 0.15},
            2: {"heal_reduction": 0.25},
            3: {"heal_reduction": 0.35},
        },
    ),
}


def get_passive(passive_id: str | PassiveId) -> PassiveDefinition | None:
    """Get a passive definition by ID."""
    try:
        return PASSIVES.get(PassiveId(passive_id))
    except ValueError:
        return None
