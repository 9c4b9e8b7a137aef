"""Race and class stat bonuses, and race awakenings."""

from dataclasses import dataclass, field

from .balance import AWAKENING_LEVEL, GUERRIER, VOLEUR
from .enums import CharacterClass, Race
from .stats import Stats

RACE_BONUSES: dict[Race, Stats] = {
    Race.HUMAIN: Stats(hp=10, auto=1, defense=1, cap=1, rescap=1, spd=1),
    Race.ELFE: Stats(auto=1, cap=1, spd=5),
    Race.ORC: Stats(),
    Race.NAIN: Stats(hp=10, defense=4),
    Race.DRAGONKIN: Stats(hp=10, rescap=15),
    Race.MORT_VIVANT: Stats(),
    Race.LYCAN: Stats(),
    Race.SYLVARI: Stats(),
}

CLASS_BONUSES: dict[CharacterClass, Stats] = {
    CharacterClass.GUERRIER: Stats(auto=GUERRIER.auto_bonus),
    CharacterClass.VOLEUR: Stats(spd=VOLEUR.spd_bonus),
}


def race_bonus(race: Race | None) -> Stats:
    """Get the flat stat bonus of a race."""
    if race is None:
        return Stats()
    return RACE_BONUSES.get(race, Stats())


def class_bonus(character_class: CharacterClass | None) -> Stats:
    """Get the flat stat bonus of a class."""
    if character_class is None:
        return Stats()
    return CLASS_BONUSES.get(character_class, Stats())


@dataclass(frozen=True)
class Awakening:
    """Race upgrade unlocked at a level threshold.

    Stat changes are applied by the stat resolver (flat bonuses, then
    multipliers). Every other field is a combat-time rule read by the engine.
    """

    level_required: int = AWAKENING_LEVEL
    stat_bonuses: dict[str, int] = field(default_factory=dict)
    stat_multipliers: dict[str, float] = field(default_factory=dict)

    crit_chance_bonus: float = 0.0
    crit_damage_bonus: float = 0.0
    incoming_hit_multiplier: float | None = None
    incoming_hit_count: int = 0
    damage_taken_multiplier: float | None = None
    damage_stack_bonus: float = 0.0
    revive_percent: float | None = None
    explosion_percent: float = 0.0
    bleed_stacks_per_hit: int | None = None
    bleed_percent_per_stack: float | None = None
    regen_percent: float | None = None
    high_hp_damage_bonus: float = 0.0
    high_hp_threshold: float = 1.0


_ALL_STATS = ("hp", "auto", "defense", "cap", "rescap", "spd")

AWAKENINGS: dict[Race, Awakening] = {
    Race.HUMAIN: Awakening(stat_multipliers={name: 1.1 for name in _ALL_STATS}),
    Race.ELFE: Awakening(
        stat_multipliers={"auto": 1.05, "cap": 1.05},
        stat_bonuses={"spd": 5},
        crit_chance_bonus=0.2,
        crit_damage_bonus=0.3,
    ),
    Race.ORC: Awakening(incoming_hit_multiplier=0.5, incoming_hit_count=2),
    Race.NAIN: Awakening(stat_multipliers={"hp": 1.2}, damage_taken_multiplier=0.9),
    Race.DRAGONKIN: Awakening(stat_multipliers={"hp": 1.1, "rescap": 1.15}, damage_stack_bonus=0.01),
    Race.MORT_VIVANT: Awakening(explosion_percent=0.3, revive_percent=0.25),
    Race.LYCAN: Awakening(bleed_stacks_per_hit=1, bleed_percent_per_stack=0.005),
    Race.SYLVARI: Awakening(regen_percent=0.03, high_hp_damage_bonus=0.05, high_hp_threshold=0.8),
}


def get_awakening(race: Race | None, level: int) -> Awakening | None:
    """Get the awakening of a race if the level unlocks it."""
    if race is None:
        return None
    awakening = AWAKENINGS.get(race)
    if awakening is None or level < awakening.level_required:
        return None
    return awakening
