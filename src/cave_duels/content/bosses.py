"""Dungeon bosses - stats and special abilities."""

from dataclasses import dataclass

from .enums import BossId, DamageKind
from .stats import Stats


@dataclass(frozen=True)
class BossDefinition:
    """Static definition of a boss.

    The ability fires on the same cooldown-counter pattern as class
    abilities. Passive fields are read by the engine on every hit.
    """

    id: BossId
    name: str
    stats: Stats
    ability_name: str
    cooldown: int

    # Ability tuning
    bleed_stacks: int = 0
    summon_auto_percent: float = 0.0
    spell_cap_scale: float = 0.0
    spell_adds_auto: bool = False
    stun_duration: int = 0

    # Passives
    reduced_kind: DamageKind | None = None
    damage_reduction: float = 0.0
    low_hp_threshold: float = 0.0
    low_hp_damage_reduction: float = 0.0
    stun_immune: bool = False
    enrage_threshold: float = 0.0
    enrage_bonus: float = 0.0


BOSSES: dict[BossId, BossDefinition] = {
    BossId.BANDIT: BossDefinition(
        id=BossId.BANDIT,
        name="Bandit des Grands Chemins",
        stats=Stats(hp=100, auto=18, defense=12, cap=8, rescap=10, spd=22),
        ability_name="Lame empoisonnée",
        cooldown=3,
        bleed_stacks=1,
    ),
    BossId.CHEF_GOBELIN: BossDefinition(
        id=BossId.CHEF_GOBELIN,
        name="Chef Gobelin Grukk",
        stats=Stats(hp=140, auto=22, defense=18, cap=15, rescap=15, spd=25),
        ability_name="Appel de la Meute",
        cooldown=4,
        summon_auto_percent=0.3,
        reduced_kind=DamageKind.PHYSICAL,
        damage_reduction=0.1,
    ),
    BossId.DRAGON: BossDefinition(
        id=BossId.DRAGON,
        name="Vyraxion le Dévoreur",
        stats=Stats(hp=200, auto=28, defense=25, cap=30, rescap=25, spd=18),
        ability_name="Souffle de Flammes",
        cooldown=3,
        spell_cap_scale=1.5,
        stun_immune=True,
        low_hp_threshold=0.3,
        low_hp_damage_reduction=0.15,
        enrage_threshold=0.25,
        enrage_bonus=0.25,
    ),
    BossId.ORNN: BossDefinition(
        id=BossId.ORNN,
        name="Ornn, le Dieu de la Forge",
        stats=Stats(hp=450, auto=100, defense=100, cap=100, rescap=100, spd=100),
        ability_name="Appel du dieu de la forge",
        cooldown=5,
        spell_cap_scale=0.5,
        spell_adds_auto=True,
        stun_duration=1,
    ),
}


def get_boss(boss_id: str | BossId | None) -> BossDefinition | None:
    """Get a boss definition by ID."""
    if boss_id is None:
        return None
    try:
        return BOSSES.get(BossId(boss_id))
    except ValueError:
        return None


def scaled_boss_stats(boss: BossDefinition, stat_modifier: float = 1.0) -> Stats:
    """Scale a boss's base stats by a level modifier."""
    if stat_modifier == 1.0:
        return boss.stats
    return boss.stats.scaled_all(stat_modifier)
