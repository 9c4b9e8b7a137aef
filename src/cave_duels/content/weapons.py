"""Weapon table - 8 families x 3 rarities."""

from dataclasses import dataclass, field

from .enums import LegendaryEffect, Rarity, WeaponFamily
from .stats import Stats


@dataclass(frozen=True)
class WeaponDefinition:
    """Static definition of a weapon."""

    id: str
    name: str
    family: WeaponFamily
    rarity: Rarity
    stats: Stats
    effect: LegendaryEffect | None = None
    values: dict[str, float] = field(default_factory=dict)


def _weapon(
    weapon_id: str,
    name: str,
    family: WeaponFamily,
    rarity: Rarity,
    stats: Stats,
    effect: LegendaryEffect | None = None,
    **values: float,
) -> WeaponDefinition:
    return WeaponDefinition(
        id=weapon_id, name=name, family=family, rarity=rarity, stats=stats, effect=effect, values=values
    )


_WEAPONS = [
    # Bâtons
    _weapon("baton_commun", "Bâton", WeaponFamily.BATON, Rarity.COMMUNE, Stats(cap=3, hp=5)),
    _weapon("baton_rare", "Bâton de soin", WeaponFamily.BATON, Rarity.RARE, Stats(cap=5, hp=10)),
    _weapon(
        "baton_legendaire",
        "Branche d'Yggdrasil",
        WeaponFamily.BATON,
        Rarity.LEGENDAIRE,
        Stats(cap=5, hp=10),
        LegendaryEffect.YGGDRASIL,
        heal_damage_percent=0.5,
        regen_percent=0.03,
    ),
    # Boucliers
    _weapon("bouclier_commun", "Bouclier", WeaponFamily.BOUCLIER, Rarity.COMMUNE, Stats(defense=3, rescap=3)),
    _weapon("bouclier_rare", "Bouclier de Fer", WeaponFamily.BOUCLIER, Rarity.RARE, Stats(defense=5, rescap=5)),
    _weapon(
        "bouclier_legendaire",
        "Égide d'Athéna",
        WeaponFamily.BOUCLIER,
        Rarity.LEGENDAIRE,
        Stats(defense=5, rescap=5),
        LegendaryEffect.EGIDE,
        def_to_atk_percent=0.1,
        rescap_to_atk_percent=0.1,
    ),
    # Épées
    _weapon("epee_commune", "Épée", WeaponFamily.EPEE, Rarity.COMMUNE, Stats(auto=3)),
    _weapon("epee_rare", "Épée lourde", WeaponFamily.EPEE, Rarity.RARE, Stats(auto=5)),
    _weapon(
        "epee_legendaire",
        "Zweihänder",
        WeaponFamily.EPEE,
        Rarity.LEGENDAIRE,
        Stats(auto=10, spd=-10),
        LegendaryEffect.ZWEIHANDER,
        every_turns=4,
        damage_bonus=0.3,
    ),
    # Dagues
    _weapon("dague_commune", "Dague", WeaponFamily.DAGUE, Rarity.COMMUNE, Stats(auto=2, spd=2)),
    _weapon("dague_rare", "Dague dentelée", WeaponFamily.DAGUE, Rarity.RARE, Stats(auto=4, spd=4)),
    _weapon(
        "dague_legendaire",
        "Lævateinn",
        WeaponFamily.DAGUE,
        Rarity.LEGENDAIRE,
        Stats(auto=4, spd=4),
        LegendaryEffect.LAEVATEINN,
        every_turns=4,
        crit_damage_bonus=0.3,
    ),
    # Marteaux
    _weapon("marteau_commun", "Marteau", WeaponFamily.MARTEAU, Rarity.COMMUNE, Stats(auto=3, spd=-2)),
    _weapon("marteau_rare", "Marteau de guerre", WeaponFamily.MARTEAU, Rarity.RARE, Stats(auto=6, spd=-3)),
    _weapon(
        "marteau_legendaire",
        "Mjöllnir",
        WeaponFamily.MARTEAU,
        Rarity.LEGENDAIRE,
        Stats(auto=8, spd=-3),
        LegendaryEffect.MJOLLNIR,
        every_attacks=5,
        stun_duration=1,
    ),
    # Lances
    _weapon("lance_commune", "Lance", WeaponFamily.LANCE, Rarity.COMMUNE, Stats(auto=3, spd=1)),
    _weapon("lance_rare", "Hasta royale", WeaponFamily.LANCE, Rarity.RARE, Stats(auto=5, spd=2)),
    _weapon(
        "lance_legendaire",
        "Gungnir",
        WeaponFamily.LANCE,
        Rarity.LEGENDAIRE,
        Stats(auto=7, spd=3),
        LegendaryEffect.GUNGNIR,
        atk_reduction_percent=0.1,
    ),
    # Arcs
    _weapon("arc_commun", "Arc court", WeaponFamily.ARC, Rarity.COMMUNE, Stats(auto=2, spd=3)),
    _weapon("arc_rare", "Arc long", WeaponFamily.ARC, Rarity.RARE, Stats(auto=4, spd=5)),
    _weapon(
        "arc_legendaire",
        "Arc des Cieux",
        WeaponFamily.ARC,
        Rarity.LEGENDAIRE,
        Stats(auto=5, spd=7),
        LegendaryEffect.ARC_DES_CIEUX,
        every_turns=4,
        bonus_attacks=1,
        bonus_attack_damage=0.5,
    ),
    # Tomes
    _weapon("tome_commun", "Tome élémentaire", WeaponFamily.TOME, Rarity.COMMUNE, Stats(cap=3)),
    _weapon("tome_rare", "Grimoire ancien", WeaponFamily.TOME, Rarity.RARE, Stats(cap=5)),
    _weapon(
        "tome_legendaire",
        "Codex Archon",
        WeaponFamily.TOME,
        Rarity.LEGENDAIRE,
        Stats(cap=7),
        LegendaryEffect.CODEX_ARCHON,
        second_cast_damage=0.7,
    ),
]

WEAPONS: dict[str, WeaponDefinition] = {weapon.id: weapon for weapon in _WEAPONS}

# Spell counts on which the Codex Archon double-casts
CODEX_SPELL_COUNTS = (2, 4)


def get_weapon(weapon_id: str | None) -> WeaponDefinition | None:
    """Get a weapon definition by ID."""
    if weapon_id is None:
        return None
    return WEAPONS.get(weapon_id)
