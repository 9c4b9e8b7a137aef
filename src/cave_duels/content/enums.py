"""Enums for game content."""

from enum import Enum


class Race(str, Enum):
    """Playable races."""

    HUMAIN = "Humain"
    ELFE = "Elfe"
    ORC = "Orc"
    NAIN = "Nain"
    DRAGONKIN = "Dragonkin"
    MORT_VIVANT = "Mort-vivant"
    LYCAN = "Lycan"
    SYLVARI = "Sylvari"


class CharacterClass(str, Enum):
    """Playable classes - each owns exactly one cooldown-gated ability."""

    GUERRIER = "Guerrier"
    VOLEUR = "Voleur"
    PALADIN = "Paladin"
    HEALER = "Healer"
    ARCHER = "Archer"
    MAGE = "Mage"
    DEMONISTE = "Demoniste"
    MASOCHISTE = "Masochiste"


class AbilityKey(str, Enum):
    """Cooldown counter keys."""

    WAR = "war"  # Guerrier - Frappe pénétrante
    ROG = "rog"  # Voleur - Esquive
    PAL = "pal"  # Paladin - Riposte
    HEAL = "heal"  # Healer - Soin puissant
    ARC = "arc"  # Archer - Tir multiple
    MAG = "mag"  # Mage - Sort magique
    DEM = "dem"  # Demoniste - Familier (every turn)
    MASO = "maso"  # Masochiste - Renvoi dégâts
    BOSS = "boss"  # Boss special ability


class BossId(str, Enum):
    """Dungeon bosses."""

    BANDIT = "bandit"
    CHEF_GOBELIN = "chef_gobelin"
    DRAGON = "dragon"
    ORNN = "ornn"


class WeaponFamily(str, Enum):
    """Weapon families."""

    BATON = "baton"
    BOUCLIER = "bouclier"
    EPEE = "epee"
    DAGUE = "dague"
    MARTEAU = "marteau"
    LANCE = "lance"
    ARC = "arc"
    TOME = "tome"


class Rarity(str, Enum):
    """Weapon rarities."""

    COMMUNE = "commune"
    RARE = "rare"
    LEGENDAIRE = "légendaire"


class LegendaryEffect(str, Enum):
    """Special effects carried by legendary weapons."""

    YGGDRASIL = "yggdrasil"  # Heals also hurt, or regen when the class cannot heal
    EGIDE = "egide"  # DEF/RESC converted into ATK on equip
    ZWEIHANDER = "zweihander"  # Every 4 turns: priority + damage
    LAEVATEINN = "laevateinn"  # Every 4 turns: guaranteed crit
    MJOLLNIR = "mjollnir"  # Every 5 attacks: stun
    GUNGNIR = "gungnir"  # First hit: enemy ATK debuff
    ARC_DES_CIEUX = "arc_des_cieux"  # Every 4 turns: bonus attack
    CODEX_ARCHON = "codex_archon"  # 2nd and 4th spell: double cast


class PassiveId(str, Enum):
    """Mage tower passives."""

    ARCANE_BARRIER = "arcane_barrier"
    MIND_BREACH = "mind_breach"
    ESSENCE_DRAIN = "essence_drain"
    SPECTRAL_MARK = "spectral_mark"
    ELEMENTAL_FURY = "elemental_fury"
    OBSIDIAN_SKIN = "obsidian_skin"
    AURA_OVERLOAD = "aura_overload"
    UNICORN_PACT = "unicorn_pact"
    RITUEL_FRACTURE = "rituel_fracture"


class StepPhase(str, Enum):
    """Phases of a replay step."""

    INTRO = "intro"
    TURN_START = "turn_start"
    ACTION = "action"
    VICTORY = "victory"


class DamageKind(str, Enum):
    """Mitigation path of a hit."""

    PHYSICAL = "physical"
    MAGICAL = "magical"
    TRUE = "true"  # Raw damage, no mitigation stat applies
