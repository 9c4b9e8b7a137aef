"""Ability resolver - class, race, weapon, passive and boss rules for one action."""

import random
from dataclasses import dataclass, replace
from enum import Enum

from ..content import AbilityKey, BossId, CharacterClass, DamageKind, LegendaryEffect, PassiveId, Race
from ..content.balance import (
    ARCHER,
    DEMONISTE,
    GUERRIER,
    HEALER,
    MAGE,
    MASOCHISTE,
    PALADIN,
    RACES,
)
from ..content.weapons import CODEX_SPELL_COUNTS
from .formulas import (
    crit_chance,
    crit_multiplier,
    magical_damage,
    physical_damage,
    round_half_away_from_zero,
    scale,
    tier,
)
from .replay import ActionLog
from .status import Hit, StatusEffectEngine
from .types import CombatantState


class Trigger(str, Enum):
    """Everything that can happen during one action."""

    WEAPON_TURN_START = "weapon_turn_start"
    RACIAL_REGEN = "racial_regen"
    BLEED = "bleed"
    PALADIN_RIPOSTE = "paladin_riposte"
    HEALER_HEAL = "healer_heal"
    ROGUE_DODGE = "rogue_dodge"
    DEMONISTE_FAMILIAR = "demoniste_familiar"
    MASOCHISTE_RELEASE = "masochiste_release"
    BOSS_ABILITY = "boss_ability"
    ATTACK = "attack"
    ELEMENTAL_FURY = "elemental_fury"


# Resolution order of simultaneous triggers: start-of-turn effects and
# self-buffs, then outgoing damage. The on-death check runs after each one.
TRIGGER_ORDER: tuple[Trigger, ...] = (
    Trigger.WEAPON_TURN_START,
    Trigger.RACIAL_REGEN,
    Trigger.BLEED,
    Trigger.PALADIN_RIPOSTE,
    Trigger.HEALER_HEAL,
    Trigger.ROGUE_DODGE,
    Trigger.DEMONISTE_FAMILIAR,
    Trigger.MASOCHISTE_RELEASE,
    Trigger.BOSS_ABILITY,
    Trigger.ATTACK,
    Trigger.ELEMENTAL_FURY,
)

# Classes whose ability restores HP (Yggdrasil turns their heals into damage)
HEALING_CLASSES = frozenset({CharacterClass.HEALER, CharacterClass.MASOCHISTE})


@dataclass
class WeaponTurnEffects:
    """Legendary weapon procs for the current action."""

    damage_multiplier: float = 1.0
    guaranteed_crit: bool = False
    bonus_attacks: int = 0
    bonus_attack_damage: float = 1.0


@dataclass
class ActionContext:
    """Everything one action needs to resolve."""

    actor: CombatantState
    target: CombatantState
    turn: int
    log: ActionLog
    weapon: WeaponTurnEffects
    skill_used: bool = False
    damage_bonus_consumed: bool = False

    def consume_damage_bonus(self) -> float:
        """Get the weapon damage multiplier for the first damage instance of the action."""
        if self.damage_bonus_consumed or self.weapon.damage_multiplier == 1.0:
            return 1.0
        self.damage_bonus_consumed = True
        return self.weapon.damage_multiplier


def weapon_turn_proc(state: CombatantState, turn: int) -> bool:
    """Check if an every-N-turns legendary weapon procs on this turn."""
    weapon = state.weapon
    if weapon is None or "every_turns" not in weapon.values:
        return False
    return turn % int(weapon.values["every_turns"]) == 0


def has_priority_strike(state: CombatantState, turn: int) -> bool:
    """Check if a Zweihänder lets this combatant strike first on this turn."""
    return (
        state.weapon is not None
        and state.weapon.effect == LegendaryEffect.ZWEIHANDER
        and weapon_turn_proc(state, turn)
    )


def anti_heal_factor(opponent: CombatantState) -> float:
    """Healing multiplier imposed by the opponent."""
    if opponent.has_passive(PassiveId.RITUEL_FRACTURE):
        return max(0.0, 1 - opponent.passive_value("heal_reduction", 0.0))
    return 1.0


def healer_heal_amount(actor: CombatantState, opponent: CombatantState) -> int:
    """Heal of a Healer's ability: share of missing HP plus a tiered share of cap."""
    missing = max(0, actor.max_hp - actor.current_hp)
    cap = actor.stats.cap
    raw = HEALER.missing_hp_percent * missing + (HEALER.cap_base + HEALER.cap_per_tier * tier(cap)) * cap
    return max(1, round_half_away_from_zero(raw * anti_heal_factor(opponent)))


def archer_hit_count(actor: CombatantState) -> int:
    """Arrows in an Archer volley."""
    return max(ARCHER.min_hits, ARCHER.hits_base + ARCHER.hits_per_tier * tier(actor.stats.cap))


class AbilityResolver:
    """Resolves one combatant's action against its opponent.

    Triggers run in TRIGGER_ORDER. After each trigger the action stops if
    either side is defeated.
    """

    def __init__(self, rng: random.Random, status: StatusEffectEngine | None = None) -> None:
        """Initialize the resolver.

        Args:
            rng: Source of randomness for crit rolls (owned by the match)
            status: Status effect engine applied around every damage event
        """
        self.rng = rng
        self.status = status or StatusEffectEngine()

    def start_of_combat(self, p1: CombatantState, p2: CombatantState) -> list[str]:
        """Apply start-of-combat passives and return their tagged log lines."""
        lines: list[str] = []
        for state, opponent in ((p1, p2), (p2, p1)):
            log = ActionLog(state.tag)
            if state.has_passive(PassiveId.ARCANE_BARRIER):
                shield = max(1, round_half_away_from_zero(state.max_hp * state.passive_value("shield_percent")))
                state.shield += shield
                log.add(f"🛡️ Barrière arcanique: {state.name} gagne un bouclier de {shield} PV.")
            if state.has_passive(PassiveId.MIND_BREACH):
                reduction = state.passive_value("def_reduction")
                reduced = max(0, round_half_away_from_zero(opponent.stats.defense * (1 - reduction)))
                opponent.stats = replace(opponent.stats, defense=reduced)
                log.add(f"🧠 Brèche mentale: {opponent.name} perd {round_half_away_from_zero(reduction * 100)}% de DEF.")
            if state.boss is not None:
                log.add(
                    f"👑 {state.name} se dresse devant son adversaire : "
                    f"{state.boss.ability_name} (tous les {state.boss.cooldown} tours)"
                )
            lines.extend(log.lines)
        return lines

    def resolve_action(self, actor: CombatantState, target: CombatantState, turn: int) -> list[str]:
        """Resolve a complete action.

        Action flow:
        1. A stunned actor loses the action
        2. Reflect from the previous action is cleared
        3. Cooldown counters advance
        4. Triggers resolve in TRIGGER_ORDER

        Args:
            actor: Combatant acting now
            target: Its opponent
            turn: Match turn number (1-based)

        Returns:
            Log lines of the action, tagged with the actor's prefix
        """
        log = ActionLog(actor.tag)

        if self.status.consume_stun(actor, log):
            return log.lines

        actor.reflect = 0.0
        actor.advance_cooldowns()

        context = ActionContext(actor=actor, target=target, turn=turn, log=log, weapon=WeaponTurnEffects())
        for trigger in TRIGGER_ORDER:
            self._run_trigger(trigger, context)
            log.flush()
            if actor.is_defeated() or target.is_defeated():
                break

        actor.check_invariants()
        target.check_invariants()
        return log.flush()

    def _run_trigger(self, trigger: Trigger, context: ActionContext) -> None:
        match trigger:
            case Trigger.WEAPON_TURN_START:
                self._weapon_turn_start(context)
            case Trigger.RACIAL_REGEN:
                self._racial_regen(context)
            case Trigger.BLEED:
                self.status.tick_bleed(context.actor, context.target, context.log)
            case Trigger.PALADIN_RIPOSTE:
                self._paladin_riposte(context)
            case Trigger.HEALER_HEAL:
                self._healer_heal(context)
            case Trigger.ROGUE_DODGE:
                self._rogue_dodge(context)
            case Trigger.DEMONISTE_FAMILIAR:
                self._demoniste_familiar(context)
            case Trigger.MASOCHISTE_RELEASE:
                self._masochiste_release(context)
            case Trigger.BOSS_ABILITY:
                self._boss_ability(context)
            case Trigger.ATTACK:
                self._attack(context)
            case Trigger.ELEMENTAL_FURY:
                self._elemental_fury(context)

    # =========================================================================
    # Start of turn
    # =========================================================================

    def _weapon_turn_start(self, context: ActionContext) -> None:
        actor = context.actor
        weapon = actor.weapon
        if weapon is None or weapon.effect is None:
            return

        effects = context.weapon
        proc = weapon_turn_proc(actor, context.turn)
        match weapon.effect:
            case LegendaryEffect.ZWEIHANDER if proc:
                effects.damage_multiplier = 1 + weapon.values["damage_bonus"]
                context.log.add(
                    f"🗡️ {weapon.name}: {actor.name} frappe en premier avec "
                    f"+{round_half_away_from_zero(weapon.values['damage_bonus'] * 100)}% de dégâts"
                )
            case LegendaryEffect.LAEVATEINN if proc:
                effects.guaranteed_crit = True
                context.log.add(f"🔥 {weapon.name}: le prochain coup de {actor.name} sera un critique garanti")
            case LegendaryEffect.ARC_DES_CIEUX if proc:
                effects.bonus_attacks = int(weapon.values["bonus_attacks"])
                effects.bonus_attack_damage = weapon.values["bonus_attack_damage"]
                context.log.add(f"🌟 {weapon.name}: {actor.name} prépare une attaque bonus")
            case LegendaryEffect.YGGDRASIL if actor.character_class not in HEALING_CLASSES:
                regen = max(
                    1,
                    round_half_away_from_zero(
                        actor.max_hp * weapon.values["regen_percent"] * anti_heal_factor(context.target)
                    ),
                )
                healed = actor.heal(regen)
                context.log.add(f"🌳 {weapon.name}: {actor.name} régénère {healed} points de vie")
            case _:
                pass

    def _racial_regen(self, context: ActionContext) -> None:
        actor = context.actor
        if actor.race != Race.SYLVARI:
            return
        percent = RACES.sylvari_regen_percent
        if actor.awakening is not None and actor.awakening.regen_percent is not None:
            percent = actor.awakening.regen_percent
        heal = max(1, round_half_away_from_zero(actor.max_hp * percent * anti_heal_factor(context.target)))
        actor.heal(heal)
        context.log.add(f"🌿 {actor.name} régénère naturellement et récupère {heal} points de vie")

    # =========================================================================
    # Self-buffs
    # =========================================================================

    def _paladin_riposte(self, context: ActionContext) -> None:
        actor = context.actor
        if actor.character_class != CharacterClass.PALADIN or not actor.ability_ready(AbilityKey.PAL):
            return
        context.skill_used = True
        actor.reflect = PALADIN.reflect_base + PALADIN.reflect_per_tier * tier(actor.stats.cap)
        context.log.add(
            f"🛡️ {actor.name} se prépare à riposter et renverra "
            f"{round_half_away_from_zero(actor.reflect * 100)}% des dégâts"
        )

    def _healer_heal(self, context: ActionContext) -> None:
        actor = context.actor
        if actor.character_class != CharacterClass.HEALER or not actor.ability_ready(AbilityKey.HEAL):
            return
        context.skill_used = True
        heal = healer_heal_amount(actor, context.target)
        actor.heal(heal)
        context.log.add(f"✚ {actor.name} lance un sort de soin puissant et récupère {heal} points de vie")

        if self._codex_double_cast(actor):
            second = max(1, scale(heal, actor.weapon.values["second_cast_damage"]))
            actor.heal(second)
            context.log.add(f"📜 Double-cast: {actor.name} récupère {second} points de vie supplémentaires")
        self._yggdrasil_heal_damage(context, heal)

    def _rogue_dodge(self, context: ActionContext) -> None:
        actor = context.actor
        if actor.character_class != CharacterClass.VOLEUR or not actor.ability_ready(AbilityKey.ROG):
            return
        context.skill_used = True
        actor.dodge = True
        context.log.add(f"🌀 {actor.name} entre dans une posture d'esquive et évitera la prochaine attaque")

    # =========================================================================
    # Outgoing damage
    # =========================================================================

    def _demoniste_familiar(self, context: ActionContext) -> None:
        actor, target = context.actor, context.target
        if actor.character_class != CharacterClass.DEMONISTE or not actor.ability_ready(AbilityKey.DEM):
            return
        cap = actor.stats.cap
        percent = (
            DEMONISTE.cap_base + DEMONISTE.cap_per_tier * tier(cap) + DEMONISTE.stack_per_auto * actor.familiar_stacks
        )
        hit = max(1, round_half_away_from_zero(percent * cap))
        raw = magical_damage(hit, target.stats.rescap * (1 - DEMONISTE.ignore_resist))
        raw = scale(raw, context.consume_damage_bonus())
        inflicted = self._deal(context, raw, DamageKind.MAGICAL)
        context.log.add(f"💠 Le familier de {actor.name} attaque {target.name} et inflige {inflicted} points de dégâts")

    def _masochiste_release(self, context: ActionContext) -> None:
        actor, target = context.actor, context.target
        if actor.character_class != CharacterClass.MASOCHISTE or not actor.ability_ready(AbilityKey.MASO):
            return
        if actor.maso_taken <= 0:
            return
        context.skill_used = True
        taken = actor.maso_taken
        percent = MASOCHISTE.return_base + MASOCHISTE.return_per_tier * tier(actor.stats.cap)
        damage = max(1, round_half_away_from_zero(taken * percent))
        heal = max(1, round_half_away_from_zero(taken * MASOCHISTE.heal_percent * anti_heal_factor(target)))
        actor.heal(heal)
        actor.maso_taken = 0

        damage = scale(damage, context.consume_damage_bonus())
        inflicted = self._deal(context, damage, DamageKind.TRUE)
        context.log.add(
            f"🩸 {actor.name} renvoie les dégâts accumulés: inflige {inflicted} points de dégâts "
            f"et récupère {heal} points de vie"
        )
        if self._codex_double_cast(actor) and target.is_alive():
            second = max(1, scale(damage, actor.weapon.values["second_cast_damage"]))
            inflicted = self._deal(context, second, DamageKind.TRUE, on_hit=False)
            context.log.add(f"📜 Double-cast: {actor.name} inflige {inflicted} points de dégâts supplémentaires")
        self._yggdrasil_heal_damage(context, heal)

    def _boss_ability(self, context: ActionContext) -> None:
        actor, target = context.actor, context.target
        boss = actor.boss
        if boss is None or not actor.ability_ready(AbilityKey.BOSS):
            return

        match boss.id:
            case BossId.BANDIT:
                target.bleed_stacks += boss.bleed_stacks
                context.log.add(f"🗡️ {actor.name} empoisonne sa lame et applique un saignement !")
            case BossId.CHEF_GOBELIN:
                raw = physical_damage(
                    round_half_away_from_zero(actor.stats.auto * boss.summon_auto_percent), target.stats.defense
                )
                inflicted = self._deal(context, raw, DamageKind.PHYSICAL)
                context.log.add(
                    f"👺 Un sbire de {actor.name} surgit et inflige {inflicted} points de dégâts à {target.name}"
                )
            case BossId.DRAGON:
                spell = self._boss_spell_power(actor)
                inflicted = self._deal(context, magical_damage(spell, target.stats.rescap), DamageKind.MAGICAL)
                context.log.add(
                    f"🔥 {actor.name} lance un Souffle de Flammes dévastateur et inflige {inflicted} points de dégâts"
                )
            case BossId.ORNN:
                spell = self._boss_spell_power(actor)
                inflicted = self._deal(context, magical_damage(spell, target.stats.rescap), DamageKind.MAGICAL)
                context.log.add(
                    f"🔥 {actor.name} invoque l'Appel du dieu de la forge et inflige {inflicted} points de dégâts"
                )
                if target.is_alive() and self.status.stun(target, boss.stun_duration, context.log):
                    context.log.add(f"😵 {target.name} est étourdi pendant {boss.stun_duration} tour !")

    @staticmethod
    def _boss_spell_power(actor: CombatantState) -> int:
        boss = actor.boss
        power = actor.stats.cap * boss.spell_cap_scale
        if boss.spell_adds_auto:
            power += actor.stats.auto
        return round_half_away_from_zero(power)

    def _attack(self, context: ActionContext) -> None:
        """Resolve the attack: a class skill when its cooldown fires, otherwise a basic hit."""
        actor, target = context.actor, context.target
        cls = actor.character_class
        is_mage = cls == CharacterClass.MAGE and actor.ability_ready(AbilityKey.MAG)
        is_war = cls == CharacterClass.GUERRIER and actor.ability_ready(AbilityKey.WAR)
        is_archer = cls == CharacterClass.ARCHER and actor.ability_ready(AbilityKey.ARC)
        if is_mage or is_war or is_archer:
            context.skill_used = True

        multiplier = 1.0
        if actor.race == Race.ORC and actor.current_hp < RACES.orc_low_hp_threshold * actor.max_hp:
            multiplier = RACES.orc_damage_bonus

        base_hits = archer_hit_count(actor) if is_archer else 1
        total_hits = base_hits + context.weapon.bonus_attacks
        force_crit = (
            actor.has_passive(PassiveId.OBSIDIAN_SKIN)
            and actor.current_hp <= actor.max_hp * actor.passive_value("crit_threshold")
        )

        total = 0
        was_crit = False
        for index in range(total_hits):
            is_bonus = index >= base_hits
            is_crit = context.weapon.guaranteed_crit or force_crit or self.rng.random() < crit_chance(actor, target)
            was_crit = was_crit or is_crit
            weapon_bonus = context.consume_damage_bonus() if index == 0 else 1.0
            attack_multiplier = multiplier * weapon_bonus * (context.weapon.bonus_attack_damage if is_bonus else 1.0)

            kind = DamageKind.PHYSICAL
            if is_mage and not is_bonus:
                raw = self._mage_spell(actor, target, attack_multiplier)
                kind = DamageKind.MAGICAL
            elif is_war and not is_bonus:
                raw, kind = self._warrior_strike(actor, target, attack_multiplier)
            elif is_archer and not is_bonus:
                raw = self._archer_arrow(actor, target, index, attack_multiplier)
            else:
                raw = physical_damage(round_half_away_from_zero(actor.stats.auto * attack_multiplier), target.stats.defense)
                if not is_bonus:
                    self._apply_basic_hit_riders(actor, target)

            if is_crit:
                raw = scale(raw, crit_multiplier(actor))

            inflicted = self._deal(context, raw, kind, is_crit=is_crit)

            if is_mage and not is_bonus:
                self._mage_double_cast(context, raw)
            else:
                self._weapon_on_attack(context)

            total += inflicted
            crit_text = " CRITIQUE !" if is_crit else ""
            if is_archer and not is_bonus:
                label = "tir" if index == 0 else "tir renforcé"
                context.log.add(f"🏹 {actor.name} lance un {label} et inflige {inflicted} points de dégâts{crit_text}")
                context.log.flush()
            elif is_bonus:
                context.log.add(f"🌟 Attaque bonus: {actor.name} inflige {inflicted} points de dégâts{crit_text}")
                context.log.flush()
            if target.is_defeated() or actor.is_defeated():
                break

        if not is_archer and total > 0:
            crit_text = " CRITIQUE !" if was_crit else ""
            if is_mage:
                context.log.add(f"{actor.name} inflige {total} points de dégâts magiques à {target.name}{crit_text}")
            elif is_war:
                context.log.add(
                    f"{actor.name} transperce les défenses de {target.name} et inflige {total} points de dégâts{crit_text}"
                )
            else:
                context.log.add(f"{actor.name} attaque {target.name} et inflige {total} points de dégâts{crit_text}")

    def _mage_spell(self, actor: CombatantState, target: CombatantState, multiplier: float) -> int:
        cap = actor.stats.cap
        spell = round_half_away_from_zero(
            actor.stats.auto * multiplier + (MAGE.cap_base + MAGE.cap_per_tier * tier(cap)) * cap * multiplier
        )
        return magical_damage(spell, target.stats.rescap)

    def _warrior_strike(
        self, actor: CombatantState, target: CombatantState, multiplier: float
    ) -> tuple[int, DamageKind]:
        """Strike through the weaker of the defender's two mitigation stats."""
        ignore = GUERRIER.ignore_base + GUERRIER.ignore_per_tier * tier(actor.stats.cap)
        if target.stats.defense <= target.stats.rescap:
            effective_def = max(0, round_half_away_from_zero(target.stats.defense * (1 - ignore)))
            attack = round_half_away_from_zero(actor.stats.auto * multiplier)
            return physical_damage(attack, effective_def), DamageKind.PHYSICAL
        effective_res = max(0, round_half_away_from_zero(target.stats.rescap * (1 - ignore)))
        power = round_half_away_from_zero(actor.stats.cap * multiplier)
        return magical_damage(power, effective_res), DamageKind.MAGICAL

    def _archer_arrow(self, actor: CombatantState, target: CombatantState, index: int, multiplier: float) -> int:
        if index == 0:
            return physical_damage(round_half_away_from_zero(actor.stats.auto * multiplier), target.stats.defense)
        physical_part = physical_damage(
            round_half_away_from_zero(actor.stats.auto * ARCHER.hit2_auto_multiplier * multiplier),
            target.stats.defense,
        )
        magical_part = magical_damage(
            round_half_away_from_zero(actor.stats.cap * ARCHER.hit2_cap_multiplier * multiplier),
            target.stats.rescap,
        )
        return physical_part + magical_part

    def _apply_basic_hit_riders(self, actor: CombatantState, target: CombatantState) -> None:
        """Effects carried by a basic attack: Lycan bleed and Demoniste familiar growth."""
        if actor.race == Race.LYCAN:
            stacks = RACES.lycan_bleed_per_hit
            if actor.awakening is not None and actor.awakening.bleed_stacks_per_hit is not None:
                stacks = actor.awakening.bleed_stacks_per_hit
            target.bleed_stacks += stacks
            if actor.awakening is not None and actor.awakening.bleed_percent_per_stack:
                target.bleed_percent_per_stack = actor.awakening.bleed_percent_per_stack
        if actor.character_class == CharacterClass.DEMONISTE:
            actor.familiar_stacks += 1

    def _elemental_fury(self, context: ActionContext) -> None:
        actor = context.actor
        if not context.skill_used or not actor.has_passive(PassiveId.ELEMENTAL_FURY):
            return
        lightning = max(1, round_half_away_from_zero(actor.stats.auto * actor.passive_value("lightning_percent")))
        context.log.add(f"⚡ Furie élémentaire déclenche un éclair et inflige {lightning} dégâts bruts")
        self.status.apply_direct(context.target, lightning, actor, context.log)

    # =========================================================================
    # Weapons
    # =========================================================================

    def _codex_double_cast(self, actor: CombatantState) -> bool:
        """Count a spell cast; True if the Codex Archon double-casts it."""
        actor.weapon_spells += 1
        return (
            actor.weapon is not None
            and actor.weapon.effect == LegendaryEffect.CODEX_ARCHON
            and actor.weapon_spells in CODEX_SPELL_COUNTS
        )

    def _mage_double_cast(self, context: ActionContext, raw: int) -> None:
        actor, target = context.actor, context.target
        if not self._codex_double_cast(actor) or not target.is_alive():
            return
        second = max(1, scale(raw, actor.weapon.values["second_cast_damage"]))
        inflicted = self._deal(context, second, DamageKind.MAGICAL, on_hit=False)
        context.log.add(f"📜 Double-cast: {actor.name} inflige {inflicted} points de dégâts magiques supplémentaires")

    def _weapon_on_attack(self, context: ActionContext) -> None:
        actor, target = context.actor, context.target
        weapon = actor.weapon
        if weapon is None:
            return
        actor.weapon_attacks += 1
        match weapon.effect:
            case LegendaryEffect.MJOLLNIR:
                every = int(weapon.values["every_attacks"])
                duration = int(weapon.values["stun_duration"])
                if actor.weapon_attacks % every == 0 and target.is_alive():
                    if self.status.stun(target, duration, context.log):
                        context.log.add(f"⚡ {weapon.name}: {target.name} est étourdi pendant {duration} tour")
            case LegendaryEffect.GUNGNIR:
                if not actor.gungnir_used and not target.atk_debuffed:
                    actor.gungnir_used = True
                    target.atk_debuffed = True
                    reduction = weapon.values["atk_reduction_percent"]
                    target.stats = replace(target.stats, auto=scale(target.stats.auto, 1 - reduction))
                    context.log.add(
                        f"🔱 {weapon.name}: {target.name} perd {round_half_away_from_zero(reduction * 100)}% d'ATK"
                    )
            case _:
                pass

    def _yggdrasil_heal_damage(self, context: ActionContext, heal: int) -> None:
        actor, target = context.actor, context.target
        weapon = actor.weapon
        if weapon is None or weapon.effect != LegendaryEffect.YGGDRASIL or not target.is_alive():
            return
        power = round_half_away_from_zero(heal * weapon.values["heal_damage_percent"])
        inflicted = self._deal(context, magical_damage(power, target.stats.rescap), DamageKind.MAGICAL, on_hit=False)
        context.log.add(f"🌳 {weapon.name}: les soins de {actor.name} infligent {inflicted} points de dégâts à {target.name}")

    # =========================================================================
    # Damage pipeline
    # =========================================================================

    def _deal(
        self,
        context: ActionContext,
        raw: int,
        kind: DamageKind,
        is_crit: bool = False,
        on_hit: bool = True,
    ) -> int:
        """Send outgoing damage through every modifier and the status effects.

        Returns:
            HP damage actually inflicted on the target
        """
        actor, target = context.actor, context.target
        amount = self._offensive_modifiers(actor, target, raw, context.turn)
        amount = self._defensive_modifiers(target, amount, kind, is_crit, context.turn)

        result = self.status.apply_hit(actor, target, Hit(amount=amount, kind=kind, is_crit=is_crit), context.log)

        if on_hit and result.inflicted > 0:
            self._on_hit_passives(context, result.inflicted)
        return result.inflicted

    def _offensive_modifiers(self, actor: CombatantState, target: CombatantState, amount: int, turn: int) -> int:
        awakening = actor.awakening
        if awakening is not None:
            if awakening.high_hp_damage_bonus and actor.current_hp > actor.max_hp * awakening.high_hp_threshold:
                amount = scale(amount, 1 + awakening.high_hp_damage_bonus)
            if awakening.damage_stack_bonus and actor.damage_taken_stacks > 0:
                amount = scale(amount, 1 + awakening.damage_stack_bonus * actor.damage_taken_stacks)

        if actor.has_passive(PassiveId.UNICORN_PACT):
            amount = scale(amount, 1 + self._unicorn_turn(actor, turn)["outgoing"])
        if actor.has_passive(PassiveId.AURA_OVERLOAD) and turn <= actor.passive_value("turns"):
            amount = scale(amount, 1 + actor.passive_value("damage_bonus"))
        if target.spectral_mark_bonus:
            amount = scale(amount, 1 + target.spectral_mark_bonus)
        return amount

    def _defensive_modifiers(
        self, target: CombatantState, amount: int, kind: DamageKind, is_crit: bool, turn: int
    ) -> int:
        if target.has_passive(PassiveId.UNICORN_PACT):
            amount = scale(amount, 1 + self._unicorn_turn(target, turn)["incoming"])

        boss = target.boss
        if boss is not None:
            if boss.reduced_kind == kind and boss.damage_reduction:
                amount = scale(amount, 1 - boss.damage_reduction)
            if boss.low_hp_threshold and target.current_hp < target.max_hp * boss.low_hp_threshold:
                amount = scale(amount, 1 - boss.low_hp_damage_reduction)

        if is_crit and target.has_passive(PassiveId.OBSIDIAN_SKIN):
            amount = scale(amount, 1 - target.passive_value("crit_reduction"))

        awakening = target.awakening
        if awakening is not None:
            if awakening.incoming_hit_multiplier is not None and target.incoming_hits_remaining > 0:
                amount = scale(amount, awakening.incoming_hit_multiplier)
                target.incoming_hits_remaining -= 1
            if awakening.damage_taken_multiplier:
                amount = scale(amount, awakening.damage_taken_multiplier)
        return amount

    def _on_hit_passives(self, context: ActionContext, inflicted: int) -> None:
        actor, target = context.actor, context.target
        if actor.has_passive(PassiveId.SPECTRAL_MARK) and not target.spectral_mark_bonus and target.is_alive():
            target.spectral_mark_bonus = actor.passive_value("damage_taken_bonus")
            context.log.add(
                f"🟣 {target.name} est marqué et subira "
                f"+{round_half_away_from_zero(target.spectral_mark_bonus * 100)}% dégâts."
            )
        if actor.has_passive(PassiveId.ESSENCE_DRAIN) and actor.is_alive():
            heal = max(
                1,
                round_half_away_from_zero(inflicted * actor.passive_value("heal_percent") * anti_heal_factor(target)),
            )
            actor.heal(heal)
            context.log.add(f"🩸 {actor.name} siphonne {heal} points de vie grâce au Vol d'essence")

    @staticmethod
    def _unicorn_turn(state: CombatantState, turn: int) -> dict[str, float]:
        """Odd turns use the pact's A side, even turns its B side."""
        return state.passive_value("turn_a" if turn % 2 == 1 else "turn_b")
