"""Status effect engine - the reactive rules wrapped around every damage event."""

import math
from dataclasses import dataclass, replace

from ..content import DamageKind
from ..content.balance import RACES
from .formulas import round_half_away_from_zero, scale
from .replay import ActionLog
from .types import CombatantState


@dataclass
class Hit:
    """An outgoing damage event, after offensive and defensive modifiers."""

    amount: int
    kind: DamageKind = DamageKind.PHYSICAL
    is_crit: bool = False


@dataclass
class HitResult:
    """Result of processing a hit through the status effects."""

    inflicted: int  # HP actually lost by the defender
    absorbed: int = 0
    dodged: bool = False
    reflected: int = 0


class StatusEffectEngine:
    """Applies shield, dodge, reflect, bleed, stun and undead revival.

    Damage goes through a fixed order:
    1. Shield absorbs min(shield, damage); the rest passes through
    2. An armed dodge negates the rest of the hit and is consumed
    3. HP loss (accumulated for the Masochiste release)
    4. An armed reflect fires once, straight off the attacker's HP
    5. Undead revival on anyone the application brought to 0 HP
    """

    def apply_hit(
        self,
        attacker: CombatantState,
        defender: CombatantState,
        hit: Hit,
        log: ActionLog,
    ) -> HitResult:
        """Apply a hit to a defender.

        Args:
            attacker: Who deals the damage (receives reflected damage)
            defender: Who receives the damage
            hit: Damage amount and flags
            log: Log of the current action

        Returns:
            HitResult with the HP damage actually inflicted
        """
        result = HitResult(inflicted=0)
        remaining = max(0, hit.amount)

        if defender.shield > 0 and remaining > 0:
            absorbed = min(defender.shield, remaining)
            defender.shield -= absorbed
            remaining -= absorbed
            result.absorbed = absorbed
            log.add(f"🛡️ {defender.name} absorbe {absorbed} points de dégâts grâce à un bouclier")

        if remaining > 0 and defender.dodge:
            defender.dodge = False
            result.dodged = True
            log.add(f"💨 {defender.name} esquive habilement l'attaque !")
            return result

        if remaining > 0:
            self._lose_hp(defender, remaining, accumulate=True, log=log)
            result.inflicted = remaining

            if defender.reflect > 0 and defender.is_alive():
                result.reflected = self._riposte(defender, attacker, remaining, log)

        self.check_revive(defender, attacker, log)
        return result

    def apply_direct(
        self,
        target: CombatantState,
        amount: int,
        source: CombatantState | None,
        log: ActionLog,
    ) -> int:
        """Apply raw HP damage that ignores shield, dodge and reflect."""
        if amount <= 0:
            return 0
        self._lose_hp(target, amount, accumulate=False, log=log)
        self.check_revive(target, source, log)
        return amount

    def tick_bleed(self, target: CombatantState, source: CombatantState, log: ActionLog) -> int:
        """Resolve bleed at the start of the bleeding combatant's own action.

        Returns:
            HP lost to bleeding (0 when not bleeding)
        """
        if target.bleed_stacks <= 0:
            return 0
        if target.bleed_percent_per_stack:
            damage = max(1, round_half_away_from_zero(target.max_hp * target.bleed_percent_per_stack * target.bleed_stacks))
        else:
            damage = math.ceil(target.bleed_stacks / RACES.lycan_bleed_divisor)
        if target.awakening and target.awakening.damage_taken_multiplier:
            damage = max(1, scale(damage, target.awakening.damage_taken_multiplier))
        target.current_hp -= damage
        log.add(f"🩸 {target.name} saigne abondamment et perd {damage} points de vie")
        self.check_revive(target, source, log)
        return damage

    def consume_stun(self, actor: CombatantState, log: ActionLog) -> bool:
        """Spend one stunned turn. Returns True if the actor loses its action."""
        if actor.stunned_turns <= 0:
            return False
        actor.stunned_turns -= 1
        log.add(f"😵 {actor.name} est étourdi et ne peut pas agir ce tour")
        return True

    def stun(self, target: CombatantState, turns: int, log: ActionLog) -> bool:
        """Stun a target for a number of its actions. Returns True if applied."""
        if target.boss is not None and target.boss.stun_immune:
            log.add(f"🐲 {target.name} est insensible à l'étourdissement")
            return False
        target.stunned_turns = max(target.stunned_turns, turns)
        return True

    def check_revive(
        self,
        target: CombatantState,
        killer: CombatantState | None,
        log: ActionLog,
    ) -> bool:
        """Revive an undead combatant that just reached 0 HP, once per match.

        An awakened undead also explodes on its killer before standing up.

        Returns:
            True if the combatant was revived
        """
        if target.is_alive() or not target.can_revive():
            return False

        awakening = target.awakening
        percent = RACES.undead_revive_percent
        if awakening is not None and awakening.revive_percent is not None:
            percent = awakening.revive_percent
        revive = max(1, round_half_away_from_zero(percent * target.max_hp))
        target.undead_used = True

        if killer is not None and awakening is not None and awakening.explosion_percent > 0:
            explosion = max(1, round_half_away_from_zero(awakening.explosion_percent * target.max_hp))
            if killer.awakening and killer.awakening.damage_taken_multiplier:
                explosion = max(1, scale(explosion, killer.awakening.damage_taken_multiplier))
            log.add(f"💥 L'éveil de {target.name} explose et inflige {explosion} dégâts à {killer.name}")
            self.apply_direct(killer, explosion, None, log)

        target.current_hp = revive
        log.add(f"☠️ {target.name} ressuscite d'entre les morts et revient avec {revive} points de vie !")
        return True

    def _riposte(self, defender: CombatantState, attacker: CombatantState, taken: int, log: ActionLog) -> int:
        """Return a share of a hit to the attacker and disarm the reflect.

        The riposte skips shield, dodge and the Masochiste accumulator. Its
        lines are deferred so they follow the line of the hit that caused it.

        Returns:
            HP taken from the attacker
        """
        back = round_half_away_from_zero(defender.reflect * taken)
        defender.reflect = 0.0
        if back <= 0:
            return 0

        riposte_log = ActionLog(log.tag)
        riposte_log.add(f"🔁 {defender.name} riposte et renvoie {back} points de dégâts à {attacker.name}")
        attacker.current_hp -= back
        self.check_revive(attacker, defender, riposte_log)
        log.defer(riposte_log.lines)
        return back

    def _lose_hp(self, target: CombatantState, amount: int, accumulate: bool, log: ActionLog) -> None:
        target.current_hp -= amount
        if accumulate:
            target.maso_taken += amount
        if target.awakening and target.awakening.damage_stack_bonus:
            target.damage_taken_stacks += 1
        self._check_enrage(target, log)

    def _check_enrage(self, target: CombatantState, log: ActionLog) -> None:
        boss = target.boss
        if boss is None or not boss.enrage_threshold or target.enraged or not target.is_alive():
            return
        if target.current_hp > target.max_hp * boss.enrage_threshold:
            return
        target.enraged = True
        factor = 1 + boss.enrage_bonus
        target.stats = replace(target.stats, auto=scale(target.stats.auto, factor), cap=scale(target.stats.cap, factor))
        log.add(
            f"🔥 {target.name} entre en furie et gagne +{round_half_away_from_zero(boss.enrage_bonus * 100)}% ATK et CAP !"
        )
