"""Stat resolver - turns a combatant record into effective combat stats."""

from dataclasses import replace

from ..content import Awakening, LegendaryEffect, Stats, get_awakening, get_boss, get_weapon, scaled_boss_stats
from ..content.balance import round_half_away_from_zero
from ..schemas import CombatantRecord
from .types import EffectiveStats

# Stage names, in application order
STAGES = (
    "base_roll",
    "race_bonus",
    "class_bonus",
    "training",
    "weapon_stats",
    "weapon_passive",
    "awakening",
)


class StatResolver:
    """Stateless pipeline from a record to effective stats.

    The order is fixed: base roll, racial bonus, class bonus, training
    boosts, weapon flat stats, weapon on-equip bonus, then awakening.
    """

    def resolve(self, record: CombatantRecord) -> EffectiveStats:
        """Resolve the effective stats of a combatant.

        Args:
            record: Validated combatant record

        Returns:
            Effective stats used both for display and for combat
        """
        return self.stages(record)[-1][1]

    def stages(self, record: CombatantRecord) -> list[tuple[str, Stats]]:
        """Resolve every intermediate stat block, for display surfaces.

        Returns:
            (stage name, stats after that stage) pairs in application order
        """
        if record.is_boss:
            boss = get_boss(record.boss_id)
            return [("boss", scaled_boss_stats(boss, record.stat_modifier).floored())]

        race_part = record.bonuses.race.to_stats()
        class_part = record.bonuses.character_class.to_stats()

        stats = record.base.to_stats() - race_part - class_part
        result: list[tuple[str, Stats]] = [("base_roll", stats)]

        stats = stats + race_part
        result.append(("race_bonus", stats))

        stats = stats + class_part
        result.append(("class_bonus", stats))

        stats = stats + record.stat_boosts.to_stats()
        result.append(("training", stats))

        weapon = get_weapon(record.weapon_id)
        if weapon is not None:
            stats = stats + weapon.stats
        result.append(("weapon_stats", stats))

        if weapon is not None and weapon.effect == LegendaryEffect.EGIDE:
            bonus = round_half_away_from_zero(
                stats.defense * weapon.values["def_to_atk_percent"]
                + stats.rescap * weapon.values["rescap_to_atk_percent"]
            )
            stats = replace(stats, auto=stats.auto + bonus)
        result.append(("weapon_passive", stats))

        awakening = get_awakening(record.race, record.level)
        if awakening is not None:
            stats = apply_awakening(stats, awakening)
        result.append(("awakening", stats.floored()))

        return result


def apply_awakening(stats: Stats, awakening: Awakening) -> Stats:
    """Apply an awakening: flat bonuses first, then multipliers, rounding each."""
    if awakening.stat_bonuses:
        stats = replace(
            stats, **{name: getattr(stats, name) + bonus for name, bonus in awakening.stat_bonuses.items()}
        )
    if awakening.stat_multipliers:
        stats = stats.scaled(awakening.stat_multipliers)
    return stats
