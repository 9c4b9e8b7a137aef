"""Character factory - rolls player records and builds boss records."""

import random
from typing import Any

from ..content import STAT_POINT_VALUES, BossId, CharacterClass, Race, Stats, class_bonus, get_boss, race_bonus
from ..schemas import CombatantRecord, validate_combatant

# Roll ranges, inclusive
HP_ROLL = (120, 200)
STAT_ROLL = (15, 35)


class CharacterFactory:
    """Creates combatant records for duels, dungeons and simulations."""

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    def roll_stats(self) -> Stats:
        """Roll fresh base stats, before race and class bonuses."""
        return Stats(
            hp=self.rng.randint(*HP_ROLL),
            auto=self.rng.randint(*STAT_ROLL),
            defense=self.rng.randint(*STAT_ROLL),
            cap=self.rng.randint(*STAT_ROLL),
            rescap=self.rng.randint(*STAT_ROLL),
            spd=self.rng.randint(*STAT_ROLL),
        )

    def roll_training(self, level: int) -> Stats:
        """Spend one training point per level above 1 on random stats."""
        boosts = dict.fromkeys(STAT_POINT_VALUES, 0)
        names = list(STAT_POINT_VALUES)
        for _ in range(max(0, level - 1)):
            name = self.rng.choice(names)
            boosts[name] += STAT_POINT_VALUES[name]
        return Stats(**boosts)

    def create(
        self,
        name: str,
        race: Race | None = None,
        character_class: CharacterClass | None = None,
        level: int = 1,
        weapon_id: str | None = None,
        passive: dict[str, Any] | None = None,
    ) -> CombatantRecord:
        """Create a player record.

        Args:
            name: Display name
            race: Race, random if None
            character_class: Class, random if None
            level: Character level (training points and awakening)
            weapon_id: Equipped weapon
            passive: Equipped passive as {"id": ..., "level": ...}

        Returns:
            Validated CombatantRecord
        """
        race = race or self.rng.choice(list(Race))
        character_class = character_class or self.rng.choice(list(CharacterClass))

        race_part = race_bonus(race)
        class_part = class_bonus(character_class)
        base = self.roll_stats() + race_part + class_part

        return validate_combatant(
            {
                "name": name,
                "race": race,
                "class": character_class,
                "level": level,
                "base": base.to_dict(),
                "bonuses": {"race": race_part.to_dict(), "class": class_part.to_dict()},
                "stat_boosts": self.roll_training(level).to_dict(),
                "weapon_id": weapon_id,
                "passive": passive,
            }
        )

    @staticmethod
    def create_boss(boss_id: BossId | str, stat_modifier: float = 1.0, name: str | None = None) -> CombatantRecord:
        """Create a boss record. The boss table provides its stats."""
        boss = get_boss(boss_id)
        return validate_combatant(
            {
                "name": name or (boss.name if boss else str(boss_id)),
                "boss_id": boss_id,
                "stat_modifier": stat_modifier,
            }
        )
