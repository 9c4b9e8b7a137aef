"""Type definitions for the combat engine."""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..content import (
    AbilityKey,
    Awakening,
    BossDefinition,
    CharacterClass,
    PassiveDefinition,
    PassiveId,
    Race,
    Stats,
    WeaponDefinition,
    get_awakening,
    get_boss,
    get_passive,
    get_weapon,
)
from ..content.balance import CLASS_ABILITIES, COOLDOWNS

if TYPE_CHECKING:
    from ..schemas import CombatantRecord

logger = logging.getLogger(__name__)

# Output of the stat resolver
EffectiveStats = Stats


class InvariantViolation(AssertionError):
    """An internal engine invariant was broken - a programming error, never bad input."""


@dataclass
class CombatantState:
    """Mutable per-match state of one combatant.

    Created from resolved stats when a match starts and discarded with the
    match result. HP may go negative transiently; exported values are clamped.
    """

    name: str
    side: int  # 1 or 2
    stats: EffectiveStats
    max_hp: int
    current_hp: int

    race: Race | None = None
    character_class: CharacterClass | None = None
    boss: BossDefinition | None = None
    awakening: Awakening | None = None
    weapon: WeaponDefinition | None = None
    passive: PassiveDefinition | None = None
    passive_level: int = 0

    shield: int = 0

    # Cooldown counter per owned ability; wraps in [1, interval] once advanced
    cooldowns: dict[AbilityKey, int] = field(default_factory=dict)
    intervals: dict[AbilityKey, int] = field(default_factory=dict)

    # Status flags
    dodge: bool = False
    reflect: float = 0.0  # Armed reflect percentage, 0 when unarmed
    undead_used: bool = False
    stunned_turns: int = 0
    bleed_stacks: int = 0
    bleed_percent_per_stack: float | None = None

    # Class accumulators
    maso_taken: int = 0
    familiar_stacks: int = 0

    # Awakening runtime
    incoming_hits_remaining: int = 0
    damage_taken_stacks: int = 0

    # Weapon runtime
    weapon_attacks: int = 0
    weapon_spells: int = 0
    gungnir_used: bool = False
    atk_debuffed: bool = False

    # Passive runtime (set on the marked combatant)
    spectral_mark_bonus: float = 0.0

    # Boss runtime
    enraged: bool = False

    strict: bool = True

    @classmethod
    def from_stats(
        cls,
        record: "CombatantRecord",
        stats: EffectiveStats,
        side: int,
        strict: bool = True,
    ) -> "CombatantState":
        """Create the starting state of a combatant from its resolved stats.

        Args:
            record: Validated combatant record
            stats: Output of the stat resolver for this record
            side: 1 for the first-listed combatant, 2 for the other
            strict: Raise on invariant violations instead of clamping

        Returns:
            A fresh CombatantState at full HP
        """
        boss = get_boss(record.boss_id)
        awakening = get_awakening(record.race, record.level)
        passive = get_passive(record.passive.id) if record.passive else None

        intervals: dict[AbilityKey, int] = {}
        if record.character_class is not None:
            key = CLASS_ABILITIES[record.character_class]
            intervals[key] = COOLDOWNS[key]
        if boss is not None:
            intervals[AbilityKey.BOSS] = boss.cooldown

        return cls(
            name=record.name,
            side=side,
            stats=stats,
            max_hp=stats.hp,
            current_hp=stats.hp,
            race=record.race,
            character_class=record.character_class,
            boss=boss,
            awakening=awakening,
            weapon=get_weapon(record.weapon_id),
            passive=passive,
            passive_level=record.passive.level if record.passive else 0,
            cooldowns={key: 0 for key in intervals},
            intervals=intervals,
            incoming_hits_remaining=awakening.incoming_hit_count if awakening else 0,
            strict=strict,
        )

    @property
    def tag(self) -> str:
        """Log prefix of this combatant's lines."""
        return f"[P{self.side}]"

    def is_alive(self) -> bool:
        """Check if the combatant is above 0 HP."""
        return self.current_hp > 0

    def can_revive(self) -> bool:
        """Check if an undead revival is still available."""
        return self.race == Race.MORT_VIVANT and not self.undead_used

    def is_defeated(self) -> bool:
        """Check if the combatant is down with no revival left."""
        return not self.is_alive() and not self.can_revive()

    def hp_fraction(self) -> float:
        """Current HP as a fraction of max HP, clamped to [0, 1]."""
        return max(0, min(self.current_hp, self.max_hp)) / self.max_hp

    def displayed_hp(self) -> int:
        """HP as exported to the replay."""
        return max(0, min(self.current_hp, self.max_hp))

    def has_passive(self, passive_id: PassiveId) -> bool:
        return self.passive is not None and self.passive.id == passive_id

    def passive_value(self, key: str, default: Any = 0) -> Any:
        """Get a tuning value of the equipped passive at its level."""
        if self.passive is None:
            return default
        return self.passive.level_data(self.passive_level).get(key, default)

    def ability_ready(self, key: AbilityKey) -> bool:
        """Check if an ability's counter reached its interval this turn."""
        return key in self.intervals and self.cooldowns[key] == self.intervals[key]

    def advance_cooldowns(self) -> None:
        """Advance every owned cooldown counter by one acting turn."""
        for key, interval in self.intervals.items():
            self.cooldowns[key] = (self.cooldowns[key] % interval) + 1
        for key, interval in self.intervals.items():
            value = self.cooldowns[key]
            if not 1 <= value <= interval:
                self._violation(f"cooldown {key.value}={value} outside [1, {interval}]")
                self.cooldowns[key] = max(1, min(value, interval))

    def heal(self, amount: int) -> int:
        """Restore HP up to max. Returns actual HP restored."""
        if amount <= 0:
            return 0
        actual = max(0, min(self.max_hp - self.current_hp, amount))
        self.current_hp += actual
        return actual

    def check_invariants(self) -> None:
        """Verify the state invariants, raising or clamping per strictness."""
        if self.shield < 0:
            self._violation(f"{self.name} shield={self.shield} is negative")
            self.shield = 0
        if self.current_hp > self.max_hp:
            self._violation(f"{self.name} HP {self.current_hp} exceeds max {self.max_hp}")
            self.current_hp = self.max_hp
        for key, interval in self.intervals.items():
            value = self.cooldowns[key]
            if not 0 <= value <= interval:
                self._violation(f"cooldown {key.value}={value} outside [0, {interval}]")
                self.cooldowns[key] = max(0, min(value, interval))

    def _violation(self, message: str) -> None:
        if self.strict:
            raise InvariantViolation(message)
        logger.warning("Invariant violation clamped: %s", message)
