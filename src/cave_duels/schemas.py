"""Input records for the combat engine, validated with pydantic.

Every lookup the engine needs (weapon, passive, boss) is checked here so a
malformed record fails as a single ValidationError before a match starts.
"""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .content import WEAPONS, BossId, CharacterClass, PassiveId, Race, Stats
from .content.passives import MAX_PASSIVE_LEVEL


class StatBlock(BaseModel):
    """Rolled combat stats of a player combatant."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hp: int = Field(ge=1, description="Maximum hit points")
    auto: int = Field(ge=0, description="Physical attack power")
    defense: int = Field(ge=0, alias="def", description="Physical mitigation")
    cap: int = Field(ge=0, description="Casting stat - scales spells, heals and tiers")
    rescap: int = Field(ge=0, description="Magical mitigation")
    spd: int = Field(ge=0, description="Speed - decides who acts first")

    def to_stats(self) -> Stats:
        return Stats(
            hp=self.hp, auto=self.auto, defense=self.defense, cap=self.cap, rescap=self.rescap, spd=self.spd
        )


class StatDelta(BaseModel):
    """Flat stat adjustments (bonuses, training boosts)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hp: int = 0
    auto: int = 0
    defense: int = Field(default=0, alias="def")
    cap: int = 0
    rescap: int = 0
    spd: int = 0

    def to_stats(self) -> Stats:
        return Stats(
            hp=self.hp, auto=self.auto, defense=self.defense, cap=self.cap, rescap=self.rescap, spd=self.spd
        )


class BonusBreakdown(BaseModel):
    """Informational decomposition of the stored base stats."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    race: StatDelta = Field(default_factory=StatDelta)
    character_class: StatDelta = Field(default_factory=StatDelta, alias="class")


class PassiveRef(BaseModel):
    """Equipped mage tower passive."""

    model_config = ConfigDict(frozen=True)

    id: PassiveId = Field(description="Passive identifier")
    level: int = Field(ge=1, le=MAX_PASSIVE_LEVEL, description="Passive level (1-3)")


class CombatantRecord(BaseModel):
    """One side of a match, immutable for its duration.

    Player records carry a race, a class and rolled base stats. Boss records
    carry a boss_id instead and take their stats from the boss table.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    race: Race | None = None
    character_class: CharacterClass | None = Field(default=None, alias="class")
    level: int = Field(default=1, ge=1)

    base: StatBlock | None = Field(default=None, description="Stored stats: roll + race bonus + class bonus")
    bonuses: BonusBreakdown = Field(default_factory=BonusBreakdown)
    stat_boosts: StatDelta = Field(default_factory=StatDelta, description="Training boosts in stat units")

    weapon_id: str | None = None
    passive: PassiveRef | None = None

    boss_id: BossId | None = None
    stat_modifier: float = Field(default=1.0, gt=0, description="Boss stat multiplier")

    @field_validator("weapon_id")
    @classmethod
    def _known_weapon(cls, value: str | None) -> str | None:
        if value is not None and value not in WEAPONS:
            raise ValueError(f"Unknown weapon: {value}")
        return value

    @model_validator(mode="after")
    def _check_identity(self) -> "CombatantRecord":
        if self.boss_id is not None:
            if self.race is not None or self.character_class is not None:
                raise ValueError("A boss combatant has no race or class")
            return self
        if self.race is None or self.character_class is None:
            raise ValueError("A player combatant needs both a race and a class")
        if self.base is None:
            raise ValueError("A player combatant needs base stats")
        return self

    @property
    def is_boss(self) -> bool:
        return self.boss_id is not None


class MatchInput(BaseModel):
    """Both sides of a match, validated together."""

    p1: CombatantRecord
    p2: CombatantRecord


def validate_combatant(data: CombatantRecord | Mapping[str, Any]) -> CombatantRecord:
    """Validate a single combatant record.

    Raises:
        pydantic.ValidationError: If the record breaks the input contract
    """
    if isinstance(data, CombatantRecord):
        return data
    return CombatantRecord.model_validate(data)


def validate_match_input(
    p1: CombatantRecord | Mapping[str, Any],
    p2: CombatantRecord | Mapping[str, Any],
) -> tuple[CombatantRecord, CombatantRecord]:
    """Validate both sides at once so every problem surfaces in one error.

    Raises:
        pydantic.ValidationError: If either record breaks the input contract
    """
    match_input = MatchInput.model_validate({"p1": p1, "p2": p2})
    return match_input.p1, match_input.p2
