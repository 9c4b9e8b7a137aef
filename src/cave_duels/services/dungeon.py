"""Dungeon service - a ladder of boss fights with weapon drops."""

import logging
import random
from dataclasses import dataclass, field

from ..content import WEAPONS, BossId, Rarity, WeaponDefinition
from ..engine.match import EncounterContext, MatchOrchestrator, MatchResult, resolve_seed
from ..schemas import CombatantRecord
from .characters import CharacterFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DungeonLevel:
    """One floor of the dungeon: a boss and the rarity it drops."""

    level: int
    name: str
    boss_id: BossId
    drop_rarity: Rarity
    stat_modifier: float = 1.0


DUNGEON_LEVELS: tuple[DungeonLevel, ...] = (
    DungeonLevel(level=1, name="Repaire des Bandits", boss_id=BossId.BANDIT, drop_rarity=Rarity.COMMUNE),
    DungeonLevel(level=2, name="Forteresse Gobeline", boss_id=BossId.CHEF_GOBELIN, drop_rarity=Rarity.RARE),
    DungeonLevel(level=3, name="Antre du Dragon", boss_id=BossId.DRAGON, drop_rarity=Rarity.LEGENDAIRE),
)


@dataclass
class DungeonResult:
    """Result of a dungeon run. A run that ends in defeat has one more result than floors cleared."""

    levels_cleared: int
    results: list[MatchResult] = field(default_factory=list)
    rewards: list[WeaponDefinition] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        """Check if every floor was cleared."""
        return bool(self.results) and self.levels_cleared == len(self.results)


class DungeonRun:
    """Runs a player through the dungeon floors until the first defeat."""

    def __init__(
        self,
        player: CombatantRecord,
        levels: tuple[DungeonLevel, ...] = DUNGEON_LEVELS,
        seed: int | str | None = None,
        orchestrator: MatchOrchestrator | None = None,
    ) -> None:
        self.player = player
        self.levels = levels
        self.seed = resolve_seed(seed)
        self.orchestrator = orchestrator or MatchOrchestrator()

    def run(self) -> DungeonResult:
        """Fight every floor in order.

        Returns:
            DungeonResult with one match per floor attempted and the drops earned
        """
        result = DungeonResult(levels_cleared=0)
        drop_rng = random.Random(f"{self.seed}:drops")

        for level in self.levels:
            boss = CharacterFactory.create_boss(level.boss_id, level.stat_modifier)
            encounter = EncounterContext(
                name=f"dungeon:{level.level}",
                player_side=1,
                on_victory=lambda _match, floor=level: self._reward(result, floor, drop_rng),
            )
            match = self.orchestrator.simulate(
                self.player, boss, random.Random(f"{self.seed}:{level.level}"), encounter
            )
            result.results.append(match)
            if match.winner_side != 1:
                logger.info("%s fell on floor %d (%s)", self.player.name, level.level, level.name)
                break
            result.levels_cleared += 1

        return result

    @staticmethod
    def _reward(result: DungeonResult, level: DungeonLevel, rng: random.Random) -> None:
        candidates = sorted(
            (weapon for weapon in WEAPONS.values() if weapon.rarity == level.drop_rarity), key=lambda w: w.id
        )
        if not candidates:
            return
        weapon = rng.choice(candidates)
        result.rewards.append(weapon)
        logger.info("Floor %d cleared, dropped %s", level.level, weapon.name)
