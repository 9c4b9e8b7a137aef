"""Balance simulation - mass random duels with win rates per race and class."""

import logging
import random
from collections import Counter
from dataclasses import dataclass, field

from ..content import StepPhase
from ..engine.match import MatchOrchestrator, resolve_seed
from .characters import CharacterFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WinRate:
    """Win record of one race or class."""

    name: str
    wins: int
    combats: int

    @property
    def rate(self) -> float:
        """Win rate in percent."""
        return 100 * self.wins / self.combats if self.combats else 0.0


@dataclass
class SimulationReport:
    """Aggregated results of a balance simulation."""

    num_combats: int
    level: int
    races: list[WinRate] = field(default_factory=list)
    classes: list[WinRate] = field(default_factory=list)
    average_turns: float = 0.0

    def format_table(self) -> str:
        """Format the report as plain-text tables."""
        lines = [f"{self.num_combats} combats au niveau {self.level}, {self.average_turns:.1f} tours en moyenne", ""]
        for title, rows in (("Races", self.races), ("Classes", self.classes)):
            lines.append(title)
            for row in rows:
                lines.append(f"  {row.name:<12} {row.rate:5.1f}%  ({row.wins}/{row.combats})")
            lines.append("")
        return "\n".join(lines).rstrip()


def _sorted_rates(wins: Counter, combats: Counter) -> list[WinRate]:
    rates = [WinRate(name=name, wins=wins[name], combats=count) for name, count in combats.items()]
    return sorted(rates, key=lambda r: (-r.rate, r.name))


def run_simulation(
    num_combats: int,
    level: int = 1,
    seed: int | str | None = None,
    orchestrator: MatchOrchestrator | None = None,
) -> SimulationReport:
    """Simulate random duels between freshly rolled characters.

    Args:
        num_combats: Number of duels to run
        level: Level of every generated character
        seed: Seed of the whole simulation
        orchestrator: Engine to use (default settings if None)

    Returns:
        SimulationReport sorted by win rate
    """
    if num_combats < 1:
        raise ValueError("num_combats must be at least 1")

    orchestrator = orchestrator or MatchOrchestrator()
    seed = resolve_seed(seed)
    factory = CharacterFactory(random.Random(f"{seed}:characters"))
    race_wins: Counter = Counter()
    race_combats: Counter = Counter()
    class_wins: Counter = Counter()
    class_combats: Counter = Counter()
    total_turns = 0

    for index in range(num_combats):
        p1 = factory.create("P1", level=level)
        p2 = factory.create("P2", level=level)
        result = orchestrator.simulate(p1, p2, random.Random(f"{seed}:{index}"))
        total_turns += sum(1 for step in result.steps if step.phase == StepPhase.TURN_START)

        winner = p1 if result.winner_side == 1 else p2
        for record in (p1, p2):
            race_combats[record.race.value] += 1
            class_combats[record.character_class.value] += 1
        race_wins[winner.race.value] += 1
        class_wins[winner.character_class.value] += 1

        if (index + 1) % 1000 == 0:
            logger.debug("Simulated %d/%d combats", index + 1, num_combats)

    return SimulationReport(
        num_combats=num_combats,
        level=level,
        races=_sorted_rates(race_wins, race_combats),
        classes=_sorted_rates(class_wins, class_combats),
        average_turns=total_turns / num_combats,
    )
