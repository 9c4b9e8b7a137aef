"""Tournament service - single-elimination bracket over the combat engine."""

import logging
import random
from dataclasses import dataclass, field

from ..engine.match import EncounterContext, MatchOrchestrator, MatchResult, resolve_seed
from ..schemas import CombatantRecord

logger = logging.getLogger(__name__)


@dataclass
class BracketMatch:
    """One bracket slot. A match against a BYE is a walkover with no result."""

    id: str
    round: int
    p1: CombatantRecord | None
    p2: CombatantRecord | None
    winner: CombatantRecord | None = None
    result: MatchResult | None = None

    @property
    def is_walkover(self) -> bool:
        return self.p1 is None or self.p2 is None


@dataclass
class TournamentResult:
    """Outcome of a tournament."""

    champion: CombatantRecord
    matches: list[BracketMatch] = field(default_factory=list)

    def played(self) -> list[BracketMatch]:
        """Get the matches that were actually fought."""
        return [match for match in self.matches if match.result is not None]


def next_power_of_two(n: int) -> int:
    size = 1
    while size < n:
        size *= 2
    return size


class Tournament:
    """Seeded single-elimination tournament.

    Every match draws from its own random source derived from the
    tournament seed and the match id, so a replay never depends on the order
    in which matches are evaluated.
    """

    def __init__(
        self,
        records: list[CombatantRecord],
        seed: int | str | None = None,
        orchestrator: MatchOrchestrator | None = None,
    ) -> None:
        if len(records) < 2:
            raise ValueError("A tournament needs at least 2 participants")
        self.records = list(records)
        self.seed = resolve_seed(seed)
        self.orchestrator = orchestrator or MatchOrchestrator()

    def seeding(self) -> list[CombatantRecord | None]:
        """Shuffle the participants and pad the bracket with BYEs (None).

        Each BYE is paired with a participant, never with another BYE.
        """
        shuffled = list(self.records)
        random.Random(f"{self.seed}:bracket").shuffle(shuffled)
        byes = next_power_of_two(len(shuffled)) - len(shuffled)

        slots: list[CombatantRecord | None] = []
        for index, record in enumerate(shuffled):
            slots.append(record)
            if index < byes:
                slots.append(None)
        return slots

    def run(self) -> TournamentResult:
        """Play the whole bracket and return the champion."""
        slots = self.seeding()
        matches: list[BracketMatch] = []
        round_number = 0

        while len(slots) > 1:
            next_slots: list[CombatantRecord | None] = []
            for index in range(0, len(slots), 2):
                match = BracketMatch(
                    id=f"W-{round_number}-{index // 2}", round=round_number, p1=slots[index], p2=slots[index + 1]
                )
                self._play(match)
                matches.append(match)
                next_slots.append(match.winner)
            slots = next_slots
            round_number += 1

        champion = slots[0]
        logger.info("Tournament won by %s after %d rounds", champion.name, round_number)
        return TournamentResult(champion=champion, matches=matches)

    def _play(self, match: BracketMatch) -> None:
        if match.is_walkover:
            match.winner = match.p1 or match.p2
            return
        result = self.orchestrator.simulate(
            match.p1,
            match.p2,
            random.Random(f"{self.seed}:{match.id}"),
            EncounterContext(name=f"tournament:{match.id}"),
        )
        match.result = result
        match.winner = match.p1 if result.winner_side == 1 else match.p2
