"""Match orchestrator - runs a full match from two records to a replay."""

import logging
import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..config import Settings, get_settings
from ..schemas import CombatantRecord, validate_match_input
from .abilities import AbilityResolver
from .replay import ReplayLog, ReplayStep
from .stats import StatResolver
from .status import StatusEffectEngine
from .turn import TurnScheduler
from .types import CombatantState

logger = logging.getLogger(__name__)


class MatchEndReason(str, Enum):
    """How a match ended."""

    KNOCKOUT = "knockout"
    MUTUAL = "mutual"  # Both sides fell during the same action
    TURN_CAP = "turn_cap"


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a match, with its full replay."""

    winner_name: str
    loser_name: str
    winner_side: int
    steps: tuple[ReplayStep, ...]
    turns: int
    reason: MatchEndReason
    p1_max_hp: int
    p2_max_hp: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to the replay payload read by presentation layers."""
        return {
            "winnerName": self.winner_name,
            "steps": [step.to_dict() for step in self.steps],
        }


@dataclass
class EncounterContext:
    """Where a match takes place.

    Arena, dungeon and tournament matches all run through the same engine;
    the context only changes the cap, the banners and the reward hook.
    """

    name: str = "arena"
    max_turns: int | None = None
    player_side: int = 1  # Side of the player facing a boss
    on_victory: Callable[[MatchResult], None] | None = None


class MatchOrchestrator:
    """Runs the turn loop and builds the match result.

    Flow:
    1. Validate both records, resolve stats, build the two states
    2. Intro step with start-of-combat passives
    3. Turns: turn_start step, then one action step per living actor
    4. Terminal check after every action, turn cap after the last turn
    5. Victory step
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        max_turns: int | None = None,
        turn_cap_policy: str | None = None,
        strict_invariants: bool | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.max_turns = max_turns if max_turns is not None else settings.max_turns
        self.turn_cap_policy = turn_cap_policy or settings.turn_cap_policy
        self.strict_invariants = strict_invariants if strict_invariants is not None else settings.strict_invariants
        self.stat_resolver = StatResolver()
        self.scheduler = TurnScheduler()

    def build_state(self, record: CombatantRecord, side: int) -> CombatantState:
        """Build the starting state of one side."""
        return CombatantState.from_stats(record, self.stat_resolver.resolve(record), side, strict=self.strict_invariants)

    def simulate(
        self,
        c1: CombatantRecord | Mapping[str, Any],
        c2: CombatantRecord | Mapping[str, Any],
        rng: random.Random,
        encounter: EncounterContext | None = None,
    ) -> MatchResult:
        """Simulate a complete match.

        Args:
            c1: First-listed combatant (side 1)
            c2: Second combatant (side 2)
            rng: Random source owned by this match; same seed, same replay
            encounter: Optional context (dungeon floor, tournament round)

        Returns:
            MatchResult with winner and replay steps

        Raises:
            pydantic.ValidationError: If a record breaks the input contract.
                Nothing is simulated in that case.
        """
        record1, record2 = validate_match_input(c1, c2)
        encounter = encounter or EncounterContext()
        max_turns = encounter.max_turns if encounter.max_turns is not None else self.max_turns

        p1 = self.build_state(record1, 1)
        p2 = self.build_state(record2, 2)
        resolver = AbilityResolver(rng, StatusEffectEngine())
        replay = ReplayLog()

        logger.debug(
            "Match %s: %s (%d HP) vs %s (%d HP), max %d turns",
            encounter.name,
            p1.name,
            p1.max_hp,
            p2.name,
            p2.max_hp,
            max_turns,
        )

        intro = [f"⚔️ Le combat épique commence entre {p1.name} et {p2.name} !"]
        intro.extend(resolver.start_of_combat(p1, p2))
        replay.intro(intro, p1, p2)

        winner: CombatantState | None = None
        reason = MatchEndReason.KNOCKOUT
        turn = 0
        while winner is None and turn < max_turns:
            turn += 1
            replay.turn_start(turn, p1, p2)
            for actor in self.scheduler.order(p1, p2, turn):
                target = p2 if actor is p1 else p1
                if actor.is_defeated() or target.is_defeated():
                    continue
                lines = resolver.resolve_action(actor, target, turn)
                replay.action(actor.side, lines, p1, p2)

                winner, reason = self._decide(actor, target)
                if winner is not None:
                    break

        if winner is None:
            winner = self._turn_cap_winner(p1, p2)
            reason = MatchEndReason.TURN_CAP
            logger.debug("Turn cap reached after %d turns, %s wins by %s", turn, winner.name, self.turn_cap_policy)

        loser = p2 if winner is p1 else p1
        victory = [f"🏆 {winner.name} remporte glorieusement le combat contre {loser.name} !"]
        if loser.side == encounter.player_side and winner.boss is not None:
            victory.append(f"💀 {loser.name} a été vaincu par {winner.name}")
        replay.victory(winner.side, victory, p1, p2)

        result = MatchResult(
            winner_name=winner.name,
            loser_name=loser.name,
            winner_side=winner.side,
            steps=replay.freeze(),
            turns=turn,
            reason=reason,
            p1_max_hp=p1.max_hp,
            p2_max_hp=p2.max_hp,
        )
        logger.debug("Match %s won by %s after %d turns (%s)", encounter.name, winner.name, turn, reason.value)

        if encounter.on_victory is not None and winner.side == encounter.player_side:
            encounter.on_victory(result)
        return result

    @staticmethod
    def _decide(
        actor: CombatantState, target: CombatantState
    ) -> tuple[CombatantState | None, MatchEndReason]:
        """Terminal check after an action. Mutual defeat goes to the actor."""
        actor_down = actor.is_defeated()
        target_down = target.is_defeated()
        if actor_down and target_down:
            return actor, MatchEndReason.MUTUAL
        if target_down:
            return actor, MatchEndReason.KNOCKOUT
        if actor_down:
            return target, MatchEndReason.KNOCKOUT
        return None, MatchEndReason.KNOCKOUT

    def _turn_cap_winner(self, p1: CombatantState, p2: CombatantState) -> CombatantState:
        if self.turn_cap_policy == "hp_fraction" and p2.hp_fraction() > p1.hp_fraction():
            return p2
        return p1


def simulate_match(
    c1: CombatantRecord | Mapping[str, Any],
    c2: CombatantRecord | Mapping[str, Any],
    seed: int | str | None = None,
    encounter: EncounterContext | None = None,
) -> MatchResult:
    """Simulate a match with default settings and a seeded random source."""
    return MatchOrchestrator().simulate(c1, c2, random.Random(seed), encounter)


def resolve_seed(seed: int | str | None) -> int | str:
    """Get a concrete seed, drawing a fresh one when none is given."""
    if seed is not None:
        return seed
    return random.Random().getrandbits(32)
