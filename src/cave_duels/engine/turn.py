"""Turn scheduler - who acts first each turn."""

from .abilities import has_priority_strike
from .types import CombatantState


class TurnScheduler:
    """Decides the acting order of a turn.

    A Zweihänder priority strike wins when exactly one side has it on this
    turn. Otherwise the faster combatant acts first and speed ties go to
    the first-listed combatant.
    """

    def order(
        self, p1: CombatantState, p2: CombatantState, turn: int
    ) -> tuple[CombatantState, CombatantState]:
        """Get (first actor, second actor) for a turn."""
        p1_priority = has_priority_strike(p1, turn)
        p2_priority = has_priority_strike(p2, turn)
        if p1_priority != p2_priority:
            return (p1, p2) if p1_priority else (p2, p1)

        if p1.stats.spd >= p2.stats.spd:
            return p1, p2
        return p2, p1
