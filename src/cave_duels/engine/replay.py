"""Replay log - the ordered, structured step stream a match produces.

Log line tagging is an external contract read by presentation layers:
- actor lines are prefixed with "[P1] " or "[P2] "
- system lines (intro banner, turn separators, victory banner) are untagged
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..content import StepPhase

if TYPE_CHECKING:
    from .types import CombatantState


class ActionLog:
    """Collects the lines of one action, each prefixed with the actor tag.

    Deferred lines wait until the next flush, so a reaction can be logged
    after the line of the event that caused it.
    """

    def __init__(self, tag: str) -> None:
        self.tag = tag
        self.lines: list[str] = []
        self.pending: list[str] = []

    def add(self, message: str) -> None:
        """Add a tagged line."""
        self.lines.append(f"{self.tag} {message}")

    def defer(self, lines: list[str]) -> None:
        """Hold already tagged lines until the next flush."""
        self.pending.extend(lines)

    def flush(self) -> list[str]:
        """Move deferred lines to the log and return every line."""
        self.lines.extend(self.pending)
        self.pending.clear()
        return self.lines


@dataclass(frozen=True)
class ReplayStep:
    """One discrete unit of the replay, with the HP/shield snapshot after it."""

    phase: StepPhase
    logs: tuple[str, ...]
    p1_hp: int
    p2_hp: int
    p1_shield: int = 0
    p2_shield: int = 0
    actor: int | None = None  # 1 or 2 on action and victory steps
    turn: int | None = None  # Set on turn_start steps

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {"phase": self.phase.value}
        if self.turn is not None:
            result["turn"] = self.turn
        if self.actor is not None:
            result["actor"] = self.actor
        result["logs"] = list(self.logs)
        result["p1HP"] = self.p1_hp
        result["p2HP"] = self.p2_hp
        if self.p1_shield or self.p2_shield:
            result["p1Shield"] = self.p1_shield
            result["p2Shield"] = self.p2_shield
        return result


@dataclass
class ReplayLog:
    """Append-only log of replay steps for one match."""

    steps: list[ReplayStep] = field(default_factory=list)

    def _append(
        self,
        phase: StepPhase,
        logs: list[str],
        p1: "CombatantState",
        p2: "CombatantState",
        actor: int | None = None,
        turn: int | None = None,
    ) -> ReplayStep:
        step = ReplayStep(
            phase=phase,
            logs=tuple(logs),
            p1_hp=p1.displayed_hp(),
            p2_hp=p2.displayed_hp(),
            p1_shield=max(0, p1.shield),
            p2_shield=max(0, p2.shield),
            actor=actor,
            turn=turn,
        )
        self.steps.append(step)
        return step

    def intro(self, logs: list[str], p1: "CombatantState", p2: "CombatantState") -> ReplayStep:
        """Log the intro step."""
        return self._append(StepPhase.INTRO, logs, p1, p2)

    def turn_start(self, turn: int, p1: "CombatantState", p2: "CombatantState") -> ReplayStep:
        """Log the start of a turn with its separator line."""
        return self._append(StepPhase.TURN_START, [f"--- Début du tour {turn} ---"], p1, p2, turn=turn)

    def action(self, actor: int, logs: list[str], p1: "CombatantState", p2: "CombatantState") -> ReplayStep:
        """Log one combatant's action."""
        return self._append(StepPhase.ACTION, logs, p1, p2, actor=actor)

    def victory(self, winner: int, logs: list[str], p1: "CombatantState", p2: "CombatantState") -> ReplayStep:
        """Log the victory step."""
        return self._append(StepPhase.VICTORY, logs, p1, p2, actor=winner)

    def freeze(self) -> tuple[ReplayStep, ...]:
        """Get an immutable copy of the steps."""
        return tuple(self.steps)

    def steps_for_phase(self, phase: StepPhase) -> list[ReplayStep]:
        """Get all steps of a specific phase."""
        return [step for step in self.steps if step.phase == phase]

    def to_dict(self) -> list[dict[str, Any]]:
        """Convert to a list of dictionaries for serialization."""
        return [step.to_dict() for step in self.steps]

    def format_readable(self) -> str:
        """Format the replay in a human-readable format."""
        return format_steps(self.steps)


def format_steps(steps: "list[ReplayStep] | tuple[ReplayStep, ...]") -> str:
    """Format replay steps as text, one log line per row with HP after each step."""
    lines: list[str] = []
    for step in steps:
        match step.phase:
            case StepPhase.TURN_START:
                lines.append("")
                lines.extend(step.logs)
            case StepPhase.ACTION:
                lines.extend(f"  {line}" for line in step.logs)
                hp = f"    [HP P1={step.p1_hp} P2={step.p2_hp}"
                if step.p1_shield or step.p2_shield:
                    hp += f" | Bouclier P1={step.p1_shield} P2={step.p2_shield}"
                lines.append(hp + "]")
            case StepPhase.VICTORY:
                lines.append("")
                lines.extend(step.logs)
            case _:
                lines.extend(step.logs)
    return "\n".join(lines)
