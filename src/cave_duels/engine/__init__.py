"""Combat engine module - stat resolution, action resolution, damage and replays."""

from .abilities import TRIGGER_ORDER, AbilityResolver, Trigger
from .formulas import crit_chance, crit_multiplier, magical_damage, physical_damage, round_half_away_from_zero, tier
from .match import EncounterContext, MatchEndReason, MatchOrchestrator, MatchResult, resolve_seed, simulate_match
from .replay import ActionLog, ReplayLog, ReplayStep, format_steps
from .stats import STAGES, StatResolver
from .status import Hit, HitResult, StatusEffectEngine
from .turn import TurnScheduler
from .types import CombatantState, EffectiveStats, InvariantViolation

__all__ = [
    "StatResolver",
    "STAGES",
    "EffectiveStats",
    "CombatantState",
    "InvariantViolation",
    "round_half_away_from_zero",
    "tier",
    "physical_damage",
    "magical_damage",
    "crit_chance",
    "crit_multiplier",
    "StatusEffectEngine",
    "Hit",
    "HitResult",
    "AbilityResolver",
    "Trigger",
    "TRIGGER_ORDER",
    "TurnScheduler",
    "MatchOrchestrator",
    "MatchResult",
    "MatchEndReason",
    "EncounterContext",
    "simulate_match",
    "resolve_seed",
    "ActionLog",
    "ReplayLog",
    "ReplayStep",
    "format_steps",
]
