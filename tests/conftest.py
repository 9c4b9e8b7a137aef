"""Shared fixtures for engine tests."""

from typing import Any

import pytest

from cave_duels.config import Settings
from cave_duels.engine import ActionLog, CombatantState, MatchOrchestrator

from .factories import make_record


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the environment."""
    return Settings(_env_file=None, max_turns=30, turn_cap_policy="first_listed", strict_invariants=True)


@pytest.fixture
def orchestrator(settings: Settings) -> MatchOrchestrator:
    """Match orchestrator with default rules."""
    return MatchOrchestrator(settings)


@pytest.fixture
def build_state(orchestrator: MatchOrchestrator):
    """Build a combatant state from make_record arguments."""

    def _build(side: int = 1, **kwargs: Any) -> CombatantState:
        kwargs.setdefault("name", f"P{side}")
        return orchestrator.build_state(make_record(**kwargs), side)

    return _build


@pytest.fixture
def action_log() -> ActionLog:
    """Action log tagged for side 1."""
    return ActionLog("[P1]")
