"""Tests for replay steps and their serialization."""

from cave_duels.content import StepPhase
from cave_duels.engine import ActionLog, ReplayLog, ReplayStep, format_steps


class TestActionLog:
    """Tests for ActionLog."""

    def test_lines_are_prefixed(self):
        log = ActionLog("[P2]")
        log.add("Beta attaque Alpha et inflige 15 points de dégâts")

        assert log.lines == ["[P2] Beta attaque Alpha et inflige 15 points de dégâts"]


class TestReplayStep:
    """Tests for ReplayStep serialization."""

    def test_action_step_to_dict(self):
        step = ReplayStep(phase=StepPhase.ACTION, logs=("[P1] hit",), p1_hp=100, p2_hp=80, actor=1)

        assert step.to_dict() == {"phase": "action", "actor": 1, "logs": ["[P1] hit"], "p1HP": 100, "p2HP": 80}

    def test_turn_start_to_dict(self):
        step = ReplayStep(phase=StepPhase.TURN_START, logs=("--- Début du tour 2 ---",), p1_hp=1, p2_hp=2, turn=2)

        result = step.to_dict()

        assert result["phase"] == "turn_start"
        assert result["turn"] == 2
        assert "actor" not in result

    def test_shields_only_when_present(self):
        step = ReplayStep(phase=StepPhase.ACTION, logs=(), p1_hp=10, p2_hp=10, p1_shield=0, p2_shield=7)

        result = step.to_dict()

        assert result["p1Shield"] == 0
        assert result["p2Shield"] == 7


class TestReplayLog:
    """Tests for ReplayLog."""

    def test_steps_snapshot_clamped_hp(self, build_state):
        p1 = build_state(1)
        p2 = build_state(2)
        p2.current_hp = -12
        replay = ReplayLog()

        step = replay.action(1, ["[P1] hit"], p1, p2)

        assert step.p2_hp == 0
        assert step.p1_hp == 150

    def test_steps_for_phase(self, build_state):
        p1 = build_state(1)
        p2 = build_state(2)
        replay = ReplayLog()
        replay.intro(["start"], p1, p2)
        replay.turn_start(1, p1, p2)
        replay.action(1, ["[P1] hit"], p1, p2)
        replay.turn_start(2, p1, p2)

        assert len(replay.steps_for_phase(StepPhase.TURN_START)) == 2
        assert replay.freeze()[0].phase == StepPhase.INTRO

    def test_format_readable(self, build_state):
        p1 = build_state(1)
        p2 = build_state(2)
        replay = ReplayLog()
        replay.intro(["⚔️ start"], p1, p2)
        replay.turn_start(1, p1, p2)
        replay.action(1, ["[P1] hit"], p1, p2)
        replay.victory(1, ["🏆 win"], p1, p2)

        text = replay.format_readable()

        assert text == format_steps(replay.steps)
        assert "--- Début du tour 1 ---" in text
        assert "  [P1] hit" in text
        assert "[HP P1=150 P2=150]" in text
        assert text.endswith("🏆 win")
