"""Tests for shield, dodge, reflect, bleed, stun and undead revival."""

import pytest

from cave_duels.content import Race
from cave_duels.engine import Hit, InvariantViolation, StatusEffectEngine

from .factories import make_boss


class TestShieldAndDodge:
    """Tests for the shield -> dodge -> HP order."""

    def test_shield_absorbs_before_dodge(self, build_state, action_log):
        """Test the shield takes its share and the dodge eats the rest."""
        attacker = build_state(1)
        defender = build_state(2)
        defender.shield = 10
        defender.dodge = True

        result = StatusEffectEngine().apply_hit(attacker, defender, Hit(amount=25), action_log)

        assert result.absorbed == 10
        assert result.dodged is True
        assert result.inflicted == 0
        assert defender.shield == 0
        assert defender.dodge is False
        assert defender.current_hp == 150
        assert "absorbe 10" in action_log.lines[0]
        assert "esquive" in action_log.lines[1]

    def test_fully_absorbed_hit_keeps_dodge(self, build_state, action_log):
        attacker = build_state(1)
        defender = build_state(2)
        defender.shield = 30
        defender.dodge = True

        StatusEffectEngine().apply_hit(attacker, defender, Hit(amount=25), action_log)

        assert defender.shield == 5
        assert defender.dodge is True
        assert defender.current_hp == 150

    def test_dodge_consumed_once(self, build_state, action_log):
        attacker = build_state(1)
        defender = build_state(2)
        defender.dodge = True
        engine = StatusEffectEngine()

        first = engine.apply_hit(attacker, defender, Hit(amount=20), action_log)
        second = engine.apply_hit(attacker, defender, Hit(amount=20), action_log)

        assert first.dodged is True
        assert second.dodged is False
        assert defender.current_hp == 130

    def test_direct_damage_ignores_shield(self, build_state, action_log):
        target = build_state(2)
        target.shield = 50

        StatusEffectEngine().apply_direct(target, 10, None, action_log)

        assert target.shield == 50
        assert target.current_hp == 140


class TestReflect:
    """Tests for Paladin-style reflect."""

    def test_reflect_returns_share_to_attacker(self, build_state, action_log):
        attacker = build_state(1)
        defender = build_state(2)
        defender.reflect = 0.5

        result = StatusEffectEngine().apply_hit(attacker, defender, Hit(amount=20), action_log)

        assert result.reflected == 10
        assert defender.current_hp == 130
        assert attacker.current_hp == 140
        assert action_log.flush() == ["[P1] 🔁 P2 riposte et renvoie 10 points de dégâts à P1"]

    def test_riposte_ignores_attacker_shield(self, build_state, action_log):
        attacker = build_state(1)
        defender = build_state(2)
        attacker.shield = 50
        defender.reflect = 0.5

        StatusEffectEngine().apply_hit(attacker, defender, Hit(amount=20), action_log)

        assert attacker.current_hp == 140
        assert attacker.shield == 50
        assert not any("absorbe" in line for line in action_log.flush())

    def test_riposte_ignores_attacker_dodge(self, build_state, action_log):
        attacker = build_state(1)
        defender = build_state(2)
        attacker.dodge = True
        defender.reflect = 0.5

        StatusEffectEngine().apply_hit(attacker, defender, Hit(amount=20), action_log)

        assert attacker.current_hp == 140
        assert attacker.dodge is True

    def test_reflect_fires_once(self, build_state, action_log):
        """Test the reflect is disarmed by its first riposte."""
        attacker = build_state(1)
        defender = build_state(2)
        defender.reflect = 0.5
        engine = StatusEffectEngine()

        first = engine.apply_hit(attacker, defender, Hit(amount=20), action_log)
        second = engine.apply_hit(attacker, defender, Hit(amount=20), action_log)

        assert first.reflected == 10
        assert second.reflected == 0
        assert defender.reflect == 0
        assert attacker.current_hp == 140

    def test_riposte_line_waits_for_flush(self, build_state, action_log):
        attacker = build_state(1)
        defender = build_state(2)
        defender.reflect = 0.5

        StatusEffectEngine().apply_hit(attacker, defender, Hit(amount=20), action_log)

        assert action_log.lines == []
        assert len(action_log.pending) == 1

    def test_reflected_damage_is_not_reflected_back(self, build_state, action_log):
        """Test two reflecting combatants do not bounce damage."""
        attacker = build_state(1)
        defender = build_state(2)
        attacker.reflect = 0.5
        defender.reflect = 0.5

        StatusEffectEngine().apply_hit(attacker, defender, Hit(amount=20), action_log)

        assert defender.current_hp == 130
        assert attacker.current_hp == 140

    def test_no_reflect_from_a_dead_defender(self, build_state, action_log):
        attacker = build_state(1)
        defender = build_state(2)
        defender.current_hp = 10
        defender.reflect = 0.5

        result = StatusEffectEngine().apply_hit(attacker, defender, Hit(amount=20), action_log)

        assert result.reflected == 0
        assert attacker.current_hp == 150

    def test_reflected_damage_does_not_feed_accumulator(self, build_state, action_log):
        """Test only unreflected damage counts toward the Masochiste release."""
        attacker = build_state(1)
        defender = build_state(2)
        defender.reflect = 0.5

        StatusEffectEngine().apply_hit(attacker, defender, Hit(amount=20), action_log)

        assert defender.maso_taken == 20
        assert attacker.maso_taken == 0


class TestBleedAndStun:
    """Tests for bleed ticks and stuns."""

    def test_bleed_tick(self, build_state, action_log):
        """Test 4 stacks deal ceil(4 / 3) = 2."""
        target = build_state(1)
        source = build_state(2)
        target.bleed_stacks = 4

        damage = StatusEffectEngine().tick_bleed(target, source, action_log)

        assert damage == 2
        assert target.current_hp == 148
        assert "saigne abondamment et perd 2" in action_log.lines[0]

    def test_no_bleed_without_stacks(self, build_state, action_log):
        target = build_state(1)

        assert StatusEffectEngine().tick_bleed(target, build_state(2), action_log) == 0
        assert action_log.lines == []

    def test_stun_skips_one_action(self, build_state, action_log):
        target = build_state(2)
        engine = StatusEffectEngine()

        assert engine.stun(target, 1, action_log) is True
        assert engine.consume_stun(target, action_log) is True
        assert engine.consume_stun(target, action_log) is False

    def test_dragon_is_stun_immune(self, orchestrator, action_log):
        dragon = orchestrator.build_state(make_boss("dragon"), 2)

        assert StatusEffectEngine().stun(dragon, 1, action_log) is False
        assert dragon.stunned_turns == 0


class TestUndeadRevive:
    """Tests for the once-per-match undead revival."""

    def test_lethal_hit_revives_undead(self, build_state, action_log):
        """Test an undead brought to 0 HP comes back at 20% of max HP."""
        attacker = build_state(1)
        undead = build_state(2, race=Race.MORT_VIVANT)
        undead.current_hp = 30

        StatusEffectEngine().apply_hit(attacker, undead, Hit(amount=50), action_log)

        assert undead.current_hp == 30
        assert undead.undead_used is True
        assert any("ressuscite" in line for line in action_log.lines)

    def test_revive_happens_once(self, build_state, action_log):
        attacker = build_state(1)
        undead = build_state(2, race=Race.MORT_VIVANT)
        engine = StatusEffectEngine()

        engine.apply_hit(attacker, undead, Hit(amount=200), action_log)
        engine.apply_hit(attacker, undead, Hit(amount=200), action_log)

        assert undead.current_hp <= 0
        assert undead.is_defeated()

    def test_undead_with_revive_left_is_not_defeated(self, build_state):
        undead = build_state(2, race=Race.MORT_VIVANT)
        undead.current_hp = 0

        assert undead.is_defeated() is False


class TestAwakenings:
    """Tests for awakening rules applied around damage."""

    def test_awakened_undead_explodes_and_revives(self, build_state, action_log):
        """Test 30% of max HP hits the killer and the undead stands up at 25%."""
        attacker = build_state(1)
        undead = build_state(2, race=Race.MORT_VIVANT, level=100)
        undead.current_hp = 30

        StatusEffectEngine().apply_hit(attacker, undead, Hit(amount=50), action_log)

        assert attacker.current_hp == 105
        assert undead.current_hp == 38
        assert "[P1] 💥 L'éveil de P2 explose et inflige 45 dégâts à P1" in action_log.lines

    def test_percent_bleed(self, build_state, action_log):
        """Test 4 stacks at 0.5% of 150 max HP lose 3 HP."""
        target = build_state(1)
        target.bleed_stacks = 4
        target.bleed_percent_per_stack = 0.005

        assert StatusEffectEngine().tick_bleed(target, build_state(2), action_log) == 3
        assert target.current_hp == 147

    def test_nain_bleeds_less(self, build_state, action_log):
        """Test 18 stacks deal ceil(18 / 3) = 6, times 0.9 for an awakened Nain."""
        nain = build_state(1, race=Race.NAIN, level=100)
        nain.bleed_stacks = 18

        assert StatusEffectEngine().tick_bleed(nain, build_state(2), action_log) == 5
        assert nain.current_hp == 175

    def test_dragonkin_counts_hits_taken(self, build_state, action_log):
        dragonkin = build_state(2, race=Race.DRAGONKIN, level=100)
        engine = StatusEffectEngine()

        engine.apply_hit(build_state(1), dragonkin, Hit(amount=10), action_log)
        engine.apply_hit(build_state(1), dragonkin, Hit(amount=10), action_log)

        assert dragonkin.damage_taken_stacks == 2


class TestBossStatus:
    """Tests for boss rules applied around damage."""

    def test_dragon_enrages_at_quarter_hp(self, orchestrator, action_log):
        """Test the dragon gains 25% ATK and CAP once at or below 50 of 200 HP."""
        dragon = orchestrator.build_state(make_boss("dragon", name="Dragon"), 2)
        attacker = orchestrator.build_state(make_boss("bandit", name="Bandit"), 1)
        dragon.current_hp = 60

        StatusEffectEngine().apply_hit(attacker, dragon, Hit(amount=15), action_log)

        assert dragon.enraged is True
        assert dragon.stats.auto == 35
        assert dragon.stats.cap == 38
        assert any("entre en furie et gagne +25% ATK et CAP" in line for line in action_log.lines)


class TestInvariants:
    """Tests for state invariant checks."""

    def test_strict_state_raises(self, build_state):
        state = build_state(1)
        state.current_hp = state.max_hp + 5

        with pytest.raises(InvariantViolation):
            state.check_invariants()

    def test_lenient_state_clamps(self, build_state):
        state = build_state(1)
        state.strict = False
        state.current_hp = state.max_hp + 5
        state.shield = -3

        state.check_invariants()

        assert state.current_hp == state.max_hp
        assert state.shield == 0
