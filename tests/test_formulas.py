"""Tests for damage formulas, rounding and critical hits."""

import pytest

from cave_duels.content import CharacterClass, Race
from cave_duels.engine.formulas import (
    crit_chance,
    crit_multiplier,
    magical_damage,
    physical_damage,
    round_half_away_from_zero,
    scale,
    tier,
)


class TestMitigation:
    """Tests for physical and magical mitigation."""

    def test_physical_hit_after_defense(self):
        """Test 20 attack against 10 defense deals 15."""
        assert physical_damage(20, 10) == 15

    def test_magical_hit_after_resistance(self):
        """Test magical damage subtracts half the resistance."""
        assert magical_damage(30, 20) == 20

    def test_hits_never_below_one(self):
        """Test a landed hit always deals at least 1."""
        assert physical_damage(3, 100) == 1
        assert magical_damage(0, 50) == 1

    def test_half_rounds_away_from_zero(self):
        """Test 20 - 4.5 = 15.5 rounds up to 16."""
        assert physical_damage(20, 9) == 16


class TestRounding:
    """Tests for round-half-away-from-zero."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0.5, 1), (1.5, 2), (2.5, 3), (2.4, 2), (-0.5, -1), (-2.5, -3), (0, 0)],
    )
    def test_rounding(self, value, expected):
        assert round_half_away_from_zero(value) == expected

    def test_scale_identity_keeps_value(self):
        assert scale(17, 1) == 17

    def test_scale_rounds_result(self):
        """Test 15 * 1.5 = 22.5 becomes 23."""
        assert scale(15, 1.5) == 23


class TestTier:
    """Tests for casting stat tiers."""

    @pytest.mark.parametrize("cap,expected", [(0, 0), (14, 0), (15, 1), (29, 1), (30, 2), (44, 2), (-5, 0)])
    def test_tier(self, cap, expected):
        assert tier(cap) == expected


class TestCritical:
    """Tests for crit chance and crit multiplier."""

    def test_base_crit_chance(self, build_state):
        attacker = build_state(1)
        defender = build_state(2)

        assert crit_chance(attacker, defender) == pytest.approx(0.10)

    def test_rogue_gains_crit_per_tier(self, build_state):
        """Test a Voleur with 30 cap gets 10% + 2 x 5%."""
        attacker = build_state(1, character_class=CharacterClass.VOLEUR, cap=30)
        defender = build_state(2)

        assert crit_chance(attacker, defender) == pytest.approx(0.20)

    def test_elf_bonus_only_when_faster(self, build_state):
        """Test the Elfe crit bonus needs more speed than the defender."""
        elf = build_state(1, race=Race.ELFE, spd=20)
        slow = build_state(2, spd=10)
        fast = build_state(2, spd=30)

        assert crit_chance(elf, slow) == pytest.approx(0.30)
        assert crit_chance(elf, fast) == pytest.approx(0.10)

    def test_crit_multipliers(self, build_state):
        """Test the base multiplier is 1.5 and a Voleur's is 2.0."""
        warrior = build_state(1)
        rogue = build_state(1, character_class=CharacterClass.VOLEUR)

        assert crit_multiplier(warrior) == pytest.approx(1.5)
        assert crit_multiplier(rogue) == pytest.approx(2.0)

    def test_laevateinn_adds_crit_damage(self, build_state):
        attacker = build_state(1, weapon_id="dague_legendaire")

        assert crit_multiplier(attacker) == pytest.approx(1.8)
