"""Tests for the stat resolver pipeline."""

from cave_duels.content import BossId, CharacterClass, Race, Stats
from cave_duels.engine import STAGES, StatResolver
from cave_duels.schemas import CombatantRecord

from .factories import make_record


class TestStatResolver:
    """Tests for StatResolver."""

    def _create_dwarf_warrior(self, **extra) -> CombatantRecord:
        """Dwarf warrior whose stored base includes +10 HP, +4 DEF and +3 ATK."""
        return make_record(
            race=Race.NAIN,
            character_class=CharacterClass.GUERRIER,
            hp=160,
            auto=23,
            defense=24,
            cap=15,
            rescap=15,
            spd=15,
            bonuses={"race": {"hp": 10, "def": 4}, "class": {"auto": 3}},
            **extra,
        )

    def test_stage_order(self):
        """Test the stages come out in the fixed application order."""
        stages = StatResolver().stages(self._create_dwarf_warrior())

        assert tuple(name for name, _ in stages) == STAGES

    def test_base_roll_removes_bonuses(self):
        """Test the stored base is decomposed into roll, race and class."""
        stages = dict(StatResolver().stages(self._create_dwarf_warrior()))

        assert stages["base_roll"] == Stats(hp=150, auto=20, defense=20, cap=15, rescap=15, spd=15)
        assert stages["race_bonus"] == Stats(hp=160, auto=20, defense=24, cap=15, rescap=15, spd=15)
        assert stages["class_bonus"] == Stats(hp=160, auto=23, defense=24, cap=15, rescap=15, spd=15)

    def test_training_boosts_are_added(self):
        record = self._create_dwarf_warrior(stat_boosts={"hp": 9, "auto": 2})

        stats = StatResolver().resolve(record)

        assert stats.hp == 169
        assert stats.auto == 25

    def test_weapon_stats_are_added(self):
        record = self._create_dwarf_warrior(weapon_id="epee_legendaire")

        stats = StatResolver().resolve(record)

        assert stats.auto == 33
        assert stats.spd == 5

    def test_egide_converts_defenses_to_attack(self):
        """Test the Égide adds 10% of DEF and RESCAP to ATK after its own stats."""
        record = self._create_dwarf_warrior(weapon_id="bouclier_legendaire")

        stages = dict(StatResolver().stages(record))

        # DEF 24+5, RESCAP 15+5 -> round(2.9 + 2.0) = 5
        assert stages["weapon_stats"].auto == 23
        assert stages["weapon_passive"].auto == 28

    def test_awakening_needs_level(self):
        """Test a Humain gets +10% on every stat at level 100 only."""
        below = make_record(level=99)
        awakened = make_record(level=100)

        assert StatResolver().resolve(below) == Stats(hp=150, auto=20, defense=10, cap=10, rescap=10, spd=10)
        assert StatResolver().resolve(awakened) == Stats(hp=165, auto=22, defense=11, cap=11, rescap=11, spd=11)

    def test_awakening_flat_bonus_before_multiplier(self):
        """Test the Elfe awakening adds +5 SPD and multiplies ATK and CAP."""
        record = make_record(race=Race.ELFE, level=100, auto=20, cap=20, spd=10)

        stats = StatResolver().resolve(record)

        assert stats.auto == 21
        assert stats.cap == 21
        assert stats.spd == 15

    def test_stats_are_floored(self):
        """Test negative results clamp at 0."""
        record = make_record(spd=3, weapon_id="epee_legendaire")

        assert StatResolver().resolve(record).spd == 0

    def test_boss_uses_boss_table(self):
        record = CombatantRecord.model_validate({"name": "Boss", "boss_id": BossId.BANDIT})

        stats = StatResolver().resolve(record)

        assert stats == Stats(hp=100, auto=18, defense=12, cap=8, rescap=10, spd=22)

    def test_boss_stat_modifier(self):
        record = CombatantRecord.model_validate({"name": "Boss", "boss_id": BossId.BANDIT, "stat_modifier": 2.0})

        stats = StatResolver().resolve(record)

        assert stats.hp == 200
        assert stats.spd == 44
