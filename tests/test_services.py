"""Tests for the character, dungeon, tournament and balance services."""

import random

import pytest

from cave_duels.content import STAT_POINT_VALUES, CharacterClass, Race, Rarity, Stats
from cave_duels.engine import StatResolver
from cave_duels.services import CharacterFactory, DungeonRun, Tournament, run_simulation

from .factories import make_record


class TestCharacterFactory:
    """Tests for CharacterFactory."""

    def test_rolled_stats_in_range(self):
        factory = CharacterFactory(random.Random(0))

        for _ in range(50):
            stats = factory.roll_stats()
            assert 120 <= stats.hp <= 200
            for value in (stats.auto, stats.defense, stats.cap, stats.rescap, stats.spd):
                assert 15 <= value <= 35

    def test_create_stores_bonuses(self):
        """Test the stored base includes race and class bonuses and the roll is recoverable."""
        record = CharacterFactory(random.Random(1)).create("Gimli", Race.NAIN, CharacterClass.GUERRIER)

        assert record.bonuses.race.to_stats() == Stats(hp=10, defense=4)
        assert record.bonuses.character_class.to_stats() == Stats(auto=3)
        base_roll = dict(StatResolver().stages(record))["base_roll"]
        assert 120 <= base_roll.hp <= 200
        assert 15 <= base_roll.auto <= 35

    def test_training_points_per_level(self):
        """Test level 11 spends 10 points, HP points counting for 3."""
        record = CharacterFactory(random.Random(2)).create("Trained", level=11)

        boosts = record.stat_boosts.to_stats()
        points = sum(getattr(boosts, name) // value for name, value in STAT_POINT_VALUES.items())
        assert points == 10
        assert boosts.hp % 3 == 0

    def test_random_race_and_class(self):
        record = CharacterFactory(random.Random(3)).create("Anyone")

        assert record.race in Race
        assert record.character_class in CharacterClass

    def test_create_boss(self):
        record = CharacterFactory.create_boss("dragon")

        assert record.is_boss
        assert record.name == "Vyraxion le Dévoreur"


class TestDungeonRun:
    """Tests for DungeonRun."""

    def test_strong_player_clears_every_floor(self):
        player = make_record(name="Champion", hp=100000, auto=5000, defense=500, rescap=500, spd=200)

        result = DungeonRun(player, seed=1).run()

        assert result.levels_cleared == 3
        assert result.completed
        assert [weapon.rarity for weapon in result.rewards] == [Rarity.COMMUNE, Rarity.RARE, Rarity.LEGENDAIRE]

    def test_run_stops_at_first_defeat(self):
        player = make_record(name="Victim", hp=1, auto=0, defense=0, rescap=0, spd=0)

        result = DungeonRun(player, seed=1).run()

        assert result.levels_cleared == 0
        assert len(result.results) == 1
        assert result.rewards == []
        assert not result.completed


class TestTournament:
    """Tests for the single-elimination tournament."""

    def _create_records(self, count: int):
        factory = CharacterFactory(random.Random(10))
        return [factory.create(f"Fighter {i}") for i in range(count)]

    def test_needs_two_participants(self):
        with pytest.raises(ValueError):
            Tournament(self._create_records(1))

    def test_bracket_padded_with_byes(self):
        tournament = Tournament(self._create_records(5), seed=3)

        slots = tournament.seeding()

        assert len(slots) == 8
        assert slots.count(None) == 3

    def test_champion_is_a_participant(self):
        records = self._create_records(5)

        result = Tournament(records, seed=3).run()

        assert result.champion in records
        assert len(result.matches) == 7
        assert all(match.winner is not None for match in result.matches)

    def test_same_seed_same_champion(self):
        records = self._create_records(6)

        first = Tournament(records, seed="cup").run()
        second = Tournament(records, seed="cup").run()

        assert first.champion.name == second.champion.name
        assert [m.result.to_dict() for m in first.played()] == [m.result.to_dict() for m in second.played()]


class TestBalanceSimulation:
    """Tests for run_simulation."""

    def test_report_counts(self):
        report = run_simulation(10, level=1, seed=4)

        assert sum(rate.combats for rate in report.races) == 20
        assert sum(rate.wins for rate in report.classes) == 10
        assert report.average_turns > 0

    def test_rates_sorted(self):
        report = run_simulation(20, seed=5)

        rates = [rate.rate for rate in report.races]
        assert rates == sorted(rates, reverse=True)

    def test_rejects_empty_run(self):
        with pytest.raises(ValueError):
            run_simulation(0)
