"""Service layer built on the combat engine."""

from .balance import SimulationReport, WinRate, run_simulation
from .characters import CharacterFactory
from .dungeon import DUNGEON_LEVELS, DungeonLevel, DungeonResult, DungeonRun
from .tournament import BracketMatch, Tournament, TournamentResult

__all__ = [
    "CharacterFactory",
    "DungeonRun",
    "DungeonResult",
    "DungeonLevel",
    "DUNGEON_LEVELS",
    "Tournament",
    "TournamentResult",
    "BracketMatch",
    "run_simulation",
    "SimulationReport",
    "WinRate",
]
