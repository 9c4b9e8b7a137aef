"""Stat block shared by content tables, the resolver and the engine."""

from dataclasses import dataclass, fields, replace
from typing import Mapping

from .balance import round_half_away_from_zero

# External key for each field ("def" is a Python keyword)
STAT_KEYS: dict[str, str] = {
    "hp": "hp",
    "auto": "auto",
    "defense": "def",
    "cap": "cap",
    "rescap": "rescap",
    "spd": "spd",
}

# A training point is worth 3 HP or 1 of any other stat
STAT_POINT_VALUES: dict[str, int] = {
    "hp": 3,
    "auto": 1,
    "defense": 1,
    "cap": 1,
    "rescap": 1,
    "spd": 1,
}


@dataclass(frozen=True)
class Stats:
    """Six combat stats. Immutable; arithmetic returns new blocks."""

    hp: int = 0
    auto: int = 0
    defense: int = 0
    cap: int = 0
    rescap: int = 0
    spd: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary using the external key names."""
        return {key: getattr(self, name) for name, key in STAT_KEYS.items()}

    def __add__(self, other: "Stats") -> "Stats":
        return Stats(**{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)})

    def __sub__(self, other: "Stats") -> "Stats":
        return Stats(**{f.name: getattr(self, f.name) - getattr(other, f.name) for f in fields(self)})

    def scaled(self, multipliers: Mapping[str, float]) -> "Stats":
        """Multiply the named stats, rounding each result."""
        changes = {
            name: round_half_away_from_zero(getattr(self, name) * factor) for name, factor in multipliers.items()
        }
        return replace(self, **changes)

    def scaled_all(self, factor: float) -> "Stats":
        """Multiply every stat by the same factor, rounding each result."""
        return self.scaled({f.name: factor for f in fields(self)})

    def floored(self) -> "Stats":
        """Clamp every stat at 0 and HP at 1."""
        values = {f.name: max(0, getattr(self, f.name)) for f in fields(self)}
        values["hp"] = max(1, values["hp"])
        return Stats(**values)
