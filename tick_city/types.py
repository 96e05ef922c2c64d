"""Tile categories, the Tile cell value and the error hierarchy."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TileType(Enum):
    """Functional type of a grid cell. Values are the persisted names."""

    EMPTY = "Empty"
    RESIDENTIAL = "Residential"
    COMMERCIAL = "Commercial"
    INDUSTRIAL = "Industrial"
    POWER_PLANT = "PowerPlant"
    WATER_PLANT = "WaterPlant"
    ROAD = "Road"
    PARK = "Park"

    @classmethod
    def parse(cls, name: str) -> TileType:
        """Look up a category by persisted name (``"PowerPlant"``) or member name."""
        try:
            return cls(name)
        except ValueError:
            pass
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown tile category: {name!r}") from None


@dataclass(slots=True)
class Tile:
    """One grid cell. Empty tiles always sit at level 1.

    Making a tile Empty drops its level back to 1.
    """

    category: TileType = TileType.EMPTY
    level: int = 1

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "level":
            if value < 1:
                raise ValueError(f"level must be >= 1, got {value}")
            if value != 1 and getattr(self, "category", None) is TileType.EMPTY:
                raise ValueError(f"Empty tiles must stay at level 1, got {value}")
        object.__setattr__(self, name, value)
        if name == "category" and value is TileType.EMPTY:
            object.__setattr__(self, "level", 1)

    @property
    def is_empty(self) -> bool:
        return self.category is TileType.EMPTY


class CityError(Exception):
    """Base class for recoverable city simulation failures."""


class OutOfBoundsError(CityError, IndexError):
    """Raised when a coordinate lies outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        self.x = x
        self.y = y
        super().__init__(f"({x}, {y}) out of bounds for {width}x{height} grid")


class InsufficientFundsError(CityError):
    """Raised when money does not cover a build or upgrade."""

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(f"Insufficient funds: need {required}, have {available}")


class InsufficientMaterialsError(CityError):
    """Raised when materials do not cover a build or upgrade."""

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient materials: need {required}, have {available}"
        )


class CannotUpgradeEmptyError(CityError):
    """Raised when upgrading a tile that has nothing built on it."""

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        super().__init__(f"Empty tile at ({x}, {y}) cannot be upgraded")


class CorruptSnapshotError(CityError, ValueError):
    """Raised on malformed or out-of-range persisted data."""


class IoFailureError(CityError, OSError):
    """Raised when the storage medium fails during save or load."""
