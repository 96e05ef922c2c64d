"""CityState - the authoritative simulation state of one city."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tick_city.config import CityConfig
from tick_city.grid import Grid

RESOURCE_FIELDS = (
    "money",
    "power",
    "water",
    "materials",
    "population",
    "jobs",
    "pollution",
)


@dataclass
class CityState:
    width: int
    height: int
    grid: Grid = field(init=False)
    money: int = 8000
    power: int = 0
    water: int = 0
    materials: int = 200
    population: int = 100
    jobs: int = 60
    pollution: int = 0
    tick_count: int = 0

    def __post_init__(self) -> None:
        self.grid = Grid(self.width, self.height)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("width", "height") and name in self.__dict__:
            raise AttributeError(f"{name} is fixed for the lifetime of a city")
        if name == "grid" and "grid" in self.__dict__ and (
            (value.width, value.height) != (self.width, self.height)
        ):
            raise ValueError(
                f"grid must be {self.width}x{self.height}, "
                f"got {value.width}x{value.height}"
            )
        super().__setattr__(name, value)

    def resources(self) -> dict[str, int]:
        """Return the seven resource counters as a plain dict."""
        return {name: getattr(self, name) for name in RESOURCE_FIELDS}

    def copy(self) -> CityState:
        clone = CityState(self.width, self.height, tick_count=self.tick_count,
                          **self.resources())
        clone.grid = self.grid.copy()
        return clone


def new_city(width: int | None = None, height: int | None = None,
             config: CityConfig | None = None) -> CityState:
    """Create a fresh city with starting resources from *config*.

    Explicit *width* and *height* win over the config's dimensions.
    """
    cfg = config or CityConfig()
    return CityState(
        cfg.width if width is None else width,
        cfg.height if height is None else height,
        money=cfg.money,
        materials=cfg.materials,
        population=cfg.population,
        jobs=cfg.jobs,
    )
