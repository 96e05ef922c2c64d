"""Economy tables - build, upgrade and yield figures per tile category."""
from __future__ import annotations

from dataclasses import dataclass

from tick_city.types import Tile, TileType

DEFAULT_UPGRADE_BASE = 100


@dataclass(frozen=True)
class TileDef:
    """Immutable per-category economy row.

    Attributes:
        category: Tile category this row describes.
        build_cost: Money charged to build at level 1.
        build_materials: Materials charged to build; also the per-level
            material charge for upgrades.
        upgrade_base: Money per current level charged to upgrade.
        housing: Residential capacity per level.
        commercial_jobs: Commercial jobs provided per level.
        industrial_jobs: Industrial jobs provided per level.
        materials: Materials produced per level per tick.
        power: Power produced per level per tick.
        water: Water produced per level per tick.
        pollution: Pollution generated per level per tick (negative cleans).
    """

    category: TileType
    build_cost: int = 0
    build_materials: int = 0
    upgrade_base: int = DEFAULT_UPGRADE_BASE
    housing: int = 0
    commercial_jobs: int = 0
    industrial_jobs: int = 0
    materials: int = 0
    power: int = 0
    water: int = 0
    pollution: int = 0

    def __post_init__(self) -> None:
        if self.build_cost < 0:
            raise ValueError(f"build_cost must be >= 0, got {self.build_cost}")
        if self.build_materials < 0:
            raise ValueError(
                f"build_materials must be >= 0, got {self.build_materials}"
            )


TILE_DEFS: dict[TileType, TileDef] = {
    d.category: d
    for d in (
        TileDef(TileType.EMPTY),
        TileDef(TileType.RESIDENTIAL, 300, 12, 200, housing=10),
        TileDef(TileType.COMMERCIAL, 600, 25, 400, commercial_jobs=12),
        TileDef(TileType.INDUSTRIAL, 900, 35, 600, industrial_jobs=8, materials=6, pollution=4),
        TileDef(TileType.POWER_PLANT, 1800, 80, 1200, power=60, pollution=6),
        TileDef(TileType.WATER_PLANT, 1600, 70, 1000, water=60),
        TileDef(TileType.ROAD, 80, 3),
        TileDef(TileType.PARK, 300, 8, 150, pollution=-5),
    )
}


def build_cost(category: TileType) -> int:
    return TILE_DEFS[category].build_cost


def build_materials(category: TileType) -> int:
    return TILE_DEFS[category].build_materials


def upgrade_base(category: TileType) -> int:
    return TILE_DEFS[category].upgrade_base


def upgrade_cost(tile: Tile) -> int:
    """Money to raise *tile* by one level: base cost times current level."""
    return upgrade_base(tile.category) * tile.level


def upgrade_materials(tile: Tile) -> int:
    """Materials to raise *tile* by one level: build materials times current level."""
    return build_materials(tile.category) * tile.level
