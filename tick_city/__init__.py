"""tick-city - A headless, tick-based city simulation core."""
from tick_city.commands import Build, CommandQueue, CommandResult, Upgrade, build, upgrade
from tick_city.config import CityConfig
from tick_city.economy import (
    TILE_DEFS,
    TileDef,
    build_cost,
    build_materials,
    upgrade_base,
    upgrade_cost,
    upgrade_materials,
)
from tick_city.events import EventOutcome, EventSystem
from tick_city.grid import Grid
from tick_city.log import CityLog, LogEntry
from tick_city.persistence import deserialize, load, save, serialize
from tick_city.session import CitySession
from tick_city.simulation import TickReport, survey, tick
from tick_city.state import CityState, new_city
from tick_city.types import (
    CannotUpgradeEmptyError,
    CityError,
    CorruptSnapshotError,
    InsufficientFundsError,
    InsufficientMaterialsError,
    IoFailureError,
    OutOfBoundsError,
    Tile,
    TileType,
)

__all__ = [
    "Build",
    "CannotUpgradeEmptyError",
    "CityConfig",
    "CityError",
    "CityLog",
    "CitySession",
    "CityState",
    "CommandQueue",
    "CommandResult",
    "CorruptSnapshotError",
    "EventOutcome",
    "EventSystem",
    "Grid",
    "InsufficientFundsError",
    "InsufficientMaterialsError",
    "IoFailureError",
    "LogEntry",
    "OutOfBoundsError",
    "TILE_DEFS",
    "Tile",
    "TileDef",
    "TileType",
    "TickReport",
    "Upgrade",
    "build",
    "build_cost",
    "build_materials",
    "deserialize",
    "load",
    "new_city",
    "save",
    "serialize",
    "survey",
    "tick",
    "upgrade",
    "upgrade_base",
    "upgrade_cost",
    "upgrade_materials",
]
