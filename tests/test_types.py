"""Tests for TileType parsing, Tile validation and the error hierarchy."""
from __future__ import annotations

import pytest

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


class TestTileType:
    def test_eight_categories(self) -> None:
        assert len(TileType) == 8

    def test_parse_persisted_name(self) -> None:
        assert TileType.parse("PowerPlant") is TileType.POWER_PLANT

    def test_parse_member_name(self) -> None:
        assert TileType.parse("water_plant") is TileType.WATER_PLANT
        assert TileType.parse("park") is TileType.PARK

    def test_parse_unknown_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown tile category"):
            TileType.parse("Airport")


class TestTile:
    def test_defaults_to_empty_level_one(self) -> None:
        tile = Tile()
        assert tile.category is TileType.EMPTY
        assert tile.level == 1
        assert tile.is_empty

    def test_level_below_one_raises(self) -> None:
        with pytest.raises(ValueError, match="level must be >= 1"):
            Tile(TileType.ROAD, 0)

    def test_empty_above_level_one_raises(self) -> None:
        with pytest.raises(ValueError, match="Empty tiles must stay at level 1"):
            Tile(TileType.EMPTY, 4)

    def test_made_empty_drops_to_level_one(self) -> None:
        tile = Tile(TileType.ROAD, 3)
        tile.category = TileType.EMPTY
        assert tile == Tile()

    def test_raising_empty_level_raises(self) -> None:
        tile = Tile()
        with pytest.raises(ValueError, match="Empty tiles must stay at level 1"):
            tile.level = 2
        assert tile.level == 1

    def test_equality_by_value(self) -> None:
        assert Tile(TileType.PARK, 2) == Tile(TileType.PARK, 2)
        assert Tile(TileType.PARK, 2) != Tile(TileType.PARK, 3)


class TestErrors:
    @pytest.mark.parametrize(
        "exc",
        [
            OutOfBoundsError(5, 5, 3, 3),
            InsufficientFundsError(100, 10),
            InsufficientMaterialsError(8, 2),
            CannotUpgradeEmptyError(0, 0),
            CorruptSnapshotError("bad"),
            IoFailureError("disk"),
        ],
    )
    def test_all_are_city_errors(self, exc: CityError) -> None:
        assert isinstance(exc, CityError)

    def test_out_of_bounds_is_index_error(self) -> None:
        exc = OutOfBoundsError(-1, 2, 4, 4)
        assert isinstance(exc, IndexError)
        assert (exc.x, exc.y) == (-1, 2)
        assert "out of bounds for 4x4 grid" in str(exc)

    def test_io_failure_is_os_error(self) -> None:
        assert isinstance(IoFailureError("disk full"), OSError)

    def test_corrupt_snapshot_is_value_error(self) -> None:
        assert isinstance(CorruptSnapshotError("x"), ValueError)

    def test_insufficient_funds_carries_amounts(self) -> None:
        exc = InsufficientFundsError(1800, 500)
        assert exc.required == 1800
        assert exc.available == 500
