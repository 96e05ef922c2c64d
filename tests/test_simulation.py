"""Tests for the per-tick update, pinned with golden values.

All casts truncate toward zero; several expectations below differ from
what floor division would give.
"""
from __future__ import annotations

import random

import pytest

from tick_city import build, new_city
from tick_city.simulation import population_growth, shortage_factor, survey, tick
from tick_city.types import TileType


class TestFreshCityTick:
    """Empty 12x12 grid, one tick at 10% tax: full power and water shortage."""

    def test_golden_values(self, city) -> None:
        messages = tick(city, 0.10)
        assert messages == []
        assert city.tick_count == 1
        assert city.power == 0
        assert city.water == 0
        # growth: -100 - 50 - 1 = -151, times 1.1 -> -166, clamped at zero
        assert city.population == 0
        assert city.jobs == 0
        assert city.pollution == 0
        assert city.materials == 200
        # taxes 0, maintenance trunc(144 * 0.12) = 17
        assert city.money == 8000 - 17

    def test_growth_value(self, city) -> None:
        report = survey(city)
        assert population_growth(city, report, 0.10) == -166


class TestPartialShortage:
    """PowerPlant and WaterPlant give 60 each against a demand of 100."""

    @pytest.fixture
    def plants(self, city):
        build(city, 0, 0, TileType.POWER_PLANT)
        build(city, 1, 0, TileType.WATER_PLANT)
        return city

    def test_setup_costs(self, plants) -> None:
        assert plants.money == 8000 - 1800 - 1600
        assert plants.materials == 200 - 80 - 70

    def test_shortage_factor(self, plants) -> None:
        assert shortage_factor(60, 100) == pytest.approx(0.4)
        report = survey(plants)
        assert report.power_produced == 60
        assert report.water_produced == 60
        assert report.pollution_generated == 6

    def test_golden_values(self, plants) -> None:
        tick(plants, 0.10)
        assert plants.power == 60
        assert plants.water == 60
        # growth: 19 - 50 - 1 = -32, times 1.094 = -35.008 -> -35 (not -36)
        assert plants.population == 65
        assert plants.jobs == 0
        assert plants.materials == 50
        # taxes trunc(6.5) = 6, maintenance trunc(17.28 + 39) = 56
        assert plants.money == 4600 + 6 - 56
        assert plants.pollution == 0


class TestShortageFactor:
    def test_no_shortage(self) -> None:
        assert shortage_factor(120, 100) == 0.0
        assert shortage_factor(100, 100) == 0.0

    def test_full_shortage(self) -> None:
        assert shortage_factor(0, 100) == 1.0

    def test_zero_demand(self) -> None:
        assert shortage_factor(0, 0) == 0.0


class TestAggregation:
    def test_levels_scale_contributions(self, city) -> None:
        city.grid.set(0, 0, TileType.RESIDENTIAL, 3)
        city.grid.set(1, 0, TileType.COMMERCIAL, 2)
        city.grid.set(2, 0, TileType.INDUSTRIAL, 2)
        city.grid.set(3, 0, TileType.PARK, 1)
        city.grid.set(4, 0, TileType.ROAD, 5)
        report = survey(city)
        assert report.residential_capacity == 30
        assert report.commercial_jobs == 24
        assert report.industrial_jobs == 16
        assert report.materials_produced == 12
        assert report.pollution_generated == 8 - 5

    def test_parks_can_push_generation_negative(self, city) -> None:
        city.grid.set(0, 0, TileType.PARK, 2)
        assert survey(city).pollution_generated == -10


class TestTickEffects:
    def test_materials_accumulate(self, city) -> None:
        city.grid.set(0, 0, TileType.INDUSTRIAL, 2)
        tick(city, 0.10)
        assert city.materials == 212

    def test_pollution_decays_by_ten(self, city) -> None:
        city.pollution = 25
        tick(city, 0.10)
        assert city.pollution == 15

    def test_pollution_accumulates(self, city) -> None:
        city.grid.set(0, 0, TileType.POWER_PLANT, 3)
        tick(city, 0.10)
        assert city.pollution == 18 - 10

    def test_commercial_jobs_are_taxed(self, city) -> None:
        city.population = 0
        city.jobs = 0
        city.grid.set(0, 0, TileType.COMMERCIAL, 1)
        tick(city, 0.10)
        assert city.money == 8000 + 12 - 17

    def test_money_can_go_negative(self, city) -> None:
        city.money = 5
        tick(city, 0.10)
        assert city.money == 5 - 17

    def test_jobs_capped_by_population(self, city) -> None:
        city.grid.set(0, 0, TileType.COMMERCIAL, 20)
        tick(city, 0.10)
        assert city.jobs <= city.population

    def test_tax_and_multiplier_sign_flip(self, city) -> None:
        # A negative base times a negative multiplier grows the city.
        tick(city, 2.0)
        assert city.population == 100 + 120

    def test_unit_ticks_only(self, city) -> None:
        with pytest.raises(ValueError, match="only unit ticks"):
            tick(city, 0.10, seconds_elapsed=2)


class TestSummaryLog:
    def test_every_tenth_tick(self, city) -> None:
        logged = []
        for _ in range(10):
            logged.append(tick(city, 0.10))
        assert all(m == [] for m in logged[:9])
        assert logged[9] == [
            "Tick 10: population=0, money=7830, jobs=0, pollution=0"
        ]

    def test_custom_interval(self, city) -> None:
        assert tick(city, 0.10, summary_interval=1) != []


class TestDeterminismAndInvariants:
    def test_same_inputs_same_outputs(self, city) -> None:
        city.grid.set(0, 0, TileType.RESIDENTIAL, 4)
        city.grid.set(1, 1, TileType.POWER_PLANT)
        city.grid.set(2, 2, TileType.INDUSTRIAL, 2)
        twin = city.copy()
        assert tick(city, 0.15) == tick(twin, 0.15)
        assert city == twin

    def test_invariants_hold_on_random_cities(self) -> None:
        rng = random.Random(1234)
        categories = list(TileType)
        for _ in range(20):
            state = new_city(8, 8)
            for x, y in [(rng.randrange(8), rng.randrange(8)) for _ in range(30)]:
                category = rng.choice(categories)
                level = 1 if category is TileType.EMPTY else rng.randint(1, 4)
                state.grid.set(x, y, category, level)
            tax = rng.choice([0.0, 0.1, 0.5, 1.0])
            for _ in range(30):
                tick(state, tax)
                assert state.population >= 0
                assert state.pollution >= 0
                assert state.jobs <= state.population
