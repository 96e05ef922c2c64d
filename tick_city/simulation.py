"""Simulation step - advance a CityState by one tick.

Every cast to an integer truncates toward zero (``int()`` on a float), so
negative intermediate growth values round up, not down. Population and
money trajectories depend on this.
"""
from __future__ import annotations

from dataclasses import dataclass

from tick_city.economy import TILE_DEFS
from tick_city.state import CityState

SUMMARY_INTERVAL = 10
POLLUTION_DECAY = 10
MAINTENANCE_PER_CELL = 0.12
MAINTENANCE_PER_CAPITA = 0.6


@dataclass(frozen=True)
class TickReport:
    """Gross per-tick aggregates of every tile on the grid."""

    residential_capacity: int = 0
    commercial_jobs: int = 0
    industrial_jobs: int = 0
    materials_produced: int = 0
    power_produced: int = 0
    water_produced: int = 0
    pollution_generated: int = 0


def survey(state: CityState) -> TickReport:
    """Sum the contribution of every tile in one pass over the grid."""
    housing = commercial = industrial = materials = power = water = pollution = 0
    for _x, _y, tile in state.grid.cells():
        defn = TILE_DEFS[tile.category]
        level = tile.level
        housing += defn.housing * level
        commercial += defn.commercial_jobs * level
        industrial += defn.industrial_jobs * level
        materials += defn.materials * level
        power += defn.power * level
        water += defn.water * level
        pollution += defn.pollution * level
    return TickReport(
        residential_capacity=housing,
        commercial_jobs=commercial,
        industrial_jobs=industrial,
        materials_produced=materials,
        power_produced=power,
        water_produced=water,
        pollution_generated=pollution,
    )


def shortage_factor(produced: int, needed: int) -> float:
    """Fractional deficit of one utility; 0.0 when supply covers demand."""
    if produced < needed:
        return (needed - produced) / max(1, needed)
    return 0.0


def population_growth(state: CityState, report: TickReport, tax_rate: float) -> int:
    """Signed population change for this tick.

    The tax/pollution multiplier is applied to a possibly negative base, so a
    multiplier below zero turns a shrinking city into a growing one.
    """
    population = state.population
    shortage = shortage_factor(report.power_produced, population)
    shortage += shortage_factor(report.water_produced, population)

    growth = int(population * (1.0 - shortage))

    vacancy = report.residential_capacity - population
    if vacancy < 0:
        growth -= int(abs(vacancy) * 0.5)
    else:
        growth += int(vacancy * 0.5)

    job_gap = max(0, population - state.jobs)
    if job_gap > 0:
        growth -= int(job_gap * 0.03)

    pollution_penalty = max(0, (state.pollution + report.pollution_generated) / 1000.0)
    return int(growth * (1.2 - pollution_penalty - tax_rate))


def tick(
    state: CityState,
    tax_rate: float,
    seconds_elapsed: int = 1,
    summary_interval: int = SUMMARY_INTERVAL,
) -> list[str]:
    """Advance *state* in place by one tick. Returns emitted log lines."""
    if seconds_elapsed != 1:
        raise ValueError(
            f"only unit ticks are supported, got seconds_elapsed={seconds_elapsed}"
        )

    state.tick_count += 1
    report = survey(state)

    # Published supply is gross production; demand only feeds the shortage.
    state.power = max(0, report.power_produced)
    state.water = max(0, report.water_produced)

    growth = population_growth(state, report, tax_rate)
    state.population = max(0, state.population + growth)
    state.jobs = min(state.population, report.commercial_jobs + report.industrial_jobs)
    state.materials += report.materials_produced

    state.money += int(state.population * tax_rate + report.commercial_jobs)
    state.money -= int(
        state.width * state.height * MAINTENANCE_PER_CELL
        + state.population * MAINTENANCE_PER_CAPITA
    )

    state.pollution = max(
        0, state.pollution + report.pollution_generated - POLLUTION_DECAY
    )

    if state.tick_count % summary_interval == 0:
        return [
            f"Tick {state.tick_count}: population={state.population}, "
            f"money={state.money}, jobs={state.jobs}, pollution={state.pollution}"
        ]
    return []
