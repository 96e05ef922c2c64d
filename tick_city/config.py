"""CityConfig - session-wide defaults for a new city."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CityConfig:
    """Immutable settings for a city session.

    Attributes:
        width: Grid columns.
        height: Grid rows.
        money: Starting money.
        materials: Starting materials.
        population: Starting population.
        jobs: Starting jobs.
        tax_rate: Default tax rate used when a step is not given one.
        event_chance: Per-step probability of a random event.
        log_capacity: Maximum retained log entries (0 for unlimited).
        summary_interval: Ticks between summary log lines.
    """

    width: int = 12
    height: int = 12
    money: int = 8000
    materials: int = 200
    population: int = 100
    jobs: int = 60
    tax_rate: float = 0.10
    event_chance: float = 0.05
    log_capacity: int = 200
    summary_interval: int = 10

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"grid dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.materials < 0:
            raise ValueError(f"materials must be >= 0, got {self.materials}")
        if self.population < 0:
            raise ValueError(f"population must be >= 0, got {self.population}")
        if self.jobs < 0:
            raise ValueError(f"jobs must be >= 0, got {self.jobs}")
        if not 0.0 <= self.tax_rate <= 1.0:
            raise ValueError(f"tax_rate must be in [0.0, 1.0], got {self.tax_rate}")
        if not 0.0 <= self.event_chance <= 1.0:
            raise ValueError(
                f"event_chance must be in [0.0, 1.0], got {self.event_chance}"
            )
        if self.log_capacity < 0:
            raise ValueError(f"log_capacity must be >= 0, got {self.log_capacity}")
        if self.summary_interval <= 0:
            raise ValueError(
                f"summary_interval must be positive, got {self.summary_interval}"
            )
