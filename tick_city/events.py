"""Random events - earthquakes and economic shifts applied between ticks."""
from __future__ import annotations

import random as _random
from dataclasses import dataclass, field
from typing import Any

from tick_city.state import CityState

DEFAULT_EVENT_CHANCE = 0.05
EARTHQUAKE_REPAIR_COST = 500


@dataclass(frozen=True)
class EventOutcome:
    """Record of one applied event.

    Attributes:
        kind: ``"earthquake"``, ``"boom"`` or ``"bust"``.
        message: Human-readable narration for the log channel.
        data: Event details (epicenter, radius, destroyed count, money delta).
    """

    kind: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)


def earthquake(state: CityState, cx: int, cy: int, radius: int) -> EventOutcome:
    """Flatten every built tile within *radius* (Chebyshev) of (cx, cy)."""
    destroyed = 0
    for x, y in state.grid.square(cx, cy, radius):
        if not state.grid.get(x, y).is_empty:
            state.grid.reset(x, y)
            destroyed += 1
    state.pollution = max(0, state.pollution - destroyed)
    state.money -= EARTHQUAKE_REPAIR_COST * destroyed
    return EventOutcome(
        kind="earthquake",
        message=(
            f"Earthquake! Epicenter ({cx},{cy}) radius {radius}, "
            f"destroyed {destroyed} buildings."
        ),
        data={
            "epicenter": (cx, cy),
            "radius": radius,
            "destroyed": destroyed,
            "delta": -EARTHQUAKE_REPAIR_COST * destroyed,
        },
    )


def economic_boom(state: CityState, gain: int) -> EventOutcome:
    state.money += gain
    return EventOutcome(
        kind="boom",
        message=f"Economic boom: extra income of {gain}.",
        data={"gain": gain, "delta": gain},
    )


def economic_bust(state: CityState, loss: int) -> EventOutcome:
    """Charge *loss*; money is floored at zero so the actual delta may be smaller."""
    before = state.money
    state.money = max(0, state.money - loss)
    return EventOutcome(
        kind="bust",
        message=f"Economic downturn: lost {loss} money.",
        data={"loss": loss, "delta": state.money - before},
    )


class EventSystem:
    """Rolls for and applies at most one random event per call.

    All draws come from the injected ``random.Random``; pass a seeded
    instance for reproducible runs.
    """

    def __init__(
        self,
        rng: _random.Random | None = None,
        chance: float = DEFAULT_EVENT_CHANCE,
    ) -> None:
        if not 0.0 <= chance <= 1.0:
            raise ValueError(f"chance must be in [0.0, 1.0], got {chance}")
        self._rng = rng if rng is not None else _random.Random()
        self._chance = chance

    @property
    def rng(self) -> _random.Random:
        return self._rng

    @property
    def chance(self) -> float:
        return self._chance

    def maybe_trigger(self, state: CityState) -> EventOutcome | None:
        if self._rng.random() < self._chance:
            return self.trigger(state)
        return None

    def trigger(self, state: CityState) -> EventOutcome:
        """Apply one event unconditionally: earthquake or economic shift, 50/50."""
        rng = self._rng
        if rng.random() < 0.5:
            cx = rng.randrange(state.width)
            cy = rng.randrange(state.height)
            radius = rng.randint(1, 2)
            return earthquake(state, cx, cy, radius)
        if rng.random() < 0.5:
            return economic_boom(state, 2000 + rng.randrange(2000))
        return economic_bust(state, 1000 + rng.randrange(1500))
