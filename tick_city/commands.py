"""Construction and upgrade commands.

``build`` and ``upgrade`` check every precondition before touching the
state, so a failed command leaves money, materials and the grid unchanged.
``Build`` and ``Upgrade`` are the queued forms a front end can submit
between steps; ``CommandQueue`` applies them in FIFO order.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Union

from tick_city.economy import (
    build_cost,
    build_materials,
    upgrade_cost,
    upgrade_materials,
)
from tick_city.state import CityState
from tick_city.types import (
    CannotUpgradeEmptyError,
    CityError,
    InsufficientFundsError,
    InsufficientMaterialsError,
    TileType,
)


def _charge(state: CityState, money: int, materials: int) -> None:
    if state.money < money:
        raise InsufficientFundsError(money, state.money)
    if state.materials < materials:
        raise InsufficientMaterialsError(materials, state.materials)
    state.money -= money
    state.materials -= materials


def build(state: CityState, x: int, y: int, category: TileType) -> str:
    """Place a level-1 *category* tile at (x, y), replacing whatever was there."""
    state.grid.check_bounds(x, y)
    cost = build_cost(category)
    materials = build_materials(category)
    _charge(state, cost, materials)
    state.grid.set(x, y, category)
    return (
        f"Built {category.value} at ({x},{y}) for {cost} money, "
        f"{materials} materials"
    )


def upgrade(state: CityState, x: int, y: int) -> str:
    """Raise the tile at (x, y) by one level."""
    tile = state.grid.get_mut(x, y)
    if tile.is_empty:
        raise CannotUpgradeEmptyError(x, y)
    _charge(state, upgrade_cost(tile), upgrade_materials(tile))
    tile.level += 1
    return f"Upgraded ({x},{y}) to {tile.category.value} Lv{tile.level}"


@dataclass(frozen=True)
class Build:
    x: int
    y: int
    category: TileType


@dataclass(frozen=True)
class Upgrade:
    x: int
    y: int


Command = Union[Build, Upgrade]


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one queued command; *error* is set when it was rejected."""

    command: Command
    message: str
    error: CityError | None = None

    @property
    def accepted(self) -> bool:
        return self.error is None


def apply(state: CityState, cmd: Command) -> str:
    """Run one command against *state*. Raises the command's CityError."""
    if isinstance(cmd, Build):
        return build(state, cmd.x, cmd.y, cmd.category)
    if isinstance(cmd, Upgrade):
        return upgrade(state, cmd.x, cmd.y)
    raise TypeError(f"Unknown command type {type(cmd).__qualname__}")


class CommandQueue:
    """FIFO of pending commands, drained against a state between ticks."""

    def __init__(self) -> None:
        self._pending: deque[Command] = deque()

    def enqueue(self, cmd: Command) -> None:
        self._pending.append(cmd)

    def pending(self) -> int:
        return len(self._pending)

    def clear(self) -> None:
        self._pending.clear()

    def drain(self, state: CityState) -> list[CommandResult]:
        """Apply every pending command in order.

        Rejected commands are reported in the result list rather than raised,
        and do not stop later commands from running.
        """
        results: list[CommandResult] = []
        while self._pending:
            cmd = self._pending.popleft()
            try:
                message = apply(state, cmd)
            except CityError as exc:
                results.append(CommandResult(cmd, str(exc), exc))
            else:
                results.append(CommandResult(cmd, message))
        return results
