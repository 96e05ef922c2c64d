"""CitySession - the driver that owns one authoritative city."""
from __future__ import annotations

import os
import random
from typing import Callable

from tick_city import persistence
from tick_city.commands import Build, Command, CommandQueue, CommandResult
from tick_city.commands import build as _build
from tick_city.commands import upgrade as _upgrade
from tick_city.config import CityConfig
from tick_city.events import EventOutcome, EventSystem
from tick_city.log import CityLog, LogEntry
from tick_city.persistence import Target
from tick_city.simulation import tick as _tick
from tick_city.state import CityState, new_city
from tick_city.types import TileType

StepHook = Callable[["CitySession", list[str]], None]


def _describe(target: Target) -> str:
    if isinstance(target, (str, os.PathLike)):
        return f" ({os.path.basename(os.fspath(target))})"
    return ""


class CitySession:
    """Owns the CityState, RNG, log and command queue of one game.

    ``step()`` runs one timer beat: queued commands,
    then the tick, then the event roll.
    """

    def __init__(
        self,
        config: CityConfig | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or CityConfig()
        if rng is None:
            if seed is None:
                seed = int.from_bytes(os.urandom(8), "big")
            rng = random.Random(seed)
        self._seed = seed
        self._events = EventSystem(rng, self._config.event_chance)
        self._log = CityLog(self._config.log_capacity)
        self._commands = CommandQueue()
        self._step_hooks: list[StepHook] = []
        self._state = new_city(config=self._config)

    @property
    def config(self) -> CityConfig:
        return self._config

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def state(self) -> CityState:
        return self._state

    @property
    def log(self) -> CityLog:
        return self._log

    @property
    def events(self) -> EventSystem:
        return self._events

    @property
    def commands(self) -> CommandQueue:
        return self._commands

    def _emit(self, kind: str, message: str) -> str:
        self._log.emit(self._state.tick_count, kind, message)
        return message

    def on_step(self, hook: StepHook) -> None:
        self._step_hooks.append(hook)

    # -- Commands --

    def new_city(self, width: int | None = None, height: int | None = None) -> CityState:
        """Discard the current city and start a fresh one."""
        self._commands.clear()
        self._state = new_city(width, height, self._config)
        return self._state

    def tick(self, tax_rate: float | None = None) -> list[str]:
        if tax_rate is None:
            tax_rate = self._config.tax_rate
        messages = _tick(
            self._state, tax_rate, summary_interval=self._config.summary_interval
        )
        for message in messages:
            self._emit("summary", message)
        return messages

    def build(self, x: int, y: int, category: TileType | str) -> str:
        if isinstance(category, str):
            category = TileType.parse(category)
        return self._emit("build", _build(self._state, x, y, category))

    def upgrade(self, x: int, y: int) -> str:
        return self._emit("upgrade", _upgrade(self._state, x, y))

    def maybe_trigger_event(self) -> EventOutcome | None:
        outcome = self._events.maybe_trigger(self._state)
        if outcome is not None:
            self._emit(outcome.kind, outcome.message)
        return outcome

    def trigger_event(self) -> EventOutcome:
        outcome = self._events.trigger(self._state)
        self._emit(outcome.kind, outcome.message)
        return outcome

    def submit(self, cmd: Command) -> None:
        """Queue a Build or Upgrade for the next step."""
        self._commands.enqueue(cmd)

    def apply_pending(self) -> list[CommandResult]:
        results = self._commands.drain(self._state)
        for result in results:
            if result.accepted:
                kind = "build" if isinstance(result.command, Build) else "upgrade"
            else:
                kind = "rejected"
            self._emit(kind, result.message)
        return results

    # -- Loop --

    def step(self, tax_rate: float | None = None) -> list[str]:
        """Apply queued commands, tick once, then roll for an event.

        Returns every message logged during the step.
        """
        messages: list[str] = []

        def collect(entry: LogEntry) -> None:
            messages.append(entry.message)

        self._log.subscribe(collect)
        try:
            self.apply_pending()
            self.tick(tax_rate)
            self.maybe_trigger_event()
        finally:
            self._log.unsubscribe(collect)
        for hook in self._step_hooks:
            hook(self, messages)
        return messages

    def run(self, n: int, tax_rate: float | None = None) -> None:
        for _ in range(n):
            self.step(tax_rate)

    # -- Persistence --

    def save(self, sink: Target, fmt: str | None = None) -> None:
        persistence.save(self._state, sink, fmt)
        self._emit("save", f"Saved city{_describe(sink)}.")

    def load(self, source: Target, fmt: str | None = None) -> CityState:
        """Replace the current city with one read from *source*.

        The current city is kept if the save is unreadable or corrupt.
        """
        self._state = persistence.load(source, fmt)
        self._commands.clear()
        self._emit("load", f"Loaded city{_describe(source)}.")
        return self._state
