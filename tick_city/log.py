"""CityLog - bounded log of human-readable city messages with subscribers."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable

DEFAULT_CAPACITY = 200


@dataclass(frozen=True)
class LogEntry:
    tick: int
    kind: str
    message: str

    def __str__(self) -> str:
        return f"[{self.tick}] {self.message}"


_Handler = Callable[[LogEntry], None]


class CityLog:
    """Keeps the newest ``max_entries`` messages and forwards each one to sinks.

    A ``max_entries`` of 0 keeps everything.
    """

    def __init__(self, max_entries: int = DEFAULT_CAPACITY) -> None:
        if max_entries < 0:
            raise ValueError(f"max_entries must be >= 0, got {max_entries}")
        self._max = max_entries
        self._entries: deque[LogEntry] = deque(maxlen=max_entries or None)
        self._subscribers: list[_Handler] = []

    def subscribe(self, handler: _Handler) -> None:
        self._subscribers.append(handler)

    def unsubscribe(self, handler: _Handler) -> None:
        try:
            self._subscribers.remove(handler)
        except ValueError:
            pass

    def emit(self, tick: int, kind: str, message: str) -> LogEntry:
        entry = LogEntry(tick=tick, kind=kind, message=message)
        self._entries.append(entry)
        for handler in list(self._subscribers):
            handler(entry)
        return entry

    def query(self, kind: str | None = None, after: int | None = None) -> list[LogEntry]:
        result = list(self._entries)
        if kind is not None:
            result = [e for e in result if e.kind == kind]
        if after is not None:
            result = [e for e in result if e.tick > after]
        return result

    def last(self, kind: str | None = None) -> LogEntry | None:
        for e in reversed(self._entries):
            if kind is None or e.kind == kind:
                return e
        return None

    def messages(self) -> list[str]:
        return [e.message for e in self._entries]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
