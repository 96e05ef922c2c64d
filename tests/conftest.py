"""Shared fixtures and a scripted RNG for deterministic event tests."""
from __future__ import annotations

import random

import pytest

from tick_city import CityState, new_city


class ScriptedRandom(random.Random):
    """Random whose draws are popped from fixed lists.

    ``floats`` feeds ``random()``; ``ints`` feeds ``randrange()`` and
    ``randint()`` in call order.
    """

    def __init__(self, floats=(), ints=()) -> None:
        super().__init__(0)
        self.floats = list(floats)
        self.ints = list(ints)

    def random(self) -> float:
        return self.floats.pop(0)

    def randrange(self, *args, **kwargs) -> int:
        return self.ints.pop(0)

    def randint(self, a: int, b: int) -> int:
        return self.ints.pop(0)


@pytest.fixture
def city() -> CityState:
    return new_city(12, 12)


@pytest.fixture
def scripted():
    return ScriptedRandom
