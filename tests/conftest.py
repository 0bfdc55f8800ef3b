"""Shared fixtures: scripted random sources and small test configs."""

import random
from dataclasses import replace

import pytest

from snake_cashout.config import GameConfig


class ScriptedRandom:
    """Stands in for ``random.Random``: replays queued values, then falls back.

    ``floats`` feed ``random()``; ``ints`` feed ``randrange()``. Once a queue
    runs dry the call is served by a seeded ``random.Random``.
    """

    def __init__(self, floats=(), ints=(), seed=0):
        self.floats = list(floats)
        self.ints = list(ints)
        self.fallback = random.Random(seed)

    def random(self):
        if self.floats:
            return self.floats.pop(0)
        return self.fallback.random()

    def randrange(self, stop):
        if self.ints:
            return self.ints.pop(0)
        return self.fallback.randrange(stop)

    def choice(self, seq):
        return seq[0]


class NeverCrash:
    def random(self):
        return 1.0


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def safe_config():
    """Default tuning with the crash process switched off."""
    return replace(GameConfig(), base_risk=0.0)
