import random

import pytest


class ScriptedRandom:
    """Replays fixed `random()` values, cycling when exhausted."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def rng():
    return random.Random(20240601)


@pytest.fixture
def scripted():
    return ScriptedRandom
