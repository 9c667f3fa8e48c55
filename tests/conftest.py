import pytest

from game.shooter2d import GameSettings, create_world


class ScriptedRng:
    """Stand-in for ``random`` that replays queued draws, then a default"""

    def __init__(self, values=(), default=0.99):
        self.values = list(values)
        self.default = default

    def random(self):
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture
def settings_a():
    return GameSettings()


@pytest.fixture
def settings_b():
    return GameSettings.variant("b")


@pytest.fixture
def world_a(settings_a):
    return create_world(settings_a)


@pytest.fixture
def world_b(settings_b):
    return create_world(settings_b)


@pytest.fixture
def rng():
    # 0.99 never beats the default spawn chance
    return ScriptedRng()
