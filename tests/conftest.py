"""Core test fixtures for dice tests."""

import pytest


class ScriptedSource:
    """Random source that returns a fixed sequence of values.

    Records every (low, high) range it was asked for.
    """

    def __init__(self, values):
        self._values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if not self._values:
            raise AssertionError("ScriptedSource ran out of values")
        return self._values.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._values)


@pytest.fixture
def scripted():
    """Factory for ScriptedSource instances.

    Usage:
        rng = scripted([3, 5, 6])
    """
    return ScriptedSource
