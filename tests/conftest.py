"""Shared fixtures for hunt tests."""

from __future__ import annotations

import random
from dataclasses import replace

import pytest

from game.hunt import rounds
from game.hunt.entities import GameState
from game.hunt.state import HuntState


class ScriptedRandom(random.Random):
    """Random whose ``random()`` replays a fixed script.

    ``uniform`` is built on ``random()``, so the script controls every
    roll the spawner makes. Once the script runs out it keeps returning
    ``fallback``.
    """

    def __init__(self, values=(), fallback: float = 0.99):
        super().__init__(0)
        self._values = list(values)
        self._fallback = fallback

    def random(self) -> float:
        if self._values:
            return self._values.pop(0)
        return self._fallback


@pytest.fixture
def scripted_rng():
    return ScriptedRandom


@pytest.fixture
def no_spawn_rng():
    """Every spawn roll fails (0.99 >= spawn chance)."""
    return ScriptedRandom()


@pytest.fixture
def playing_state():
    """Factory: a PLAYING snapshot at (level, round) with field overrides."""

    def _make(level: int = 1, round: int = 1, **overrides) -> HuntState:
        s = rounds.start_round(HuntState(state=GameState.HOME), level, round)
        return replace(s, **overrides) if overrides else s

    return _make
