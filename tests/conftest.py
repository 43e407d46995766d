"""Pytest configuration and fixtures for space shooter tests."""

import random

import pytest

from space_shooter.game import GameController, ManualFrameSource
from space_shooter.simulation import Simulation
from space_shooter.timers import GameClock, ManualTime


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def manual_time():
    """Wall clock that only moves when a test advances it."""
    return ManualTime()


@pytest.fixture
def sim(seeded_rng, manual_time):
    """Running simulation at level 1 with score-driven levelling off."""
    clock = GameClock(manual_time)
    clock.resume()
    return Simulation(clock=clock, rng=seeded_rng, level_score_step=None)


@pytest.fixture
def frames():
    return ManualFrameSource()


@pytest.fixture
def controller(frames, manual_time):
    """Controller on a manual frame source and clock, not yet started."""
    return GameController(frame_source=frames, time_fn=manual_time, seed=42, level_score_step=None)
