"""Pytest configuration and fixtures for arcade soccer tests."""

import random

import pytest


class CenteredRandom(random.Random):
    """RNG whose ``random()`` always sits in the middle of its range."""

    def random(self):
        return 0.5


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def centered_rng():
    """RNG that makes every kick angle variance exactly zero."""
    return CenteredRandom()


@pytest.fixture
def config():
    from kickoff.config import DEFAULT_CONFIG

    return DEFAULT_CONFIG


@pytest.fixture
def physics(config):
    from kickoff.physics import SoccerPhysics

    return SoccerPhysics(config)


@pytest.fixture
def state(config):
    """Fresh simulation state in the kickoff layout."""
    from kickoff.simulation import kickoff_state

    return kickoff_state(config)


@pytest.fixture
def simulation():
    """Setup a simulation for testing with deterministic seed."""
    from kickoff.simulation import Simulation

    return Simulation(seed=42)
