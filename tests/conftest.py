"""Shared test fixtures for the Mini Racer test suite."""
import sys
from pathlib import Path

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).parent.parent

# Make the racer / racer_env packages importable without installing
sys.path.insert(0, str(PROJECT_ROOT))

from racer.config import load_config  # noqa: E402
from racer.simulation import Command, Simulation  # noqa: E402


@pytest.fixture
def config() -> dict:
    """A fresh copy of the default config (tests may mutate it)."""
    return load_config(PROJECT_ROOT / "configs" / "default.yaml")


@pytest.fixture
def sim(config) -> Simulation:
    """An IDLE simulation with a seeded obstacle generator."""
    return Simulation(config, rng=np.random.default_rng(1234))


@pytest.fixture
def running_sim(sim) -> Simulation:
    """A simulation that has been started."""
    sim.handle(Command.START)
    return sim
