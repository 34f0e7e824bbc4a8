import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')

import numpy as np
import pytest

from blackhole.engine import ParticleFactory, SimulationConfig, SimulationState, Well


@pytest.fixture
def factory():
    return ParticleFactory(np.random.RandomState(0))


@pytest.fixture
def well():
    return Well(x=640.0, y=400.0, radius=5.0, gravity=500.0)


@pytest.fixture
def make_state(well, factory):
    def _make(particles=None, **config):
        return SimulationState(well=well, config=SimulationConfig(**config),
                               factory=factory, particles=particles)
    return _make
