# -- Particle Grid Scenario Tests -- #

'''
Sean Bowman [02/12/2026]
'''

import numpy as np
import pytest

from FluidSim.sph.protocols import FluidConfig, WorldBounds
from FluidSim.scenarios.particleGrid import (
    GridSeedConfig,
    createGridScenario,
    MIN_GRID_SIZE,
    MAX_GRID_SIZE,
)


def testPresets():
    assert GridSeedConfig.small().nParticles == 100
    assert GridSeedConfig.standard().nParticles == 400
    assert GridSeedConfig.large().nParticles == MAX_GRID_SIZE * MAX_GRID_SIZE


def testFromGridSizeRange():
    assert GridSeedConfig.fromGridSize(MIN_GRID_SIZE).nParticles == 1
    assert GridSeedConfig.fromGridSize(12).rows == 12

    with pytest.raises(ValueError):
        GridSeedConfig.fromGridSize(0)
    with pytest.raises(ValueError):
        GridSeedConfig.fromGridSize(MAX_GRID_SIZE + 1)


def testCreateGridScenario():
    gridConfig = GridSeedConfig(rows=4, cols=6, jitter=0.0)
    fluidConfig = FluidConfig(bounds=WorldBounds(0.0, 0.0, 400.0, 200.0))

    sim = createGridScenario(gridConfig, fluidConfig, seed=0)

    assert sim.nParticles == 24
    positions = sim.particles.positions
    np.testing.assert_allclose(positions[0], [100.0, 50.0])
    np.testing.assert_allclose(positions[-1], [100.0 + 5 * 12.0, 50.0 + 3 * 12.0])


def testCreateGridScenarioSeeded():
    first = createGridScenario(GridSeedConfig.small(), seed=9)
    second = createGridScenario(GridSeedConfig.small(), seed=9)

    np.testing.assert_array_equal(first.particles.positions, second.particles.positions)
