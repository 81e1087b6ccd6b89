# -- Boundary and Time Integration Tests -- #

'''
Wall clamping / reflection and the symplectic Euler step with its
speed cap.

Sean Bowman [02/12/2026]
'''

import numpy as np
import pytest

from FluidSim.sph.protocols import WorldBounds
from FluidSim.sph.particles import ParticleStore
from FluidSim.sph.boundaryHandling import BoundaryHandler
from FluidSim.sph.timeIntegration import SymplecticEuler


def makeStore(positions, velocities) -> ParticleStore:
    store = ParticleStore.empty()
    store.addMany(np.asarray(positions, dtype=float))
    store.velocities[:] = velocities
    return store


#--------------------------------------------------------------------#
# -- Boundary -- #
#--------------------------------------------------------------------#

@pytest.fixture
def handler():
    return BoundaryHandler(WorldBounds(0.0, 0.0, 100.0, 100.0), particleRadius=5.0, damping=0.4)


def testLeftWallReflects(handler):
    store = makeStore([[2.0, 50.0]], [[-10.0, 3.0]])

    nContacts = handler.enforceBoundary(store)

    assert nContacts == 1
    np.testing.assert_allclose(store.positions[0], [5.0, 50.0])
    np.testing.assert_allclose(store.velocities[0], [4.0, 3.0])


def testCornerContactHitsBothAxes(handler):
    store = makeStore([[99.0, 99.0]], [[5.0, 6.0]])

    nContacts = handler.enforceBoundary(store)

    assert nContacts == 2
    np.testing.assert_allclose(store.positions[0], [95.0, 95.0])
    np.testing.assert_allclose(store.velocities[0], [-2.0, -2.4])


def testInteriorParticleUntouched(handler):
    store = makeStore([[50.0, 50.0], [5.0, 95.0]], [[7.0, -3.0], [1.0, 1.0]])

    assert handler.enforceBoundary(store) == 0
    np.testing.assert_array_equal(store.positions, [[50.0, 50.0], [5.0, 95.0]])
    np.testing.assert_array_equal(store.velocities, [[7.0, -3.0], [1.0, 1.0]])


def testOffsetBoundsRespected():
    handler = BoundaryHandler(WorldBounds(24.0, 24.0, 752.0, 552.0), particleRadius=5.0, damping=0.4)
    store = makeStore([[0.0, 1000.0]], [[0.0, 0.0]])

    handler.enforceBoundary(store)

    np.testing.assert_allclose(store.positions[0], [29.0, 571.0])
    assert handler.bounds.right == 776.0


#--------------------------------------------------------------------#
# -- Time Integration -- #
#--------------------------------------------------------------------#

def testKickThenDrift():
    store = makeStore([[0.0, 0.0]], [[0.0, 0.0]])
    store.densities[:] = 2.0
    store.forces[:] = [[4.0, 0.0]]

    SymplecticEuler(maxVelocity=300.0).integrate(store, 0.5)

    np.testing.assert_allclose(store.velocities[0], [1.0, 0.0])
    np.testing.assert_allclose(store.positions[0], [0.5, 0.0])


def testSpeedClampKeepsDirection():
    store = makeStore([[0.0, 0.0]], [[600.0, 800.0]])
    store.densities[:] = 1.0

    SymplecticEuler(maxVelocity=300.0).integrate(store, 0.1)

    np.testing.assert_allclose(store.velocities[0], [180.0, 240.0])
    np.testing.assert_allclose(store.positions[0], [18.0, 24.0])


def testZeroDensityRowGetsNoAcceleration():
    store = makeStore([[0.0, 0.0]], [[1.0, 0.0]])
    store.forces[:] = [[1e6, 1e6]]

    SymplecticEuler(maxVelocity=300.0).integrate(store, 1.0)

    np.testing.assert_allclose(store.velocities[0], [1.0, 0.0])


def testEmptyStoreIntegrates():
    store = ParticleStore.empty()
    SymplecticEuler(maxVelocity=300.0).integrate(store, 1.0 / 60.0)
    assert store.isEmpty
