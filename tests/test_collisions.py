# -- Collision Resolver Tests -- #

'''
Elastic collision branch: overlap search order, impulse, positional
separation and the coincident-particle guard.

Sean Bowman [02/12/2026]
'''

import numpy as np
import pytest

from FluidSim.sph.particles import ParticleStore
from FluidSim.sph.collisions import ElasticCollisionResolver


def makeStore(positions, velocities=None) -> ParticleStore:
    store = ParticleStore.empty()
    store.addMany(np.asarray(positions, dtype=float))
    if velocities is not None:
        store.velocities[:] = velocities
    return store


@pytest.fixture
def resolver():
    return ElasticCollisionResolver(particleRadius=5.0, restitution=0.8)


def testCollisionDistance(resolver):
    assert resolver.collisionDistance == 10.0
    assert resolver.restitution == 0.8


def testFindOverlapsRowMajor(resolver):
    positions = np.array([[0.0, 0.0], [8.0, 0.0], [16.0, 0.0], [4.0, 3.0]])

    pairs = resolver.findOverlaps(positions)

    assert pairs == [(0, 1), (0, 3), (1, 2), (1, 3)]


def testTouchingIsNotOverlapping(resolver):
    store = makeStore([[0.0, 0.0], [10.0, 0.0]])

    assert resolver.findOverlaps(store.positions) == []
    assert not resolver.resolvePair(store, 0, 1)


def testApproachingPairGetsImpulse(resolver):
    store = makeStore([[0.0, 0.0], [9.0, 0.0]], [[10.0, 0.0], [-10.0, 0.0]])

    assert resolver.resolvePair(store, 0, 1)

    np.testing.assert_allclose(store.velocities, [[-8.0, 0.0], [8.0, 0.0]])
    np.testing.assert_allclose(store.positions, [[-0.5, 0.0], [9.5, 0.0]])


def testSeparatingPairOnlySeparated(resolver):
    store = makeStore([[0.0, 0.0], [9.0, 0.0]], [[-10.0, 0.0], [10.0, 0.0]])

    assert resolver.resolvePair(store, 0, 1)

    np.testing.assert_allclose(store.velocities, [[-10.0, 0.0], [10.0, 0.0]])
    assert np.linalg.norm(store.positions[1] - store.positions[0]) == pytest.approx(10.0)


def testMomentumConserved(resolver):
    store = makeStore([[0.0, 0.0], [5.0, 5.0]], [[30.0, 12.0], [-4.0, -20.0]])
    before = store.velocities.sum(axis=0)

    resolver.resolvePair(store, 0, 1)

    np.testing.assert_allclose(store.velocities.sum(axis=0), before)


def testCoincidentParticlesUseFallbackNormal(resolver):
    store = makeStore([[50.0, 50.0], [50.0, 50.0]])

    assert resolver.resolvePair(store, 0, 1)

    assert np.all(np.isfinite(store.positions))
    np.testing.assert_allclose(store.positions, [[55.0, 50.0], [45.0, 50.0]])


def testResolveReturnsCorrectedPairs(resolver):
    store = makeStore([[0.0, 0.0], [9.0, 0.0], [100.0, 100.0]])

    resolved = resolver.resolve(store)

    assert resolved == [(0, 1)]
    assert resolver.findOverlaps(store.positions) == []


def testSequentialResolutionRechecksDistance(resolver):
    # Separating (0, 1) pushes particle 1 out of contact with particle 2
    store = makeStore([[0.0, 0.0], [1.0, 0.0], [2.0, 9.9]])

    resolved = resolver.resolve(store)

    assert resolved == [(0, 1)]
    np.testing.assert_allclose(store.positions[1], [5.5, 0.0])
