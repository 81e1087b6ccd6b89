# -- Particle-Particle Collision Resolver -- #

'''
Discrete elastic collision correction between overlapping particles.

Runs inside the force pass, independent of the smoothing-length
cutoff. For each pair closer than two particle radii:

    n   = (x_i - x_j) / r                      collision normal
    v_n = (v_i - v_j) . n                      normal approach speed
    J   = -(1 + e) * v_n / 2                   only when v_n < 0
    v_i += J n,   v_j -= J n
    x_i += (2R - r)/2 n,   x_j -= (2R - r)/2 n

Equal masses are assumed, so the impulse is split evenly. Pairs
are resolved one at a time in index order and the distance is
re-read before each pair, so a correction can influence the pairs
after it. Coincident particles (r <= eps) use +x as the normal.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import math

import numpy as np

from FluidSim import constants as const
from FluidSim.sph.particles import ParticleStore


# Normal used when two particles coincide
_FALLBACK_NORMAL = np.array([1.0, 0.0])


class ElasticCollisionResolver:
    '''
    Impulse-based collision correction for equal-mass disc particles.

    Parameters:
    -----------
    particleRadius : float
        Disc radius R [px]; pairs closer than 2R overlap
    restitution : float
        Coefficient of restitution e (1.0 = perfectly elastic)
    epsilon : float
        Distance at or below which two particles are coincident
    '''

    def __init__(
        self,
        particleRadius: float,
        restitution: float = const.restitution,
        epsilon: float = const.distanceEpsilon,
    ) -> None:
        self._collisionDistance = 2.0 * particleRadius
        self._restitution = restitution
        self._epsilon = epsilon

    @property
    def collisionDistance(self) -> float:
        '''Centre distance below which two particles overlap.'''
        return self._collisionDistance

    @property
    def restitution(self) -> float:
        '''Coefficient of restitution.'''
        return self._restitution

    def findOverlaps(self, positions: np.ndarray) -> list[tuple[int, int]]:
        '''
        Find all overlapping pairs (i < j) in row-major order.

        Parameters:
        -----------
        positions : np.ndarray
            Particle positions, shape (N, 2)

        Returns:
        --------
        list[tuple[int, int]] : Candidate pairs with r < 2R
        '''
        if positions.shape[0] < 2:
            return []

        dr = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
        rSq = np.sum(dr * dr, axis=2)
        limitSq = self._collisionDistance * self._collisionDistance

        overlapping = np.triu(rSq < limitSq, k=1)
        iIdx, jIdx = np.nonzero(overlapping)
        return list(zip(iIdx.tolist(), jIdx.tolist()))

    def resolvePair(self, particles: ParticleStore, i: int, j: int) -> bool:
        '''
        Resolve one pair against the current state.

        The impulse is applied only if the particles approach each
        other; the positional separation is applied for any overlap.

        Parameters:
        -----------
        particles : ParticleStore
            Particle state, velocities and positions of i and j updated
        i, j : int
            Particle indices

        Returns:
        --------
        bool : True if the pair overlapped and was corrected
        '''
        positions = particles.positions
        velocities = particles.velocities

        diff = positions[i] - positions[j]
        r = math.hypot(diff[0], diff[1])
        if r >= self._collisionDistance:
            return False

        if r > self._epsilon:
            normal = diff / r
        else:
            normal = _FALLBACK_NORMAL

        relativeVelocity = velocities[i] - velocities[j]
        normalVelocity = float(np.dot(relativeVelocity, normal))

        if normalVelocity < 0.0:
            impulse = -(1.0 + self._restitution) * normalVelocity / 2.0
            velocities[i] += normal * impulse
            velocities[j] -= normal * impulse

        overlap = self._collisionDistance - r
        separation = normal * (overlap * 0.5)
        positions[i] += separation
        positions[j] -= separation

        return True

    def resolve(self, particles: ParticleStore) -> list[tuple[int, int]]:
        '''
        Resolve every overlapping pair.

        Parameters:
        -----------
        particles : ParticleStore
            Particle state, corrected in place

        Returns:
        --------
        list[tuple[int, int]] : Pairs that were corrected
        '''
        resolved: list[tuple[int, int]] = []
        for i, j in self.findOverlaps(particles.positions):
            if self.resolvePair(particles, i, j):
                resolved.append((i, j))
        return resolved
