# -- SPH Boundary Conditions -- #

'''
Wall enforcement for the rectangular sandbox world.

The world is a closed axis-aligned box. After integration, each
particle disc (centre x, radius R) is tested against all four
walls independently per axis:

    x - R < left    ->  x = left + R,    v_x *= -damping
    x + R > right   ->  x = right - R,   v_x *= -damping
    y - R < top     ->  y = top + R,     v_y *= -damping
    y + R > bottom  ->  y = bottom - R,  v_y *= -damping

Both axes may trigger in the same step (corner contact).

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import numpy as np

from FluidSim.sph.protocols import WorldBounds
from FluidSim.sph.particles import ParticleStore


class BoundaryHandler:
    '''
    Reflects particles off the walls of a rectangular world.

    Parameters:
    -----------
    bounds : WorldBounds
        World rectangle
    particleRadius : float
        Particle disc radius R [px]
    damping : float
        Fraction of wall-normal velocity kept on a bounce (0 - 1)
    '''

    def __init__(
        self,
        bounds: WorldBounds,
        particleRadius: float,
        damping: float,
    ) -> None:
        self._bounds = bounds
        self._particleRadius = particleRadius
        self._damping = damping

        # Admissible centre range per axis
        self._lower = bounds.lower + particleRadius
        self._upper = bounds.upper - particleRadius

    @property
    def bounds(self) -> WorldBounds:
        '''World rectangle.'''
        return self._bounds

    def enforceBoundary(self, particles: ParticleStore) -> int:
        '''
        Clamp particle centres into the world and reflect velocities.

        Parameters:
        -----------
        particles : ParticleStore
            Particle state, positions and velocities updated in place

        Returns:
        --------
        int : Number of wall contacts this call (corners count twice)
        '''
        positions = particles.positions
        velocities = particles.velocities
        nContacts = 0

        for d in range(2):
            # Lower wall (left / top)
            belowMin = positions[:, d] < self._lower[d]
            positions[belowMin, d] = self._lower[d]
            velocities[belowMin, d] *= -self._damping

            # Upper wall (right / bottom)
            aboveMax = positions[:, d] > self._upper[d]
            positions[aboveMax, d] = self._upper[d]
            velocities[aboveMax, d] *= -self._damping

            nContacts += int(np.count_nonzero(belowMin)) + int(np.count_nonzero(aboveMax))

        return nContacts
